"""lendcrm: multi-tenant lending/CRM service over a managed Postgres backend."""
