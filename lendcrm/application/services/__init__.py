"""Application services: owner-scoped use cases over the record stores."""

from lendcrm.application.services.borrower_service import BorrowerService
from lendcrm.application.services.tenant_service import TenantService

__all__ = ["BorrowerService", "TenantService"]
