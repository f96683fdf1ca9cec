"""Tenant (organization) and user membership rows."""

from pydantic import BaseModel

from lendcrm.domain.enums import TenantRole
from lendcrm.domain.entities.record import Record


class Tenant(Record):
    """Organization that scopes users and their data."""

    name: str


class UserTenant(BaseModel):
    """users_tenants row; tenant is embedded when selected with it."""

    user_id: str
    tenant_id: str
    role: TenantRole
    tenant: Tenant | None = None
