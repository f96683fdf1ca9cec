"""Tenant API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from lendcrm.domain.enums import TenantRole


class TenantCreateRequest(BaseModel):
    """Request body for creating a tenant owned by the caller.

    When name is omitted the tenant is named after the caller's email.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)


class TenantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    created_at: datetime | None = None


class MembershipResponse(BaseModel):
    """The caller's membership in one tenant."""

    model_config = ConfigDict(from_attributes=True)

    tenant_id: str
    role: TenantRole
    tenant: TenantResponse | None = None
