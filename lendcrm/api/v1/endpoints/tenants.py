"""Tenant API: the caller's organizations (memberships, creation, bootstrap)."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends

from lendcrm.api.v1.dependencies import get_current_user, get_tenant_service
from lendcrm.application.dtos.user import CurrentUser
from lendcrm.application.services.tenant_service import TenantService
from lendcrm.schemas.tenant import MembershipResponse, TenantCreateRequest, TenantResponse

router = APIRouter()

CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
TenantServiceDep = Annotated[TenantService, Depends(get_tenant_service)]


@router.get("", response_model=list[MembershipResponse])
async def list_tenants(current_user: CurrentUserDep, service: TenantServiceDep):
    """Return the caller's memberships with the tenant embedded."""
    return await service.list_user_tenants(current_user.id)


@router.post("", response_model=TenantResponse, status_code=201)
async def create_tenant(
    current_user: CurrentUserDep,
    service: TenantServiceDep,
    body: Annotated[TenantCreateRequest | None, Body()] = None,
):
    """Create a tenant owned by the caller."""
    name = body.name if body is not None else None
    return await service.create_tenant(current_user.id, current_user.email, name)


@router.post("/bootstrap", response_model=TenantResponse)
async def bootstrap_tenant(current_user: CurrentUserDep, service: TenantServiceDep):
    """Return the caller's tenant, creating a default one on first sign-in."""
    return await service.ensure_user_tenant(current_user.id, current_user.email)
