"""Tenant (organization) use cases: memberships, creation, first sign-in bootstrap."""

from __future__ import annotations

import logging

from lendcrm.application.interfaces.repositories import (
    IMembershipRepository,
    ITenantRepository,
)
from lendcrm.application.services._results import unwrap
from lendcrm.core.constants import DEFAULT_TENANT_NAME_TEMPLATE
from lendcrm.domain.entities.tenant import Tenant, UserTenant
from lendcrm.domain.enums import TenantRole
from lendcrm.domain.exceptions import ValidationException

logger = logging.getLogger(__name__)


class TenantService:
    """Creates tenants and owner memberships; resolves a user's tenants."""

    def __init__(
        self,
        tenant_repo: ITenantRepository,
        membership_repo: IMembershipRepository,
    ) -> None:
        self.tenant_repo = tenant_repo
        self.membership_repo = membership_repo

    async def list_user_tenants(self, user_id: str) -> list[UserTenant]:
        """Return the user's memberships, each with its tenant embedded."""
        return unwrap(await self.membership_repo.list_for_user(user_id))

    async def create_tenant(self, user_id: str, email: str, name: str | None = None) -> Tenant:
        """Create a tenant and make user_id its owner.

        Without a name the tenant is called "<email>'s Organization". The
        two inserts are not atomic: if the membership insert fails, the
        tenant row is left behind without members.
        """
        tenant_name = (name or "").strip()
        if not tenant_name:
            if not email:
                raise ValidationException("Tenant name is required", "name")
            tenant_name = DEFAULT_TENANT_NAME_TEMPLATE.format(email=email)
        tenant = unwrap(await self.tenant_repo.create({"name": tenant_name}))
        unwrap(await self.membership_repo.add(user_id, tenant.id, TenantRole.OWNER))
        logger.info("Tenant %s created for user %s", tenant.id, user_id)
        return tenant

    async def ensure_user_tenant(self, user_id: str, email: str) -> Tenant:
        """Return the user's first tenant, creating one on first sign-in."""
        memberships = await self.list_user_tenants(user_id)
        for membership in memberships:
            if membership.tenant is not None:
                return membership.tenant
        if memberships:
            # Embedded tenant not visible; fall back to a direct read
            return unwrap(
                await self.tenant_repo.get_by_id(memberships[0].tenant_id),
                "tenant",
                memberships[0].tenant_id,
            )
        logger.info("No tenant for user %s; creating default tenant", user_id)
        return await self.create_tenant(user_id, email)
