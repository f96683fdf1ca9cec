"""Tenant and membership repositories (tenants, users_tenants tables)."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from lendcrm.application.interfaces.repositories import Filter, TableSource
from lendcrm.application.result import Err, Ok, Result
from lendcrm.domain.entities.tenant import Tenant, UserTenant
from lendcrm.domain.enums import TenantRole
from lendcrm.domain.exceptions import LendCrmException
from lendcrm.infrastructure.exceptions import DataLayerException
from lendcrm.infrastructure.persistence.repositories.record_store import (
    RecordStore,
    RecordStoreConfig,
)
from lendcrm.infrastructure.persistence.retry import RetryPolicy

logger = logging.getLogger(__name__)

# users_tenants with the tenant embedded through its foreign key
_MEMBERSHIP_COLUMNS = "user_id,tenant_id,role,tenant:tenants(id,name,created_at)"


class TenantRepository(RecordStore[Tenant]):
    """Tenants accessor (plain record store)."""

    def __init__(self, source: TableSource, config: RecordStoreConfig, **kwargs) -> None:
        super().__init__(source, Tenant, config, **kwargs)


class MembershipRepository:
    """users_tenants accessor.

    Membership rows are keyed by (user_id, tenant_id), not by an id, so this
    is not a RecordStore; it shares the retry policy and the Result envelope.
    """

    def __init__(
        self,
        source: TableSource,
        table: str,
        retry: RetryPolicy | None = None,
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.table_name = table
        self._table = source.table(table)
        self._retry = retry or RetryPolicy()
        self._sleep = sleep

    async def list_for_user(self, user_id: str) -> Result[list[UserTenant]]:
        """Return the user's memberships, each with its tenant embedded."""
        try:
            result = await self._retry.run(
                f"{self.table_name}.list_for_user",
                lambda: self._table.select_many(
                    [Filter.eq("user_id", user_id)], columns=_MEMBERSHIP_COLUMNS
                ),
                sleep=self._sleep,
            )
            return Ok([UserTenant.model_validate(row) for row in result.rows])
        except Exception as exc:
            return self._fail("list_for_user", exc)

    async def add(self, user_id: str, tenant_id: str, role: TenantRole) -> Result[UserTenant]:
        """Insert a membership row."""
        row = {"user_id": user_id, "tenant_id": tenant_id, "role": role}
        try:
            created = await self._retry.run(
                f"{self.table_name}.add",
                lambda: self._table.insert_one(row),
                sleep=self._sleep,
            )
            return Ok(UserTenant.model_validate(created))
        except Exception as exc:
            return self._fail("add", exc)

    def _fail(self, operation: str, exc: Exception) -> Err:
        error = exc if isinstance(exc, LendCrmException) else DataLayerException.wrap(exc)
        logger.warning("%s.%s failed: %s", self.table_name, operation, error.message)
        return Err(error)
