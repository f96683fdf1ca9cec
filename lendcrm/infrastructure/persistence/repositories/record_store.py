"""Record store: generic CRUD accessor over one backend table.

Every backend call goes through a linear-backoff retry; get_by_id reads
through a per-instance TTL cache that update and delete invalidate.
Operations never raise: failures come back as Err results.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from lendcrm.application.interfaces.repositories import Filter, TableSource
from lendcrm.application.result import Err, Ok, Result
from lendcrm.core.config import Settings, get_settings
from lendcrm.core.constants import (
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_PAGE,
    DEFAULT_PAGE_LIMIT,
    DEFAULT_RETRY_DELAY_MS,
)
from lendcrm.domain.entities.record import Record
from lendcrm.domain.exceptions import LendCrmException, RecordValidationException
from lendcrm.infrastructure.cache import RecordCache, RecordCacheProtocol
from lendcrm.infrastructure.exceptions import DataLayerException
from lendcrm.infrastructure.persistence.retry import RetryPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordStoreConfig:
    """Accessor configuration, fixed at construction.

    max_retries counts total attempts. Attempt n that fails waits
    retry_delay_ms * n milliseconds before attempt n + 1.
    """

    table: str
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay_ms: int = DEFAULT_RETRY_DELAY_MS
    cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS
    retry_all_errors: bool = False
    single_flight: bool = False

    def __post_init__(self) -> None:
        if not self.table:
            raise ValueError("table is required")
        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        if self.retry_delay_ms < 0:
            raise ValueError("retry_delay_ms must not be negative")

    @property
    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_retries=self.max_retries,
            retry_delay_ms=self.retry_delay_ms,
            retry_all_errors=self.retry_all_errors,
        )

    @classmethod
    def from_settings(cls, table: str, settings: Settings | None = None) -> RecordStoreConfig:
        """Build from RECORD_STORE_* settings for the given table."""
        settings = settings or get_settings()
        return cls(
            table=table,
            max_retries=settings.record_store_max_retries,
            retry_delay_ms=settings.record_store_retry_delay_ms,
            cache_ttl_seconds=settings.record_store_cache_ttl_seconds,
            retry_all_errors=settings.record_store_retry_all_errors,
            single_flight=settings.record_store_single_flight,
        )


class RecordStore[RecordT: Record]:
    """Typed accessor bound to one table and one record model.

    Subclasses add table-specific queries using _with_retry, _to_record
    and _fail so they share the retry policy and error envelope.
    """

    def __init__(
        self,
        source: TableSource,
        model: type[RecordT],
        config: RecordStoreConfig,
        *,
        cache: RecordCacheProtocol[RecordT] | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.config = config
        self.model = model
        self._table = source.table(config.table)
        self._cache: RecordCacheProtocol[RecordT] = (
            cache if cache is not None else RecordCache(config.cache_ttl_seconds)
        )
        self._retry = config.retry_policy
        self._sleep = sleep
        self._in_flight: dict[str, asyncio.Future[RecordT]] = {}
        # Bumped on every invalidation
        self._generation = 0

    @property
    def table_name(self) -> str:
        return self.config.table

    async def create(self, payload: Mapping[str, Any] | BaseModel | None) -> Result[RecordT]:
        """Insert a record; returns it with the backend-assigned id and timestamps."""
        try:
            row = self._validate_payload(payload)
            created = await self._with_retry("create", lambda: self._table.insert_one(row))
            return Ok(self._to_record(created))
        except Exception as exc:
            return self._fail("create", exc)

    async def get_by_id(self, record_id: str) -> Result[RecordT]:
        """Return a record, from cache when a live entry exists."""
        try:
            cached = self._cache.get(record_id)
            if cached is not None:
                return Ok(cached)
            if self.config.single_flight:
                return Ok(await self._fetch_shared(record_id))
            return Ok(await self._fetch_and_cache(record_id))
        except Exception as exc:
            return self._fail("get_by_id", exc, record_id)

    async def update(
        self, record_id: str, patch: Mapping[str, Any] | BaseModel | None
    ) -> Result[RecordT]:
        """Apply a partial update; the cached entry is dropped, not refreshed."""
        try:
            row = self._validate_payload(patch)
            updated = await self._with_retry(
                "update", lambda: self._table.update_one("id", record_id, row)
            )
            self._invalidate(record_id)
            return Ok(self._to_record(updated))
        except Exception as exc:
            return self._fail("update", exc, record_id)

    async def delete(self, record_id: str) -> Result[bool]:
        """Delete a record and drop its cached entry."""
        try:
            await self._with_retry("delete", lambda: self._table.delete("id", record_id))
            self._invalidate(record_id)
            return Ok(True)
        except Exception as exc:
            return self._fail("delete", exc, record_id)

    async def list(
        self,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_PAGE_LIMIT,
        filters: Mapping[str, Any] | None = None,
    ) -> Result[list[RecordT]]:
        """Return one page of records matching every equality filter. Never cached."""
        try:
            if page < 1:
                raise RecordValidationException("page must be at least 1", "page")
            if limit < 1:
                raise RecordValidationException("limit must be at least 1", "limit")
            offset = (page - 1) * limit
            constraints = [Filter.eq(column, value) for column, value in (filters or {}).items()]
            result = await self._with_retry(
                "list",
                lambda: self._table.select_many(constraints, offset=offset, limit=limit),
            )
            return Ok([self._to_record(row) for row in result.rows])
        except Exception as exc:
            return self._fail("list", exc)

    def clear_cache(self) -> None:
        """Drop every cached record."""
        self._generation += 1
        self._in_flight.clear()
        self._cache.clear()

    async def aclose(self) -> None:
        """Tear down: cancel shared in-flight reads and drop the cache.

        Callers still waiting on a cancelled shared read get an Err, not
        CancelledError.
        """
        pending = [task for task in self._in_flight.values() if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self.clear_cache()

    def _invalidate(self, record_id: str) -> None:
        """Forget record_id, including any read of it still in flight."""
        self._generation += 1
        self._in_flight.pop(record_id, None)
        self._cache.delete(record_id)

    async def _fetch_and_cache(self, record_id: str) -> RecordT:
        generation = self._generation
        row = await self._with_retry(
            "get_by_id", lambda: self._table.select_one("id", record_id)
        )
        record = self._to_record(row)
        # Row may predate an invalidation made while it was read
        if generation == self._generation:
            self._cache.set(record_id, record)
        return record

    async def _fetch_shared(self, record_id: str) -> RecordT:
        """Join the in-flight read for record_id, or start one others can join."""
        task = self._in_flight.get(record_id)
        if task is None:
            task = asyncio.ensure_future(self._run_shared(record_id))
            self._in_flight[record_id] = task
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if not task.cancelled() or (current is not None and current.cancelling()):
                raise
            raise DataLayerException("read cancelled because the record store closed")

    async def _run_shared(self, record_id: str) -> RecordT:
        try:
            return await self._fetch_and_cache(record_id)
        finally:
            if self._in_flight.get(record_id) is asyncio.current_task():
                del self._in_flight[record_id]

    async def _with_retry[R](self, operation: str, call: Callable[[], Awaitable[R]]) -> R:
        """Run call under this store's retry policy (see RetryPolicy)."""
        return await self._retry.run(f"{self.table_name}.{operation}", call, sleep=self._sleep)

    def _validate_payload(self, payload: Mapping[str, Any] | BaseModel | None) -> dict[str, Any]:
        """Shallow check only: payload must be a mapping (or a pydantic model)."""
        if isinstance(payload, BaseModel):
            return payload.model_dump(mode="json", exclude_unset=True)
        if payload is None or not isinstance(payload, Mapping):
            raise RecordValidationException()
        return dict(payload)

    def _to_record(self, row: Any) -> RecordT:
        return self.model.model_validate(row)

    def _fail(self, operation: str, exc: Exception, record_id: str | None = None) -> Err:
        """Convert a failure into an Err, wrapping backend errors."""
        error = exc if isinstance(exc, LendCrmException) else DataLayerException.wrap(exc)
        logger.warning(
            "%s.%s%s failed: %s",
            self.table_name,
            operation,
            f"({record_id})" if record_id is not None else "",
            error.message,
        )
        return Err(error)
