"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: the shared HTTP client, the
PostgREST client, and the record stores and services built on them.
Record store caches live as long as the process.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from lendcrm.application.services.borrower_service import BorrowerService
from lendcrm.application.services.tenant_service import TenantService
from lendcrm.core.config import get_settings
from lendcrm.infrastructure.persistence.repositories import (
    BorrowerRepository,
    MembershipRepository,
    RecordStoreConfig,
    TenantRepository,
)
from lendcrm.infrastructure.persistence.retry import RetryPolicy
from lendcrm.infrastructure.postgrest import create_postgrest_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: shared HTTP client, PostgREST client, record stores,
    services. Shutdown: record stores torn down, then the HTTP client.
    """
    settings = get_settings()

    # ---- Startup ----
    app.state.http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    postgrest = create_postgrest_client(settings, http_client=app.state.http_client)

    borrower_repo = BorrowerRepository(
        postgrest, RecordStoreConfig.from_settings(settings.borrowers_table, settings)
    )
    tenant_repo = TenantRepository(
        postgrest, RecordStoreConfig.from_settings(settings.tenants_table, settings)
    )
    membership_repo = MembershipRepository(
        postgrest,
        settings.user_tenants_table,
        RetryPolicy(
            max_retries=settings.record_store_max_retries,
            retry_delay_ms=settings.record_store_retry_delay_ms,
            retry_all_errors=settings.record_store_retry_all_errors,
        ),
    )
    app.state.record_stores = [borrower_repo, tenant_repo]
    app.state.borrower_service = BorrowerService(
        borrower_repo, export_page_size=settings.borrowers_export_page_size
    )
    app.state.tenant_service = TenantService(tenant_repo, membership_repo)
    logger.info(
        "Record stores ready: %s", ", ".join(s.table_name for s in app.state.record_stores)
    )

    yield

    # ---- Shutdown ----
    for store in getattr(app.state, "record_stores", []):
        await store.aclose()
    app.state.record_stores = []
    logger.info("Record stores closed")

    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("HTTP client closed")
