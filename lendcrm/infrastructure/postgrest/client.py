"""PostgREST client construction from settings.

Built once at app startup (see lendcrm.core.lifespan) on the shared
httpx.AsyncClient and closed at shutdown.
"""

import logging

import httpx

from lendcrm.core.config import Settings, get_settings
from lendcrm.infrastructure.postgrest._rest_client import PostgrestRESTClient

logger = logging.getLogger(__name__)


def create_postgrest_client(
    settings: Settings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> PostgrestRESTClient:
    """Return a PostgREST client for SUPABASE_URL authenticated with SUPABASE_KEY.

    Args:
        settings: Settings to read; defaults to get_settings().
        http_client: Optional shared client; when omitted the returned
            client owns (and closes) its own.

    Returns:
        PostgrestRESTClient ready for table(...) calls.
    """
    settings = settings or get_settings()
    client = PostgrestRESTClient(
        settings.supabase_url,
        settings.supabase_key.get_secret_value(),
        http_client=http_client,
        timeout=settings.http_timeout_seconds,
    )
    logger.info("PostgREST client configured: %s", client.rest_url)
    return client
