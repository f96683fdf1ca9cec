"""PostgREST data API client (REST over httpx) for the managed backend."""

from lendcrm.infrastructure.postgrest._rest_client import (
    PostgrestRESTClient,
    TableReference,
    parse_content_range,
)
from lendcrm.infrastructure.postgrest.client import create_postgrest_client

__all__ = [
    "PostgrestRESTClient",
    "TableReference",
    "create_postgrest_client",
    "parse_content_range",
]
