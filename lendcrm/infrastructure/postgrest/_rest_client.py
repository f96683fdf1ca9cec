"""Thin PostgREST REST API client (no supabase-py).

Talks to the managed backend's data API at {supabase_url}/rest/v1 with
httpx.AsyncClient so calls do not block the event loop. Each
TableReference implements the TableGateway protocol used by record stores.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from lendcrm.application.interfaces.repositories import Filter, QueryResult
from lendcrm.core.constants import POSTGREST_NO_ROWS_CODE
from lendcrm.infrastructure.exceptions import PostgrestError, RecordNotFoundError
from lendcrm.infrastructure.postgrest._encoding import encode_filter, encode_row

logger = logging.getLogger(__name__)

_OBJECT_ACCEPT = "application/vnd.pgrst.object+json"
_RETURN_ROW = "return=representation"


def parse_content_range(value: str | None) -> int | None:
    """Return the total from a Content-Range header ('0-9/42' -> 42, '*/0' -> 0).

    Returns None when the header is missing or the total is unknown ('0-9/*').
    """
    if not value or "/" not in value:
        return None
    total = value.rsplit("/", 1)[1].strip()
    if total == "*":
        return None
    try:
        return int(total)
    except ValueError:
        return None


async def _request_async(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    headers: dict[str, str],
    params: list[tuple[str, str]] | None = None,
    body: Any = None,
) -> httpx.Response:
    """Perform async HTTP request to the PostgREST API. Non-2xx raises PostgrestError."""
    logger.debug("PostgREST %s %s params=%s", method, url, params)
    resp = await client.request(method, url, headers=headers, params=params, json=body)
    if resp.status_code >= 400:
        error = PostgrestError.from_response(resp)
        if resp.status_code == 406 and error.code == POSTGREST_NO_ROWS_CODE:
            raise RecordNotFoundError(
                error.message,
                error.status_code,
                code=error.code,
                details=error.details,
                hint=error.hint,
            )
        raise error
    return resp


def _json_body(resp: httpx.Response) -> Any:
    return resp.json() if resp.content else None


class TableReference:
    """Reference to one table; implements TableGateway over PostgREST."""

    def __init__(self, client: PostgrestRESTClient, name: str) -> None:
        self._client = client
        self.name = name
        self._url = f"{client.rest_url}/{name}"

    async def insert_one(self, row: Mapping[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored (POST, return=representation)."""
        resp = await _request_async(
            self._client.http,
            "POST",
            self._url,
            headers=self._client.headers(accept=_OBJECT_ACCEPT, prefer=_RETURN_ROW),
            params=[("select", "*")],
            body=encode_row(row),
        )
        return _json_body(resp)

    async def select_one(self, column: str, value: Any) -> dict[str, Any]:
        """Return the single row where column == value; RecordNotFoundError if none."""
        params = [("select", "*"), encode_filter(Filter.eq(column, value))]
        resp = await _request_async(
            self._client.http,
            "GET",
            self._url,
            headers=self._client.headers(accept=_OBJECT_ACCEPT),
            params=params,
        )
        return _json_body(resp)

    async def select_many(
        self,
        filters: Sequence[Filter] = (),
        *,
        offset: int = 0,
        limit: int | None = None,
        order_by: str | None = None,
        descending: bool = False,
        count: bool = False,
        columns: str = "*",
    ) -> QueryResult:
        """Return rows matching all filters; rows offset..offset+limit-1 when limit is set."""
        params: list[tuple[str, str]] = [("select", columns)]
        params.extend(encode_filter(f) for f in filters)
        if order_by is not None:
            params.append(("order", f"{order_by}.{'desc' if descending else 'asc'}"))
        if offset:
            params.append(("offset", str(offset)))
        if limit is not None:
            params.append(("limit", str(limit)))
        resp = await _request_async(
            self._client.http,
            "GET",
            self._url,
            headers=self._client.headers(prefer="count=exact" if count else None),
            params=params,
        )
        rows = _json_body(resp) or []
        total = parse_content_range(resp.headers.get("content-range")) if count else None
        return QueryResult(rows=list(rows), count=total)

    async def update_one(
        self, column: str, value: Any, patch: Mapping[str, Any]
    ) -> dict[str, Any]:
        """PATCH the row where column == value and return it."""
        resp = await _request_async(
            self._client.http,
            "PATCH",
            self._url,
            headers=self._client.headers(accept=_OBJECT_ACCEPT, prefer=_RETURN_ROW),
            params=[("select", "*"), encode_filter(Filter.eq(column, value))],
            body=encode_row(patch),
        )
        return _json_body(resp)

    async def delete(self, column: str, value: Any) -> None:
        """DELETE rows where column == value. Idempotent if nothing matches."""
        await _request_async(
            self._client.http,
            "DELETE",
            self._url,
            headers=self._client.headers(),
            params=[encode_filter(Filter.eq(column, value))],
        )


class PostgrestRESTClient:
    """Lightweight PostgREST client using the REST API (no supabase-py)."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        access_token: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.rest_url = f"{base_url.rstrip('/')}/rest/v1"
        self._api_key = api_key
        self._access_token = access_token
        self.http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self.http.aclose()

    def headers(
        self, *, accept: str | None = None, prefer: str | None = None
    ) -> dict[str, str]:
        """Request headers: api key, bearer token, optional Accept and Prefer."""
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._access_token or self._api_key}",
            "Content-Type": "application/json",
        }
        if accept:
            headers["Accept"] = accept
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def table(self, name: str) -> TableReference:
        return TableReference(self, name)
