"""Infrastructure exceptions for backend (PostgREST) operations.

PostgrestError and RecordNotFoundError are raised by the REST client and
never escape a record store: the store wraps them in DataLayerException,
which extends LendCrmException so presentation can map it to HTTP
responses consistently.
"""

from typing import Any

import httpx

from lendcrm.core.constants import DATA_LAYER_ERROR_PREFIX, TRANSIENT_STATUS_CODES
from lendcrm.domain.exceptions import LendCrmException


class PostgrestError(Exception):
    """Error body returned by the PostgREST data API (non-2xx response)."""

    def __init__(
        self,
        message: str,
        status_code: int,
        code: str | None = None,
        details: str | None = None,
        hint: str | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details
        self.hint = hint
        super().__init__(message)

    @classmethod
    def from_response(cls, resp: httpx.Response) -> "PostgrestError":
        """Build from a PostgREST error response; falls back to the raw text."""
        body: dict[str, Any] = {}
        try:
            parsed = resp.json()
            if isinstance(parsed, dict):
                body = parsed
        except ValueError:
            pass
        message = body.get("message") or resp.text or resp.reason_phrase
        return cls(
            message,
            resp.status_code,
            code=body.get("code"),
            details=body.get("details"),
            hint=body.get("hint"),
        )


class RecordNotFoundError(PostgrestError):
    """Single-object request matched no row (PostgREST 406 / PGRST116)."""


class DataLayerException(LendCrmException):
    """Backend failure surfaced by a record store.

    Only the backend message survives (prefixed); status_code is kept for
    classification and HTTP mapping, not the backend's own error code.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        details = {"status_code": status_code} if status_code is not None else {}
        super().__init__(f"{DATA_LAYER_ERROR_PREFIX}{message}", "DATA_LAYER_ERROR", details)
        self.status_code = status_code

    @property
    def not_found(self) -> bool:
        """True when the backend reported that no matching row exists."""
        return self.status_code in (404, 406)

    @classmethod
    def wrap(cls, error: BaseException) -> "DataLayerException":
        """Wrap any backend-side failure, keeping the HTTP status when known."""
        if isinstance(error, DataLayerException):
            return error
        if isinstance(error, PostgrestError):
            return cls(error.message, error.status_code)
        if isinstance(error, httpx.HTTPStatusError):
            return cls(str(error), error.response.status_code)
        return cls(str(error) or error.__class__.__name__)


def is_transient_error(error: BaseException) -> bool:
    """Return True for failures worth retrying.

    Transport errors (connect/read timeouts, dropped connections) and
    408/425/429/5xx responses are transient; every other failure is
    permanent (bad request, permission denied, not found, row parsing).
    """
    if isinstance(error, httpx.TransportError):
        return True
    if isinstance(error, PostgrestError):
        return error.status_code in TRANSIENT_STATUS_CODES
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code in TRANSIENT_STATUS_CODES
    return False
