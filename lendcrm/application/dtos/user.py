"""DTOs for the authenticated caller."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CurrentUser:
    """Caller resolved from a verified access token (sub, email claims)."""

    id: str
    email: str = ""
