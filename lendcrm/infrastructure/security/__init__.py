"""Access token verification."""

from lendcrm.infrastructure.security.jwt import verify_access_token

__all__ = ["verify_access_token"]
