"""Verification of access tokens issued by the managed auth provider.

Tokens are HS256 JWTs signed with the project's JWT secret; sub is the
user id and email the address the user signed in with. Uses
lendcrm.core.config for the secret, algorithm and audience.
"""

from typing import Any

from jose import JWTError, jwt

from lendcrm.core.config import get_settings


def verify_access_token(token: str) -> dict[str, Any]:
    """Verify and decode an access token. Returns the payload.

    Enforces signature, expiry, audience, and presence of exp and sub.

    Args:
        token: JWT string (e.g. from Authorization header).

    Returns:
        Decoded payload dict.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.supabase_jwt_secret.get_secret_value(),
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload
