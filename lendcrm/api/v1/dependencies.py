"""Presentation-layer dependency injection.

Services are built once in the app lifespan (lendcrm.core.lifespan) and
stored on app.state, so each record store's cache lives as long as the
process. Routes depend only on these functions; tests override them via
app.dependency_overrides.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from lendcrm.application.dtos.user import CurrentUser
from lendcrm.application.services.borrower_service import BorrowerService
from lendcrm.application.services.tenant_service import TenantService
from lendcrm.domain.exceptions import AuthenticationException
from lendcrm.infrastructure.security.jwt import verify_access_token

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> CurrentUser:
    """Return the caller from the bearer access token; raise 401 if missing or invalid."""
    if credentials is None:
        raise AuthenticationException("Not authenticated")
    try:
        payload = verify_access_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException(str(e)) from e
    return CurrentUser(id=str(payload["sub"]), email=payload.get("email") or "")


def get_borrower_service(request: Request) -> BorrowerService:
    return request.app.state.borrower_service


def get_tenant_service(request: Request) -> TenantService:
    return request.app.state.tenant_service
