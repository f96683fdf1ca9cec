"""Pytest configuration and fixtures for lendcrm.

Backend settings are set before lendcrm.main is imported (settings are
validated when the app is created). HTTP tests run against the ASGI app
with the service dependencies overridden by services over FakeBackend,
so no data API is contacted.
"""

import os
from datetime import UTC, datetime, timedelta

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt

from lendcrm.api.v1.dependencies import get_borrower_service, get_tenant_service
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
from lendcrm.main import app
from tests.fakes import FakeBackend, RecordingSleep

TEST_USER_ID = "5d9c1f2e-0000-4000-8000-000000000001"
OTHER_USER_ID = "5d9c1f2e-0000-4000-8000-000000000002"


def make_token(
    sub: str = TEST_USER_ID,
    email: str = "owner@example.com",
    *,
    audience: str = "authenticated",
    expires_in: timedelta = timedelta(hours=1),
    secret: str | None = None,
) -> str:
    """Access token shaped like the auth provider's (HS256, aud=authenticated)."""
    settings = get_settings()
    claims = {
        "sub": sub,
        "email": email,
        "aud": audience,
        "role": "authenticated",
        "exp": datetime.now(UTC) + expires_in,
    }
    key = secret or settings.supabase_jwt_secret.get_secret_value()
    return jwt.encode(claims, key, algorithm=settings.jwt_algorithm)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def borrower_repo(backend: FakeBackend, sleep: RecordingSleep) -> BorrowerRepository:
    return BorrowerRepository(backend, RecordStoreConfig(table="borrowers"), sleep=sleep)


@pytest.fixture
def borrower_service(borrower_repo: BorrowerRepository) -> BorrowerService:
    return BorrowerService(borrower_repo, export_page_size=2)


@pytest.fixture
def tenant_service(backend: FakeBackend, sleep: RecordingSleep) -> TenantService:
    return TenantService(
        TenantRepository(backend, RecordStoreConfig(table="tenants"), sleep=sleep),
        MembershipRepository(backend, "users_tenants", RetryPolicy(), sleep=sleep),
    )


@pytest.fixture
async def client(
    borrower_service: BorrowerService, tenant_service: TenantService
) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI), services over FakeBackend."""
    app.dependency_overrides[get_borrower_service] = lambda: borrower_service
    app.dependency_overrides[get_tenant_service] = lambda: tenant_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}
