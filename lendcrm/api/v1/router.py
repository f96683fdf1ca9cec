"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from lendcrm.api.v1.dependencies.
"""

from fastapi import APIRouter

from lendcrm.api.v1.endpoints import borrowers, health, tenants

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(borrowers.router, prefix="/borrowers", tags=["borrowers"])
api_router.include_router(tenants.router, prefix="/tenants", tags=["tenants"])
