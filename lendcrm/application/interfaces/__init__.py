"""Application interfaces (protocols) implemented by infrastructure."""

from lendcrm.application.interfaces.repositories import (
    Filter,
    IBorrowerRepository,
    IMembershipRepository,
    ITenantRepository,
    QueryResult,
    TableGateway,
    TableSource,
)

__all__ = [
    "Filter",
    "IBorrowerRepository",
    "IMembershipRepository",
    "ITenantRepository",
    "QueryResult",
    "TableGateway",
    "TableSource",
]
