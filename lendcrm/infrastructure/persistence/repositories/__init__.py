"""Repositories: record stores and table accessors over the managed backend."""

from lendcrm.infrastructure.persistence.repositories.borrower_repo import (
    BorrowerRepository,
    build_search_filters,
)
from lendcrm.infrastructure.persistence.repositories.record_store import (
    RecordStore,
    RecordStoreConfig,
)
from lendcrm.infrastructure.persistence.repositories.tenant_repo import (
    MembershipRepository,
    TenantRepository,
)

__all__ = [
    "BorrowerRepository",
    "MembershipRepository",
    "RecordStore",
    "RecordStoreConfig",
    "TenantRepository",
    "build_search_filters",
]
