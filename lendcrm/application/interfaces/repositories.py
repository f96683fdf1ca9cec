"""Backend table gateway contract used by record stores (DIP).

The PostgREST client implements TableGateway; tests use an in-memory fake.
Filter and QueryResult are the value objects exchanged across it.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal, Protocol

if TYPE_CHECKING:
    from lendcrm.application.dtos.borrower import BorrowerPage, BorrowerSearch
    from lendcrm.application.result import Result
    from lendcrm.domain.entities import Borrower, Tenant, UserTenant
    from lendcrm.domain.enums import TenantRole

FilterOp = Literal["eq", "gte", "lte", "ilike_any"]


@dataclass(frozen=True)
class Filter:
    """One conjunctive constraint on a select.

    For op "ilike_any", column is a tuple of column names and value the
    search term: any column containing the term (case-insensitive) matches.
    """

    column: str | tuple[str, ...]
    op: FilterOp
    value: Any

    @classmethod
    def eq(cls, column: str, value: Any) -> Filter:
        return cls(column, "eq", value)

    @classmethod
    def gte(cls, column: str, value: Any) -> Filter:
        return cls(column, "gte", value)

    @classmethod
    def lte(cls, column: str, value: Any) -> Filter:
        return cls(column, "lte", value)

    @classmethod
    def ilike_any(cls, columns: Sequence[str], term: str) -> Filter:
        return cls(tuple(columns), "ilike_any", term)


@dataclass(frozen=True)
class QueryResult:
    """Rows of one select plus the exact total when it was requested."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    count: int | None = None


class TableGateway(Protocol):
    """One backend table: the five calls a record store needs."""

    name: str

    async def insert_one(self, row: Mapping[str, Any]) -> dict[str, Any]:
        """Insert a row and return it as stored (generated id, timestamps)."""
        ...

    async def select_one(self, column: str, value: Any) -> dict[str, Any]:
        """Return the single row where column == value.

        Raises RecordNotFoundError when no row matches.
        """
        ...

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
        """Return rows matching all filters, from offset, at most limit."""
        ...

    async def update_one(
        self, column: str, value: Any, patch: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Apply patch to the row where column == value and return it."""
        ...

    async def delete(self, column: str, value: Any) -> None:
        """Delete rows where column == value. No error when none match."""
        ...


class TableSource(Protocol):
    """Anything that hands out table gateways by name (the PostgREST client)."""

    def table(self, name: str) -> TableGateway:
        ...


# Accessor ports used by application services. Accessors return Results.
class IBorrowerRepository(Protocol):
    """Protocol for the borrowers accessor (DIP)."""

    async def create(self, payload: Mapping[str, Any]) -> Result[Borrower]:
        """Insert a borrower row."""

    async def get_by_id(self, record_id: str) -> Result[Borrower]:
        """Return a borrower by id (read-through cache)."""

    async def update(self, record_id: str, patch: Mapping[str, Any]) -> Result[Borrower]:
        """Apply a partial update."""

    async def delete(self, record_id: str) -> Result[bool]:
        """Delete by id."""

    async def list(
        self, page: int = 1, limit: int = 10, filters: Mapping[str, Any] | None = None
    ) -> Result[list[Borrower]]:
        """Return one page of borrowers matching every equality filter."""

    async def search(self, owner_id: str, criteria: BorrowerSearch) -> Result[BorrowerPage]:
        """Return one page of the owner's borrowers matching criteria."""


class ITenantRepository(Protocol):
    """Protocol for the tenants accessor (DIP)."""

    async def create(self, payload: Mapping[str, Any]) -> Result[Tenant]:
        """Insert a tenant row."""

    async def get_by_id(self, record_id: str) -> Result[Tenant]:
        """Return a tenant by id."""


class IMembershipRepository(Protocol):
    """Protocol for the users_tenants accessor (DIP)."""

    async def list_for_user(self, user_id: str) -> Result[list[UserTenant]]:
        """Return the user's memberships with the tenant embedded."""

    async def add(self, user_id: str, tenant_id: str, role: TenantRole) -> Result[UserTenant]:
        """Insert a membership row."""
