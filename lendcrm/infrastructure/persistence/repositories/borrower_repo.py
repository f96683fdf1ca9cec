"""Borrower repository: record store over the borrowers table plus search."""

from __future__ import annotations

from lendcrm.application.dtos.borrower import BorrowerPage, BorrowerSearch
from lendcrm.application.interfaces.repositories import Filter, TableSource
from lendcrm.application.result import Ok, Result
from lendcrm.core.constants import BORROWER_SEARCH_COLUMNS
from lendcrm.domain.entities.borrower import Borrower
from lendcrm.domain.exceptions import RecordValidationException
from lendcrm.infrastructure.persistence.repositories.record_store import (
    RecordStore,
    RecordStoreConfig,
)


def build_search_filters(owner_id: str, criteria: BorrowerSearch) -> list[Filter]:
    """Translate search criteria into conjunctive filters, always scoped to owner_id."""
    filters = [Filter.eq("user_id", owner_id)]
    if criteria.search:
        filters.append(Filter.ilike_any(BORROWER_SEARCH_COLUMNS, criteria.search))
    if criteria.loanstatus is not None:
        filters.append(Filter.eq("loanstatus", criteria.loanstatus))
    if criteria.employmentstatus is not None:
        filters.append(Filter.eq("employmentstatus", criteria.employmentstatus))
    if criteria.min_credit_score is not None:
        filters.append(Filter.gte("creditscore", criteria.min_credit_score))
    if criteria.max_credit_score is not None:
        filters.append(Filter.lte("creditscore", criteria.max_credit_score))
    return filters


class BorrowerRepository(RecordStore[Borrower]):
    """Borrowers accessor. search() is newest-first with an exact total count."""

    def __init__(self, source: TableSource, config: RecordStoreConfig, **kwargs) -> None:
        super().__init__(source, Borrower, config, **kwargs)

    async def search(self, owner_id: str, criteria: BorrowerSearch) -> Result[BorrowerPage]:
        """Return one page of the owner's borrowers matching criteria."""
        try:
            if criteria.page < 1 or criteria.limit < 1:
                raise RecordValidationException("page and limit must be at least 1")
            offset = (criteria.page - 1) * criteria.limit
            filters = build_search_filters(owner_id, criteria)
            result = await self._with_retry(
                "search",
                lambda: self._table.select_many(
                    filters,
                    offset=offset,
                    limit=criteria.limit,
                    order_by="created_at",
                    descending=True,
                    count=True,
                ),
            )
            items = [self._to_record(row) for row in result.rows]
            return Ok(
                BorrowerPage(
                    items=items,
                    total=result.count if result.count is not None else len(items),
                    page=criteria.page,
                    limit=criteria.limit,
                )
            )
        except Exception as exc:
            return self._fail("search", exc)
