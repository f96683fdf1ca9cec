"""Borrower use cases, scoped to the signed-in user.

Every borrower row carries the id of the user who created it (user_id).
The data API is called with the service key, so ownership is enforced
here: another user's borrower behaves exactly like a missing one.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from lendcrm.application.dtos.borrower import BorrowerPage, BorrowerSearch
from lendcrm.application.interfaces.repositories import IBorrowerRepository
from lendcrm.application.services._results import unwrap, writable_fields
from lendcrm.application.services.borrower_export import render_borrowers_csv
from lendcrm.domain.entities.borrower import Borrower
from lendcrm.domain.exceptions import ResourceNotFoundException
from lendcrm.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

_OWNER_FIELD = "user_id"


class BorrowerService:
    """Create, read, update, delete, search and export the owner's borrowers."""

    def __init__(self, borrower_repo: IBorrowerRepository, export_page_size: int = 500) -> None:
        if export_page_size < 1:
            raise ValueError("export_page_size must be at least 1")
        self.borrower_repo = borrower_repo
        self.export_page_size = export_page_size

    async def create(self, owner_id: str, data: Mapping[str, Any] | BaseModel) -> Borrower:
        """Insert a borrower owned by owner_id, registered now."""
        payload = writable_fields(data, exclude=frozenset({_OWNER_FIELD}), exclude_unset=False)
        payload[_OWNER_FIELD] = owner_id
        payload["registrationdate"] = utc_now()
        borrower = unwrap(await self.borrower_repo.create(payload))
        logger.info("Borrower %s created by %s", borrower.id, owner_id)
        return borrower

    async def get(self, owner_id: str, borrower_id: str) -> Borrower:
        """Return the owner's borrower; raises ResourceNotFoundException otherwise."""
        borrower = unwrap(
            await self.borrower_repo.get_by_id(borrower_id), "borrower", borrower_id
        )
        if borrower.user_id != owner_id:
            raise ResourceNotFoundException("borrower", borrower_id)
        return borrower

    async def update(
        self, owner_id: str, borrower_id: str, patch: Mapping[str, Any] | BaseModel
    ) -> Borrower:
        """Apply a partial update. Ownership cannot be transferred."""
        current = await self.get(owner_id, borrower_id)
        changes = writable_fields(patch, exclude=frozenset({_OWNER_FIELD, "registrationdate"}))
        if not changes:
            return current
        return unwrap(
            await self.borrower_repo.update(borrower_id, changes), "borrower", borrower_id
        )

    async def delete(self, owner_id: str, borrower_id: str) -> None:
        await self.get(owner_id, borrower_id)
        unwrap(await self.borrower_repo.delete(borrower_id), "borrower", borrower_id)
        logger.info("Borrower %s deleted by %s", borrower_id, owner_id)

    async def find_by_email(self, owner_id: str, email: str) -> Borrower | None:
        """Return the owner's borrower with exactly this email, if any."""
        matches = unwrap(
            await self.borrower_repo.list(
                limit=1, filters={_OWNER_FIELD: owner_id, "email": email}
            )
        )
        return matches[0] if matches else None

    async def search(self, owner_id: str, criteria: BorrowerSearch | None = None) -> BorrowerPage:
        return unwrap(await self.borrower_repo.search(owner_id, criteria or BorrowerSearch()))

    async def export_csv(self, owner_id: str, criteria: BorrowerSearch | None = None) -> str:
        """Return every borrower matching criteria (all pages) as CSV text.

        criteria.page and criteria.limit are ignored; pages of
        export_page_size are fetched until the total is reached.
        """
        base = criteria or BorrowerSearch()
        borrowers: list[Borrower] = []
        page_number = 1
        while True:
            page = await self.search(
                owner_id,
                BorrowerSearch(
                    page=page_number,
                    limit=self.export_page_size,
                    search=base.search,
                    loanstatus=base.loanstatus,
                    employmentstatus=base.employmentstatus,
                    min_credit_score=base.min_credit_score,
                    max_credit_score=base.max_credit_score,
                ),
            )
            borrowers.extend(page.items)
            if not page.items or not page.has_next:
                break
            page_number += 1
        logger.info("Exporting %d borrowers for %s", len(borrowers), owner_id)
        return render_borrowers_csv(borrowers)
