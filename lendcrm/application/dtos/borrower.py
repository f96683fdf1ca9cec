"""DTOs for borrower use cases."""

from dataclasses import dataclass, field

from lendcrm.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT
from lendcrm.domain.entities.borrower import Borrower
from lendcrm.domain.enums import EmploymentStatus, LoanStatus


@dataclass(frozen=True)
class BorrowerSearch:
    """Borrower list criteria. All set criteria must match (AND)."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_LIMIT
    # Case-insensitive substring over first name, last name, email
    search: str | None = None
    loanstatus: LoanStatus | None = None
    employmentstatus: EmploymentStatus | None = None
    min_credit_score: int | None = None
    max_credit_score: int | None = None


@dataclass(frozen=True)
class BorrowerPage:
    """One page of borrowers plus the total matching the criteria."""

    items: list[Borrower] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_LIMIT

    @property
    def has_next(self) -> bool:
        return self.page * self.limit < self.total
