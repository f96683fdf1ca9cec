"""Borrower entity (borrowers table row)."""

from datetime import datetime

from lendcrm.domain.enums import EmploymentStatus, LoanStatus
from lendcrm.domain.entities.record import Record


class Borrower(Record):
    """A borrower owned by one user (user_id)."""

    user_id: str | None = None
    firstname: str
    lastname: str
    email: str
    phone: str
    address: str
    socialsecuritynumber: str
    creditscore: int
    employmentstatus: EmploymentStatus
    employername: str | None = None
    monthlyincome: float
    loanstatus: LoanStatus
    registrationdate: datetime | None = None
