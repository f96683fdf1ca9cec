"""Borrower API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from lendcrm.domain.enums import EmploymentStatus, LoanStatus

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class BorrowerCreate(BaseModel):
    """Request body for registering a borrower.

    user_id and registrationdate are set by the server.
    """

    model_config = ConfigDict(extra="forbid")

    firstname: str = Field(..., min_length=2, max_length=100)
    lastname: str = Field(..., min_length=2, max_length=100)
    email: str = Field(..., pattern=_EMAIL_PATTERN, max_length=255)
    phone: str = Field(..., min_length=10, max_length=32)
    address: str = Field(..., min_length=1, max_length=500)
    socialsecuritynumber: str = Field(..., min_length=9, max_length=11)
    creditscore: int = Field(..., ge=0, le=900)
    employmentstatus: EmploymentStatus
    employername: str | None = Field(default=None, max_length=255)
    monthlyincome: float = Field(..., ge=0)
    loanstatus: LoanStatus = LoanStatus.PENDING


class BorrowerUpdate(BaseModel):
    """Request body for a partial borrower update; only sent fields change."""

    model_config = ConfigDict(extra="forbid")

    firstname: str | None = Field(default=None, min_length=2, max_length=100)
    lastname: str | None = Field(default=None, min_length=2, max_length=100)
    email: str | None = Field(default=None, pattern=_EMAIL_PATTERN, max_length=255)
    phone: str | None = Field(default=None, min_length=10, max_length=32)
    address: str | None = Field(default=None, min_length=1, max_length=500)
    socialsecuritynumber: str | None = Field(default=None, min_length=9, max_length=11)
    creditscore: int | None = Field(default=None, ge=0, le=900)
    employmentstatus: EmploymentStatus | None = None
    employername: str | None = Field(default=None, max_length=255)
    monthlyincome: float | None = Field(default=None, ge=0)
    loanstatus: LoanStatus | None = None


class BorrowerResponse(BaseModel):
    """Borrower as returned by the API. The social security number is never returned."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str | None = None
    firstname: str
    lastname: str
    email: str
    phone: str
    address: str
    creditscore: int
    employmentstatus: EmploymentStatus
    employername: str | None = None
    monthlyincome: float
    loanstatus: LoanStatus
    registrationdate: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BorrowerPageResponse(BaseModel):
    """One page of borrowers (GET /borrowers)."""

    items: list[BorrowerResponse]
    total: int
    page: int
    limit: int
    has_next: bool
