"""Domain enumerations for the lendcrm application.

Enums represent fixed sets of domain values (e.g. loan status).
"""

from enum import Enum


class LoanStatus(str, Enum):
    """Lifecycle of a borrower's loan."""

    ACTIVE = "active"
    PENDING = "pending"
    COMPLETED = "completed"
    DEFAULTED = "defaulted"


class EmploymentStatus(str, Enum):
    """Borrower employment situation, captured at registration."""

    EMPLOYED = "employed"
    SELF_EMPLOYED = "self-employed"
    UNEMPLOYED = "unemployed"
    RETIRED = "retired"


class TenantRole(str, Enum):
    """Role of a user inside a tenant (organization)."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
