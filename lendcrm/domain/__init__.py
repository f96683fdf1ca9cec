"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from lendcrm.domain.enums import EmploymentStatus, LoanStatus, TenantRole
from lendcrm.domain.exceptions import (
    AuthenticationException,
    LendCrmException,
    RecordValidationException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    "AuthenticationException",
    "EmploymentStatus",
    "LendCrmException",
    "LoanStatus",
    "RecordValidationException",
    "ResourceNotFoundException",
    "TenantRole",
    "ValidationException",
]
