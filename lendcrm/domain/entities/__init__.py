"""Domain entities: backend row models (pydantic, no ORM)."""

from lendcrm.domain.entities.borrower import Borrower
from lendcrm.domain.entities.record import SYSTEM_FIELDS, Record
from lendcrm.domain.entities.tenant import Tenant, UserTenant

__all__ = ["Borrower", "Record", "SYSTEM_FIELDS", "Tenant", "UserTenant"]
