"""Application DTOs (dataclasses exchanged between services and the API)."""

from lendcrm.application.dtos.borrower import BorrowerPage, BorrowerSearch
from lendcrm.application.dtos.user import CurrentUser

__all__ = ["BorrowerPage", "BorrowerSearch", "CurrentUser"]
