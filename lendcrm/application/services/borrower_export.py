"""Borrower CSV export.

Column order and headers follow BORROWER_EXPORT_COLUMNS; one row per
borrower after the header row.
"""

import csv
import io
from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from typing import Any

from lendcrm.core.constants import BORROWER_EXPORT_COLUMNS
from lendcrm.domain.entities.borrower import Borrower
from lendcrm.shared.utils.datetime import ensure_utc


def format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return ensure_utc(value).isoformat()
    return str(value)


def render_borrowers_csv(borrowers: Iterable[Borrower]) -> str:
    """Return CSV text: header row, then one row per borrower."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(BORROWER_EXPORT_COLUMNS.values())
    for borrower in borrowers:
        writer.writerow(
            format_cell(getattr(borrower, field)) for field in BORROWER_EXPORT_COLUMNS
        )
    return buffer.getvalue()
