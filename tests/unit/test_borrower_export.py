"""Tests for borrower CSV rendering."""

import csv
import io
from datetime import UTC, datetime

from lendcrm.application.services.borrower_export import format_cell, render_borrowers_csv
from lendcrm.domain.entities.borrower import Borrower
from lendcrm.domain.enums import LoanStatus
from tests.unit._borrowers import borrower_payload

HEADERS = [
    "First Name",
    "Last Name",
    "Email",
    "Phone",
    "Address",
    "Credit Score",
    "Employment Status",
    "Monthly Income",
    "Loan Status",
    "Registration Date",
]


def _borrower(**overrides) -> Borrower:
    return Borrower.model_validate(
        {
            "id": "b-1",
            "registrationdate": "2024-03-01T09:30:00+00:00",
            **borrower_payload(**overrides),
        }
    )


def test_header_row_and_one_line_per_borrower() -> None:
    content = render_borrowers_csv([_borrower(), _borrower(firstname="Bo")])
    rows = list(csv.reader(io.StringIO(content)))
    assert rows[0] == HEADERS
    assert len(rows) == 3
    assert rows[1] == [
        "Ann",
        "Lee",
        "ann.lee@example.com",
        "5551234567",
        "1 Main St",
        "700",
        "employed",
        "5000.0",
        "active",
        "2024-03-01T09:30:00+00:00",
    ]
    assert rows[2][0] == "Bo"


def test_ssn_is_not_exported() -> None:
    content = render_borrowers_csv([_borrower()])
    assert "123456789" not in content


def test_values_with_commas_and_quotes_are_quoted() -> None:
    content = render_borrowers_csv([_borrower(address='12 "Oak", Apt 4')])
    rows = list(csv.reader(io.StringIO(content)))
    assert rows[1][4] == '12 "Oak", Apt 4'


def test_format_cell() -> None:
    assert format_cell(None) == ""
    assert format_cell(LoanStatus.COMPLETED) == "completed"
    assert format_cell(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05+00:00"
    assert format_cell(datetime(2024, 1, 2, tzinfo=UTC)) == "2024-01-02T00:00:00+00:00"
