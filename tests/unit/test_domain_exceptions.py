"""Tests for domain and data layer exceptions (error_code, message, details)."""

import httpx
import pytest

from lendcrm.core.exception_handlers import status_for
from lendcrm.domain.exceptions import (
    AuthenticationException,
    LendCrmException,
    RecordValidationException,
    ResourceNotFoundException,
    ValidationException,
)
from lendcrm.infrastructure.exceptions import (
    DataLayerException,
    PostgrestError,
    RecordNotFoundError,
)


def test_base_exception_default_error_code() -> None:
    exc = LendCrmException("Something failed")
    assert exc.error_code == "LendCrmException"
    assert exc.to_dict() == {
        "error": "LendCrmException",
        "message": "Something failed",
        "details": {},
    }


def test_record_validation_is_a_validation_error() -> None:
    exc = RecordValidationException()
    assert isinstance(exc, ValidationException)
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.message == "Invalid data provided"
    assert RecordValidationException("bad page", "page").details == {"field": "page"}


def test_resource_not_found_details() -> None:
    exc = ResourceNotFoundException("borrower", "b-1")
    assert exc.message == "borrower not found: b-1"
    assert exc.details == {"resource_type": "borrower", "resource_id": "b-1"}


def test_data_layer_exception_prefixes_message() -> None:
    exc = DataLayerException.wrap(PostgrestError("relation does not exist", 404, code="42P01"))
    assert exc.message == "Database error: relation does not exist"
    assert exc.error_code == "DATA_LAYER_ERROR"
    assert exc.status_code == 404
    assert "42P01" not in str(exc.to_dict())


def test_wrap_is_idempotent_and_handles_plain_errors() -> None:
    exc = DataLayerException("boom", 500)
    assert DataLayerException.wrap(exc) is exc
    plain = DataLayerException.wrap(httpx.ConnectError("connection refused"))
    assert plain.message == "Database error: connection refused"
    assert plain.status_code is None


@pytest.mark.parametrize(
    "exc, status",
    [
        (RecordValidationException(), 400),
        (ResourceNotFoundException("borrower", "x"), 404),
        (AuthenticationException(), 401),
        (DataLayerException.wrap(RecordNotFoundError("no rows", 406, code="PGRST116")), 404),
        (DataLayerException("denied", 403), 502),
        (DataLayerException("timeout"), 502),
        (LendCrmException("other"), 400),
    ],
)
def test_status_mapping(exc: LendCrmException, status: int) -> None:
    assert status_for(exc) == status
