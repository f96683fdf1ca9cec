"""Tests for BorrowerService: ownership scoping, search, export paging."""

import pytest

from lendcrm.application.dtos.borrower import BorrowerSearch
from lendcrm.application.services.borrower_service import BorrowerService
from lendcrm.domain.enums import EmploymentStatus, LoanStatus
from lendcrm.domain.exceptions import RecordValidationException, ResourceNotFoundException
from lendcrm.infrastructure.exceptions import DataLayerException
from lendcrm.infrastructure.persistence.repositories import build_search_filters
from tests.conftest import OTHER_USER_ID, TEST_USER_ID
from tests.fakes import FakeBackend, permanent_error
from tests.unit._borrowers import borrower_payload


async def test_create_stamps_owner_and_registration_date(
    borrower_service: BorrowerService, backend: FakeBackend
) -> None:
    borrower = await borrower_service.create(
        TEST_USER_ID, borrower_payload(user_id=OTHER_USER_ID, id="forged")
    )
    assert borrower.user_id == TEST_USER_ID
    assert borrower.registrationdate is not None
    assert borrower.id != "forged"
    assert backend.table("borrowers").rows[0]["user_id"] == TEST_USER_ID


async def test_get_returns_owned_borrower(borrower_service: BorrowerService) -> None:
    created = await borrower_service.create(TEST_USER_ID, borrower_payload())
    fetched = await borrower_service.get(TEST_USER_ID, created.id)
    assert fetched.email == "ann.lee@example.com"
    assert fetched.employmentstatus is EmploymentStatus.EMPLOYED


async def test_other_users_borrower_behaves_as_missing(
    borrower_service: BorrowerService,
) -> None:
    created = await borrower_service.create(TEST_USER_ID, borrower_payload())
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await borrower_service.get(OTHER_USER_ID, created.id)
    assert exc_info.value.details == {"resource_type": "borrower", "resource_id": created.id}
    with pytest.raises(ResourceNotFoundException):
        await borrower_service.update(OTHER_USER_ID, created.id, {"creditscore": 1})
    with pytest.raises(ResourceNotFoundException):
        await borrower_service.delete(OTHER_USER_ID, created.id)


async def test_missing_borrower_raises_not_found(borrower_service: BorrowerService) -> None:
    with pytest.raises(ResourceNotFoundException):
        await borrower_service.get(TEST_USER_ID, "does-not-exist")


async def test_update_changes_fields_but_not_owner(
    borrower_service: BorrowerService, backend: FakeBackend
) -> None:
    created = await borrower_service.create(TEST_USER_ID, borrower_payload())
    updated = await borrower_service.update(
        TEST_USER_ID, created.id, {"loanstatus": "defaulted", "user_id": OTHER_USER_ID}
    )
    assert updated.loanstatus is LoanStatus.DEFAULTED
    assert updated.user_id == TEST_USER_ID
    again = await borrower_service.get(TEST_USER_ID, created.id)
    assert again.loanstatus is LoanStatus.DEFAULTED


async def test_empty_update_returns_current_without_write(
    borrower_service: BorrowerService, backend: FakeBackend
) -> None:
    created = await borrower_service.create(TEST_USER_ID, borrower_payload())
    result = await borrower_service.update(TEST_USER_ID, created.id, {})
    assert result.id == created.id
    assert backend.table("borrowers").calls["update_one"] == 0


async def test_delete_removes_borrower(
    borrower_service: BorrowerService, backend: FakeBackend
) -> None:
    created = await borrower_service.create(TEST_USER_ID, borrower_payload())
    await borrower_service.delete(TEST_USER_ID, created.id)
    assert backend.table("borrowers").rows == []
    with pytest.raises(ResourceNotFoundException):
        await borrower_service.get(TEST_USER_ID, created.id)


async def test_backend_failure_raises_data_layer_exception(
    borrower_service: BorrowerService, backend: FakeBackend
) -> None:
    backend.table("borrowers").fail_next("insert_one", permanent_error())
    with pytest.raises(DataLayerException) as exc_info:
        await borrower_service.create(TEST_USER_ID, borrower_payload())
    assert not exc_info.value.not_found


async def test_search_is_scoped_newest_first_with_total(
    borrower_service: BorrowerService,
) -> None:
    for n in range(3):
        await borrower_service.create(TEST_USER_ID, borrower_payload(firstname=f"Mine{n}"))
    await borrower_service.create(OTHER_USER_ID, borrower_payload(firstname="Theirs"))

    page = await borrower_service.search(TEST_USER_ID, BorrowerSearch(page=1, limit=2))

    assert page.total == 3
    assert [b.firstname for b in page.items] == ["Mine2", "Mine1"]
    assert page.has_next


async def test_search_filters_text_status_and_credit_range(
    borrower_service: BorrowerService,
) -> None:
    await borrower_service.create(
        TEST_USER_ID, borrower_payload(firstname="Grace", creditscore=720)
    )
    await borrower_service.create(
        TEST_USER_ID, borrower_payload(firstname="Gregory", creditscore=610, loanstatus="pending")
    )
    await borrower_service.create(
        TEST_USER_ID, borrower_payload(firstname="Ann", lastname="Smith")
    )

    by_text = await borrower_service.search(TEST_USER_ID, BorrowerSearch(search="GR"))
    by_status = await borrower_service.search(
        TEST_USER_ID, BorrowerSearch(loanstatus=LoanStatus.PENDING)
    )
    by_range = await borrower_service.search(
        TEST_USER_ID, BorrowerSearch(min_credit_score=650, max_credit_score=750)
    )

    assert {b.firstname for b in by_text.items} == {"Grace", "Gregory"}
    assert [b.firstname for b in by_status.items] == ["Gregory"]
    assert {b.firstname for b in by_range.items} == {"Grace", "Ann"}


async def test_search_rejects_invalid_paging(borrower_service: BorrowerService) -> None:
    with pytest.raises(RecordValidationException) as exc_info:
        await borrower_service.search(TEST_USER_ID, BorrowerSearch(page=0))
    assert exc_info.value.error_code == "VALIDATION_ERROR"


def test_build_search_filters_always_scopes_to_owner() -> None:
    filters = build_search_filters(
        TEST_USER_ID,
        BorrowerSearch(
            search="ann", employmentstatus=EmploymentStatus.RETIRED, max_credit_score=800
        ),
    )
    assert [(f.column, f.op) for f in filters] == [
        ("user_id", "eq"),
        (("firstname", "lastname", "email"), "ilike_any"),
        ("employmentstatus", "eq"),
        ("creditscore", "lte"),
    ]
    assert filters[0].value == TEST_USER_ID


async def test_export_fetches_every_page(
    borrower_service: BorrowerService, backend: FakeBackend
) -> None:
    for n in range(5):
        await borrower_service.create(TEST_USER_ID, borrower_payload(firstname=f"B{n}"))

    content = await borrower_service.export_csv(TEST_USER_ID)

    lines = content.strip().split("\n")
    assert len(lines) == 6
    # export_page_size=2 in the fixture: pages of 2, 2, 1
    assert backend.table("borrowers").calls["select_many"] == 3


async def test_export_of_no_borrowers_is_header_only(borrower_service: BorrowerService) -> None:
    content = await borrower_service.export_csv(TEST_USER_ID)
    assert content.startswith("First Name,Last Name,Email")
    assert content.count("\n") == 1


def test_export_page_size_must_be_positive(borrower_service: BorrowerService) -> None:
    with pytest.raises(ValueError):
        BorrowerService(borrower_service.borrower_repo, export_page_size=0)


async def test_find_by_email_matches_exact_address_only(
    borrower_service: BorrowerService,
) -> None:
    assert await borrower_service.find_by_email(TEST_USER_ID, "a@b.com") is None
    await borrower_service.create(TEST_USER_ID, borrower_payload(email="xa@b.com"))
    assert await borrower_service.find_by_email(TEST_USER_ID, "a@b.com") is None

    exact = await borrower_service.create(TEST_USER_ID, borrower_payload(email="a@b.com"))
    await borrower_service.create(TEST_USER_ID, borrower_payload(email="za@b.com"))

    found = await borrower_service.find_by_email(TEST_USER_ID, "a@b.com")
    assert found is not None
    assert found.id == exact.id
    assert await borrower_service.find_by_email(OTHER_USER_ID, "a@b.com") is None
