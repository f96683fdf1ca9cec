"""Borrower API: thin routes delegating to BorrowerService (owner-scoped)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from lendcrm.api.v1.dependencies import get_borrower_service, get_current_user
from lendcrm.application.dtos.borrower import BorrowerSearch
from lendcrm.application.dtos.user import CurrentUser
from lendcrm.application.services.borrower_service import BorrowerService
from lendcrm.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from lendcrm.domain.enums import EmploymentStatus, LoanStatus
from lendcrm.schemas.borrower import (
    BorrowerCreate,
    BorrowerPageResponse,
    BorrowerResponse,
    BorrowerUpdate,
)
from lendcrm.shared.utils.datetime import utc_now

router = APIRouter()

CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
BorrowerServiceDep = Annotated[BorrowerService, Depends(get_borrower_service)]


def _search_criteria(
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    search: str | None = Query(
        None, max_length=100, description="First name, last name or email contains"
    ),
    loanstatus: LoanStatus | None = None,
    employmentstatus: EmploymentStatus | None = None,
    mincreditscore: int | None = Query(None, ge=0),
    maxcreditscore: int | None = Query(None, ge=0),
) -> BorrowerSearch:
    return BorrowerSearch(
        page=page,
        limit=limit,
        search=(search or "").strip() or None,
        loanstatus=loanstatus,
        employmentstatus=employmentstatus,
        min_credit_score=mincreditscore,
        max_credit_score=maxcreditscore,
    )


@router.get("", response_model=BorrowerPageResponse)
async def list_borrowers(
    current_user: CurrentUserDep,
    service: BorrowerServiceDep,
    criteria: Annotated[BorrowerSearch, Depends(_search_criteria)],
):
    """List the caller's borrowers, newest first, with the total match count."""
    page = await service.search(current_user.id, criteria)
    return BorrowerPageResponse(
        items=[BorrowerResponse.model_validate(b) for b in page.items],
        total=page.total,
        page=page.page,
        limit=page.limit,
        has_next=page.has_next,
    )


@router.get("/export")
async def export_borrowers(
    current_user: CurrentUserDep,
    service: BorrowerServiceDep,
    criteria: Annotated[BorrowerSearch, Depends(_search_criteria)],
) -> Response:
    """Download every matching borrower as CSV (paging parameters are ignored)."""
    content = await service.export_csv(current_user.id, criteria)
    filename = f"borrowers-{utc_now().strftime('%Y%m%dT%H%M%SZ')}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("", response_model=BorrowerResponse, status_code=201)
async def create_borrower(
    body: BorrowerCreate,
    current_user: CurrentUserDep,
    service: BorrowerServiceDep,
):
    return await service.create(current_user.id, body)


@router.get("/{borrower_id}", response_model=BorrowerResponse)
async def get_borrower(
    borrower_id: str,
    current_user: CurrentUserDep,
    service: BorrowerServiceDep,
):
    return await service.get(current_user.id, borrower_id)


@router.patch("/{borrower_id}", response_model=BorrowerResponse)
async def update_borrower(
    borrower_id: str,
    body: BorrowerUpdate,
    current_user: CurrentUserDep,
    service: BorrowerServiceDep,
):
    """Partially update a borrower; only fields present in the body change."""
    return await service.update(current_user.id, borrower_id, body)


@router.delete("/{borrower_id}", status_code=204)
async def delete_borrower(
    borrower_id: str,
    current_user: CurrentUserDep,
    service: BorrowerServiceDep,
) -> Response:
    await service.delete(current_user.id, borrower_id)
    return Response(status_code=204)
