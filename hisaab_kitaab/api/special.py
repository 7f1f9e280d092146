"""
Special ledger API endpoints.
"""

from fastapi import APIRouter, Depends, Query

from hisaab_kitaab.auth.dependencies import get_current_user
from hisaab_kitaab.models.repository import Repository, get_repository
from hisaab_kitaab.services.balances import closing_balance, select_for_display
from hisaab_kitaab.services.special_service import SpecialService
from hisaab_kitaab.schemas.common import MessageResponse
from hisaab_kitaab.schemas.special import (
    SpecialEntryCreate,
    SpecialEntryResponse,
    SpecialEntryUpdate,
    SpecialLedgerResponse,
)

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

router = APIRouter(
    prefix="/api/special",
    tags=["Special"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=SpecialLedgerResponse)
def get_ledger(
    from_date: str | None = Query(default=None, pattern=DATE_PATTERN),
    to_date: str | None = Query(default=None, pattern=DATE_PATTERN),
    newest_first: bool = False,
    repo: Repository = Depends(get_repository),
):
    service = SpecialService(repo)
    rows = service.get_ledger()
    shown = select_for_display(rows, from_date, to_date, newest_first)

    return SpecialLedgerResponse(
        count=len(shown),
        closing_balance=closing_balance(rows),
        entries=[
            SpecialEntryResponse.model_validate(row.record).model_copy(
                update={"running_balance": row.running_balance}
            )
            for row in shown
        ],
    )


@router.post("", response_model=SpecialEntryResponse, status_code=201)
def create_entry(
    request: SpecialEntryCreate,
    repo: Repository = Depends(get_repository),
):
    service = SpecialService(repo)
    entry = service.create_entry(request)
    repo.commit()
    return entry


@router.get("/{entry_id}", response_model=SpecialEntryResponse)
def get_entry(
    entry_id: int,
    repo: Repository = Depends(get_repository),
):
    service = SpecialService(repo)
    return service.get_entry(entry_id)


@router.put("/{entry_id}", response_model=SpecialEntryResponse)
def update_entry(
    entry_id: int,
    request: SpecialEntryUpdate,
    repo: Repository = Depends(get_repository),
):
    service = SpecialService(repo)
    entry = service.update_entry(entry_id, request)
    repo.commit()
    return entry


@router.delete("/{entry_id}", response_model=MessageResponse)
def delete_entry(
    entry_id: int,
    repo: Repository = Depends(get_repository),
):
    service = SpecialService(repo)
    service.delete_entry(entry_id)
    repo.commit()
    return MessageResponse(message="Special entry deleted successfully")
