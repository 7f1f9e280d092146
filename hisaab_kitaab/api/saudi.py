"""
Saudi ledger API endpoints.
"""

from fastapi import APIRouter, Depends, Query

from hisaab_kitaab.auth.dependencies import get_current_user
from hisaab_kitaab.models.repository import Repository, get_repository
from hisaab_kitaab.services.balances import closing_balance, select_for_display
from hisaab_kitaab.services.saudi_service import SaudiService
from hisaab_kitaab.schemas.common import MessageResponse
from hisaab_kitaab.schemas.saudi import (
    SaudiEntryCreate,
    SaudiEntryResponse,
    SaudiEntryUpdate,
    SaudiLedgerResponse,
)

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

router = APIRouter(
    prefix="/api/saudi",
    tags=["Saudi"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=SaudiLedgerResponse)
def get_ledger(
    from_date: str | None = Query(default=None, pattern=DATE_PATTERN),
    to_date: str | None = Query(default=None, pattern=DATE_PATTERN),
    newest_first: bool = False,
    repo: Repository = Depends(get_repository),
):
    """
    All Saudi entries with running SAR balances.

    closing_balance is the outstanding SAR across every entry,
    independent of the date range shown.
    """
    service = SaudiService(repo)
    rows = service.get_ledger()
    shown = select_for_display(rows, from_date, to_date, newest_first)

    return SaudiLedgerResponse(
        count=len(shown),
        closing_balance=closing_balance(rows),
        entries=[
            SaudiEntryResponse.model_validate(row.record).model_copy(
                update={"running_balance": row.running_balance}
            )
            for row in shown
        ],
    )


@router.post("", response_model=SaudiEntryResponse, status_code=201)
def create_entry(
    request: SaudiEntryCreate,
    repo: Repository = Depends(get_repository),
):
    service = SaudiService(repo)
    entry = service.create_entry(request)
    repo.commit()
    return entry


@router.get("/{entry_id}", response_model=SaudiEntryResponse)
def get_entry(
    entry_id: int,
    repo: Repository = Depends(get_repository),
):
    service = SaudiService(repo)
    return service.get_entry(entry_id)


@router.put("/{entry_id}", response_model=SaudiEntryResponse)
def update_entry(
    entry_id: int,
    request: SaudiEntryUpdate,
    repo: Repository = Depends(get_repository),
):
    """Update only the fields sent; riyal_amount and balance are rederived."""
    service = SaudiService(repo)
    entry = service.update_entry(entry_id, request)
    repo.commit()
    return entry


@router.delete("/{entry_id}", response_model=MessageResponse)
def delete_entry(
    entry_id: int,
    repo: Repository = Depends(get_repository),
):
    service = SaudiService(repo)
    service.delete_entry(entry_id)
    repo.commit()
    return MessageResponse(message="Saudi entry deleted successfully")
