"""
Bank ledger API endpoints.

The API layer is thin: it handles HTTP concerns and delegates
all balance logic to BankLedgerService. Running balances are
always computed over the whole bank; the date filter and
newest_first only choose which rows are shown, and in what order.
"""

from fastapi import APIRouter, Depends, Query

from hisaab_kitaab.auth.dependencies import get_current_user
from hisaab_kitaab.models.bank_ledger_entry import BankLedgerEntry
from hisaab_kitaab.models.repository import Repository, get_repository
from hisaab_kitaab.services.balances import RunningBalanceRow, select_for_display
from hisaab_kitaab.services.bank_ledger_service import BankLedgerService
from hisaab_kitaab.schemas.common import MessageResponse
from hisaab_kitaab.schemas.ledger import (
    BankLedgerEntryCreate,
    BankLedgerEntryResponse,
    BankLedgerEntryUpdate,
    BankLedgerResponse,
)

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

router = APIRouter(
    prefix="/api/traders/{trader_id}/banks/{bank_id}/ledger",
    tags=["Bank Ledger"],
    dependencies=[Depends(get_current_user)],
)


def _entry_response(
    row: RunningBalanceRow[BankLedgerEntry],
) -> BankLedgerEntryResponse:
    return BankLedgerEntryResponse.model_validate(row.record).model_copy(
        update={"running_balance": row.running_balance}
    )


@router.get("", response_model=BankLedgerResponse)
def get_ledger(
    trader_id: int,
    bank_id: int,
    from_date: str | None = Query(default=None, pattern=DATE_PATTERN),
    to_date: str | None = Query(default=None, pattern=DATE_PATTERN),
    newest_first: bool = False,
    repo: Repository = Depends(get_repository),
):
    """
    Get a bank's entries with running balances.

    Totals always cover the whole bank, even when a date range
    narrows the entries returned.
    """
    service = BankLedgerService(repo)
    ledger = service.get_ledger(trader_id, bank_id)
    rows = select_for_display(ledger.rows, from_date, to_date, newest_first)

    return BankLedgerResponse(
        bank_id=ledger.bank.id,
        count=len(rows),
        total_credit=ledger.summary.total_credit,
        total_debit=ledger.summary.total_debit,
        remaining_balance=ledger.summary.remaining_balance,
        entries=[_entry_response(row) for row in rows],
    )


@router.post("", response_model=BankLedgerEntryResponse, status_code=201)
def create_entry(
    trader_id: int,
    bank_id: int,
    request: BankLedgerEntryCreate,
    repo: Repository = Depends(get_repository),
):
    """
    Record a deposit or withdrawal.

    Rejected with 400 when both amounts are zero.
    """
    service = BankLedgerService(repo)
    row = service.create_entry(trader_id, bank_id, request)
    repo.commit()
    return _entry_response(row)


@router.get("/{entry_id}", response_model=BankLedgerEntryResponse)
def get_entry(
    trader_id: int,
    bank_id: int,
    entry_id: int,
    repo: Repository = Depends(get_repository),
):
    service = BankLedgerService(repo)
    return _entry_response(
        service.get_entry_with_balance(trader_id, bank_id, entry_id)
    )


@router.put("/{entry_id}", response_model=BankLedgerEntryResponse)
def update_entry(
    trader_id: int,
    bank_id: int,
    entry_id: int,
    request: BankLedgerEntryUpdate,
    repo: Repository = Depends(get_repository),
):
    """Update only the fields sent; remaining_amount is recomputed."""
    service = BankLedgerService(repo)
    row = service.update_entry(trader_id, bank_id, entry_id, request)
    repo.commit()
    return _entry_response(row)


@router.delete("/{entry_id}", response_model=MessageResponse)
def delete_entry(
    trader_id: int,
    bank_id: int,
    entry_id: int,
    repo: Repository = Depends(get_repository),
):
    service = BankLedgerService(repo)
    service.delete_entry(trader_id, bank_id, entry_id)
    repo.commit()
    return MessageResponse(message="Ledger entry deleted successfully")
