"""
Bank ledger service: deposits and withdrawals for one bank.

Rules enforced here:
1. Every entry adds or withdraws something (not both zero)
2. remaining_amount is the entry's own net change, derived
   from its amounts on every write
3. Running balances are folded over the whole bank in
   chronological order, whatever order the caller displays

The caller controls the commit.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select

from hisaab_kitaab.errors import NotFoundError, ValidationError
from hisaab_kitaab.models.bank import Bank
from hisaab_kitaab.models.bank_ledger_entry import BankLedgerEntry
from hisaab_kitaab.models.repository import Repository
from hisaab_kitaab.schemas.ledger import (
    BankLedgerEntryCreate,
    BankLedgerEntryUpdate,
)
from hisaab_kitaab.services.balances import (
    LedgerSummary,
    RunningBalanceRow,
    bank_entry_net_change,
    bank_net_change,
    compute_running_balances,
    find_row,
    reconcile,
    summarize_bank_ledger,
    to_decimal,
)
from hisaab_kitaab.services.bank_service import BankService
from hisaab_kitaab.services.updates import apply_changes

logger = logging.getLogger(__name__)


@dataclass
class BankLedger:
    bank: Bank
    rows: list[RunningBalanceRow[BankLedgerEntry]]
    summary: LedgerSummary


def _check_amounts(amount_added, amount_withdrawn) -> None:
    if to_decimal(amount_added) <= 0 and to_decimal(amount_withdrawn) <= 0:
        raise ValidationError(
            "Either amount added or amount withdrawn must be greater than zero"
        )


class BankLedgerService:

    def __init__(self, repo: Repository):
        self.repo = repo
        self.bank_service = BankService(repo)

    def _entries(self, bank_id: int) -> list[BankLedgerEntry]:
        return self.repo.scalars(
            select(BankLedgerEntry).where(BankLedgerEntry.bank_id == bank_id)
        )

    def _rows(self, bank_id: int) -> list[RunningBalanceRow[BankLedgerEntry]]:
        return compute_running_balances(
            self._entries(bank_id), bank_entry_net_change
        )

    def _row_for(self, entry: BankLedgerEntry) -> RunningBalanceRow[BankLedgerEntry]:
        row = find_row(self._rows(entry.bank_id), entry.id)
        if row is None:
            raise NotFoundError(f"Ledger entry {entry.id} not found")
        return row

    def get_ledger(self, trader_id: int, bank_id: int) -> BankLedger:
        """
        All entries of a bank with running balances and totals.

        Rows are oldest first. summary.remaining_balance equals the
        closing running balance.
        """
        bank = self.bank_service.get_bank(trader_id, bank_id)
        rows = self._rows(bank.id)
        reconcile(
            rows,
            lambda entry: entry.remaining_amount,
            scope=f"bank:{bank.id}",
        )
        return BankLedger(
            bank=bank,
            rows=rows,
            summary=summarize_bank_ledger(row.record for row in rows),
        )

    def get_entry(
        self, trader_id: int, bank_id: int, entry_id: int
    ) -> BankLedgerEntry:
        bank = self.bank_service.get_bank(trader_id, bank_id)
        entry = self.repo.get(BankLedgerEntry, entry_id)
        if not entry or entry.bank_id != bank.id:
            raise NotFoundError(f"Ledger entry {entry_id} not found")
        return entry

    def get_entry_with_balance(
        self, trader_id: int, bank_id: int, entry_id: int
    ) -> RunningBalanceRow[BankLedgerEntry]:
        return self._row_for(self.get_entry(trader_id, bank_id, entry_id))

    def create_entry(
        self, trader_id: int, bank_id: int, request: BankLedgerEntryCreate
    ) -> RunningBalanceRow[BankLedgerEntry]:
        """
        Record a deposit and/or withdrawal.

        Returns the new entry with its running balance within the bank.
        """
        bank = self.bank_service.get_bank(trader_id, bank_id)
        _check_amounts(request.amount_added, request.amount_withdrawn)

        entry = BankLedgerEntry(
            bank_id=bank.id,
            date=request.date,
            reference_type=request.reference_type,
            amount_added=request.amount_added,
            amount_withdrawn=request.amount_withdrawn,
            reference_person=request.reference_person,
            remaining_amount=bank_net_change(
                request.amount_added, request.amount_withdrawn
            ),
        )
        self.repo.add(entry)
        self.repo.flush()
        logger.info(
            "Ledger entry created",
            extra={"bank_id": bank.id, "entry_id": entry.id},
        )
        return self._row_for(entry)

    def update_entry(
        self,
        trader_id: int,
        bank_id: int,
        entry_id: int,
        request: BankLedgerEntryUpdate,
    ) -> RunningBalanceRow[BankLedgerEntry]:
        """
        Change some fields of an entry.

        The amount check and remaining_amount use the merged values,
        so sending only amount_withdrawn keeps the stored amount_added.
        """
        entry = self.get_entry(trader_id, bank_id, entry_id)

        added = (
            request.amount_added
            if request.amount_added is not None
            else entry.amount_added
        )
        withdrawn = (
            request.amount_withdrawn
            if request.amount_withdrawn is not None
            else entry.amount_withdrawn
        )
        _check_amounts(added, withdrawn)

        apply_changes(
            entry, request,
            required=("date", "amount_added", "amount_withdrawn"),
        )
        entry.remaining_amount = bank_net_change(added, withdrawn)
        self.repo.flush()
        logger.info(
            "Ledger entry updated",
            extra={"bank_id": entry.bank_id, "entry_id": entry.id},
        )
        return self._row_for(entry)

    def delete_entry(self, trader_id: int, bank_id: int, entry_id: int) -> None:
        entry = self.get_entry(trader_id, bank_id, entry_id)
        self.repo.delete(entry)
        self.repo.flush()
        logger.info(
            "Ledger entry deleted",
            extra={"bank_id": bank_id, "entry_id": entry_id},
        )
