"""
Saudi service: PKR orders converted to SAR, and SAR payments.

riyal_amount and balance are always derived server-side from
pkr_amount, riyal_rate and submitted_sar. The running balance is
recomputed from those raw fields rather than from the stored
riyal_amount, so old rows written under a different rule still
fold correctly.
"""

import logging

from sqlalchemy import select

from hisaab_kitaab.errors import NotFoundError
from hisaab_kitaab.models.repository import Repository
from hisaab_kitaab.models.saudi_entry import SaudiEntry
from hisaab_kitaab.schemas.saudi import SaudiEntryCreate, SaudiEntryUpdate
from hisaab_kitaab.services.balances import (
    RunningBalanceRow,
    compute_running_balances,
    reconcile,
    riyal_amount,
    saudi_entry_net_change,
    saudi_net_change,
)
from hisaab_kitaab.services.updates import apply_changes

logger = logging.getLogger(__name__)


def _derive(entry: SaudiEntry) -> None:
    entry.riyal_amount = riyal_amount(entry.pkr_amount, entry.riyal_rate)
    entry.balance = saudi_net_change(
        entry.pkr_amount, entry.riyal_rate, entry.submitted_sar
    )


class SaudiService:

    def __init__(self, repo: Repository):
        self.repo = repo

    def get_ledger(self) -> list[RunningBalanceRow[SaudiEntry]]:
        """Every Saudi entry, oldest first, with its running SAR balance."""
        entries = self.repo.scalars(select(SaudiEntry))
        rows = compute_running_balances(entries, saudi_entry_net_change)
        reconcile(rows, lambda entry: entry.balance, scope="saudi")
        return rows

    def get_entry(self, entry_id: int) -> SaudiEntry:
        entry = self.repo.get(SaudiEntry, entry_id)
        if not entry:
            raise NotFoundError(f"Saudi entry {entry_id} not found")
        return entry

    def create_entry(self, request: SaudiEntryCreate) -> SaudiEntry:
        entry = SaudiEntry(
            date=request.date,
            time=request.time,
            ref_no=request.ref_no,
            pkr_amount=request.pkr_amount,
            riyal_rate=request.riyal_rate,
            submitted_sar=request.submitted_sar,
            reference2=request.reference2,
        )
        _derive(entry)
        self.repo.add(entry)
        self.repo.flush()
        logger.info("Saudi entry created", extra={"entry_id": entry.id})
        return entry

    def update_entry(
        self, entry_id: int, request: SaudiEntryUpdate
    ) -> SaudiEntry:
        """Apply the fields sent, then rederive from the merged values."""
        entry = self.get_entry(entry_id)
        apply_changes(
            entry, request,
            required=(
                "date", "time", "ref_no",
                "pkr_amount", "riyal_rate", "submitted_sar",
            ),
        )
        if entry.reference2 is None:
            entry.reference2 = ""
        _derive(entry)
        self.repo.flush()
        logger.info("Saudi entry updated", extra={"entry_id": entry.id})
        return entry

    def delete_entry(self, entry_id: int) -> None:
        entry = self.get_entry(entry_id)
        self.repo.delete(entry)
        self.repo.flush()
        logger.info("Saudi entry deleted", extra={"entry_id": entry_id})
