"""
Special service: rupee accounts kept per named person.
"""

import logging

from sqlalchemy import select

from hisaab_kitaab.errors import NotFoundError
from hisaab_kitaab.models.repository import Repository
from hisaab_kitaab.models.special_entry import SpecialEntry
from hisaab_kitaab.schemas.special import SpecialEntryCreate, SpecialEntryUpdate
from hisaab_kitaab.services.balances import (
    RunningBalanceRow,
    compute_running_balances,
    reconcile,
    special_entry_net_change,
    special_net_change,
)
from hisaab_kitaab.services.updates import apply_changes

logger = logging.getLogger(__name__)


class SpecialService:

    def __init__(self, repo: Repository):
        self.repo = repo

    def get_ledger(self) -> list[RunningBalanceRow[SpecialEntry]]:
        entries = self.repo.scalars(select(SpecialEntry))
        rows = compute_running_balances(entries, special_entry_net_change)
        reconcile(rows, lambda entry: entry.balance, scope="special")
        return rows

    def get_entry(self, entry_id: int) -> SpecialEntry:
        entry = self.repo.get(SpecialEntry, entry_id)
        if not entry:
            raise NotFoundError(f"Special entry {entry_id} not found")
        return entry

    def create_entry(self, request: SpecialEntryCreate) -> SpecialEntry:
        entry = SpecialEntry(
            user_name=request.user_name,
            date=request.date,
            balance_type=request.balance_type,
            name_rupees=request.name_rupees,
            submitted_rupees=request.submitted_rupees,
            reference_person=request.reference_person,
            balance=special_net_change(
                request.name_rupees, request.submitted_rupees
            ),
        )
        self.repo.add(entry)
        self.repo.flush()
        logger.info("Special entry created", extra={"entry_id": entry.id})
        return entry

    def update_entry(
        self, entry_id: int, request: SpecialEntryUpdate
    ) -> SpecialEntry:
        entry = self.get_entry(entry_id)
        apply_changes(
            entry, request,
            required=(
                "user_name", "date", "balance_type",
                "name_rupees", "submitted_rupees",
            ),
        )
        if entry.reference_person is None:
            entry.reference_person = ""
        entry.balance = special_net_change(
            entry.name_rupees, entry.submitted_rupees
        )
        self.repo.flush()
        logger.info("Special entry updated", extra={"entry_id": entry.id})
        return entry

    def delete_entry(self, entry_id: int) -> None:
        entry = self.get_entry(entry_id)
        self.repo.delete(entry)
        self.repo.flush()
        logger.info("Special entry deleted", extra={"entry_id": entry_id})
