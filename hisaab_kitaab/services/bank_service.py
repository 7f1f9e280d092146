"""
Bank service: a trader's banks and their balances.

A bank is always addressed through its trader: a bank id that
exists but belongs to another trader is reported as not found.
Bank balances are derived from the ledger entries, never stored.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import select

from hisaab_kitaab.errors import NotFoundError
from hisaab_kitaab.models.bank import Bank
from hisaab_kitaab.models.bank_ledger_entry import BankLedgerEntry
from hisaab_kitaab.models.trader import Trader
from hisaab_kitaab.models.repository import Repository
from hisaab_kitaab.schemas.trader import BankCreate, BankUpdate
from hisaab_kitaab.services.balances import ZERO, bank_entry_net_change
from hisaab_kitaab.services.updates import apply_changes

logger = logging.getLogger(__name__)


@dataclass
class BankBalance:
    bank: Bank
    total_balance: Decimal
    entry_count: int


class BankService:

    def __init__(self, repo: Repository):
        self.repo = repo

    def _get_trader(self, trader_id: int) -> Trader:
        trader = self.repo.get(Trader, trader_id)
        if not trader:
            raise NotFoundError(f"Trader {trader_id} not found")
        return trader

    def get_bank(self, trader_id: int, bank_id: int) -> Bank:
        """Get a bank, checking that it belongs to the trader."""
        bank = self.repo.get(Bank, bank_id)
        if not bank or bank.trader_id != trader_id:
            raise NotFoundError(f"Bank {bank_id} not found")
        return bank

    def balances_for(self, banks: list[Bank]) -> list[BankBalance]:
        """Total every bank's entries with one query."""
        if not banks:
            return []

        totals = {bank.id: ZERO for bank in banks}
        counts = {bank.id: 0 for bank in banks}
        entries = self.repo.scalars(
            select(BankLedgerEntry).where(
                BankLedgerEntry.bank_id.in_(totals.keys())
            )
        )
        for entry in entries:
            totals[entry.bank_id] += bank_entry_net_change(entry)
            counts[entry.bank_id] += 1

        return [
            BankBalance(
                bank=bank,
                total_balance=totals[bank.id],
                entry_count=counts[bank.id],
            )
            for bank in banks
        ]

    def list_banks(self, trader_id: int) -> list[BankBalance]:
        """All banks of a trader, by name, with their balances."""
        self._get_trader(trader_id)
        banks = self.repo.scalars(
            select(Bank)
            .where(Bank.trader_id == trader_id)
            .order_by(Bank.name)
        )
        return self.balances_for(banks)

    def get_bank_balance(self, trader_id: int, bank_id: int) -> BankBalance:
        bank = self.get_bank(trader_id, bank_id)
        return self.balances_for([bank])[0]

    def create_bank(self, trader_id: int, request: BankCreate) -> Bank:
        self._get_trader(trader_id)
        bank = Bank(
            trader_id=trader_id,
            name=request.name,
            code=request.code,
        )
        self.repo.add(bank)
        self.repo.flush()
        logger.info(
            "Bank created", extra={"trader_id": trader_id, "bank_id": bank.id}
        )
        return bank

    def update_bank(
        self, trader_id: int, bank_id: int, request: BankUpdate
    ) -> Bank:
        bank = self.get_bank(trader_id, bank_id)
        apply_changes(bank, request, required=("name", "code"))
        self.repo.flush()
        logger.info("Bank updated", extra={"bank_id": bank.id})
        return bank

    def delete_bank(self, trader_id: int, bank_id: int) -> None:
        """Delete a bank together with all of its ledger entries."""
        bank = self.get_bank(trader_id, bank_id)
        self.repo.delete(bank)
        self.repo.flush()
        logger.info(
            "Bank deleted", extra={"trader_id": trader_id, "bank_id": bank_id}
        )
