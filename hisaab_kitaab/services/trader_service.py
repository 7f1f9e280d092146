"""
Trader service: traders and their overall position.

A trader's total balance is the sum of its banks' balances.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import select

from hisaab_kitaab.errors import NotFoundError
from hisaab_kitaab.models.bank import Bank
from hisaab_kitaab.models.trader import Trader
from hisaab_kitaab.models.repository import Repository
from hisaab_kitaab.schemas.trader import TraderCreate, TraderUpdate
from hisaab_kitaab.services.balances import ZERO
from hisaab_kitaab.services.bank_service import BankBalance, BankService
from hisaab_kitaab.services.updates import apply_changes

logger = logging.getLogger(__name__)


@dataclass
class TraderBalance:
    trader: Trader
    banks: list[BankBalance]

    @property
    def total_balance(self) -> Decimal:
        return sum((b.total_balance for b in self.banks), ZERO)


class TraderService:

    def __init__(self, repo: Repository):
        self.repo = repo
        self.bank_service = BankService(repo)

    def get_trader(self, trader_id: int) -> Trader:
        trader = self.repo.get(Trader, trader_id)
        if not trader:
            raise NotFoundError(f"Trader {trader_id} not found")
        return trader

    def _with_balances(self, traders: list[Trader]) -> list[TraderBalance]:
        if not traders:
            return []

        banks = self.repo.scalars(
            select(Bank)
            .where(Bank.trader_id.in_([t.id for t in traders]))
            .order_by(Bank.name)
        )
        by_trader: dict[int, list[BankBalance]] = {t.id: [] for t in traders}
        for balance in self.bank_service.balances_for(banks):
            by_trader[balance.bank.trader_id].append(balance)

        return [
            TraderBalance(trader=t, banks=by_trader[t.id]) for t in traders
        ]

    def list_traders(self) -> list[TraderBalance]:
        """All traders by name, each with its banks and totals."""
        traders = self.repo.scalars(select(Trader).order_by(Trader.name))
        return self._with_balances(traders)

    def get_trader_balance(self, trader_id: int) -> TraderBalance:
        return self._with_balances([self.get_trader(trader_id)])[0]

    def create_trader(self, request: TraderCreate) -> Trader:
        trader = Trader(
            name=request.name,
            short_name=request.short_name,
            color=request.color,
        )
        self.repo.add(trader)
        self.repo.flush()
        logger.info("Trader created", extra={"trader_id": trader.id})
        return trader

    def update_trader(self, trader_id: int, request: TraderUpdate) -> Trader:
        trader = self.get_trader(trader_id)
        apply_changes(trader, request, required=("name", "short_name"))
        self.repo.flush()
        logger.info("Trader updated", extra={"trader_id": trader.id})
        return trader

    def delete_trader(self, trader_id: int) -> None:
        """Delete a trader, its banks, and every entry of those banks."""
        trader = self.get_trader(trader_id)
        self.repo.delete(trader)
        self.repo.flush()
        logger.info("Trader deleted", extra={"trader_id": trader_id})
