"""Business logic services."""

from hisaab_kitaab.services.auth_service import AuthService
from hisaab_kitaab.services.bank_service import BankService
from hisaab_kitaab.services.bank_ledger_service import BankLedgerService
from hisaab_kitaab.services.saudi_service import SaudiService
from hisaab_kitaab.services.special_service import SpecialService
from hisaab_kitaab.services.trader_service import TraderService

__all__ = [
    "AuthService",
    "BankService",
    "BankLedgerService",
    "SaudiService",
    "SpecialService",
    "TraderService",
]
