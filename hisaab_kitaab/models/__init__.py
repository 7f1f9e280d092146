"""
Database models package.

All models are imported here so that Base.metadata knows every
table when create_all() runs.
"""

from hisaab_kitaab.models.base import Base
from hisaab_kitaab.models.enums import PaymentMethod, UserRole
from hisaab_kitaab.models.user import User
from hisaab_kitaab.models.trader import Trader
from hisaab_kitaab.models.bank import Bank
from hisaab_kitaab.models.bank_ledger_entry import BankLedgerEntry
from hisaab_kitaab.models.saudi_entry import SaudiEntry
from hisaab_kitaab.models.special_entry import SpecialEntry

__all__ = [
    "Base",
    "PaymentMethod",
    "UserRole",
    "User",
    "Trader",
    "Bank",
    "BankLedgerEntry",
    "SaudiEntry",
    "SpecialEntry",
]
