"""
Pydantic schemas for bank ledger entries.

remaining_amount is never accepted from the client; the service
derives it from the amounts on every write.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from hisaab_kitaab.models.enums import PaymentMethod
from hisaab_kitaab.schemas.common import Amount, LedgerDate


# --- Request Schemas ---

class BankLedgerEntryCreate(BaseModel):
    """
    A single deposit or withdrawal.

    At least one of the amounts must be greater than zero; the
    service enforces that so create and update share one check.
    """
    date: LedgerDate
    reference_type: PaymentMethod | None = None
    amount_added: Amount = Decimal("0")
    amount_withdrawn: Amount = Decimal("0")
    reference_person: str | None = Field(default=None, max_length=255)


class BankLedgerEntryUpdate(BaseModel):
    """Partial update: omitted fields keep their stored values."""
    date: LedgerDate | None = None
    reference_type: PaymentMethod | None = None
    amount_added: Amount | None = None
    amount_withdrawn: Amount | None = None
    reference_person: str | None = Field(default=None, max_length=255)


# --- Response Schemas ---

class BankLedgerEntryResponse(BaseModel):
    id: int
    bank_id: int
    date: str
    reference_type: PaymentMethod | None
    amount_added: Decimal
    amount_withdrawn: Decimal
    reference_person: str | None
    remaining_amount: Decimal
    running_balance: Decimal | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class BankLedgerResponse(BaseModel):
    """A bank's entries with running balances and whole-bank totals."""
    bank_id: int
    count: int
    total_credit: Decimal
    total_debit: Decimal
    remaining_balance: Decimal
    entries: list[BankLedgerEntryResponse]
