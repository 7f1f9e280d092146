"""
Pydantic schemas for special (per-person rupee) entries.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from hisaab_kitaab.models.enums import PaymentMethod
from hisaab_kitaab.schemas.common import Amount, LedgerDate


class SpecialEntryCreate(BaseModel):
    user_name: str = Field(min_length=1, max_length=100)
    date: LedgerDate
    balance_type: PaymentMethod
    name_rupees: Amount = Decimal("0")
    submitted_rupees: Amount = Decimal("0")
    reference_person: str = Field(default="", max_length=255)


class SpecialEntryUpdate(BaseModel):
    user_name: str | None = Field(default=None, min_length=1, max_length=100)
    date: LedgerDate | None = None
    balance_type: PaymentMethod | None = None
    name_rupees: Amount | None = None
    submitted_rupees: Amount | None = None
    reference_person: str | None = Field(default=None, max_length=255)


class SpecialEntryResponse(BaseModel):
    id: int
    user_name: str
    date: str
    balance_type: PaymentMethod
    name_rupees: Decimal
    submitted_rupees: Decimal
    reference_person: str
    balance: Decimal
    running_balance: Decimal | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class SpecialLedgerResponse(BaseModel):
    count: int
    closing_balance: Decimal
    entries: list[SpecialEntryResponse]
