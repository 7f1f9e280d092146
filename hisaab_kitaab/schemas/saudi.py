"""
Pydantic schemas for Saudi (SAR) entries.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from hisaab_kitaab.schemas.common import Amount, ClockTime, LedgerDate


class SaudiEntryCreate(BaseModel):
    """
    An order (pkr_amount at riyal_rate), a payment (submitted_sar),
    or both. riyal_amount and balance are derived server-side.
    """
    date: LedgerDate
    time: ClockTime
    ref_no: str = Field(min_length=1, max_length=50)
    pkr_amount: Amount = Decimal("0")
    riyal_rate: Amount = Decimal("0")
    submitted_sar: Amount = Decimal("0")
    reference2: str = Field(default="", max_length=255)

    @field_validator("ref_no")
    @classmethod
    def ref_no_uppercase(cls, v: str) -> str:
        return v.strip().upper()


class SaudiEntryUpdate(BaseModel):
    date: LedgerDate | None = None
    time: ClockTime | None = None
    ref_no: str | None = Field(default=None, min_length=1, max_length=50)
    pkr_amount: Amount | None = None
    riyal_rate: Amount | None = None
    submitted_sar: Amount | None = None
    reference2: str | None = Field(default=None, max_length=255)

    @field_validator("ref_no")
    @classmethod
    def ref_no_uppercase(cls, v: str | None) -> str | None:
        return v.strip().upper() if v is not None else None


class SaudiEntryResponse(BaseModel):
    id: int
    date: str
    time: str
    ref_no: str
    pkr_amount: Decimal
    riyal_rate: Decimal
    riyal_amount: Decimal
    submitted_sar: Decimal
    reference2: str
    balance: Decimal
    running_balance: Decimal | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class SaudiLedgerResponse(BaseModel):
    count: int
    closing_balance: Decimal
    entries: list[SaudiEntryResponse]
