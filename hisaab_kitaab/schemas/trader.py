"""
Pydantic schemas for traders and their banks.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


def _upper(value: str | None) -> str | None:
    return value.strip().upper() if value is not None else None


# --- Trader Schemas ---

class TraderCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    short_name: str = Field(min_length=1, max_length=10)
    color: str | None = Field(default=None, max_length=50)

    @field_validator("short_name")
    @classmethod
    def short_name_uppercase(cls, v: str) -> str:
        return _upper(v)


class TraderUpdate(BaseModel):
    """Only the fields sent are changed."""
    name: str | None = Field(default=None, min_length=1, max_length=100)
    short_name: str | None = Field(default=None, min_length=1, max_length=10)
    color: str | None = Field(default=None, max_length=50)

    @field_validator("short_name")
    @classmethod
    def short_name_uppercase(cls, v: str | None) -> str | None:
        return _upper(v)


# --- Bank Schemas ---

class BankCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    code: str = Field(min_length=1, max_length=20)

    @field_validator("code")
    @classmethod
    def code_uppercase(cls, v: str) -> str:
        return _upper(v)


class BankUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    code: str | None = Field(default=None, min_length=1, max_length=20)

    @field_validator("code")
    @classmethod
    def code_uppercase(cls, v: str | None) -> str | None:
        return _upper(v)


class BankResponse(BaseModel):
    id: int
    trader_id: int
    name: str
    code: str
    entry_count: int
    total_balance: Decimal
    created_at: datetime


class TraderResponse(BaseModel):
    id: int
    name: str
    short_name: str
    color: str | None
    total_balance: Decimal
    banks: list[BankResponse]
    created_at: datetime
