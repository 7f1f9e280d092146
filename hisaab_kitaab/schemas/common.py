"""
Field types shared by the ledger schemas.
"""

from datetime import date, time
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field


def _valid_date(value: str) -> str:
    date.fromisoformat(value)
    return value


def _valid_time(value: str) -> str:
    time.fromisoformat(value)
    return value


# Stored as text and compared lexically, so the format is strict
LedgerDate = Annotated[
    str,
    Field(pattern=r"^\d{4}-\d{2}-\d{2}$", examples=["2024-01-31"]),
    AfterValidator(_valid_date),
]

ClockTime = Annotated[
    str,
    Field(pattern=r"^\d{2}:\d{2}(:\d{2})?$", examples=["14:30"]),
    AfterValidator(_valid_time),
]

Amount = Annotated[Decimal, Field(ge=0, decimal_places=4)]


class MessageResponse(BaseModel):
    message: str
