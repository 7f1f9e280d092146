"""
Saudi (foreign-currency) entry model.

An entry either records an order placed in PKR at a riyal rate,
a SAR payment against outstanding orders, or both. riyal_amount
and balance are derived on every write.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from hisaab_kitaab.models.base import Base


class SaudiEntry(Base):
    __tablename__ = "saudi_hisaab_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    time: Mapped[str] = mapped_column(String(8), nullable=False)
    ref_no: Mapped[str] = mapped_column(String(50), nullable=False)
    pkr_amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    riyal_rate: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    riyal_amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    submitted_sar: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    reference2: Mapped[str] = mapped_column(
        String(255), nullable=False, default=""
    )
    balance: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<SaudiEntry {self.ref_no} {self.date} {self.time}>"
