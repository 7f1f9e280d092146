"""
Special entry model.

Rupee amounts owed by a named person (name_rupees) against
what they have submitted. balance is derived on every write.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Numeric, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from hisaab_kitaab.models.base import Base
from hisaab_kitaab.models.enums import PaymentMethod


class SpecialEntry(Base):
    __tablename__ = "special_hisaab_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_name: Mapped[str] = mapped_column(String(100), nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    balance_type: Mapped[PaymentMethod] = mapped_column(
        SAEnum(
            PaymentMethod,
            name="special_balance_type_enum",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    name_rupees: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    submitted_rupees: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    reference_person: Mapped[str] = mapped_column(
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
        return f"<SpecialEntry {self.user_name} {self.date}>"
