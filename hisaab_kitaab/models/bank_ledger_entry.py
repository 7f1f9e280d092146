"""
Bank ledger entry model.

Each entry records money added to or withdrawn from one bank.
remaining_amount is the entry's own net effect
(amount_added - amount_withdrawn). It is recomputed by the
service on every write and is never taken from the client.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, DateTime, Numeric, ForeignKey,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hisaab_kitaab.models.base import Base
from hisaab_kitaab.models.enums import PaymentMethod


class BankLedgerEntry(Base):
    __tablename__ = "bank_ledger_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    bank_id: Mapped[int] = mapped_column(
        ForeignKey("banks.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # YYYY-MM-DD, compared lexically
    date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    reference_type: Mapped[PaymentMethod | None] = mapped_column(
        SAEnum(
            PaymentMethod,
            name="bank_reference_type_enum",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=True,
    )
    amount_added: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    amount_withdrawn: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    reference_person: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    remaining_amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    bank: Mapped["Bank"] = relationship(back_populates="entries")

    def __repr__(self) -> str:
        return (
            f"<BankLedgerEntry {self.date} "
            f"+{self.amount_added} -{self.amount_withdrawn}>"
        )
