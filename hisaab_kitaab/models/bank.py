"""
Bank model.

A bank belongs to exactly one trader and is the scope over
which a bank ledger's running balance is computed.
"""

from datetime import datetime

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hisaab_kitaab.models.base import Base


class Bank(Base):
    __tablename__ = "banks"

    id: Mapped[int] = mapped_column(primary_key=True)
    trader_id: Mapped[int] = mapped_column(
        ForeignKey("traders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    code: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    trader: Mapped["Trader"] = relationship(back_populates="banks")
    entries: Mapped[list["BankLedgerEntry"]] = relationship(
        back_populates="bank",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Bank {self.code} {self.name}>"
