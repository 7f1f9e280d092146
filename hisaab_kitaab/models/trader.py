"""
Trader model.

A trader owns any number of banks. Deleting a trader deletes
its banks and, through them, every ledger entry.
"""

from datetime import datetime

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hisaab_kitaab.models.base import Base


class Trader(Base):
    __tablename__ = "traders"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    short_name: Mapped[str] = mapped_column(String(10), nullable=False)
    color: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    banks: Mapped[list["Bank"]] = relationship(
        back_populates="trader",
        cascade="all, delete-orphan",
        order_by="Bank.name",
    )

    def __repr__(self) -> str:
        return f"<Trader {self.short_name} {self.name}>"
