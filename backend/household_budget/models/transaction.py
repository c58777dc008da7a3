from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ulid import ULID

from ..domain.entities import MAX_TITLE_LENGTH, new_id
from ..domain.types import TransactionDate
from .base import Base, TimestampMixin
from .types import TransactionDateType, ULIDType


class Transaction(Base, TimestampMixin):
    """
    A payment recorded against a budget entry.

    Amounts are stored as integer minor units to avoid floating point issues.
    """

    __tablename__ = "transactions"

    id: Mapped[ULID] = mapped_column(ULIDType, primary_key=True, default=new_id)
    entry_id: Mapped[ULID] = mapped_column(
        ULIDType, ForeignKey("budget_entries.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[TransactionDate] = mapped_column(TransactionDateType, nullable=False)
    title: Mapped[str | None] = mapped_column(String(MAX_TITLE_LENGTH), nullable=True)

    # Relationships
    entry: Mapped["BudgetEntry"] = relationship("BudgetEntry", back_populates="transactions")

    def __repr__(self) -> str:
        return (
            f"<Transaction(id={self.id}, entry={self.entry_id}, "
            f"date={self.date}, amount={self.amount})>"
        )
