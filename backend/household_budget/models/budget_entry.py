from sqlalchemy import Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ulid import ULID

from ..domain.entities import new_id
from .base import Base, TimestampMixin
from .types import ULIDType


class BudgetEntry(Base, TimestampMixin):
    """Planned allocation of money to one category within one month."""

    __tablename__ = "budget_entries"
    __table_args__ = (
        UniqueConstraint("month_id", "category_id", name="uq_budget_entries_month_category"),
    )

    id: Mapped[ULID] = mapped_column(ULIDType, primary_key=True, default=new_id)
    month_id: Mapped[ULID] = mapped_column(
        ULIDType, ForeignKey("months.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    category_id: Mapped[ULID] = mapped_column(
        ULIDType, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    budgeted: Mapped[int] = mapped_column(Integer, nullable=False)  # Minor units
    due_day: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Relationships
    month: Mapped["Month"] = relationship("Month", back_populates="entries")
    category: Mapped["Category"] = relationship("Category", back_populates="entries")
    transactions: Mapped[list["Transaction"]] = relationship(
        "Transaction", back_populates="entry", passive_deletes="all"
    )

    def __repr__(self) -> str:
        return (
            f"<BudgetEntry(id={self.id}, month={self.month_id}, "
            f"category={self.category_id}, budgeted={self.budgeted})>"
        )
