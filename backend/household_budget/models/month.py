from sqlalchemy.orm import Mapped, mapped_column, relationship
from ulid import ULID

from ..domain.entities import new_id
from ..domain.types import BudgetMonth
from .base import Base, TimestampMixin
from .types import BudgetMonthType, ULIDType


class Month(Base, TimestampMixin):
    """One budgeting period. At most one record per calendar month."""

    __tablename__ = "months"

    id: Mapped[ULID] = mapped_column(ULIDType, primary_key=True, default=new_id)
    month: Mapped[BudgetMonth] = mapped_column(BudgetMonthType, nullable=False, unique=True)

    # Relationships
    entries: Mapped[list["BudgetEntry"]] = relationship(
        "BudgetEntry", back_populates="month", passive_deletes="all"
    )

    def __repr__(self) -> str:
        return f"<Month(id={self.id}, month='{self.month}')>"
