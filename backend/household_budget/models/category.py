from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ulid import ULID

from ..domain.entities import new_id
from .base import Base, TimestampMixin
from .types import ULIDType


class Category(Base, TimestampMixin):
    """
    Spending category.
    Hierarchy is encoded in the name itself ("utils/electricity").
    """

    __tablename__ = "categories"

    id: Mapped[ULID] = mapped_column(ULIDType, primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    label: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Relationships
    entries: Mapped[list["BudgetEntry"]] = relationship(
        "BudgetEntry", back_populates="category", passive_deletes="all"
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"
