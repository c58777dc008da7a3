from .base import Base, TimestampMixin
from .category import Category
from .month import Month
from .budget_entry import BudgetEntry
from .transaction import Transaction

__all__ = [
    "Base",
    "TimestampMixin",
    "Category",
    "Month",
    "BudgetEntry",
    "Transaction",
]
