from .types import BudgetMonth, CategoryName, DueDay, Money, TransactionDate
from .entities import (
    MAX_TITLE_LENGTH,
    BudgetEntry,
    BudgetEntryWithCategory,
    Category,
    CategorySummary,
    Month,
    Transaction,
    new_id,
    utc_now,
)
from .updates import CLEAR, KEEP, Clear, FieldUpdate, Keep, Set
from .repositories import (
    BudgetEntryRepository,
    CategoryRepository,
    MonthRepository,
    TransactionRepository,
)

__all__ = [
    "BudgetMonth",
    "CategoryName",
    "DueDay",
    "Money",
    "TransactionDate",
    "MAX_TITLE_LENGTH",
    "BudgetEntry",
    "BudgetEntryWithCategory",
    "Category",
    "CategorySummary",
    "Month",
    "Transaction",
    "new_id",
    "utc_now",
    "CLEAR",
    "KEEP",
    "Clear",
    "FieldUpdate",
    "Keep",
    "Set",
    "BudgetEntryRepository",
    "CategoryRepository",
    "MonthRepository",
    "TransactionRepository",
]
