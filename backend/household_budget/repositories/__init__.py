from .category_repository import SqlCategoryRepository
from .month_repository import SqlMonthRepository
from .entry_repository import SqlBudgetEntryRepository
from .transaction_repository import SqlTransactionRepository

__all__ = [
    "SqlCategoryRepository",
    "SqlMonthRepository",
    "SqlBudgetEntryRepository",
    "SqlTransactionRepository",
]
