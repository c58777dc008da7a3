from .category_service import CategoryService
from .month_service import MonthService
from .entry_service import EntryService
from .transaction_service import TransactionService
from .summary_service import (
    BudgetStatus,
    CategoryBudgetSummary,
    MonthSummary,
    SummaryService,
    derive_status,
)

__all__ = [
    "CategoryService",
    "MonthService",
    "EntryService",
    "TransactionService",
    "BudgetStatus",
    "CategoryBudgetSummary",
    "MonthSummary",
    "SummaryService",
    "derive_status",
]
