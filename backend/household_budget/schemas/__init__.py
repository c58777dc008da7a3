from .category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategorySummaryResponse,
)
from .month import MonthCreate, MonthResponse
from .entry import EntryCreate, EntryUpdate, EntryResponse
from .transaction import (
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    PaginatedTransactionsResponse,
)
from .summary import CategoryBudgetSummaryResponse, MonthSummaryResponse

__all__ = [
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategorySummaryResponse",
    "MonthCreate",
    "MonthResponse",
    "EntryCreate",
    "EntryUpdate",
    "EntryResponse",
    "TransactionCreate",
    "TransactionUpdate",
    "TransactionResponse",
    "PaginatedTransactionsResponse",
    "CategoryBudgetSummaryResponse",
    "MonthSummaryResponse",
]
