from fastapi import Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..repositories import (
    SqlBudgetEntryRepository,
    SqlCategoryRepository,
    SqlMonthRepository,
    SqlTransactionRepository,
)
from ..services import (
    CategoryService,
    EntryService,
    MonthService,
    SummaryService,
    TransactionService,
)


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(SqlCategoryRepository(db))


def get_month_service(db: Session = Depends(get_db)) -> MonthService:
    return MonthService(SqlMonthRepository(db), SqlBudgetEntryRepository(db))


def get_entry_service(db: Session = Depends(get_db)) -> EntryService:
    return EntryService(
        SqlBudgetEntryRepository(db),
        SqlCategoryRepository(db),
        SqlMonthRepository(db),
    )


def get_transaction_service(db: Session = Depends(get_db)) -> TransactionService:
    return TransactionService(SqlTransactionRepository(db), SqlBudgetEntryRepository(db))


def get_summary_service(db: Session = Depends(get_db)) -> SummaryService:
    return SummaryService(
        SqlBudgetEntryRepository(db),
        SqlTransactionRepository(db),
        SqlMonthRepository(db),
    )
