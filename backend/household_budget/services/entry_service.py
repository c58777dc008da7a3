import structlog
from ulid import ULID

from ..domain import (
    KEEP,
    BudgetEntryRepository,
    BudgetEntryWithCategory,
    CategoryRepository,
    DueDay,
    FieldUpdate,
    Money,
    MonthRepository,
)
from ..domain.errors import CategoryNotFound, EntryHasTransactions, MonthNotFound

logger = structlog.get_logger(__name__)


class EntryService:
    def __init__(
        self,
        entry_repo: BudgetEntryRepository,
        category_repo: CategoryRepository,
        month_repo: MonthRepository,
    ):
        self.entry_repo = entry_repo
        self.category_repo = category_repo
        self.month_repo = month_repo

    def list_by_month(self, month_id: ULID) -> list[BudgetEntryWithCategory]:
        if self.month_repo.find_by_id(month_id) is None:
            raise MonthNotFound()
        return self.entry_repo.list_by_month(month_id)

    def create(
        self,
        month_id: ULID,
        category_id: ULID,
        budgeted: Money,
        due_day: DueDay | None = None,
    ) -> BudgetEntryWithCategory:
        if self.month_repo.find_by_id(month_id) is None:
            raise MonthNotFound()
        if self.category_repo.find_by_id(category_id) is None:
            raise CategoryNotFound()

        entry = self.entry_repo.create(
            month_id=month_id,
            category_id=category_id,
            budgeted=budgeted,
            due_day=due_day,
        )
        logger.info(
            "entry_created",
            entry_id=str(entry.id),
            month_id=str(month_id),
            category_id=str(category_id),
        )
        return entry

    def update(
        self,
        entry_id: ULID,
        budgeted: Money | None = None,
        due_day: FieldUpdate[DueDay] = KEEP,
    ) -> BudgetEntryWithCategory:
        return self.entry_repo.update(entry_id, budgeted=budgeted, due_day=due_day)

    def delete(self, entry_id: ULID) -> None:
        """
        Delete an entry that has no transactions.

        The count and the delete are separate round-trips; a transaction
        created in between is caught by the store's foreign key instead.
        """
        count = self.entry_repo.transaction_count(entry_id)
        if count > 0:
            raise EntryHasTransactions(count)
        self.entry_repo.delete(entry_id)
        logger.info("entry_deleted", entry_id=str(entry_id))
