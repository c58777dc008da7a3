import structlog
from ulid import ULID

from ..domain import BudgetEntryRepository, BudgetMonth, Month, MonthRepository
from ..domain.errors import BudgetError, MonthNotFound, MonthRepositoryError

logger = structlog.get_logger(__name__)


class MonthService:
    def __init__(self, month_repo: MonthRepository, entry_repo: BudgetEntryRepository):
        self.month_repo = month_repo
        self.entry_repo = entry_repo

    def list_all(self) -> list[Month]:
        return self.month_repo.list_all()

    def find_by_id(self, month_id: ULID) -> Month:
        month = self.month_repo.find_by_id(month_id)
        if month is None:
            raise MonthNotFound()
        return month

    def create(
        self,
        month: BudgetMonth,
        copy_from: ULID | None = None,
        empty: bool = False,
    ) -> Month:
        """
        Create a month and, unless ``empty``, copy budget entries into it.

        Entries are copied from ``copy_from`` when given, otherwise from the
        latest existing month. The service does not commit: callers that need
        all-or-nothing behaviour run it inside one store transaction.

        Raises:
            MonthAlreadyExists: If the calendar month already exists
            MonthNotFound: If ``copy_from`` does not resolve
            MonthRepositoryError: If listing or copying entries fails
        """
        created = self.month_repo.create(month)
        logger.info("month_created", month_id=str(created.id), month=str(created.month))

        if empty:
            return created

        if copy_from is not None:
            source = self.month_repo.find_by_id(copy_from)
            if source is None:
                raise MonthNotFound()
        else:
            source = self.month_repo.find_latest_excluding(created.id)

        if source is None:
            return created

        try:
            entries = self.entry_repo.list_by_month(source.id)
        except BudgetError as e:
            raise MonthRepositoryError(f"Failed to list entries for copy: {e}") from e

        for entry in entries:
            try:
                self.entry_repo.create(
                    month_id=created.id,
                    category_id=entry.category.id,
                    budgeted=entry.budgeted,
                    due_day=entry.due_day,
                )
            except BudgetError as e:
                raise MonthRepositoryError(f"Failed to copy entry: {e}") from e

        logger.info(
            "month_entries_copied",
            month_id=str(created.id),
            source_month_id=str(source.id),
            entry_count=len(entries),
        )
        return created
