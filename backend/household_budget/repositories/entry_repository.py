from sqlalchemy import func
from sqlalchemy.orm import contains_eager
from ulid import ULID

from .. import models
from ..domain import (
    KEEP,
    BudgetEntry,
    BudgetEntryRepository,
    BudgetEntryWithCategory,
    CategoryName,
    CategorySummary,
    DueDay,
    FieldUpdate,
    Money,
    utc_now,
)
from ..domain.errors import (
    CategoryAlreadyInMonth,
    CategoryNotFound,
    EntryHasTransactions,
    EntryNotFound,
    EntryRepositoryError,
    MonthNotFound,
)
from ..domain.updates import apply_update, map_update
from .base import SqlRepository, is_foreign_key_violation, is_unique_violation


def _due_day(value: int | None) -> DueDay | None:
    return DueDay(value) if value is not None else None


def to_entry(row: models.BudgetEntry) -> BudgetEntry:
    return BudgetEntry(
        id=row.id,
        month_id=row.month_id,
        category_id=row.category_id,
        budgeted=Money(row.budgeted),
        due_day=_due_day(row.due_day),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def to_entry_with_category(row: models.BudgetEntry) -> BudgetEntryWithCategory:
    return BudgetEntryWithCategory(
        id=row.id,
        month_id=row.month_id,
        category=CategorySummary(
            id=row.category.id,
            name=CategoryName(row.category.name),
            label=row.category.label,
        ),
        budgeted=Money(row.budgeted),
        due_day=_due_day(row.due_day),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlBudgetEntryRepository(SqlRepository, BudgetEntryRepository):
    error_cls = EntryRepositoryError

    def _with_category(self):
        return (
            self.db.query(models.BudgetEntry)
            .join(models.BudgetEntry.category)
            .options(contains_eager(models.BudgetEntry.category))
        )

    def _get_row(self, entry_id: ULID) -> models.BudgetEntry:
        row = self.db.get(models.BudgetEntry, entry_id)
        if row is None:
            raise EntryNotFound()
        return row

    def _month_label(self, month_id: ULID) -> str:
        month = self.db.get(models.Month, month_id)
        return str(month.month) if month else str(month_id)

    def list_by_month(self, month_id: ULID) -> list[BudgetEntryWithCategory]:
        with self._store_errors():
            rows = (
                self._with_category()
                .filter(models.BudgetEntry.month_id == month_id)
                .order_by(
                    models.BudgetEntry.due_day.asc().nulls_last(),
                    models.Category.name.asc(),
                )
                .all()
            )
            return [to_entry_with_category(row) for row in rows]

    def find_by_id(self, entry_id: ULID) -> BudgetEntry | None:
        with self._store_errors():
            row = self.db.get(models.BudgetEntry, entry_id)
            return to_entry(row) if row else None

    def create(
        self,
        month_id: ULID,
        category_id: ULID,
        budgeted: Money,
        due_day: DueDay | None = None,
    ) -> BudgetEntryWithCategory:
        with self._store_errors():
            existing = (
                self.db.query(models.BudgetEntry.id)
                .filter(
                    models.BudgetEntry.month_id == month_id,
                    models.BudgetEntry.category_id == category_id,
                )
                .first()
            )
            if existing is not None:
                raise CategoryAlreadyInMonth(str(category_id), self._month_label(month_id))

            now = utc_now()
            row = models.BudgetEntry(
                month_id=month_id,
                category_id=category_id,
                budgeted=budgeted.value,
                due_day=due_day.value if due_day else None,
                created_at=now,
                updated_at=now,
            )
            self.db.add(row)

            error = self._flush()
            if error is not None:
                if is_unique_violation(error):
                    raise CategoryAlreadyInMonth(
                        str(category_id), self._month_label(month_id)
                    ) from error
                if is_foreign_key_violation(error):
                    if self.db.get(models.Month, month_id) is None:
                        raise MonthNotFound() from error
                    raise CategoryNotFound() from error
                raise EntryRepositoryError(str(error)) from error

            return to_entry_with_category(row)

    def update(
        self,
        entry_id: ULID,
        budgeted: Money | None = None,
        due_day: FieldUpdate[DueDay] = KEEP,
    ) -> BudgetEntryWithCategory:
        with self._store_errors():
            row = self._get_row(entry_id)

            if budgeted is not None:
                row.budgeted = budgeted.value
            row.due_day = apply_update(row.due_day, map_update(due_day, int))

            error = self._flush()
            if error is not None:
                raise EntryRepositoryError(str(error)) from error
            return to_entry_with_category(row)

    def delete(self, entry_id: ULID) -> None:
        with self._store_errors():
            row = self._get_row(entry_id)
            self.db.delete(row)

            error = self._flush()
            if error is not None:
                if is_foreign_key_violation(error):
                    raise EntryHasTransactions(self.transaction_count(entry_id)) from error
                raise EntryRepositoryError(str(error)) from error

    def transaction_count(self, entry_id: ULID) -> int:
        with self._store_errors():
            return (
                self.db.query(func.count(models.Transaction.id))
                .filter(models.Transaction.entry_id == entry_id)
                .scalar()
            )
