from ulid import ULID

from .. import models
from ..domain import BudgetMonth, Month, MonthRepository, utc_now
from ..domain.errors import MonthAlreadyExists, MonthRepositoryError
from .base import SqlRepository, is_unique_violation


def to_month(row: models.Month) -> Month:
    return Month(
        id=row.id,
        month=row.month,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlMonthRepository(SqlRepository, MonthRepository):
    error_cls = MonthRepositoryError

    def list_all(self) -> list[Month]:
        with self._store_errors():
            rows = self.db.query(models.Month).order_by(models.Month.month.desc()).all()
            return [to_month(row) for row in rows]

    def find_by_id(self, month_id: ULID) -> Month | None:
        with self._store_errors():
            row = self.db.get(models.Month, month_id)
            return to_month(row) if row else None

    def find_by_month(self, month: BudgetMonth) -> Month | None:
        with self._store_errors():
            row = self.db.query(models.Month).filter(models.Month.month == month).first()
            return to_month(row) if row else None

    def create(self, month: BudgetMonth) -> Month:
        with self._store_errors():
            if self.find_by_month(month) is not None:
                raise MonthAlreadyExists(str(month))

            now = utc_now()
            row = models.Month(month=month, created_at=now, updated_at=now)
            self.db.add(row)

            error = self._flush()
            if error is not None:
                if is_unique_violation(error):
                    raise MonthAlreadyExists(str(month)) from error
                raise MonthRepositoryError(str(error)) from error
            return to_month(row)

    def find_latest(self) -> Month | None:
        with self._store_errors():
            row = self.db.query(models.Month).order_by(models.Month.month.desc()).first()
            return to_month(row) if row else None

    def find_latest_excluding(self, exclude_id: ULID) -> Month | None:
        with self._store_errors():
            row = (
                self.db.query(models.Month)
                .filter(models.Month.id != exclude_id)
                .order_by(models.Month.month.desc())
                .first()
            )
            return to_month(row) if row else None
