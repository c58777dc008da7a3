from sqlalchemy import func
from ulid import ULID

from .. import models
from ..domain import (
    KEEP,
    FieldUpdate,
    Money,
    Transaction,
    TransactionDate,
    TransactionRepository,
    utc_now,
)
from ..domain.errors import (
    TransactionEntryNotFound,
    TransactionNotFound,
    TransactionRepositoryError,
)
from ..domain.updates import apply_update
from .base import SqlRepository, is_foreign_key_violation


def to_transaction(row: models.Transaction) -> Transaction:
    return Transaction(
        id=row.id,
        entry_id=row.entry_id,
        amount=Money(row.amount),
        date=row.date,
        title=row.title,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlTransactionRepository(SqlRepository, TransactionRepository):
    error_cls = TransactionRepositoryError

    @staticmethod
    def _newest_first(query):
        return query.order_by(
            models.Transaction.date.desc(),
            models.Transaction.created_at.desc(),
        )

    def _get_row(self, transaction_id: ULID) -> models.Transaction:
        row = self.db.get(models.Transaction, transaction_id)
        if row is None:
            raise TransactionNotFound()
        return row

    def _save(self, row: models.Transaction) -> Transaction:
        error = self._flush()
        if error is not None:
            if is_foreign_key_violation(error):
                raise TransactionEntryNotFound() from error
            raise TransactionRepositoryError(str(error)) from error
        return to_transaction(row)

    def list_by_month(self, month_id: ULID) -> list[Transaction]:
        with self._store_errors():
            query = (
                self.db.query(models.Transaction)
                .join(models.Transaction.entry)
                .filter(models.BudgetEntry.month_id == month_id)
            )
            return [to_transaction(row) for row in self._newest_first(query).all()]

    def find_by_id(self, transaction_id: ULID) -> Transaction | None:
        with self._store_errors():
            row = self.db.get(models.Transaction, transaction_id)
            return to_transaction(row) if row else None

    def create(
        self,
        entry_id: ULID,
        amount: Money,
        date: TransactionDate,
        title: str | None = None,
    ) -> Transaction:
        with self._store_errors():
            now = utc_now()
            row = models.Transaction(
                entry_id=entry_id,
                amount=amount.value,
                date=date,
                title=title,
                created_at=now,
                updated_at=now,
            )
            self.db.add(row)
            return self._save(row)

    def update(
        self,
        transaction_id: ULID,
        entry_id: ULID | None = None,
        amount: Money | None = None,
        date: TransactionDate | None = None,
        title: FieldUpdate[str] = KEEP,
    ) -> Transaction:
        with self._store_errors():
            row = self._get_row(transaction_id)

            if entry_id is not None:
                row.entry_id = entry_id
            if amount is not None:
                row.amount = amount.value
            if date is not None:
                row.date = date
            row.title = apply_update(row.title, title)

            return self._save(row)

    def delete(self, transaction_id: ULID) -> None:
        with self._store_errors():
            row = self._get_row(transaction_id)
            self.db.delete(row)
            self.db.flush()

    def sum_by_entry(self, entry_id: ULID) -> Money:
        with self._store_errors():
            total = (
                self.db.query(func.coalesce(func.sum(models.Transaction.amount), 0))
                .filter(models.Transaction.entry_id == entry_id)
                .scalar()
            )
            return Money(int(total))

    def list_by_entry(self, entry_id: ULID, limit: int, offset: int) -> list[Transaction]:
        with self._store_errors():
            query = self.db.query(models.Transaction).filter(
                models.Transaction.entry_id == entry_id
            )
            rows = self._newest_first(query).limit(limit).offset(offset).all()
            return [to_transaction(row) for row in rows]
