import structlog
from ulid import ULID

from ..domain import (
    KEEP,
    MAX_TITLE_LENGTH,
    BudgetEntryRepository,
    FieldUpdate,
    Money,
    Transaction,
    TransactionDate,
    TransactionRepository,
)
from ..domain.errors import (
    InvalidAmount,
    TitleTooLong,
    TransactionEntryNotFound,
    TransactionNotFound,
)
from ..domain.updates import Set, map_update

logger = structlog.get_logger(__name__)


def normalize_title(title: str | None) -> str | None:
    """Trim whitespace; empty or whitespace-only titles become None."""
    if title is None:
        return None
    title = title.strip()
    return title or None


def validate_title_length(title: str | None) -> None:
    if title is not None and len(title) > MAX_TITLE_LENGTH:
        raise TitleTooLong(length=len(title), max=MAX_TITLE_LENGTH)


def validate_amount(amount: Money) -> None:
    if amount.value < 0:
        raise InvalidAmount(amount.value)


class TransactionService:
    def __init__(
        self,
        transaction_repo: TransactionRepository,
        entry_repo: BudgetEntryRepository,
    ):
        self.transaction_repo = transaction_repo
        self.entry_repo = entry_repo

    def list_by_month(self, month_id: ULID) -> list[Transaction]:
        return self.transaction_repo.list_by_month(month_id)

    def list_by_entry(self, entry_id: ULID, limit: int, offset: int = 0) -> list[Transaction]:
        return self.transaction_repo.list_by_entry(entry_id, limit, offset)

    def find_by_id(self, transaction_id: ULID) -> Transaction:
        transaction = self.transaction_repo.find_by_id(transaction_id)
        if transaction is None:
            raise TransactionNotFound()
        return transaction

    def _ensure_entry_exists(self, entry_id: ULID) -> None:
        if self.entry_repo.find_by_id(entry_id) is None:
            raise TransactionEntryNotFound()

    def create(
        self,
        entry_id: ULID,
        amount: Money,
        date: TransactionDate,
        title: str | None = None,
    ) -> Transaction:
        """
        Record a payment against a budget entry.

        Amount and title are validated before the store is touched.

        Raises:
            InvalidAmount: If the amount is negative
            TitleTooLong: If the normalized title exceeds MAX_TITLE_LENGTH
            TransactionEntryNotFound: If the budget entry does not exist
        """
        validate_amount(amount)
        title = normalize_title(title)
        validate_title_length(title)
        self._ensure_entry_exists(entry_id)

        transaction = self.transaction_repo.create(
            entry_id=entry_id,
            amount=amount,
            date=date,
            title=title,
        )
        logger.info(
            "transaction_created",
            transaction_id=str(transaction.id),
            entry_id=str(entry_id),
            amount=amount.value,
        )
        return transaction

    def update(
        self,
        transaction_id: ULID,
        entry_id: ULID | None = None,
        amount: Money | None = None,
        date: TransactionDate | None = None,
        title: FieldUpdate[str] = KEEP,
    ) -> Transaction:
        """
        Partially update a transaction.

        Only supplied fields are validated. ``title`` is KEEP, CLEAR or
        Set(text); a blank text clears the title.
        """
        if amount is not None:
            validate_amount(amount)
        title = map_update(title, normalize_title)
        if isinstance(title, Set):
            validate_title_length(title.value)
        if entry_id is not None:
            self._ensure_entry_exists(entry_id)

        return self.transaction_repo.update(
            transaction_id,
            entry_id=entry_id,
            amount=amount,
            date=date,
            title=title,
        )

    def delete(self, transaction_id: ULID) -> None:
        self.transaction_repo.delete(transaction_id)
        logger.info("transaction_deleted", transaction_id=str(transaction_id))
