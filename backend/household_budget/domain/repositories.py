"""
Repository contracts required by the services.

Services depend only on these abstract classes. The SQLAlchemy adapters in
``household_budget.repositories`` implement them for the real store, and the
test suite implements them in memory.

Implementations must classify store failures into the domain error taxonomy:
constraint violations become the documented conflict or not-found errors, any
other store failure becomes the entity's repository error.
"""

from abc import ABC, abstractmethod

from ulid import ULID

from .entities import (
    BudgetEntry,
    BudgetEntryWithCategory,
    Category,
    Month,
    Transaction,
)
from .types import BudgetMonth, CategoryName, DueDay, Money, TransactionDate
from .updates import KEEP, FieldUpdate


class CategoryRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[Category]:
        """All categories ordered by name ascending."""

    @abstractmethod
    def find_by_id(self, category_id: ULID) -> Category | None:
        pass

    @abstractmethod
    def create(self, name: CategoryName, label: str | None = None) -> Category:
        """
        Insert a new category.

        Raises:
            CategoryNameAlreadyExists: If the name is taken (exact match)
        """

    @abstractmethod
    def update_name(self, category_id: ULID, name: CategoryName) -> Category:
        """
        Rename a category.

        Raises:
            CategoryNotFound: If the category does not exist
            CategoryNameAlreadyExists: If the new name is taken
        """

    @abstractmethod
    def update(
        self,
        category_id: ULID,
        name: CategoryName | None = None,
        label: FieldUpdate[str] = KEEP,
    ) -> Category:
        """
        Partially update a category. ``name=None`` leaves the name unchanged.

        Raises:
            CategoryNotFound: If the category does not exist
            CategoryNameAlreadyExists: If the new name is taken
        """


class MonthRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[Month]:
        """All months, newest first."""

    @abstractmethod
    def find_by_id(self, month_id: ULID) -> Month | None:
        pass

    @abstractmethod
    def find_by_month(self, month: BudgetMonth) -> Month | None:
        pass

    @abstractmethod
    def create(self, month: BudgetMonth) -> Month:
        """
        Insert a new month.

        Raises:
            MonthAlreadyExists: If the calendar month already has a record
        """

    @abstractmethod
    def find_latest(self) -> Month | None:
        """The month with the greatest BudgetMonth, if any."""

    @abstractmethod
    def find_latest_excluding(self, exclude_id: ULID) -> Month | None:
        """The month with the greatest BudgetMonth other than ``exclude_id``."""


class BudgetEntryRepository(ABC):

    @abstractmethod
    def list_by_month(self, month_id: ULID) -> list[BudgetEntryWithCategory]:
        """Entries of a month ordered by due day (nulls last), then category name."""

    @abstractmethod
    def find_by_id(self, entry_id: ULID) -> BudgetEntry | None:
        pass

    @abstractmethod
    def create(
        self,
        month_id: ULID,
        category_id: ULID,
        budgeted: Money,
        due_day: DueDay | None = None,
    ) -> BudgetEntryWithCategory:
        """
        Insert a new entry.

        Raises:
            CategoryAlreadyInMonth: If the category already has an entry in the month
            MonthNotFound: If the month does not exist
            CategoryNotFound: If the category does not exist
        """

    @abstractmethod
    def update(
        self,
        entry_id: ULID,
        budgeted: Money | None = None,
        due_day: FieldUpdate[DueDay] = KEEP,
    ) -> BudgetEntryWithCategory:
        """
        Partially update an entry.

        Raises:
            EntryNotFound: If the entry does not exist
        """

    @abstractmethod
    def delete(self, entry_id: ULID) -> None:
        """
        Raises:
            EntryNotFound: If the entry does not exist
            EntryHasTransactions: If transactions still reference the entry
        """

    @abstractmethod
    def transaction_count(self, entry_id: ULID) -> int:
        pass


class TransactionRepository(ABC):

    @abstractmethod
    def list_by_month(self, month_id: ULID) -> list[Transaction]:
        """Transactions of all entries in a month, newest date first."""

    @abstractmethod
    def find_by_id(self, transaction_id: ULID) -> Transaction | None:
        pass

    @abstractmethod
    def create(
        self,
        entry_id: ULID,
        amount: Money,
        date: TransactionDate,
        title: str | None = None,
    ) -> Transaction:
        """
        Raises:
            TransactionEntryNotFound: If the entry does not exist
        """

    @abstractmethod
    def update(
        self,
        transaction_id: ULID,
        entry_id: ULID | None = None,
        amount: Money | None = None,
        date: TransactionDate | None = None,
        title: FieldUpdate[str] = KEEP,
    ) -> Transaction:
        """
        Raises:
            TransactionNotFound: If the transaction does not exist
            TransactionEntryNotFound: If the new entry does not exist
        """

    @abstractmethod
    def delete(self, transaction_id: ULID) -> None:
        """
        Raises:
            TransactionNotFound: If the transaction does not exist
        """

    @abstractmethod
    def sum_by_entry(self, entry_id: ULID) -> Money:
        """Total of all transaction amounts for an entry, zero if none."""

    @abstractmethod
    def list_by_entry(self, entry_id: ULID, limit: int, offset: int) -> list[Transaction]:
        """One page of an entry's transactions, newest date first."""
