"""
Domain error taxonomy.

Every concrete error derives from one kind (not-found, conflict, validation,
repository) and one entity base, and carries a stable ``code`` plus a
``details`` mapping for callers that render machine-readable responses.
"""

from typing import Any


class BudgetError(Exception):
    """Base class for all domain errors."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message())

    def default_message(self) -> str:
        return self.code.replace("_", " ").capitalize()

    @property
    def details(self) -> dict[str, Any]:
        return {}


# --- Kinds ---

class NotFoundError(BudgetError):
    """Entity absent for the requested id."""


class ConflictError(BudgetError):
    """Operation conflicts with existing state."""


class DomainValidationError(BudgetError):
    """Input violates a domain rule."""


class RepositoryError(BudgetError):
    """Opaque store failure. The cause is for logs, never for external callers."""

    def __init__(self, cause: str):
        self.cause = cause
        super().__init__(f"Repository error: {cause}")


# --- Entity bases ---

class CategoryError(BudgetError):
    pass


class MonthError(BudgetError):
    pass


class EntryError(BudgetError):
    pass


class TransactionError(BudgetError):
    pass


# --- Category ---

class CategoryNotFound(CategoryError, NotFoundError):
    code = "CATEGORY_NOT_FOUND"

    def default_message(self) -> str:
        return "Category not found"


class CategoryNameAlreadyExists(CategoryError, ConflictError):
    code = "CATEGORY_NAME_ALREADY_EXISTS"

    def __init__(self, name: str):
        self.name = str(name)
        super().__init__(f"Category name already exists: {self.name}")

    @property
    def details(self) -> dict[str, Any]:
        return {"name": self.name}


class InvalidCategoryName(CategoryError, DomainValidationError):
    code = "CATEGORY_INVALID_NAME"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid category name format: {reason}")

    @property
    def details(self) -> dict[str, Any]:
        return {"reason": self.reason}


class CategoryRepositoryError(CategoryError, RepositoryError):
    pass


# --- Month ---

class MonthNotFound(MonthError, NotFoundError):
    code = "MONTH_NOT_FOUND"

    def default_message(self) -> str:
        return "Month not found"


class MonthAlreadyExists(MonthError, ConflictError):
    code = "MONTH_ALREADY_EXISTS"

    def __init__(self, month: str):
        self.month = str(month)
        super().__init__(f"Month already exists: {self.month}")

    @property
    def details(self) -> dict[str, Any]:
        return {"month": self.month}


class InvalidBudgetMonth(MonthError, DomainValidationError):
    code = "MONTH_INVALID_FORMAT"

    def __init__(self, value: str, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid budget month: {reason}")

    @property
    def details(self) -> dict[str, Any]:
        return {"value": self.value, "reason": self.reason}


class MonthRepositoryError(MonthError, RepositoryError):
    pass


# --- Budget entry ---

class EntryNotFound(EntryError, NotFoundError):
    code = "ENTRY_NOT_FOUND"

    def default_message(self) -> str:
        return "Entry not found"


class CategoryAlreadyInMonth(EntryError, ConflictError):
    code = "ENTRY_CATEGORY_ALREADY_IN_MONTH"

    def __init__(self, category_id: str, month: str):
        self.category_id = str(category_id)
        self.month = str(month)
        super().__init__(f"Category {self.category_id} already in month {self.month}")

    @property
    def details(self) -> dict[str, Any]:
        return {"category_id": self.category_id, "month": self.month}


class EntryHasTransactions(EntryError, ConflictError):
    code = "ENTRY_HAS_TRANSACTIONS"

    def __init__(self, transaction_count: int):
        self.transaction_count = transaction_count
        super().__init__(f"Entry has {transaction_count} transaction(s)")

    @property
    def details(self) -> dict[str, Any]:
        return {"transaction_count": self.transaction_count}


class InvalidDueDay(EntryError, DomainValidationError):
    code = "ENTRY_INVALID_DUE_DAY"

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Invalid due day: {value}")

    @property
    def details(self) -> dict[str, Any]:
        return {"value": self.value}


class EntryRepositoryError(EntryError, RepositoryError):
    pass


# --- Transaction ---

class TransactionNotFound(TransactionError, NotFoundError):
    code = "TRANSACTION_NOT_FOUND"

    def default_message(self) -> str:
        return "Transaction not found"


class TransactionEntryNotFound(TransactionError, NotFoundError):
    code = "TRANSACTION_ENTRY_NOT_FOUND"

    def default_message(self) -> str:
        return "Entry not found"


class InvalidAmount(TransactionError, DomainValidationError):
    code = "TRANSACTION_INVALID_AMOUNT"

    def __init__(self, value: int):
        self.value = value
        super().__init__(f"Invalid amount: {value}")

    @property
    def details(self) -> dict[str, Any]:
        return {"value": self.value}


class InvalidTransactionDate(TransactionError, DomainValidationError):
    code = "TRANSACTION_INVALID_DATE"

    def __init__(self, value: str, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid date: {reason}")

    @property
    def details(self) -> dict[str, Any]:
        return {"value": self.value}


class TitleTooLong(TransactionError, DomainValidationError):
    code = "TRANSACTION_TITLE_TOO_LONG"

    def __init__(self, length: int, max: int):
        self.length = length
        self.max = max
        super().__init__(f"Title too long: {length} characters (max {max})")

    @property
    def details(self) -> dict[str, Any]:
        return {"length": self.length, "max": self.max}


class TransactionRepositoryError(TransactionError, RepositoryError):
    pass
