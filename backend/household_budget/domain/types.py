"""
Self-validating value types for the budget domain.

All types are immutable. Invalid input raises the matching validation error
from ``errors`` at construction time, so an instance that exists is valid.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable

from .errors import (
    InvalidBudgetMonth,
    InvalidCategoryName,
    InvalidDueDay,
    InvalidTransactionDate,
)

MIN_YEAR = 2000
MAX_YEAR = 2100

MONEY_MIN = -(2 ** 63)
MONEY_MAX = 2 ** 63 - 1

_BUDGET_MONTH_RE = re.compile(r"(\d+)-(\d+)", re.ASCII)


@dataclass(frozen=True, order=True)
class Money:
    """
    Amount in minor units (cents, grosz).

    Stored as a plain signed integer to avoid floating point issues.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Money requires an integer amount of minor units, got {self.value!r}")
        if not MONEY_MIN <= self.value <= MONEY_MAX:
            raise OverflowError(f"Money amount out of 64-bit range: {self.value}")

    @classmethod
    def zero(cls) -> "Money":
        return cls(0)

    @classmethod
    def sum(cls, amounts: Iterable["Money"]) -> "Money":
        """Sum a collection of amounts; an empty collection sums to zero."""
        total = cls.zero()
        for amount in amounts:
            total = total + amount
        return total

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.value + other.value)

    def __sub__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.value - other.value)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True)
class BudgetMonth:
    """A calendar month, ordered by (year, month). Canonical form is YYYY-MM."""

    year: int
    month: int

    def __post_init__(self) -> None:
        value = f"{self.year}-{self.month}"
        if not MIN_YEAR <= self.year <= MAX_YEAR:
            raise InvalidBudgetMonth(
                value, f"year must be between {MIN_YEAR} and {MAX_YEAR}, got {self.year}"
            )
        if not 1 <= self.month <= 12:
            raise InvalidBudgetMonth(value, f"month must be between 1 and 12, got {self.month}")

    @classmethod
    def parse(cls, value: str) -> "BudgetMonth":
        """
        Parse a YYYY-MM string.

        Each part is read as a plain integer, so non-padded ("2026-1") and
        zero-padded ("2026-001", "02026-01") forms are accepted; only the
        year and month ranges are checked.
        """
        match = _BUDGET_MONTH_RE.fullmatch(value)
        if not match:
            raise InvalidBudgetMonth(value, f"expected YYYY-MM format, got '{value}'")
        try:
            year, month = (int(part) for part in match.groups())
        except ValueError:
            # Digit strings past the int conversion limit
            raise InvalidBudgetMonth(value, f"expected YYYY-MM format, got '{value}'") from None
        return cls(year, month)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True, order=True)
class DueDay:
    """Day of month a payment is due. No check against the actual month length."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidDueDay(self.value)
        if not 1 <= self.value <= 31:
            raise InvalidDueDay(self.value)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True)
class CategoryName:
    """
    Hierarchical category name such as ``utils/electricity``.

    Segments are separated by ``/`` and may contain only alphanumeric
    characters, hyphens and underscores.
    """

    value: str

    def __post_init__(self) -> None:
        value = self.value
        if not isinstance(value, str) or not value:
            raise InvalidCategoryName("category name must not be empty")
        if value.startswith("/"):
            raise InvalidCategoryName("category name must not start with '/'")
        if value.endswith("/"):
            raise InvalidCategoryName("category name must not end with '/'")
        if "//" in value:
            raise InvalidCategoryName(
                "category name must not contain empty segments (double slashes)"
            )
        for segment in value.split("/"):
            if not segment:
                raise InvalidCategoryName("category name must not contain empty segments")
            if not all(ch.isalnum() or ch in "-_" for ch in segment):
                raise InvalidCategoryName(
                    f"segment '{segment}' contains invalid characters; "
                    "only alphanumeric, hyphens, and underscores are allowed"
                )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class TransactionDate:
    """Calendar date of a transaction. Canonical form is YYYY-MM-DD."""

    value: date

    def __post_init__(self) -> None:
        if isinstance(self.value, datetime) or not isinstance(self.value, date):
            raise InvalidTransactionDate(
                str(self.value), "transaction date must be a calendar date"
            )

    @classmethod
    def parse(cls, value: str) -> "TransactionDate":
        try:
            parsed = datetime.strptime(value, "%Y-%m-%d").date()
        except (TypeError, ValueError):
            raise InvalidTransactionDate(
                str(value), f"expected YYYY-MM-DD format, got '{value}'"
            ) from None
        return cls(parsed)

    def __str__(self) -> str:
        return self.value.isoformat()
