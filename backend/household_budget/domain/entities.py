from dataclasses import dataclass
from datetime import datetime, timezone

from ulid import ULID

from .types import BudgetMonth, CategoryName, DueDay, Money, TransactionDate

MAX_TITLE_LENGTH = 50


def new_id() -> ULID:
    """Generate a fresh time-ordered identifier."""
    return ULID()


def utc_now() -> datetime:
    """Current UTC time truncated to millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


@dataclass(frozen=True)
class Category:
    id: ULID
    name: CategoryName
    label: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class CategorySummary:
    """Minimal category info embedded in entries and summaries."""

    id: ULID
    name: CategoryName
    label: str | None = None


@dataclass(frozen=True)
class Month:
    id: ULID
    month: BudgetMonth
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class BudgetEntry:
    id: ULID
    month_id: ULID
    category_id: ULID
    budgeted: Money
    due_day: DueDay | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class BudgetEntryWithCategory:
    """Budget entry with inlined category info."""

    id: ULID
    month_id: ULID
    category: CategorySummary
    budgeted: Money
    due_day: DueDay | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Transaction:
    id: ULID
    entry_id: ULID
    amount: Money
    date: TransactionDate
    title: str | None
    created_at: datetime
    updated_at: datetime
