"""
Column types that persist domain values as text.

    ULID             26-character Crockford base32 string
    BudgetMonth      "YYYY-MM"
    TransactionDate  "YYYY-MM-DD"
    datetime         RFC 3339 UTC with millisecond precision

All of these text forms sort in the same order as the values they encode.
"""

from datetime import datetime, timezone

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator
from ulid import ULID

from ..domain.types import BudgetMonth, TransactionDate


class ULIDType(TypeDecorator):
    impl = String(26)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, str):
            return str(ULID.from_str(value))
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return ULID.from_str(value)


class BudgetMonthType(TypeDecorator):
    impl = String(7)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return BudgetMonth.parse(value)


class TransactionDateType(TypeDecorator):
    impl = String(10)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return TransactionDate.parse(value)


def format_timestamp(value: datetime) -> str:
    """Format as RFC 3339 UTC with milliseconds, e.g. 2026-01-10T08:30:00.123Z."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_timestamp(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value).astimezone(timezone.utc)


class UTCTimestamp(TypeDecorator):
    impl = String(24)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return format_timestamp(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return parse_timestamp(value)
