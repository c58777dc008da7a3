from datetime import datetime

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ..domain.entities import utc_now
from .types import UTCTimestamp


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    """Adds created_at/updated_at columns maintained on insert and update."""

    created_at: Mapped[datetime] = mapped_column(
        UTCTimestamp, nullable=False, default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCTimestamp, nullable=False, default=utc_now, onupdate=utc_now
    )
