from pydantic import BaseModel


class MonthCreate(BaseModel):
    """Fields for creating a month."""
    month: str  # "YYYY-MM"
    copy_from: str | None = None  # Month id to copy entries from
    empty: bool = False  # Create the month with no entries


class MonthResponse(BaseModel):
    id: str
    month: str  # "YYYY-MM"
    created_at: str
    updated_at: str
