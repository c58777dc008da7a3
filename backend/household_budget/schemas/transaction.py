from pydantic import BaseModel

from .entry import MinorUnits


class TransactionCreate(BaseModel):
    """Fields for creating a transaction."""
    entry_id: str
    amount: MinorUnits  # Must not be negative
    date: str  # "YYYY-MM-DD"
    title: str | None = None


class TransactionUpdate(BaseModel):
    """
    Fields for updating a transaction (all optional).

    An absent title is left unchanged; an explicit null clears it.
    """
    entry_id: str | None = None
    amount: MinorUnits | None = None
    date: str | None = None
    title: str | None = None


class TransactionResponse(BaseModel):
    id: str
    entry_id: str
    amount: int
    date: str  # "YYYY-MM-DD"
    title: str | None = None
    created_at: str
    updated_at: str


class PaginatedTransactionsResponse(BaseModel):
    items: list[TransactionResponse]
    has_more: bool
