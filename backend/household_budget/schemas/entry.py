from typing import Annotated

from pydantic import BaseModel, Field, StrictInt

from ..domain.types import MONEY_MAX, MONEY_MIN
from .category import CategorySummaryResponse

# Integer minor units within the 64-bit range; floats are rejected
MinorUnits = Annotated[StrictInt, Field(ge=MONEY_MIN, le=MONEY_MAX)]


class EntryCreate(BaseModel):
    """Fields for creating a budget entry."""
    category_id: str
    budgeted: MinorUnits
    due_day: StrictInt | None = None


class EntryUpdate(BaseModel):
    """
    Fields for updating a budget entry (all optional).

    An absent due_day is left unchanged; an explicit null clears it.
    """
    budgeted: MinorUnits | None = None
    due_day: StrictInt | None = None


class EntryResponse(BaseModel):
    id: str
    category: CategorySummaryResponse
    budgeted: int
    due_day: int | None = None
    created_at: str
    updated_at: str
