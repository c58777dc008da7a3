from pydantic import BaseModel


class CategoryCreate(BaseModel):
    """Fields for creating a category."""
    name: str
    label: str | None = None


class CategoryUpdate(BaseModel):
    """
    Fields for updating a category (all optional).

    An absent label is left unchanged; an explicit null clears it.
    """
    name: str | None = None
    label: str | None = None


class CategorySummaryResponse(BaseModel):
    """Minimal category info embedded in entries and summaries."""
    id: str
    name: str
    label: str | None = None


class CategoryResponse(BaseModel):
    """Category response with all fields."""
    id: str
    name: str
    label: str | None = None
    created_at: str  # RFC 3339
    updated_at: str
