from fastapi import APIRouter, Depends, Response

from ..domain import CLEAR, KEEP, BudgetEntryWithCategory, DueDay, Money, Set
from ..models.types import format_timestamp
from ..schemas import EntryCreate, EntryUpdate, EntryResponse
from ..services import EntryService
from .deps import get_entry_service
from .errors import parse_id

router = APIRouter()


def _build_response(entry: BudgetEntryWithCategory) -> dict:
    return {
        "id": str(entry.id),
        "category": {
            "id": str(entry.category.id),
            "name": str(entry.category.name),
            "label": entry.category.label,
        },
        "budgeted": entry.budgeted.value,
        "due_day": entry.due_day.value if entry.due_day is not None else None,
        "created_at": format_timestamp(entry.created_at),
        "updated_at": format_timestamp(entry.updated_at),
    }


@router.get("", response_model=list[EntryResponse])
def list_entries(month_id: str, service: EntryService = Depends(get_entry_service)):
    """Get a month's entries, by due day then category name."""
    return [_build_response(e) for e in service.list_by_month(parse_id(month_id))]


@router.post("", response_model=EntryResponse, status_code=201)
def create_entry(
    month_id: str,
    data: EntryCreate,
    service: EntryService = Depends(get_entry_service),
):
    month_ulid = parse_id(month_id)
    category_ulid = parse_id(data.category_id)
    due_day = DueDay(data.due_day) if data.due_day is not None else None

    entry = service.create(
        month_ulid,
        category_ulid,
        Money(data.budgeted),
        due_day,
    )
    return _build_response(entry)


@router.patch("/{entry_id}", response_model=EntryResponse)
def update_entry(
    month_id: str,
    entry_id: str,
    data: EntryUpdate,
    service: EntryService = Depends(get_entry_service),
):
    """Update the budgeted amount and/or due day. An explicit null clears the due day."""
    parse_id(month_id)
    entry_ulid = parse_id(entry_id)

    budgeted = Money(data.budgeted) if data.budgeted is not None else None
    due_day = KEEP
    if "due_day" in data.model_fields_set:
        due_day = CLEAR if data.due_day is None else Set(DueDay(data.due_day))

    entry = service.update(entry_ulid, budgeted=budgeted, due_day=due_day)
    return _build_response(entry)


@router.delete("/{entry_id}", status_code=204)
def delete_entry(
    month_id: str,
    entry_id: str,
    service: EntryService = Depends(get_entry_service),
):
    """Delete an entry. Entries with transactions cannot be deleted."""
    parse_id(month_id)
    service.delete(parse_id(entry_id))
    return Response(status_code=204)
