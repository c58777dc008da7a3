from fastapi import APIRouter, Depends

from ..domain import BudgetMonth, Month
from ..models.types import format_timestamp
from ..schemas import MonthCreate, MonthResponse
from ..services import MonthService
from .deps import get_month_service
from .errors import parse_id

router = APIRouter()


def _build_response(month: Month) -> dict:
    return {
        "id": str(month.id),
        "month": str(month.month),
        "created_at": format_timestamp(month.created_at),
        "updated_at": format_timestamp(month.updated_at),
    }


@router.get("", response_model=list[MonthResponse])
def list_months(service: MonthService = Depends(get_month_service)):
    """Get all months, newest first."""
    return [_build_response(m) for m in service.list_all()]


@router.get("/{month_id}", response_model=MonthResponse)
def get_month(month_id: str, service: MonthService = Depends(get_month_service)):
    return _build_response(service.find_by_id(parse_id(month_id)))


@router.post("", response_model=MonthResponse, status_code=201)
def create_month(data: MonthCreate, service: MonthService = Depends(get_month_service)):
    """
    Create a month.

    Entries are copied from ``copy_from`` (or the latest month) unless
    ``empty`` is set. The whole operation commits or rolls back together.
    """
    month = BudgetMonth.parse(data.month)
    copy_from = parse_id(data.copy_from) if data.copy_from is not None else None
    created = service.create(month, copy_from=copy_from, empty=data.empty)
    return _build_response(created)
