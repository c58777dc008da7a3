from fastapi import APIRouter, Depends

from ..schemas import MonthSummaryResponse
from ..services import SummaryService
from .deps import get_summary_service
from .errors import parse_id

router = APIRouter()


@router.get("", response_model=MonthSummaryResponse)
def get_month_summary(
    month_id: str,
    service: SummaryService = Depends(get_summary_service),
):
    """Budgeted vs paid for every category in the month."""
    summary = service.get_month_summary(parse_id(month_id))
    return {
        "month": str(summary.month),
        "total_budgeted": summary.total_budgeted.value,
        "total_paid": summary.total_paid.value,
        "remaining": summary.remaining.value,
        "categories": [
            {
                "entry_id": str(c.entry_id),
                "category": {
                    "id": str(c.category.id),
                    "name": str(c.category.name),
                    "label": c.category.label,
                },
                "budgeted": c.budgeted.value,
                "paid": c.paid.value,
                "remaining": c.remaining.value,
                "status": c.status.value,
            }
            for c in summary.categories
        ],
    }
