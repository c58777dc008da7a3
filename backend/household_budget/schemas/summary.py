from pydantic import BaseModel

from .category import CategorySummaryResponse


class CategoryBudgetSummaryResponse(BaseModel):
    entry_id: str
    category: CategorySummaryResponse
    budgeted: int
    paid: int
    remaining: int
    status: str  # unpaid, underspent, on_budget, overspent


class MonthSummaryResponse(BaseModel):
    month: str
    total_budgeted: int
    total_paid: int
    remaining: int
    categories: list[CategoryBudgetSummaryResponse]
