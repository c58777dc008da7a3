import enum
from dataclasses import dataclass

from ulid import ULID

from ..domain import (
    BudgetEntryRepository,
    BudgetMonth,
    CategorySummary,
    Money,
    MonthRepository,
    TransactionRepository,
)
from ..domain.errors import BudgetError, MonthNotFound, MonthRepositoryError


class BudgetStatus(enum.Enum):
    """Spending state of one category in a month."""
    UNPAID = "unpaid"
    UNDERSPENT = "underspent"
    ON_BUDGET = "on_budget"
    OVERSPENT = "overspent"


@dataclass(frozen=True)
class CategoryBudgetSummary:
    entry_id: ULID
    category: CategorySummary
    budgeted: Money
    paid: Money
    remaining: Money
    status: BudgetStatus


@dataclass(frozen=True)
class MonthSummary:
    month: BudgetMonth
    total_budgeted: Money
    total_paid: Money
    remaining: Money
    categories: list[CategoryBudgetSummary]


def derive_status(budgeted: Money, paid: Money) -> BudgetStatus:
    b = budgeted.value
    p = paid.value

    if b == 0 and p == 0:
        return BudgetStatus.ON_BUDGET
    if p == 0 and b > 0:
        return BudgetStatus.UNPAID
    if 0 < p < b:
        return BudgetStatus.UNDERSPENT
    if p == b:
        return BudgetStatus.ON_BUDGET
    # p > b, includes zero-budget categories with any payment
    return BudgetStatus.OVERSPENT


class SummaryService:
    def __init__(
        self,
        entry_repo: BudgetEntryRepository,
        transaction_repo: TransactionRepository,
        month_repo: MonthRepository,
    ):
        self.entry_repo = entry_repo
        self.transaction_repo = transaction_repo
        self.month_repo = month_repo

    def get_month_summary(self, month_id: ULID) -> MonthSummary:
        """Budgeted vs paid per category for one month, in entry listing order."""
        month = self.month_repo.find_by_id(month_id)
        if month is None:
            raise MonthNotFound()

        try:
            entries = self.entry_repo.list_by_month(month_id)
        except BudgetError as e:
            raise MonthRepositoryError(f"Failed to list entries: {e}") from e

        categories = []
        total_budgeted = Money.zero()
        total_paid = Money.zero()

        for entry in entries:
            try:
                paid = self.transaction_repo.sum_by_entry(entry.id)
            except BudgetError as e:
                raise MonthRepositoryError(f"Failed to sum transactions: {e}") from e

            try:
                total_budgeted = total_budgeted + entry.budgeted
                total_paid = total_paid + paid
                remaining = entry.budgeted - paid
            except OverflowError as e:
                raise MonthRepositoryError(f"Failed to total entries: {e}") from e

            categories.append(CategoryBudgetSummary(
                entry_id=entry.id,
                category=entry.category,
                budgeted=entry.budgeted,
                paid=paid,
                remaining=remaining,
                status=derive_status(entry.budgeted, paid),
            ))

        try:
            remaining = total_budgeted - total_paid
        except OverflowError as e:
            raise MonthRepositoryError(f"Failed to total entries: {e}") from e

        return MonthSummary(
            month=month.month,
            total_budgeted=total_budgeted,
            total_paid=total_paid,
            remaining=remaining,
            categories=categories,
        )
