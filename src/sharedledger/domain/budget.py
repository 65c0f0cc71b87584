"""Budget utilization per spending category."""

from __future__ import annotations

import logging
from collections import defaultdict
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from sharedledger.domain.entities import (
    Budget,
    BudgetStatus,
    BudgetTotals,
    Expense,
    PeriodBounds,
)
from sharedledger.domain.errors import ValidationError
from sharedledger.domain.group import GroupService
from sharedledger.domain.periods import MonthlyPeriodCalendar, PeriodCalendar

if TYPE_CHECKING:
    from sharedledger.database.base import Database

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def compute_budget_status(
    budgets: Sequence[Budget],
    expenses: Iterable[Expense],
    period_bounds: PeriodBounds,
) -> list[BudgetStatus]:
    """Compare category budgets with actual spend inside a period.

    Categories with a budget but no spend get ``spent_amount == 0``;
    spend in categories without a budget is ignored.

    Args:
        budgets: Category budgets for the period (one per category)
        expenses: Candidate expenses; only those inside the bounds count
        period_bounds: Inclusive date range of the period

    Returns:
        One BudgetStatus per budget, in budget order

    Raises:
        ValidationError: If a budget is negative or a category is budgeted twice
    """
    seen = set()
    for budget in budgets:
        if budget.amount < 0:
            raise ValidationError(
                f"Budget for category {budget.category_id} must not be negative"
            )
        if budget.category_id in seen:
            raise ValidationError(
                f"Category {budget.category_id} has more than one budget"
            )
        seen.add(budget.category_id)

    spent: dict[Optional[int], int] = defaultdict(int)
    for expense in expenses:
        if expense.category_id is None or not period_bounds.contains(expense.occurred_at):
            continue
        spent[expense.category_id] += expense.amount

    return [
        _status(budget.category_id, budget.amount, spent.get(budget.category_id, 0))
        for budget in budgets
    ]


def summarize_budgets(statuses: Sequence[BudgetStatus]) -> BudgetTotals:
    """Aggregate budget statuses (spend counted only for budgeted categories)."""
    total_budget = sum(status.budget_amount for status in statuses)
    total_spent = sum(status.spent_amount for status in statuses)
    return BudgetTotals(
        total_budget=total_budget,
        total_spent=total_spent,
        total_remaining=total_budget - total_spent,
        utilization_percent=utilization_percent(total_spent, total_budget),
        over_budget_count=sum(1 for status in statuses if status.is_over_budget),
    )


def utilization_percent(spent_amount: int, budget_amount: int) -> Decimal:
    """Return spent/budget*100 rounded half-up to two places; 0 for a zero budget."""
    return percent_of(spent_amount, budget_amount)


def percent_of(part: int, whole: int) -> Decimal:
    """Return part/whole*100 rounded half away from zero to two places.

    A zero or negative whole gives 0.00. The part may be negative.
    """
    if whole <= 0:
        return Decimal("0.00")
    # Hundredths of a percent, rounded half-up in integer arithmetic
    scaled = abs(part) * 10000
    hundredths = (2 * scaled + whole) // (2 * whole)
    if part < 0:
        hundredths = -hundredths
    return Decimal(hundredths).scaleb(-2).quantize(TWO_PLACES)


def _status(category_id: int, budget_amount: int, spent_amount: int) -> BudgetStatus:
    return BudgetStatus(
        category_id=category_id,
        budget_amount=budget_amount,
        spent_amount=spent_amount,
        remaining_amount=budget_amount - spent_amount,
        utilization_percent=utilization_percent(spent_amount, budget_amount),
        is_over_budget=spent_amount > budget_amount,
    )


class BudgetService:
    """Service for category budgets of a group."""

    def __init__(self, db: Database, calendar: Optional[PeriodCalendar] = None):
        """Initialize budget service.

        Args:
            db: Database instance
            calendar: Period calendar resolving period bounds
                (defaults to calendar months)
        """
        self.db = db
        self.calendar = calendar or MonthlyPeriodCalendar()
        self.groups = GroupService(db)

    def set_budget(self, group_id: int, category_id: int, period_key: str, amount: int) -> int:
        """Create or replace the budget of a category for a period.

        Raises:
            NotFoundError: If the group or category doesn't exist
            ValidationError: If the period key is invalid or amount negative
        """
        self.groups.require_category(group_id, category_id)
        self.calendar.bounds(period_key)
        if amount < 0:
            raise ValidationError("Budget amount must not be negative")
        budget_id = self.db.upsert_budget(
            group_id=group_id, category_id=category_id, period_key=period_key, amount=amount
        )
        logger.info(
            "Set budget of category %s for %s in group %s to %d",
            category_id,
            period_key,
            group_id,
            amount,
        )
        return budget_id

    def get_budget_status(self, group_id: int, period_key: str) -> list[BudgetStatus]:
        """Get utilization of every category budget in a period."""
        self.groups.require_group(group_id)
        bounds = self.calendar.bounds(period_key)
        budgets = self.db.list_budgets(group_id, period_key)
        expenses = self.db.list_expenses(group_id, start_date=bounds.start, end_date=bounds.end)
        logger.debug(
            "Computing budget status for group %s in %s: %d budgets, %d expenses",
            group_id,
            period_key,
            len(budgets),
            len(expenses),
        )
        return compute_budget_status(budgets, expenses, bounds)

    def get_budget_totals(self, group_id: int, period_key: str) -> BudgetTotals:
        """Get aggregate budget utilization for a period."""
        return summarize_budgets(self.get_budget_status(group_id, period_key))
