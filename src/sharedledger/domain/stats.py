"""Income versus expense statistics for a period."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import timedelta
from typing import TYPE_CHECKING, Iterable, Optional

from sharedledger.domain.budget import percent_of
from sharedledger.domain.entities import (
    CategorySpend,
    DailyCashFlow,
    Expense,
    Income,
    PeriodBounds,
    PeriodStats,
)
from sharedledger.domain.errors import ValidationError
from sharedledger.domain.group import GroupService
from sharedledger.domain.periods import MonthlyPeriodCalendar, PeriodCalendar

if TYPE_CHECKING:
    from sharedledger.database.base import Database

logger = logging.getLogger(__name__)

DEFAULT_TOP_CATEGORIES = 5


def compute_period_stats(
    incomes: Iterable[Income],
    expenses: Iterable[Expense],
    bounds: PeriodBounds,
    top_n: int = DEFAULT_TOP_CATEGORIES,
) -> PeriodStats:
    """Compare income with expenses inside a period.

    Records outside the bounds are ignored. The savings rate is net savings
    as a percentage of income, 0.00 when there is no income, and negative
    when expenses exceed income.

    Args:
        incomes: Candidate incomes
        expenses: Candidate expenses
        bounds: Inclusive date range of the period
        top_n: Maximum number of categories to report

    Returns:
        PeriodStats with the largest expense categories first. Uncategorized
        spend is reported with category_id None. Equal amounts keep the
        order in which the categories first appear.

    Raises:
        ValidationError: If top_n is negative
    """
    if top_n < 0:
        raise ValidationError("Number of top categories must not be negative")

    total_income = sum(income.amount for income in incomes if bounds.contains(income.occurred_at))

    total_expenses = 0
    by_category: dict[Optional[int], int] = {}
    for expense in expenses:
        if not bounds.contains(expense.occurred_at):
            continue
        total_expenses += expense.amount
        by_category[expense.category_id] = by_category.get(expense.category_id, 0) + expense.amount

    ranked = sorted(by_category.items(), key=lambda item: item[1], reverse=True)
    top_categories = tuple(
        CategorySpend(
            category_id=category_id,
            amount=amount,
            percentage=percent_of(amount, total_expenses),
        )
        for category_id, amount in ranked[:top_n]
    )

    net_savings = total_income - total_expenses
    return PeriodStats(
        total_income=total_income,
        total_expenses=total_expenses,
        net_savings=net_savings,
        savings_rate=percent_of(net_savings, total_income),
        top_categories=top_categories,
    )


def compute_daily_cash_flow(
    incomes: Iterable[Income],
    expenses: Iterable[Expense],
    bounds: PeriodBounds,
) -> list[DailyCashFlow]:
    """Return one row per day of the period with income, expense and running net."""
    income_by_day: dict = defaultdict(int)
    for income in incomes:
        income_by_day[income.occurred_at] += income.amount
    expense_by_day: dict = defaultdict(int)
    for expense in expenses:
        expense_by_day[expense.occurred_at] += expense.amount

    rows = []
    cumulative = 0
    day = bounds.start
    while day <= bounds.end:
        income = income_by_day.get(day, 0)
        expense = expense_by_day.get(day, 0)
        cumulative += income - expense
        rows.append(
            DailyCashFlow(
                day=day,
                income=income,
                expense=expense,
                net=income - expense,
                cumulative_net=cumulative,
            )
        )
        day += timedelta(days=1)
    return rows


class StatsService:
    """Service for period statistics of a group."""

    def __init__(self, db: Database, calendar: Optional[PeriodCalendar] = None):
        """Initialize stats service.

        Args:
            db: Database instance
            calendar: Period calendar resolving period bounds
                (defaults to calendar months)
        """
        self.db = db
        self.calendar = calendar or MonthlyPeriodCalendar()
        self.groups = GroupService(db)

    def _period_records(self, group_id: int, period_key: str):
        self.groups.require_group(group_id)
        bounds = self.calendar.bounds(period_key)
        incomes = self.db.list_incomes(group_id, start_date=bounds.start, end_date=bounds.end)
        expenses = self.db.list_expenses(group_id, start_date=bounds.start, end_date=bounds.end)
        logger.debug(
            "Loaded %d incomes and %d expenses of group %s for %s",
            len(incomes),
            len(expenses),
            group_id,
            period_key,
        )
        return bounds, incomes, expenses

    def get_period_stats(
        self, group_id: int, period_key: str, top_n: int = DEFAULT_TOP_CATEGORIES
    ) -> PeriodStats:
        """Get income, expenses, savings and top categories of a period.

        Raises:
            NotFoundError: If the group doesn't exist
            ValidationError: If the period key is invalid
        """
        bounds, incomes, expenses = self._period_records(group_id, period_key)
        return compute_period_stats(incomes, expenses, bounds, top_n=top_n)

    def get_daily_cash_flow(self, group_id: int, period_key: str) -> list[DailyCashFlow]:
        """Get the day-by-day cash flow of a period."""
        bounds, incomes, expenses = self._period_records(group_id, period_key)
        return compute_daily_cash_flow(incomes, expenses, bounds)
