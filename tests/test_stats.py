"""Tests for income and savings statistics."""

from datetime import date
from decimal import Decimal

import pytest
from sharedledger.domain.budget import percent_of
from sharedledger.domain.entities import (
    CategorySpend,
    DailyCashFlow,
    Expense,
    ExpenseShare,
    Income,
    PeriodBounds,
)
from sharedledger.domain.errors import ValidationError
from sharedledger.domain.stats import compute_daily_cash_flow, compute_period_stats

MARCH = PeriodBounds(start=date(2024, 3, 1), end=date(2024, 3, 31))


def _income(income_id, amount, day):
    return Income(id=income_id, amount=amount, received_by_id="A", occurred_at=day)


def _expense(expense_id, amount, category_id, day):
    return Expense(
        id=expense_id,
        amount=amount,
        payer_id="A",
        shares=(ExpenseShare(participant_id="A", amount=amount),),
        occurred_at=day,
        category_id=category_id,
    )


def test_period_stats():
    """Test totals, savings and top categories within the period."""
    incomes = [
        _income(1, 300000, date(2024, 3, 1)),
        _income(2, 50000, date(2024, 3, 15)),
        _income(3, 99999, date(2024, 2, 29)),
    ]
    expenses = [
        _expense(1, 60000, 1, date(2024, 3, 2)),
        _expense(2, 40000, 2, date(2024, 3, 3)),
        _expense(3, 20000, None, date(2024, 3, 31)),
        _expense(4, 20000, 1, date(2024, 4, 1)),
    ]

    stats = compute_period_stats(incomes, expenses, MARCH)

    assert stats.total_income == 350000
    assert stats.total_expenses == 120000
    assert stats.net_savings == 230000
    assert stats.savings_rate == Decimal("65.71")
    assert stats.top_categories == (
        CategorySpend(category_id=1, amount=60000, percentage=Decimal("50.00")),
        CategorySpend(category_id=2, amount=40000, percentage=Decimal("33.33")),
        CategorySpend(category_id=None, amount=20000, percentage=Decimal("16.67")),
    )


def test_period_stats_negative_savings():
    """Test that overspending gives negative savings and rate."""
    stats = compute_period_stats(
        [_income(1, 1000, date(2024, 3, 5))],
        [_expense(1, 1500, None, date(2024, 3, 6))],
        MARCH,
    )

    assert stats.net_savings == -500
    assert stats.savings_rate == Decimal("-50.00")


def test_period_stats_without_income():
    """Test the savings rate is zero when nothing was earned."""
    stats = compute_period_stats([], [_expense(1, 100, 1, date(2024, 3, 6))], MARCH)

    assert stats.total_income == 0
    assert stats.net_savings == -100
    assert stats.savings_rate == Decimal("0.00")


def test_period_stats_empty():
    """Test an empty period."""
    stats = compute_period_stats([], [], MARCH)

    assert stats.total_income == 0
    assert stats.total_expenses == 0
    assert stats.savings_rate == Decimal("0.00")
    assert stats.top_categories == ()


def test_top_categories_limit_and_ties():
    """Test equal amounts keep first-seen order and the list is cut at top_n."""
    expenses = [
        _expense(1, 100, 5, date(2024, 3, 1)),
        _expense(2, 100, 3, date(2024, 3, 2)),
        _expense(3, 300, 7, date(2024, 3, 3)),
    ]

    stats = compute_period_stats([], expenses, MARCH, top_n=2)
    assert [c.category_id for c in stats.top_categories] == [7, 5]

    assert compute_period_stats([], expenses, MARCH, top_n=0).top_categories == ()
    with pytest.raises(ValidationError):
        compute_period_stats([], expenses, MARCH, top_n=-1)


def test_percent_of_rounding():
    """Test half-away-from-zero rounding for positive and negative parts."""
    assert percent_of(1, 8) == Decimal("12.50")
    assert percent_of(-1, 8) == Decimal("-12.50")
    assert percent_of(-1, 3) == Decimal("-33.33")
    assert percent_of(-2, 3) == Decimal("-66.67")
    assert percent_of(1, 16000) == Decimal("0.01")
    assert percent_of(-1, 16000) == Decimal("-0.01")
    assert percent_of(5, 0) == Decimal("0.00")


def test_daily_cash_flow():
    """Test one row per day with a running net."""
    bounds = PeriodBounds(start=date(2024, 2, 1), end=date(2024, 2, 3))
    incomes = [_income(1, 100, date(2024, 2, 2)), _income(2, 999, date(2024, 1, 31))]
    expenses = [
        _expense(1, 30, None, date(2024, 2, 1)),
        _expense(2, 20, 1, date(2024, 2, 2)),
        _expense(3, 5, 1, date(2024, 2, 4)),
    ]

    rows = compute_daily_cash_flow(incomes, expenses, bounds)

    assert rows == [
        DailyCashFlow(day=date(2024, 2, 1), income=0, expense=30, net=-30, cumulative_net=-30),
        DailyCashFlow(day=date(2024, 2, 2), income=100, expense=20, net=80, cumulative_net=50),
        DailyCashFlow(day=date(2024, 2, 3), income=0, expense=0, net=0, cumulative_net=50),
    ]


def test_daily_cash_flow_covers_whole_month():
    """Test a leap-year February yields 29 rows."""
    bounds = PeriodBounds(start=date(2024, 2, 1), end=date(2024, 2, 29))

    rows = compute_daily_cash_flow([], [], bounds)

    assert len(rows) == 29
    assert rows[-1].day == date(2024, 2, 29)
