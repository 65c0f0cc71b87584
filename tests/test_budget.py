"""Tests for budget utilization."""

from datetime import date
from decimal import Decimal

import pytest
from sharedledger.domain.budget import (
    compute_budget_status,
    summarize_budgets,
    utilization_percent,
)
from sharedledger.domain.entities import Budget, Expense, ExpenseShare, PeriodBounds
from sharedledger.domain.errors import ValidationError

JANUARY = PeriodBounds(start=date(2024, 1, 1), end=date(2024, 1, 31))


def _expense(expense_id, amount, category_id, day):
    return Expense(
        id=expense_id,
        amount=amount,
        payer_id=1,
        shares=(ExpenseShare(participant_id=1, amount=amount),),
        occurred_at=day,
        category_id=category_id,
    )


def test_budget_status():
    """Test spend is summed per category inside the period."""
    budgets = [Budget(category_id=1, amount=10000), Budget(category_id=2, amount=5000)]
    expenses = [
        _expense(1, 4000, 1, date(2024, 1, 1)),
        _expense(2, 2500, 1, date(2024, 1, 31)),
        _expense(3, 6000, 2, date(2024, 1, 15)),
        _expense(4, 9999, 1, date(2024, 2, 1)),
        _expense(5, 100, None, date(2024, 1, 10)),
        _expense(6, 100, 3, date(2024, 1, 10)),
    ]

    food, fun = compute_budget_status(budgets, expenses, JANUARY)

    assert food.spent_amount == 6500
    assert food.remaining_amount == 3500
    assert food.utilization_percent == Decimal("65.00")
    assert not food.is_over_budget

    assert fun.spent_amount == 6000
    assert fun.remaining_amount == -1000
    assert fun.utilization_percent == Decimal("120.00")
    assert fun.is_over_budget


def test_budget_without_spend():
    """Test budgeted categories without expenses."""
    (status,) = compute_budget_status([Budget(category_id=1, amount=100)], [], JANUARY)

    assert status.spent_amount == 0
    assert status.utilization_percent == Decimal("0.00")


def test_zero_budget_utilization():
    """Test utilization of a zero budget is zero."""
    (status,) = compute_budget_status(
        [Budget(category_id=1, amount=0)], [_expense(1, 50, 1, date(2024, 1, 2))], JANUARY
    )

    assert status.utilization_percent == Decimal("0.00")
    assert status.is_over_budget


def test_utilization_rounds_half_up():
    """Test two-place half-up rounding."""
    assert utilization_percent(1, 3) == Decimal("33.33")
    assert utilization_percent(2, 3) == Decimal("66.67")
    assert utilization_percent(1, 8) == Decimal("12.50")
    # 1/16000 * 100 = 0.00625 -> 0.01
    assert utilization_percent(1, 16000) == Decimal("0.01")


def test_negative_budget_rejected():
    """Test that negative budgets are rejected."""
    with pytest.raises(ValidationError):
        compute_budget_status([Budget(category_id=1, amount=-1)], [], JANUARY)


def test_duplicate_category_rejected():
    """Test that a category may only be budgeted once."""
    budgets = [Budget(category_id=1, amount=1), Budget(category_id=1, amount=2)]
    with pytest.raises(ValidationError):
        compute_budget_status(budgets, [], JANUARY)


def test_summarize_budgets():
    """Test aggregate totals."""
    budgets = [Budget(category_id=1, amount=10000), Budget(category_id=2, amount=5000)]
    expenses = [_expense(1, 6500, 1, date(2024, 1, 3)), _expense(2, 6000, 2, date(2024, 1, 4))]

    totals = summarize_budgets(compute_budget_status(budgets, expenses, JANUARY))

    assert totals.total_budget == 15000
    assert totals.total_spent == 12500
    assert totals.total_remaining == 2500
    assert totals.utilization_percent == Decimal("83.33")
    assert totals.over_budget_count == 1
