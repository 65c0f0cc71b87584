"""Domain layer for sharedledger: ledger engine and services."""

from sharedledger.domain.allocation import allocate
from sharedledger.domain.balances import compute_balances
from sharedledger.domain.simplifier import simplify
from sharedledger.domain.charges import (
    ChargeService,
    compute_charge_debt,
    compute_charge_status,
)
from sharedledger.domain.budget import (
    BudgetService,
    compute_budget_status,
    summarize_budgets,
)
from sharedledger.domain.summary import SummaryService, summarize_group
from sharedledger.domain.group import GroupService
from sharedledger.domain.expense import ExpenseService
from sharedledger.domain.settlement import SettlementService
from sharedledger.domain.income import IncomeService
from sharedledger.domain.stats import (
    StatsService,
    compute_daily_cash_flow,
    compute_period_stats,
)

__all__ = [
    "allocate",
    "compute_balances",
    "simplify",
    "compute_charge_debt",
    "compute_charge_status",
    "compute_budget_status",
    "summarize_budgets",
    "summarize_group",
    "compute_period_stats",
    "compute_daily_cash_flow",
    "GroupService",
    "ExpenseService",
    "SettlementService",
    "SummaryService",
    "ChargeService",
    "BudgetService",
    "IncomeService",
    "StatsService",
]
