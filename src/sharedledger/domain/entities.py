"""Domain model entities for sharedledger.

These are pure data classes representing ledger concepts, independent of
database schema. Monetary amounts are always integers counted in the
smallest currency unit of the group's currency.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Mapping, Optional, Union

ParticipantId = Union[int, str]


@dataclass(frozen=True)
class Group:
    """A group sharing costs (trip, building, household, ...)."""

    id: int
    name: str
    currency: str
    minor_units: int
    created_at: datetime


@dataclass(frozen=True)
class Participant:
    """Group member domain entity."""

    id: ParticipantId
    display_name: str
    weight: Decimal = Decimal(1)
    percentage_share: Optional[Decimal] = None


@dataclass(frozen=True)
class Category:
    """Spending category domain entity."""

    id: int
    group_id: int
    name: str


@dataclass(frozen=True)
class ExpenseShare:
    """Amount of one expense owed by one participant."""

    participant_id: ParticipantId
    amount: int


@dataclass(frozen=True)
class Expense:
    """Expense domain entity with its already-allocated shares."""

    id: int
    amount: int
    payer_id: ParticipantId
    shares: tuple[ExpenseShare, ...]
    occurred_at: date
    category_id: Optional[int] = None
    period_key: Optional[str] = None
    title: Optional[str] = None


@dataclass(frozen=True)
class Settlement:
    """Money that actually moved from one participant to another."""

    id: int
    from_id: ParticipantId
    to_id: ParticipantId
    amount: int
    occurred_at: date
    note: Optional[str] = None


@dataclass(frozen=True)
class Income:
    """Money received by a participant of the group."""

    id: int
    amount: int
    received_by_id: ParticipantId
    occurred_at: date
    title: Optional[str] = None
    category_id: Optional[int] = None
    source: Optional[str] = None


@dataclass(frozen=True)
class Budget:
    """Spending limit for a category within a period."""

    category_id: int
    amount: int
    period_key: Optional[str] = None
    id: Optional[int] = None


@dataclass(frozen=True)
class ChargeRule:
    """Fixed recurring charge component (e.g. cleaning, elevator upkeep)."""

    id: int
    title: str
    amount: int
    is_active: bool = True


@dataclass(frozen=True)
class PeriodBounds:
    """Inclusive date range of a period."""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        """Return True if day falls within the bounds (inclusive)."""
        return self.start <= day <= self.end


class SplitType(Enum):
    """Persisted label of a split policy."""

    EQUAL = "equal"
    WEIGHTED = "weighted"
    PERCENTAGE = "percentage"
    MANUAL = "manual"


@dataclass(frozen=True)
class EqualSplit:
    """Split the total evenly; remainder units go to the first participants."""

    split_type = SplitType.EQUAL


@dataclass(frozen=True)
class WeightedSplit:
    """Split proportionally to each participant's weight."""

    split_type = SplitType.WEIGHTED


@dataclass(frozen=True)
class PercentageSplit:
    """Split by each participant's percentage share (must total 100)."""

    split_type = SplitType.PERCENTAGE


@dataclass(frozen=True)
class ManualSplit:
    """Caller-supplied amount per participant."""

    amounts: Mapping[ParticipantId, int] = field(default_factory=dict)
    split_type = SplitType.MANUAL


SplitPolicy = Union[EqualSplit, WeightedSplit, PercentageSplit, ManualSplit]


@dataclass(frozen=True)
class Balance:
    """Net position of a participant (positive = owed money)."""

    participant_id: ParticipantId
    total_paid: int
    total_owed: int
    net_from_settlements: int = 0

    @property
    def balance(self) -> int:
        return self.total_paid - self.total_owed + self.net_from_settlements


@dataclass(frozen=True)
class SettlementSuggestion:
    """Proposed transfer that moves the group towards zero balances."""

    from_id: ParticipantId
    to_id: ParticipantId
    amount: int


@dataclass(frozen=True)
class GroupSummary:
    """Balances and suggested settlements for a whole group."""

    total_expenses: int
    balances: tuple[Balance, ...]
    suggestions: tuple[SettlementSuggestion, ...]


@dataclass(frozen=True)
class ChargeDebtRecord:
    """Unpaid recurring charge periods for a participant."""

    participant_id: ParticipantId
    unpaid_periods: int
    required_periods: int
    debt_amount: int


class ChargeStatus(Enum):
    """Payment state of a participant for one charge period."""

    PAID = "paid"
    PARTIAL = "partial"
    UNPAID = "unpaid"


@dataclass(frozen=True)
class ParticipantChargeStatus:
    """One participant's charge payments within a period."""

    participant_id: ParticipantId
    expected_amount: int
    paid_amount: int
    status: ChargeStatus
    expense_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class PeriodChargeStatus:
    """Charge payment overview of all participants for one period."""

    period_key: str
    expected_amount: int
    participants: tuple[ParticipantChargeStatus, ...]
    total_expected: int
    total_paid: int
    paid_count: int
    unpaid_count: int


@dataclass(frozen=True)
class BudgetStatus:
    """Budget utilization of one category."""

    category_id: int
    budget_amount: int
    spent_amount: int
    remaining_amount: int
    utilization_percent: Decimal
    is_over_budget: bool


@dataclass(frozen=True)
class BudgetTotals:
    """Aggregate of budget statuses for a period."""

    total_budget: int
    total_spent: int
    total_remaining: int
    utilization_percent: Decimal
    over_budget_count: int


@dataclass(frozen=True)
class CategorySpend:
    """Expense total of one category (None = uncategorized) in a period."""

    category_id: Optional[int]
    amount: int
    percentage: Decimal


@dataclass(frozen=True)
class PeriodStats:
    """Income against expenses for a period."""

    total_income: int
    total_expenses: int
    net_savings: int
    savings_rate: Decimal
    top_categories: tuple[CategorySpend, ...]


@dataclass(frozen=True)
class DailyCashFlow:
    """Income and expenses of one day with the running net."""

    day: date
    income: int
    expense: int
    net: int
    cumulative_net: int
