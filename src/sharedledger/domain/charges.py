"""Recurring charge accounting (e.g. monthly building maintenance fees).

Expenses tagged with a ``period_key`` count as charge payments by their
payer for that period.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from sharedledger.domain.entities import (
    ChargeDebtRecord,
    ChargeRule,
    ChargeStatus,
    Expense,
    Participant,
    ParticipantChargeStatus,
    ParticipantId,
    PeriodChargeStatus,
)
from sharedledger.domain.errors import (
    NotFoundError,
    UnknownParticipantError,
    ValidationError,
    charge_rule_not_found,
    unknown_participant,
)
from sharedledger.domain.group import GroupService
from sharedledger.domain.periods import MonthlyPeriodCalendar, PeriodCalendar

if TYPE_CHECKING:
    from sharedledger.database.base import Database

logger = logging.getLogger(__name__)

# A period counts as paid once at least this share of the charge came in
PAID_THRESHOLD_PERCENT = 95


def charge_per_period(rules: Iterable[ChargeRule]) -> int:
    """Return the fixed charge per period: the sum of active rule amounts."""
    return sum(rule.amount for rule in rules if rule.is_active)


def compute_charge_debt(
    participants: Sequence[Participant],
    charge_per_period: int,
    required_period_keys: Sequence[str],
    paid_expenses: Iterable[Expense],
) -> list[ChargeDebtRecord]:
    """Count unpaid charge periods and the resulting debt per participant.

    A participant has paid a period when they are the payer of at least one
    expense tagged with that period key, whatever its amount.

    Args:
        participants: Group participants; output follows this order
        charge_per_period: Fixed charge in minor units
        required_period_keys: Periods each participant must cover
        paid_expenses: Candidate payment expenses

    Returns:
        One ChargeDebtRecord per participant

    Raises:
        ValidationError: If the charge is negative
        UnknownParticipantError: If an expense payer is not a participant
    """
    _check_charge(charge_per_period)
    required = list(dict.fromkeys(required_period_keys))
    required_set = set(required)
    paid_periods = _paid_periods_by_participant(participants, paid_expenses)

    records = []
    for participant in participants:
        covered = paid_periods[participant.id] & required_set
        unpaid = len(required) - len(covered)
        records.append(
            ChargeDebtRecord(
                participant_id=participant.id,
                unpaid_periods=unpaid,
                required_periods=len(required),
                debt_amount=unpaid * charge_per_period if unpaid > 0 else 0,
            )
        )
    return records


def compute_charge_status(
    participants: Sequence[Participant],
    charge_per_period: int,
    period_keys: Sequence[str],
    expenses: Iterable[Expense],
) -> list[PeriodChargeStatus]:
    """Build per-period payment status for every participant.

    Status is PAID when the participant's payments for the period reach
    95% of the charge, PARTIAL when something was paid, UNPAID otherwise.
    """
    _check_charge(charge_per_period)
    known = {p.id for p in participants}

    by_period: dict[str, dict[ParticipantId, list[Expense]]] = defaultdict(
        lambda: defaultdict(list)
    )
    for expense in expenses:
        if expense.period_key is None:
            continue
        if expense.payer_id not in known:
            raise UnknownParticipantError(
                unknown_participant(expense.payer_id, f"Expense {expense.id}")
            )
        by_period[expense.period_key][expense.payer_id].append(expense)

    statuses = []
    for period_key in dict.fromkeys(period_keys):
        payments = by_period.get(period_key, {})
        rows = []
        for participant in participants:
            paid = payments.get(participant.id, [])
            paid_amount = sum(expense.amount for expense in paid)
            rows.append(
                ParticipantChargeStatus(
                    participant_id=participant.id,
                    expected_amount=charge_per_period,
                    paid_amount=paid_amount,
                    status=charge_status_for(paid_amount, charge_per_period),
                    expense_ids=tuple(expense.id for expense in paid),
                )
            )
        statuses.append(
            PeriodChargeStatus(
                period_key=period_key,
                expected_amount=charge_per_period,
                participants=tuple(rows),
                total_expected=charge_per_period * len(rows),
                total_paid=sum(row.paid_amount for row in rows),
                paid_count=sum(1 for row in rows if row.status == ChargeStatus.PAID),
                unpaid_count=sum(1 for row in rows if row.status == ChargeStatus.UNPAID),
            )
        )
    return statuses


def charge_status_for(paid_amount: int, expected_amount: int) -> ChargeStatus:
    """Classify a period payment against the expected charge."""
    if paid_amount * 100 >= expected_amount * PAID_THRESHOLD_PERCENT:
        return ChargeStatus.PAID
    if paid_amount > 0:
        return ChargeStatus.PARTIAL
    return ChargeStatus.UNPAID


def _paid_periods_by_participant(
    participants: Sequence[Participant], expenses: Iterable[Expense]
) -> dict[ParticipantId, set[str]]:
    paid: dict[ParticipantId, set[str]] = {p.id: set() for p in participants}
    for expense in expenses:
        if expense.period_key is None:
            continue
        if expense.payer_id not in paid:
            raise UnknownParticipantError(
                unknown_participant(expense.payer_id, f"Expense {expense.id}")
            )
        paid[expense.payer_id].add(expense.period_key)
    return paid


def _check_charge(amount: int) -> None:
    if amount < 0:
        raise ValidationError(f"Charge per period must not be negative, got {amount}")


class ChargeService:
    """Service for recurring charge rules and charge payment tracking."""

    def __init__(self, db: Database, calendar: Optional[PeriodCalendar] = None):
        """Initialize charge service.

        Args:
            db: Database instance
            calendar: Period calendar resolving period ranges
                (defaults to calendar months)
        """
        self.db = db
        self.calendar = calendar or MonthlyPeriodCalendar()
        self.groups = GroupService(db)

    def add_rule(self, group_id: int, title: str, amount: int) -> int:
        """Add a charge rule to a group.

        Raises:
            NotFoundError: If the group doesn't exist
            ValidationError: If amount is not positive
        """
        self.groups.require_group(group_id)
        if amount <= 0:
            raise ValidationError("Charge amount must be greater than zero")
        rule_id = self.db.create_charge_rule(group_id=group_id, title=title, amount=amount)
        logger.info("Added charge rule %s to group %s (%d per period)", rule_id, group_id, amount)
        return rule_id

    def list_rules(self, group_id: int, active_only: bool = False) -> list[ChargeRule]:
        """List charge rules of a group."""
        self.groups.require_group(group_id)
        return self.db.list_charge_rules(group_id, active_only=active_only)

    def set_rule_active(self, group_id: int, rule_id: int, is_active: bool) -> None:
        """Activate or deactivate a rule of the group.

        Raises:
            NotFoundError: If the rule doesn't belong to the group
        """
        if all(rule.id != rule_id for rule in self.list_rules(group_id)):
            raise NotFoundError(charge_rule_not_found(rule_id))
        self.db.set_charge_rule_active(rule_id, is_active)

    def get_charge_per_period(self, group_id: int) -> int:
        """Get the group's fixed charge per period from its active rules."""
        return charge_per_period(self.list_rules(group_id, active_only=True))

    def get_charge_debt(
        self, group_id: int, first_period: str, last_period: str
    ) -> list[ChargeDebtRecord]:
        """Count unpaid periods between first_period and last_period (inclusive)."""
        period_keys = self.calendar.period_keys_between(first_period, last_period)
        charge = self.get_charge_per_period(group_id)
        participants = self.db.list_participants(group_id)
        expenses = self.db.list_expenses(group_id)
        logger.debug(
            "Computing charge debt for group %s over %d periods", group_id, len(period_keys)
        )
        return compute_charge_debt(participants, charge, period_keys, expenses)

    def get_charge_status(
        self, group_id: int, first_period: str, last_period: Optional[str] = None
    ) -> list[PeriodChargeStatus]:
        """Get per-period payment status between two periods (inclusive)."""
        period_keys = self.calendar.period_keys_between(
            first_period, last_period or first_period
        )
        charge = self.get_charge_per_period(group_id)
        participants = self.db.list_participants(group_id)
        expenses = self.db.list_expenses(group_id)
        return compute_charge_status(participants, charge, period_keys, expenses)
