"""Group balance summary."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Sequence

from sharedledger.domain.balances import compute_balances
from sharedledger.domain.entities import (
    Balance,
    Expense,
    GroupSummary,
    Participant,
    Settlement,
    SettlementSuggestion,
)
from sharedledger.domain.group import GroupService
from sharedledger.domain.simplifier import simplify

if TYPE_CHECKING:
    from sharedledger.database.base import Database

logger = logging.getLogger(__name__)


def summarize_group(
    participants: Sequence[Participant],
    expenses: Iterable[Expense],
    settlements: Iterable[Settlement],
) -> GroupSummary:
    """Compute total spend, balances and settlement suggestions for a group."""
    expenses = list(expenses)
    balances = compute_balances(participants, expenses, settlements)
    return GroupSummary(
        total_expenses=sum(expense.amount for expense in expenses),
        balances=tuple(balances),
        suggestions=tuple(simplify(balances)),
    )


class SummaryService:
    """Service computing balances and settlement suggestions for a group."""

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db
        self.groups = GroupService(db)

    def _load_snapshot(
        self, group_id: int
    ) -> tuple[list[Participant], list[Expense], list[Settlement]]:
        self.groups.require_group(group_id)
        participants = self.db.list_participants(group_id)
        expenses = self.db.list_expenses(group_id)
        settlements = self.db.list_settlements(group_id)
        logger.debug(
            "Loaded group %s: %d participants, %d expenses, %d settlements",
            group_id,
            len(participants),
            len(expenses),
            len(settlements),
        )
        return participants, expenses, settlements

    def get_balances(self, group_id: int) -> list[Balance]:
        """Get every participant's balance in a group."""
        participants, expenses, settlements = self._load_snapshot(group_id)
        return compute_balances(participants, expenses, settlements)

    def suggest_settlements(self, group_id: int) -> list[SettlementSuggestion]:
        """Get the transfers that would settle a group."""
        return simplify(self.get_balances(group_id))

    def get_summary(self, group_id: int) -> GroupSummary:
        """Get total spend, balances and suggestions for a group."""
        participants, expenses, settlements = self._load_snapshot(group_id)
        return summarize_group(participants, expenses, settlements)
