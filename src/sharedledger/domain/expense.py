"""Expense domain service."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Optional, Sequence

from sharedledger.domain.allocation import allocate
from sharedledger.domain.entities import (
    EqualSplit,
    Expense as ExpenseEntity,
    SplitPolicy,
)
from sharedledger.domain.errors import (
    NotFoundError,
    UnknownParticipantError,
    expense_not_found,
    unknown_participant,
)
from sharedledger.domain.group import GroupService

if TYPE_CHECKING:
    from sharedledger.database.base import Database

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for recording expenses and their shares."""

    def __init__(self, db: Database):
        """Initialize expense service.

        Args:
            db: Database instance
        """
        self.db = db
        self.groups = GroupService(db)

    def add_expense(
        self,
        group_id: int,
        amount: int,
        payer_id: int,
        occurred_at: date,
        policy: SplitPolicy = EqualSplit(),
        participant_ids: Optional[Sequence[int]] = None,
        title: Optional[str] = None,
        category_id: Optional[int] = None,
        period_key: Optional[str] = None,
    ) -> int:
        """Allocate and record an expense.

        Args:
            group_id: Group ID
            amount: Total in minor units
            payer_id: Participant who paid
            occurred_at: Expense date
            policy: Split policy
            participant_ids: Participants sharing the cost (default: whole
                group). Ignored for manual splits, which name their own.
            title: Optional description
            category_id: Optional category of the group
            period_key: Optional period tag for recurring charge accounting

        Returns:
            Expense ID

        Raises:
            NotFoundError: If the group or category doesn't exist
            UnknownParticipantError: If payer or a sharer isn't in the group
            InvalidSplitError, ShareMismatchError, ValidationError: From allocation
        """
        self.groups.require_group(group_id)
        members = self.db.list_participants(group_id)
        member_ids = {p.id for p in members}

        if payer_id not in member_ids:
            raise UnknownParticipantError(unknown_participant(payer_id, "Expense payer"))
        if category_id is not None:
            self.groups.require_category(group_id, category_id)

        sharers = members
        if participant_ids is not None:
            for pid in participant_ids:
                if pid not in member_ids:
                    raise UnknownParticipantError(unknown_participant(pid, "Expense"))
            selected = set(participant_ids)
            # Keep group order so remainder distribution stays deterministic
            sharers = [p for p in members if p.id in selected]

        shares = allocate(amount, sharers, policy)
        expense_id = self.db.create_expense(
            group_id=group_id,
            amount=amount,
            payer_id=payer_id,
            shares=shares,
            occurred_at=occurred_at,
            split_type=policy.split_type.value,
            title=title,
            category_id=category_id,
            period_key=period_key,
        )
        logger.info(
            "Recorded expense %s in group %s: %d split %s across %d participants",
            expense_id,
            group_id,
            amount,
            policy.split_type.value,
            len(shares),
        )
        return expense_id

    def get_expense(self, expense_id: int) -> Optional[ExpenseEntity]:
        """Get expense by ID."""
        return self.db.get_expense(expense_id)

    def list_expenses(
        self,
        group_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        period_key: Optional[str] = None,
    ) -> list[ExpenseEntity]:
        """List expenses of a group."""
        self.groups.require_group(group_id)
        return self.db.list_expenses(
            group_id, start_date=start_date, end_date=end_date, period_key=period_key
        )

    def delete_expense(self, group_id: int, expense_id: int) -> None:
        """Delete an expense of a group.

        Edits are modelled as delete + add, since expenses are immutable.

        Raises:
            NotFoundError: If the expense doesn't exist in the group
        """
        if self.db.get_expense_group_id(expense_id) != group_id:
            raise NotFoundError(expense_not_found(expense_id))
        self.db.delete_expense(expense_id)
        logger.info("Deleted expense %s from group %s", expense_id, group_id)
