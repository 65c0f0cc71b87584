"""Income domain service."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Optional

from sharedledger.domain.entities import Income as IncomeEntity
from sharedledger.domain.errors import (
    NotFoundError,
    UnknownParticipantError,
    ValidationError,
    income_not_found,
    unknown_participant,
)
from sharedledger.domain.group import GroupService

if TYPE_CHECKING:
    from sharedledger.database.base import Database

logger = logging.getLogger(__name__)


class IncomeService:
    """Service for recording money received by group members."""

    def __init__(self, db: Database):
        """Initialize income service.

        Args:
            db: Database instance
        """
        self.db = db
        self.groups = GroupService(db)

    def add_income(
        self,
        group_id: int,
        amount: int,
        received_by_id: int,
        occurred_at: Optional[date] = None,
        title: Optional[str] = None,
        category_id: Optional[int] = None,
        source: Optional[str] = None,
    ) -> int:
        """Record an income.

        Args:
            group_id: Group ID
            amount: Amount in minor units (> 0)
            received_by_id: Participant who received the money
            occurred_at: Date received (defaults to today)
            title: Optional description
            category_id: Optional category of the group
            source: Optional free-form source (e.g. "salary")

        Returns:
            Income ID

        Raises:
            NotFoundError: If the group or category doesn't exist
            UnknownParticipantError: If the receiver isn't in the group
            ValidationError: If amount <= 0
        """
        self.groups.require_group(group_id)
        if not isinstance(amount, int) or amount <= 0:
            raise ValidationError("Income amount must be a positive integer")
        member_ids = {p.id for p in self.db.list_participants(group_id)}
        if received_by_id not in member_ids:
            raise UnknownParticipantError(unknown_participant(received_by_id, "Income receiver"))
        if category_id is not None:
            self.groups.require_category(group_id, category_id)

        income_id = self.db.create_income(
            group_id=group_id,
            amount=amount,
            received_by_id=received_by_id,
            occurred_at=occurred_at or date.today(),
            title=title,
            category_id=category_id,
            source=source,
        )
        logger.info(
            "Recorded income %s in group %s: %d received by %s",
            income_id,
            group_id,
            amount,
            received_by_id,
        )
        return income_id

    def get_income(self, income_id: int) -> Optional[IncomeEntity]:
        """Get income by ID."""
        return self.db.get_income(income_id)

    def list_incomes(
        self,
        group_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
        received_by_id: Optional[int] = None,
        source: Optional[str] = None,
    ) -> list[IncomeEntity]:
        """List incomes of a group, oldest first."""
        self.groups.require_group(group_id)
        return self.db.list_incomes(
            group_id,
            start_date=start_date,
            end_date=end_date,
            category_id=category_id,
            received_by_id=received_by_id,
            source=source,
        )

    def get_total(
        self, group_id: int, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> int:
        """Sum the incomes of a group within an optional date range."""
        return sum(income.amount for income in self.list_incomes(group_id, start_date, end_date))

    def delete_income(self, group_id: int, income_id: int) -> None:
        """Delete an income of a group.

        Raises:
            NotFoundError: If the income doesn't exist in the group
        """
        if self.db.get_income_group_id(income_id) != group_id:
            raise NotFoundError(income_not_found(income_id))
        self.db.delete_income(income_id)
        logger.info("Deleted income %s from group %s", income_id, group_id)
