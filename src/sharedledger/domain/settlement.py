"""Settlement domain service."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Optional

from sharedledger.domain.balances import validate_settlement
from sharedledger.domain.entities import Settlement as SettlementEntity
from sharedledger.domain.errors import NotFoundError, settlement_not_found
from sharedledger.domain.group import GroupService

if TYPE_CHECKING:
    from sharedledger.database.base import Database

logger = logging.getLogger(__name__)


class SettlementService:
    """Service for recording payments between participants."""

    def __init__(self, db: Database):
        """Initialize settlement service.

        Args:
            db: Database instance
        """
        self.db = db
        self.groups = GroupService(db)

    def record_settlement(
        self,
        group_id: int,
        from_id: int,
        to_id: int,
        amount: int,
        occurred_at: Optional[date] = None,
        note: Optional[str] = None,
    ) -> int:
        """Record money that moved from one participant to another.

        Args:
            group_id: Group ID
            from_id: Paying participant
            to_id: Receiving participant
            amount: Amount in minor units (> 0)
            occurred_at: Payment date (defaults to today)
            note: Optional note

        Returns:
            Settlement ID

        Raises:
            NotFoundError: If the group doesn't exist
            UnknownParticipantError: If a party isn't in the group
            ValidationError: If from_id == to_id or amount <= 0
        """
        self.groups.require_group(group_id)
        member_ids = {p.id for p in self.db.list_participants(group_id)}
        occurred_at = occurred_at or date.today()

        candidate = SettlementEntity(
            id=0,
            from_id=from_id,
            to_id=to_id,
            amount=amount,
            occurred_at=occurred_at,
            note=note,
        )
        validate_settlement(candidate, member_ids)

        settlement_id = self.db.create_settlement(
            group_id=group_id,
            from_id=from_id,
            to_id=to_id,
            amount=amount,
            occurred_at=occurred_at,
            note=note,
        )
        logger.info(
            "Recorded settlement %s in group %s: %s -> %s (%d)",
            settlement_id,
            group_id,
            from_id,
            to_id,
            amount,
        )
        return settlement_id

    def list_settlements(self, group_id: int) -> list[SettlementEntity]:
        """List settlements of a group."""
        self.groups.require_group(group_id)
        return self.db.list_settlements(group_id)

    def delete_settlement(self, group_id: int, settlement_id: int) -> None:
        """Delete a settlement of a group.

        Raises:
            NotFoundError: If the settlement doesn't exist in the group
        """
        settlement = self.db.get_settlement(settlement_id)
        if settlement is None:
            raise NotFoundError(settlement_not_found(settlement_id))
        member_ids = {p.id for p in self.db.list_participants(group_id)}
        if settlement.from_id not in member_ids:
            raise NotFoundError(settlement_not_found(settlement_id))
        self.db.delete_settlement(settlement_id)
        logger.info("Deleted settlement %s from group %s", settlement_id, group_id)
