"""Group, participant and category domain service."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sharedledger.domain.entities import (
    Category as CategoryEntity,
    Group as GroupEntity,
    Participant as ParticipantEntity,
)
from sharedledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    category_not_found,
    duplicate_name,
    group_not_found,
    participant_not_found,
)

if TYPE_CHECKING:
    from sharedledger.database.base import Database

logger = logging.getLogger(__name__)


class GroupService:
    """Service for managing groups and their members."""

    def __init__(self, db: Database):
        """Initialize group service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_group(self, name: str, currency: str = "USD", minor_units: int = 2) -> int:
        """Create a group.

        Args:
            name: Group name (unique)
            currency: Currency code used as a display label
            minor_units: Decimal digits of the currency's minor unit

        Returns:
            Group ID

        Raises:
            ConflictError: If a group with the same name exists
            ValidationError: If minor_units is out of range
        """
        if not 0 <= minor_units <= 4:
            raise ValidationError("Minor units must be between 0 and 4")
        for group in self.db.list_groups():
            if group.name == name:
                raise ConflictError(duplicate_name("Group", name))

        group_id = self.db.create_group(name=name, currency=currency.upper(), minor_units=minor_units)
        logger.info("Created group %s (%s)", group_id, name)
        return group_id

    def get_group(self, group_id: int) -> Optional[GroupEntity]:
        """Get group by ID."""
        return self.db.get_group(group_id)

    def require_group(self, group_id: int) -> GroupEntity:
        """Get group by ID or raise NotFoundError."""
        group = self.db.get_group(group_id)
        if group is None:
            raise NotFoundError(group_not_found(group_id))
        return group

    def list_groups(self) -> list[GroupEntity]:
        """List all groups."""
        return self.db.list_groups()

    def add_participant(
        self,
        group_id: int,
        display_name: str,
        weight: Decimal = Decimal(1),
        percentage_share: Optional[Decimal] = None,
    ) -> int:
        """Add a participant to a group.

        Args:
            group_id: Group ID
            display_name: Name shown for the participant (unique in the group)
            weight: Positive weight used by weighted splits
            percentage_share: Optional share (0-100) used by percentage splits

        Returns:
            Participant ID

        Raises:
            NotFoundError: If the group doesn't exist
            ConflictError: If the name is taken in the group
            ValidationError: If weight or percentage is out of range
        """
        self.require_group(group_id)
        _check_weight(weight, percentage_share)
        for participant in self.db.list_participants(group_id):
            if participant.display_name == display_name:
                raise ConflictError(duplicate_name("Participant", display_name))

        participant_id = self.db.create_participant(
            group_id=group_id,
            display_name=display_name,
            weight=weight,
            percentage_share=percentage_share,
        )
        logger.info("Added participant %s to group %s", participant_id, group_id)
        return participant_id

    def list_participants(self, group_id: int) -> list[ParticipantEntity]:
        """List participants of a group in stable (creation) order."""
        self.require_group(group_id)
        return self.db.list_participants(group_id)

    def update_participant(
        self,
        participant_id: int,
        display_name: Optional[str] = None,
        weight: Optional[Decimal] = None,
        percentage_share: Optional[Decimal] = None,
        clear_percentage: bool = False,
    ) -> None:
        """Rename a participant or change its weight/percentage share.

        A None argument leaves the field unchanged. Use clear_percentage to
        remove a percentage share.

        Raises:
            NotFoundError: If the participant doesn't exist
            ConflictError: If the new name is taken in the group
            ValidationError: If weight or percentage is out of range
        """
        group_id = self.db.get_participant_group_id(participant_id)
        if group_id is None:
            raise NotFoundError(participant_not_found(participant_id))
        if clear_percentage and percentage_share is not None:
            raise ValidationError("Cannot set and clear the percentage share at once")
        _check_weight(weight, percentage_share)

        if display_name is not None:
            for participant in self.db.list_participants(group_id):
                if participant.id != participant_id and participant.display_name == display_name:
                    raise ConflictError(duplicate_name("Participant", display_name))

        self.db.update_participant(
            participant_id,
            display_name=display_name,
            weight=weight,
            percentage_share=percentage_share,
            clear_percentage=clear_percentage,
        )
        logger.info("Updated participant %s", participant_id)

    def create_category(self, group_id: int, name: str) -> int:
        """Create a spending category in a group.

        Raises:
            NotFoundError: If the group doesn't exist
            ConflictError: If the category name is taken in the group
        """
        self.require_group(group_id)
        for category in self.db.list_categories(group_id):
            if category.name == name:
                raise ConflictError(duplicate_name("Category", name))
        return self.db.create_category(group_id=group_id, name=name)

    def list_categories(self, group_id: int) -> list[CategoryEntity]:
        """List categories of a group."""
        self.require_group(group_id)
        return self.db.list_categories(group_id)

    def require_category(self, group_id: int, category_id: int) -> CategoryEntity:
        """Get a category of the group or raise NotFoundError."""
        category = self.db.get_category(category_id)
        if category is None or category.group_id != group_id:
            raise NotFoundError(category_not_found(category_id))
        return category


# Weights and percentage shares are stored with four decimal places.
DECIMAL_PLACES = 4


def _check_precision(value: Decimal, label: str) -> Decimal:
    value = Decimal(value)
    if not value.is_finite():
        raise ValidationError(f"{label} must be a finite number")
    if value.normalize().as_tuple().exponent < -DECIMAL_PLACES:
        raise ValidationError(f"{label} allows at most {DECIMAL_PLACES} decimal places")
    return value


def _check_weight(weight: Optional[Decimal], percentage_share: Optional[Decimal]) -> None:
    if weight is not None and _check_precision(weight, "Weight") <= 0:
        raise ValidationError("Weight must be greater than zero")
    if percentage_share is not None:
        if not 0 <= _check_precision(percentage_share, "Percentage share") <= 100:
            raise ValidationError("Percentage share must be between 0 and 100")
