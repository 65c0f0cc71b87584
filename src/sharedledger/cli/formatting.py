"""Output helpers shared by CLI commands."""

from sharedledger.domain.entities import Group
from sharedledger.domain.group import GroupService
from sharedledger.utils.amount_parser import format_amount


def format_money(group: Group, amount: int) -> str:
    """Format minor units in the group's currency."""
    return f"{format_amount(amount, group.minor_units)} {group.currency}"


def participant_names(group_service: GroupService, group_id: int) -> dict[int, str]:
    """Map participant IDs of a group to display names."""
    return {p.id: p.display_name for p in group_service.list_participants(group_id)}
