"""Utilities for resolving group and participant names to IDs."""

from sharedledger.domain.errors import NotFoundError, group_not_found, participant_not_found
from sharedledger.domain.group import GroupService


def resolve_group(group_service: GroupService, group: str | int) -> int:
    """Resolve group name or ID to group ID.

    Args:
        group_service: GroupService instance
        group: Group name (str) or ID (int or string representation of int)

    Returns:
        Group ID

    Raises:
        NotFoundError: If group is not found
    """
    try:
        group_id = int(group)
    except (ValueError, TypeError):
        group_id = None

    if group_id is not None:
        if group_service.get_group(group_id) is None:
            raise NotFoundError(group_not_found(group_id))
        return group_id

    for candidate in group_service.list_groups():
        if candidate.name == group:
            return candidate.id

    raise NotFoundError(f"Group '{group}' not found")


def resolve_participant(group_service: GroupService, group_id: int, participant: str | int) -> int:
    """Resolve participant display name or ID within a group.

    Names take precedence over IDs so that members named with digits
    still resolve.

    Raises:
        NotFoundError: If no member of the group matches
    """
    members = group_service.list_participants(group_id)
    for member in members:
        if member.display_name == participant:
            return member.id

    try:
        participant_id = int(participant)
    except (ValueError, TypeError):
        participant_id = None

    for member in members:
        if member.id == participant_id:
            return member.id

    if participant_id is not None:
        raise NotFoundError(participant_not_found(participant_id))
    raise NotFoundError(f"Participant '{participant}' not found")
