"""CLI helpers for resolving names and parsing user input, exiting on errors."""

from __future__ import annotations

import click

from sharedledger.cli.error_handling import handle_domain_error
from sharedledger.domain.entities import Group
from sharedledger.domain.group import GroupService
from sharedledger.utils.amount_parser import parse_amount
from sharedledger.utils.date_parser import parse_date
from sharedledger.utils.resolvers import resolve_group, resolve_participant


def resolve_group_or_exit(ctx: click.Context, group_service: GroupService, group: str | int) -> Group:
    """Resolve group name or ID to a Group, or exit with a CLI error."""
    try:
        return group_service.require_group(resolve_group(group_service, group))
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_participant_or_exit(
    ctx: click.Context, group_service: GroupService, group_id: int, participant: str | int
) -> int:
    """Resolve participant name or ID within a group, or exit with a CLI error."""
    try:
        return resolve_participant(group_service, group_id, participant)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_category_or_exit(
    ctx: click.Context, group_service: GroupService, group_id: int, category: str
) -> int:
    """Resolve category name or ID within a group, or exit with a CLI error."""
    for candidate in group_service.list_categories(group_id):
        if candidate.name == category or str(candidate.id) == category:
            return candidate.id
    click.echo(f"Error: Category '{category}' not found", err=True)
    ctx.exit(1)


def parse_amount_or_exit(ctx: click.Context, amount: str, minor_units: int) -> int:
    """Parse a user amount into minor units, or exit with a CLI error."""
    try:
        return parse_amount(amount, minor_units=minor_units)
    except ValueError as exc:
        click.echo(f"Error: Invalid amount format: {exc}", err=True)
        ctx.exit(1)


def parse_date_or_exit(ctx: click.Context, value: str):
    """Parse a user date, or exit with a CLI error."""
    try:
        return parse_date(value)
    except ValueError as exc:
        click.echo(f"Error: Invalid date format: {exc}", err=True)
        ctx.exit(1)
