"""Participant management commands."""

from decimal import Decimal, InvalidOperation

import click
from sharedledger.domain.errors import DomainError
from sharedledger.domain.group import GroupService
from sharedledger.cli.error_handling import handle_domain_error
from sharedledger.cli.resolution import resolve_group_or_exit, resolve_participant_or_exit


def _parse_decimal(ctx, value: str | None, label: str) -> Decimal | None:
    if value is None:
        return None
    try:
        parsed = Decimal(value)
    except InvalidOperation:
        parsed = None
    if parsed is None or not parsed.is_finite():
        click.echo(f"Error: Invalid {label} '{value}'", err=True)
        ctx.exit(1)
    return parsed


@click.group()
def participant_group():
    """Manage group participants."""
    pass


@participant_group.command("add")
@click.argument("group", metavar="GROUP")
@click.argument("name", metavar="NAME")
@click.option("--weight", default="1", show_default=True, help="Weight for weighted splits (e.g. unit area)")
@click.option("--percentage", help="Percentage share (0-100) for percentage splits")
@click.pass_context
def add_participant(ctx, group: str, name: str, weight: str, percentage: str | None):
    """Add a participant to a group.

    GROUP can be a group name or ID.

    Examples:
        sharedledger participant add "Lisbon Trip" Alice
        sharedledger participant add "Building 12" "Unit 3" --weight 85.5
    """
    service = GroupService(ctx.obj["db"])
    grp = resolve_group_or_exit(ctx, service, group)

    try:
        participant_id = service.add_participant(
            grp.id,
            display_name=name,
            weight=_parse_decimal(ctx, weight, "weight"),
            percentage_share=_parse_decimal(ctx, percentage, "percentage"),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added '{name}' to '{grp.name}' (ID: {participant_id})")


@participant_group.command("list")
@click.argument("group", metavar="GROUP")
@click.pass_context
def list_participants(ctx, group: str):
    """List participants of a group."""
    service = GroupService(ctx.obj["db"])
    grp = resolve_group_or_exit(ctx, service, group)

    participants = service.list_participants(grp.id)
    if not participants:
        click.echo("No participants found.")
        return

    click.echo(f"\nParticipants of '{grp.name}':")
    click.echo("-" * 60)
    for p in participants:
        pct = f" | {p.percentage_share}%" if p.percentage_share is not None else ""
        click.echo(f"ID: {p.id:3d} | {p.display_name:20s} | weight {p.weight}{pct}")


@participant_group.command("update")
@click.argument("group", metavar="GROUP")
@click.argument("participant", metavar="PARTICIPANT")
@click.option("--name", help="New display name")
@click.option("--weight", help="New weight")
@click.option("--percentage", help="New percentage share")
@click.option("--clear-percentage", is_flag=True, help="Remove the percentage share")
@click.pass_context
def update_participant(
    ctx,
    group: str,
    participant: str,
    name: str | None,
    weight: str | None,
    percentage: str | None,
    clear_percentage: bool,
):
    """Rename a participant or change its weight or percentage share."""
    service = GroupService(ctx.obj["db"])
    grp = resolve_group_or_exit(ctx, service, group)
    participant_id = resolve_participant_or_exit(ctx, service, grp.id, participant)

    if name is None and weight is None and percentage is None and not clear_percentage:
        click.echo(
            "Error: Nothing to update. Use --name, --weight, --percentage or --clear-percentage.",
            err=True,
        )
        ctx.exit(1)
    if clear_percentage and percentage is not None:
        click.echo("Error: --percentage and --clear-percentage cannot be combined", err=True)
        ctx.exit(1)

    try:
        service.update_participant(
            participant_id,
            display_name=name,
            weight=_parse_decimal(ctx, weight, "weight"),
            percentage_share=_parse_decimal(ctx, percentage, "percentage"),
            clear_percentage=clear_percentage,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated participant {participant_id}")


def register_commands(cli):
    """Register participant commands with main CLI."""
    cli.add_command(participant_group, name="participant")
