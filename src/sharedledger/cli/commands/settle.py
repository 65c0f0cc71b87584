"""Settlement (payment between participants) commands."""

import click
from sharedledger.domain.errors import DomainError
from sharedledger.domain.group import GroupService
from sharedledger.domain.settlement import SettlementService
from sharedledger.cli.error_handling import handle_domain_error
from sharedledger.cli.formatting import format_money, participant_names
from sharedledger.cli.resolution import (
    parse_amount_or_exit,
    parse_date_or_exit,
    resolve_group_or_exit,
    resolve_participant_or_exit,
)


@click.group()
def settle_group():
    """Record payments between participants."""
    pass


@settle_group.command("record")
@click.argument("group", metavar="GROUP")
@click.option("--from", "from_participant", required=True, help="Participant name or ID who paid")
@click.option("--to", "to_participant", required=True, help="Participant name or ID who received")
@click.option("--amount", required=True, help="Amount paid (e.g., 29.33)")
@click.option("--date", "date_str", default="today", show_default=True, help="Payment date")
@click.option("--note", help="Optional note")
@click.pass_context
def record_settlement(
    ctx,
    group: str,
    from_participant: str,
    to_participant: str,
    amount: str,
    date_str: str,
    note: str | None,
):
    """Record money paid from one participant to another.

    Examples:
        sharedledger settle record "Lisbon Trip" --from Carol --to Alice --amount 30.33
    """
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = SettlementService(db)

    grp = resolve_group_or_exit(ctx, group_service, group)
    from_id = resolve_participant_or_exit(ctx, group_service, grp.id, from_participant)
    to_id = resolve_participant_or_exit(ctx, group_service, grp.id, to_participant)
    paid = parse_amount_or_exit(ctx, amount, grp.minor_units)
    occurred_at = parse_date_or_exit(ctx, date_str)

    try:
        settlement_id = service.record_settlement(
            grp.id, from_id, to_id, paid, occurred_at=occurred_at, note=note
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(
        f"Recorded settlement {settlement_id}: {from_participant} -> {to_participant} "
        f"{format_money(grp, paid)}"
    )


@settle_group.command("list")
@click.argument("group", metavar="GROUP")
@click.pass_context
def list_settlements(ctx, group: str):
    """List settlements of a group."""
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = SettlementService(db)
    grp = resolve_group_or_exit(ctx, group_service, group)

    settlements = service.list_settlements(grp.id)
    if not settlements:
        click.echo("No settlements found.")
        return

    names = participant_names(group_service, grp.id)
    click.echo(f"\nSettlements of '{grp.name}':")
    click.echo("-" * 72)
    for settlement in settlements:
        note = f" | {settlement.note}" if settlement.note else ""
        click.echo(
            f"ID: {settlement.id:4d} | {settlement.occurred_at.isoformat()} | "
            f"{names.get(settlement.from_id, '?')} -> {names.get(settlement.to_id, '?')} | "
            f"{format_money(grp, settlement.amount)}{note}"
        )


@settle_group.command("delete")
@click.argument("group", metavar="GROUP")
@click.argument("settlement_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_settlement(ctx, group: str, settlement_id: int, yes: bool):
    """Delete a settlement."""
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = SettlementService(db)
    grp = resolve_group_or_exit(ctx, group_service, group)

    if not yes:
        click.confirm(f"Delete settlement {settlement_id}?", abort=True)

    try:
        service.delete_settlement(grp.id, settlement_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted settlement {settlement_id}")


def register_commands(cli):
    """Register settlement commands with main CLI."""
    cli.add_command(settle_group, name="settle")
