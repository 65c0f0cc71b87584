"""Recurring charge commands."""

import click
from sharedledger.domain.charges import ChargeService
from sharedledger.domain.errors import DomainError
from sharedledger.domain.group import GroupService
from sharedledger.cli.error_handling import handle_domain_error
from sharedledger.cli.formatting import format_money, participant_names
from sharedledger.cli.resolution import parse_amount_or_exit, resolve_group_or_exit


@click.group()
def charge_group():
    """Track recurring per-period charges (e.g. monthly fees)."""
    pass


@charge_group.command("rule-add")
@click.argument("group", metavar="GROUP")
@click.argument("title")
@click.argument("amount")
@click.pass_context
def add_rule(ctx, group: str, title: str, amount: str):
    """Add a charge every participant owes each period.

    Examples:
        sharedledger charge rule-add "Building 12" Maintenance 1500000
    """
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = ChargeService(db)
    grp = resolve_group_or_exit(ctx, group_service, group)
    charge = parse_amount_or_exit(ctx, amount, grp.minor_units)

    try:
        rule_id = service.add_rule(grp.id, title, charge)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added charge rule '{title}' (ID: {rule_id})")


@charge_group.command("rules")
@click.argument("group", metavar="GROUP")
@click.option("--active-only", is_flag=True, help="Hide inactive rules")
@click.pass_context
def list_rules(ctx, group: str, active_only: bool):
    """List charge rules of a group."""
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = ChargeService(db)
    grp = resolve_group_or_exit(ctx, group_service, group)

    rules = service.list_rules(grp.id, active_only=active_only)
    if not rules:
        click.echo("No charge rules found.")
        return

    for rule in rules:
        state = "active" if rule.is_active else "inactive"
        click.echo(f"ID: {rule.id:3d} | {rule.title:25s} | {format_money(grp, rule.amount):>18s} | {state}")
    click.echo(f"\nCharge per period: {format_money(grp, service.get_charge_per_period(grp.id))}")


@charge_group.command("rule-toggle")
@click.argument("group", metavar="GROUP")
@click.argument("rule_id", type=int)
@click.option("--active/--inactive", default=True, help="Activate or deactivate the rule")
@click.pass_context
def toggle_rule(ctx, group: str, rule_id: int, active: bool):
    """Activate or deactivate a charge rule."""
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = ChargeService(db)
    grp = resolve_group_or_exit(ctx, group_service, group)

    try:
        service.set_rule_active(grp.id, rule_id, active)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Charge rule {rule_id} is now {'active' if active else 'inactive'}")


@charge_group.command("debt")
@click.argument("group", metavar="GROUP")
@click.option("--from-period", required=True, help="First period (YYYY-MM)")
@click.option("--to-period", required=True, help="Last period (YYYY-MM)")
@click.pass_context
def charge_debt(ctx, group: str, from_period: str, to_period: str):
    """Show unpaid charge periods and debt per participant."""
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = ChargeService(db)
    grp = resolve_group_or_exit(ctx, group_service, group)

    try:
        records = service.get_charge_debt(grp.id, from_period, to_period)
    except DomainError as e:
        handle_domain_error(ctx, e)

    names = participant_names(group_service, grp.id)
    click.echo(f"\nCharge debt of '{grp.name}' ({from_period} to {to_period}):")
    click.echo("-" * 60)
    for record in records:
        click.echo(
            f"{names.get(record.participant_id, '?'):20s} "
            f"{record.unpaid_periods:3d}/{record.required_periods:<3d} unpaid | "
            f"{format_money(grp, record.debt_amount):>18s}"
        )


@charge_group.command("status")
@click.argument("group", metavar="GROUP")
@click.argument("period")
@click.option("--to-period", help="Last period to report (defaults to PERIOD)")
@click.pass_context
def charge_status(ctx, group: str, period: str, to_period: str | None):
    """Show who paid the charge for a period."""
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = ChargeService(db)
    grp = resolve_group_or_exit(ctx, group_service, group)

    try:
        statuses = service.get_charge_status(grp.id, period, to_period)
    except DomainError as e:
        handle_domain_error(ctx, e)

    names = participant_names(group_service, grp.id)
    for period_status in statuses:
        click.echo(
            f"\n{period_status.period_key}: paid {period_status.paid_count}, "
            f"unpaid {period_status.unpaid_count} | "
            f"{format_money(grp, period_status.total_paid)} of "
            f"{format_money(grp, period_status.total_expected)}"
        )
        for row in period_status.participants:
            click.echo(
                f"  {names.get(row.participant_id, '?'):20s} {row.status.value:8s} "
                f"{format_money(grp, row.paid_amount):>18s}"
            )


def register_commands(cli):
    """Register charge commands with main CLI."""
    cli.add_command(charge_group, name="charge")
