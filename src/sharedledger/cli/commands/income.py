"""Income commands."""

import click
from sharedledger.domain.errors import DomainError
from sharedledger.domain.group import GroupService
from sharedledger.domain.income import IncomeService
from sharedledger.cli.error_handling import handle_domain_error
from sharedledger.cli.formatting import format_money, participant_names
from sharedledger.cli.resolution import (
    parse_amount_or_exit,
    parse_date_or_exit,
    resolve_category_or_exit,
    resolve_group_or_exit,
    resolve_participant_or_exit,
)


@click.group()
def income_group():
    """Record and manage incomes."""
    pass


@income_group.command("add")
@click.argument("group", metavar="GROUP")
@click.option("--amount", required=True, help="Amount received (e.g., 2500.00)")
@click.option("--received-by", "received_by", required=True, help="Participant name or ID who received it")
@click.option("--date", "date_str", default="today", show_default=True, help="Income date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--title", help="What the income was for")
@click.option("--category", help="Category name or ID")
@click.option("--source", help="Where the money came from (e.g., salary)")
@click.pass_context
def add_income(
    ctx,
    group: str,
    amount: str,
    received_by: str,
    date_str: str,
    title: str | None,
    category: str | None,
    source: str | None,
):
    """Record money received by a participant.

    Examples:
        sharedledger income add Home --amount 2500 --received-by Alice --source salary
    """
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = IncomeService(db)

    grp = resolve_group_or_exit(ctx, group_service, group)
    total = parse_amount_or_exit(ctx, amount, grp.minor_units)
    receiver_id = resolve_participant_or_exit(ctx, group_service, grp.id, received_by)
    occurred_at = parse_date_or_exit(ctx, date_str)

    category_id = None
    if category is not None:
        category_id = resolve_category_or_exit(ctx, group_service, grp.id, category)

    try:
        income_id = service.add_income(
            grp.id,
            amount=total,
            received_by_id=receiver_id,
            occurred_at=occurred_at,
            title=title,
            category_id=category_id,
            source=source,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Recorded income {income_id}: {format_money(grp, total)}")


@income_group.command("list")
@click.argument("group", metavar="GROUP")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--received-by", "received_by", help="Only incomes of this participant")
@click.option("--category", help="Only incomes in this category")
@click.option("--source", help="Only incomes from this source")
@click.pass_context
def list_incomes(
    ctx,
    group: str,
    start_date: str | None,
    end_date: str | None,
    received_by: str | None,
    category: str | None,
    source: str | None,
):
    """List incomes of a group."""
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = IncomeService(db)
    grp = resolve_group_or_exit(ctx, group_service, group)

    start = parse_date_or_exit(ctx, start_date) if start_date else None
    end = parse_date_or_exit(ctx, end_date) if end_date else None
    receiver_id = resolve_participant_or_exit(ctx, group_service, grp.id, received_by) if received_by else None
    category_id = resolve_category_or_exit(ctx, group_service, grp.id, category) if category else None

    incomes = service.list_incomes(
        grp.id,
        start_date=start,
        end_date=end,
        category_id=category_id,
        received_by_id=receiver_id,
        source=source,
    )
    if not incomes:
        click.echo("No incomes found.")
        return

    names = participant_names(group_service, grp.id)
    click.echo(f"\nIncomes of '{grp.name}':")
    click.echo("-" * 72)
    for income in incomes:
        details = " ".join(part for part in (income.title, f"[{income.source}]" if income.source else None) if part)
        click.echo(
            f"ID: {income.id:4d} | {income.occurred_at.isoformat()} | "
            f"{format_money(grp, income.amount):>18s} | {names.get(income.received_by_id, '?'):15s} | {details}"
        )
    click.echo("-" * 72)
    click.echo(f"Total: {format_money(grp, sum(i.amount for i in incomes))}")


@income_group.command("delete")
@click.argument("group", metavar="GROUP")
@click.argument("income_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_income(ctx, group: str, income_id: int, yes: bool):
    """Delete an income."""
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = IncomeService(db)
    grp = resolve_group_or_exit(ctx, group_service, group)

    if not yes:
        click.confirm(f"Delete income {income_id}?", abort=True)

    try:
        service.delete_income(grp.id, income_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted income {income_id}")


def register_commands(cli):
    """Register income commands with main CLI."""
    cli.add_command(income_group, name="income")
