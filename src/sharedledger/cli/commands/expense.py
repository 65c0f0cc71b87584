"""Expense commands."""

import click
from sharedledger.domain.allocation import split_policy_for
from sharedledger.domain.entities import SplitType
from sharedledger.domain.errors import DomainError
from sharedledger.domain.expense import ExpenseService
from sharedledger.domain.group import GroupService
from sharedledger.cli.error_handling import handle_domain_error
from sharedledger.cli.formatting import format_money, participant_names
from sharedledger.cli.resolution import (
    parse_amount_or_exit,
    parse_date_or_exit,
    resolve_category_or_exit,
    resolve_group_or_exit,
    resolve_participant_or_exit,
)

SPLIT_CHOICES = [split_type.value for split_type in SplitType]


@click.group()
def expense_group():
    """Record and manage expenses."""
    pass


@expense_group.command("add")
@click.argument("group", metavar="GROUP")
@click.option("--amount", required=True, help="Total amount (e.g., 120.50)")
@click.option("--payer", required=True, help="Participant name or ID who paid")
@click.option("--date", "date_str", default="today", show_default=True, help="Expense date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--title", help="What the expense was for")
@click.option(
    "--split",
    "split_type",
    type=click.Choice(SPLIT_CHOICES),
    default=SplitType.EQUAL.value,
    show_default=True,
    help="How to split the amount",
)
@click.option("--share", "shares", multiple=True, help="Manual share as NAME=AMOUNT (repeatable)")
@click.option("--only", "only", multiple=True, help="Restrict the split to these participants (repeatable)")
@click.option("--category", help="Category name or ID")
@click.option("--period", help="Charge period this expense pays for (YYYY-MM)")
@click.pass_context
def add_expense(
    ctx,
    group: str,
    amount: str,
    payer: str,
    date_str: str,
    title: str | None,
    split_type: str,
    shares: tuple[str, ...],
    only: tuple[str, ...],
    category: str | None,
    period: str | None,
):
    """Record an expense paid by one participant and split across the group.

    Examples:
        sharedledger expense add "Lisbon Trip" --amount 90 --payer Alice --title Dinner
        sharedledger expense add "Lisbon Trip" --amount 50 --payer Bob --only Bob --only Carol
        sharedledger expense add "Lisbon Trip" --amount 30 --payer Alice --split manual \\
            --share Alice=10 --share Bob=20
        sharedledger expense add "Building 12" --amount 1500 --payer "Unit 3" --period 2024-01
    """
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = ExpenseService(db)

    grp = resolve_group_or_exit(ctx, group_service, group)
    total = parse_amount_or_exit(ctx, amount, grp.minor_units)
    payer_id = resolve_participant_or_exit(ctx, group_service, grp.id, payer)
    occurred_at = parse_date_or_exit(ctx, date_str)

    manual_amounts = None
    if split_type == SplitType.MANUAL.value:
        if not shares:
            click.echo("Error: Manual split requires at least one --share NAME=AMOUNT", err=True)
            ctx.exit(1)
        if only:
            click.echo("Error: --only is not valid with --split manual", err=True)
            ctx.exit(1)
        manual_amounts = {}
        for share in shares:
            name, sep, share_amount = share.rpartition("=")
            if not sep or not name:
                click.echo(f"Error: Invalid share '{share}', expected NAME=AMOUNT", err=True)
                ctx.exit(1)
            pid = resolve_participant_or_exit(ctx, group_service, grp.id, name)
            manual_amounts[pid] = parse_amount_or_exit(ctx, share_amount, grp.minor_units)
    elif shares:
        click.echo("Error: --share is only valid with --split manual", err=True)
        ctx.exit(1)

    participant_ids = None
    if only:
        participant_ids = [resolve_participant_or_exit(ctx, group_service, grp.id, name) for name in only]

    category_id = None
    if category is not None:
        category_id = resolve_category_or_exit(ctx, group_service, grp.id, category)

    try:
        expense_id = service.add_expense(
            grp.id,
            amount=total,
            payer_id=payer_id,
            occurred_at=occurred_at,
            policy=split_policy_for(SplitType(split_type), manual_amounts),
            participant_ids=participant_ids,
            title=title,
            category_id=category_id,
            period_key=period,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Recorded expense {expense_id}: {format_money(grp, total)}")


@expense_group.command("list")
@click.argument("group", metavar="GROUP")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--period", help="Only expenses tagged with this charge period")
@click.option("--verbose", "-v", is_flag=True, help="Show each participant's share")
@click.pass_context
def list_expenses(
    ctx, group: str, start_date: str | None, end_date: str | None, period: str | None, verbose: bool
):
    """List expenses of a group."""
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = ExpenseService(db)
    grp = resolve_group_or_exit(ctx, group_service, group)

    start = parse_date_or_exit(ctx, start_date) if start_date else None
    end = parse_date_or_exit(ctx, end_date) if end_date else None

    expenses = service.list_expenses(grp.id, start_date=start, end_date=end, period_key=period)
    if not expenses:
        click.echo("No expenses found.")
        return

    names = participant_names(group_service, grp.id)
    click.echo(f"\nExpenses of '{grp.name}':")
    click.echo("-" * 72)
    for expense in expenses:
        title = expense.title or ""
        click.echo(
            f"ID: {expense.id:4d} | {expense.occurred_at.isoformat()} | "
            f"{format_money(grp, expense.amount):>18s} | {names.get(expense.payer_id, '?'):15s} | {title}"
        )
        if verbose:
            for share in expense.shares:
                click.echo(f"        {names.get(share.participant_id, '?'):15s} {format_money(grp, share.amount)}")


@expense_group.command("delete")
@click.argument("group", metavar="GROUP")
@click.argument("expense_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_expense(ctx, group: str, expense_id: int, yes: bool):
    """Delete an expense."""
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = ExpenseService(db)
    grp = resolve_group_or_exit(ctx, group_service, group)

    if not yes:
        click.confirm(f"Delete expense {expense_id}?", abort=True)

    try:
        service.delete_expense(grp.id, expense_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted expense {expense_id}")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
