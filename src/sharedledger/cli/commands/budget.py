"""Category budget commands."""

import click
from sharedledger.domain.budget import BudgetService
from sharedledger.domain.errors import DomainError
from sharedledger.domain.group import GroupService
from sharedledger.cli.error_handling import handle_domain_error
from sharedledger.cli.formatting import format_money
from sharedledger.cli.resolution import (
    parse_amount_or_exit,
    resolve_category_or_exit,
    resolve_group_or_exit,
)


@click.group()
def budget_group():
    """Manage category budgets."""
    pass


@budget_group.command("set")
@click.argument("group", metavar="GROUP")
@click.argument("category")
@click.argument("period")
@click.argument("amount")
@click.pass_context
def set_budget(ctx, group: str, category: str, period: str, amount: str):
    """Set the budget of a category for a period.

    Examples:
        sharedledger budget set "Lisbon Trip" Food 2024-05 300
    """
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = BudgetService(db)
    grp = resolve_group_or_exit(ctx, group_service, group)
    category_id = resolve_category_or_exit(ctx, group_service, grp.id, category)
    budget_amount = parse_amount_or_exit(ctx, amount, grp.minor_units)

    try:
        service.set_budget(grp.id, category_id, period, budget_amount)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Budget for '{category}' in {period} set to {format_money(grp, budget_amount)}")


@budget_group.command("status")
@click.argument("group", metavar="GROUP")
@click.argument("period")
@click.pass_context
def budget_status(ctx, group: str, period: str):
    """Show spending against each category budget in a period."""
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = BudgetService(db)
    grp = resolve_group_or_exit(ctx, group_service, group)

    try:
        statuses = service.get_budget_status(grp.id, period)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not statuses:
        click.echo(f"No budgets set for {period}.")
        return

    names = {c.id: c.name for c in group_service.list_categories(grp.id)}
    click.echo(f"\nBudgets of '{grp.name}' for {period}:")
    click.echo("-" * 80)
    for status in statuses:
        flag = " OVER" if status.is_over_budget else ""
        click.echo(
            f"{names.get(status.category_id, '?'):20s} "
            f"{format_money(grp, status.spent_amount):>15s} / "
            f"{format_money(grp, status.budget_amount):>15s} "
            f"({status.utilization_percent}%){flag}"
        )

    totals = service.get_budget_totals(grp.id, period)
    click.echo("-" * 80)
    click.echo(
        f"{'Total':20s} {format_money(grp, totals.total_spent):>15s} / "
        f"{format_money(grp, totals.total_budget):>15s} "
        f"({totals.utilization_percent}%), {totals.over_budget_count} over budget"
    )


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
