"""Period statistics command."""

import click
from sharedledger.domain.errors import DomainError
from sharedledger.domain.group import GroupService
from sharedledger.domain.stats import DEFAULT_TOP_CATEGORIES, StatsService
from sharedledger.cli.error_handling import handle_domain_error
from sharedledger.cli.formatting import format_money
from sharedledger.cli.resolution import resolve_group_or_exit


@click.command("stats")
@click.argument("group", metavar="GROUP")
@click.argument("period")
@click.option("--top", default=DEFAULT_TOP_CATEGORIES, show_default=True, type=click.IntRange(min=0), help="Number of top expense categories")
@click.option("--daily", is_flag=True, help="Also show the day-by-day cash flow")
@click.pass_context
def stats(ctx, group: str, period: str, top: int, daily: bool):
    """Show income, expenses and savings of a group for a period.

    Examples:
        sharedledger stats Home 2024-03
        sharedledger stats Home 2024-03 --daily
    """
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = StatsService(db)
    grp = resolve_group_or_exit(ctx, group_service, group)

    try:
        result = service.get_period_stats(grp.id, period, top_n=top)
        days = service.get_daily_cash_flow(grp.id, period) if daily else []
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nStats of '{grp.name}' for {period}:")
    click.echo("-" * 60)
    click.echo(f"{'Income':20s} {format_money(grp, result.total_income):>20s}")
    click.echo(f"{'Expenses':20s} {format_money(grp, result.total_expenses):>20s}")
    click.echo(f"{'Net savings':20s} {format_money(grp, result.net_savings):>20s}")
    click.echo(f"{'Savings rate':20s} {str(result.savings_rate) + '%':>20s}")

    if result.top_categories:
        names = {c.id: c.name for c in group_service.list_categories(grp.id)}
        click.echo("\nTop expense categories:")
        for spend in result.top_categories:
            name = names.get(spend.category_id, "?") if spend.category_id is not None else "Uncategorized"
            click.echo(f"  {name:18s} {format_money(grp, spend.amount):>20s} ({spend.percentage}%)")

    if daily:
        click.echo("\nDaily cash flow:")
        click.echo(f"  {'Date':10s} {'Income':>18s} {'Expense':>18s} {'Cumulative':>18s}")
        for row in days:
            click.echo(
                f"  {row.day.isoformat()} "
                f"{format_money(grp, row.income):>18s} "
                f"{format_money(grp, row.expense):>18s} "
                f"{format_money(grp, row.cumulative_net):>18s}"
            )


def register_commands(cli):
    """Register stats command with main CLI."""
    cli.add_command(stats)
