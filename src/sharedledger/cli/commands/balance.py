"""Balance and settlement suggestion command."""

import click
from sharedledger.domain.errors import DomainError
from sharedledger.domain.group import GroupService
from sharedledger.domain.summary import SummaryService
from sharedledger.cli.error_handling import handle_domain_error
from sharedledger.cli.formatting import format_money, participant_names
from sharedledger.cli.resolution import resolve_group_or_exit


@click.command("balance")
@click.argument("group", metavar="GROUP")
@click.pass_context
def balance(ctx, group: str):
    """Show who owes whom in a group.

    Positive balances are owed money; negative balances owe money. The
    suggested transfers settle every balance.
    """
    db = ctx.obj["db"]
    group_service = GroupService(db)
    service = SummaryService(db)
    grp = resolve_group_or_exit(ctx, group_service, group)

    try:
        summary = service.get_summary(grp.id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    names = participant_names(group_service, grp.id)
    click.echo(f"\nBalances of '{grp.name}' (total spent {format_money(grp, summary.total_expenses)}):")
    click.echo("-" * 72)
    click.echo(f"{'Participant':20s} {'Paid':>15s} {'Owed':>15s} {'Settled':>15s} {'Balance':>15s}")
    for row in summary.balances:
        click.echo(
            f"{names.get(row.participant_id, '?'):20s} "
            f"{format_money(grp, row.total_paid):>15s} "
            f"{format_money(grp, row.total_owed):>15s} "
            f"{format_money(grp, row.net_from_settlements):>15s} "
            f"{format_money(grp, row.balance):>15s}"
        )

    click.echo("\nSuggested settlements:")
    if not summary.suggestions:
        click.echo("  All settled up.")
        return
    for suggestion in summary.suggestions:
        click.echo(
            f"  {names.get(suggestion.from_id, '?')} pays "
            f"{names.get(suggestion.to_id, '?')} {format_money(grp, suggestion.amount)}"
        )


def register_commands(cli):
    """Register balance command with main CLI."""
    cli.add_command(balance)
