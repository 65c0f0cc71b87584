"""Group management commands."""

import click
from sharedledger.domain.errors import DomainError
from sharedledger.domain.group import GroupService
from sharedledger.cli.error_handling import handle_domain_error


@click.group()
def group_group():
    """Manage groups."""
    pass


@group_group.command("create")
@click.argument("name", metavar="GROUP_NAME")
@click.option("--currency", default="USD", show_default=True, help="Currency code")
@click.option(
    "--minor-units",
    type=int,
    default=2,
    show_default=True,
    help="Decimal digits of the currency's smallest unit (0 for IRR/JPY)",
)
@click.pass_context
def create_group(ctx, name: str, currency: str, minor_units: int):
    """Create a new group.

    Examples:
        sharedledger group create "Lisbon Trip"
        sharedledger group create "Building 12" --currency IRR --minor-units 0
    """
    service = GroupService(ctx.obj["db"])

    try:
        group_id = service.create_group(name=name, currency=currency, minor_units=minor_units)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created group '{name}' (ID: {group_id})")


@group_group.command("list")
@click.pass_context
def list_groups(ctx):
    """List all groups."""
    service = GroupService(ctx.obj["db"])

    groups = service.list_groups()
    if not groups:
        click.echo("No groups found.")
        return

    click.echo("\nGroups:")
    click.echo("-" * 60)
    for grp in groups:
        click.echo(f"ID: {grp.id:3d} | {grp.name:30s} | {grp.currency}")


def register_commands(cli):
    """Register group commands with main CLI."""
    cli.add_command(group_group, name="group")
