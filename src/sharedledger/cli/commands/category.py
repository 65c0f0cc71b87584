"""Category management commands."""

import click
from sharedledger.domain.errors import DomainError
from sharedledger.domain.group import GroupService
from sharedledger.cli.error_handling import handle_domain_error
from sharedledger.cli.resolution import resolve_group_or_exit


@click.group()
def category_group():
    """Manage spending categories."""
    pass


@category_group.command("create")
@click.argument("group", metavar="GROUP")
@click.argument("name")
@click.pass_context
def create_category(ctx, group: str, name: str):
    """Create a new category in a group."""
    service = GroupService(ctx.obj["db"])
    grp = resolve_group_or_exit(ctx, service, group)

    try:
        category_id = service.create_category(grp.id, name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{name}' (ID: {category_id})")


@category_group.command("list")
@click.argument("group", metavar="GROUP")
@click.pass_context
def list_categories(ctx, group: str):
    """List categories of a group."""
    service = GroupService(ctx.obj["db"])
    grp = resolve_group_or_exit(ctx, service, group)

    categories = service.list_categories(grp.id)
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        click.echo(f"{cat.name} (ID: {cat.id})")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
