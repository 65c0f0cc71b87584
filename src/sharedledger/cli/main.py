"""Main CLI entry point."""

import logging
import os

import click
from sharedledger.database.factories import DB_PATH_ENV_VAR, create_sqlite_database

# Import and register all commands at module level
from sharedledger.cli.commands import (
    group,
    participant,
    category,
    expense,
    settle,
    balance,
    charge,
    budget,
    income,
    stats,
)

LOG_LEVEL_ENV_VAR = "SHAREDLEDGER_LOG_LEVEL"


def configure_logging(verbose: bool) -> None:
    """Configure root logging from the --verbose flag or SHAREDLEDGER_LOG_LEVEL."""
    level_name = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING")
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Sharedledger - shared expense ledger.

    Record group expenses and payments, see who owes whom, track recurring
    charges, category budgets, incomes and savings.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
group.register_commands(cli)
participant.register_commands(cli)
category.register_commands(cli)
expense.register_commands(cli)
settle.register_commands(cli)
balance.register_commands(cli)
charge.register_commands(cli)
budget.register_commands(cli)
income.register_commands(cli)
stats.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
