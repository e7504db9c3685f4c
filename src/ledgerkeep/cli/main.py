"""Main CLI entry point."""

import logging

import click
from ledgerkeep.database.factories import create_sqlite_database

# Import and register all commands at module level
from ledgerkeep.cli.commands import (
    account,
    add,
    analytics,
    category,
    maintenance,
    transaction,
)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; DEBUG when verbose, otherwise WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERKEEP_DB_PATH environment variable)",
    envvar="LEDGERKEEP_DB_PATH",
)
@click.option(
    "--owner",
    "owner_id",
    type=int,
    default=1,
    show_default=True,
    help="ID of the user whose data is used (overrides LEDGERKEEP_OWNER environment variable)",
    envvar="LEDGERKEEP_OWNER",
)
@click.option("--verbose", "-v", is_flag=True, help="Log balance recalculations and other details")
@click.pass_context
def cli(ctx, db_path: str | None, owner_id: int, verbose: bool):
    """Ledgerkeep - Personal finance tracker.

    Record checking, savings and credit accounts, categorize transactions and
    keep account balances in step with them.
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
        ctx.obj["owner_id"] = owner_id
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
category.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
analytics.register_commands(cli)
maintenance.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
