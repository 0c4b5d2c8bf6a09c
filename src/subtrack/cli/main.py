"""Main CLI entry point."""

import asyncio

import click
from subtrack.config import DB_PATH_ENV
from subtrack.database.factories import create_sqlite_database
from subtrack.domain.errors import StorageError
from subtrack.domain.store import DashboardStore
from subtrack.utils.logger import configure_logging

# Import and register all commands at module level
from subtrack.cli.commands import (
    subscription,
    dashboard,
    settings,
    chat,
    reset,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV} environment variable)",
    envvar=DB_PATH_ENV,
)
@click.pass_context
def cli(ctx, db_path: str | None):
    """Subtrack - Subscription and bill tracker.

    Keep track of recurring payments, see what they cost per month and per
    year, and find out what renews or expires next.
    """
    ctx.ensure_object(dict)
    configure_logging()

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)

        store = DashboardStore()
        try:
            asyncio.run(store.load(db))
        except StorageError as e:
            click.echo(f"Warning: {e}. Starting with an empty dashboard.", err=True)

        ctx.obj["db"] = db
        ctx.obj["store"] = store


# Register all commands
subscription.register_commands(cli)
dashboard.register_commands(cli)
settings.register_commands(cli)
chat.register_commands(cli)
reset.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
