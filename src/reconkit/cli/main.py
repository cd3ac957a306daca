"""Main CLI entry point."""

import click
from reconkit.database.factories import create_sqlite_database
from reconkit.utils.logger import configure_logging

# Import and register all commands at module level
from reconkit.cli.commands import (
    account,
    rules,
    import_cmd,
    template,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides RECONKIT_DB_PATH environment variable)",
    envvar="RECONKIT_DB_PATH",
)
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    envvar="RECONKIT_LOG_LEVEL",
    help="Log level for messages written to stderr",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Reconkit - bank statement import and transfer reconciliation.

    Normalize CSV exports from several banks, apply type, merchant and
    transfer rules, review the result and import it in bulk.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
rules.register_commands(cli)
import_cmd.register_commands(cli)
template.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
