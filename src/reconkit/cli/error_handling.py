"""CLI error rendering."""

import click

from reconkit.domain.errors import CommitError, DomainError
from reconkit.utils.logger import get_logger

log = get_logger("cli")


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print ``Error: <message>`` to stderr and exit 1.

    A failed commit also tells the user that nothing was written, so the
    same import can simply be run again.
    """
    log.debug("{} in '{}': {}", type(error).__name__, ctx.command_path, error)
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, CommitError):
        click.echo("No transactions were imported; run the import again to retry.", err=True)
    ctx.exit(1)
