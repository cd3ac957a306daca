"""CSV template command."""

from pathlib import Path

import click
from reconkit.domain.template import CSV_TEMPLATE, CSV_TEMPLATE_FILENAME


@click.command("template")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    help=f"Write the template to a file (e.g. {CSV_TEMPLATE_FILENAME})",
)
def template(output: str | None):
    """Print a sample statement CSV.

    The account column shows the '#Debt' and '#Savings' suffixes that route
    a row to a debt or savings account.
    """
    if output is None:
        click.echo(CSV_TEMPLATE, nl=False)
        return
    Path(output).write_text(CSV_TEMPLATE, encoding="utf-8")
    click.echo(f"Template written to {output}")


def register_commands(cli):
    """Register template command with main CLI."""
    cli.add_command(template)
