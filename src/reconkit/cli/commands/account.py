"""Account management commands."""

import click
from reconkit.cli.error_handling import handle_domain_error
from reconkit.domain.account import AccountService
from reconkit.domain.entities import ACCOUNT_KINDS


@click.group()
def account_group():
    """Manage known accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--kind",
    type=click.Choice(ACCOUNT_KINDS),
    default="asset",
    show_default=True,
    help="Account kind; debt accounts are matched by '#Debt' annotations",
)
@click.pass_context
def create_account(ctx, name: str, kind: str):
    """Create a new account.

    Statement rows with an account column are matched to accounts by name,
    ignoring case. A '#Debt' suffix looks among debt accounts, a '#Savings'
    suffix or no suffix among asset and savings accounts.

    Examples:
        reconkit account create "Monzo Current"
        reconkit account create "Marcus" --kind savings
        reconkit account create "Amex" --kind debt
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        account_id = service.create_account(name=name, kind=kind)
        click.echo(f"Created {kind} account '{name.strip()}' (ID: {account_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | Kind: {acc.kind}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
