"""Statement review and import commands."""

from pathlib import Path
from typing import Optional

import click
from reconkit.cli.error_handling import handle_domain_error
from reconkit.cli.account_resolution import resolve_account_or_exit
from reconkit.domain.account import AccountService
from reconkit.domain.entities import DraftRecord, StatementFile, TRANSACTION_TYPES
from reconkit.domain.ledger import LedgerService
from reconkit.domain.review import ReviewSession
from reconkit.domain.rules import RuleService


def load_statement_files(paths: tuple[str, ...]) -> list[StatementFile]:
    """Read every file of a batch before any pipeline pass runs."""
    return [
        StatementFile(name=Path(p).name, text=Path(p).read_text(encoding="utf-8-sig"))
        for p in paths
    ]


def statement_options(command):
    """Options shared by review and import."""
    options = [
        click.argument("csv_files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False)),
        click.option("--account", help="Account name or ID for every row without an account column"),
        click.option("--account-column", help="Column holding a per-row account name"),
        click.option("--amount-col", help="Single signed amount column"),
        click.option("--debit-col", help="Debit column (use with --credit-col)"),
        click.option("--credit-col", help="Credit column (use with --debit-col)"),
        click.option("--skip", "skip_ids", multiple=True, help="Record ID to leave out (repeatable)"),
        click.option(
            "--set-type",
            "type_overrides",
            multiple=True,
            help="Override the type of every row with a bank code, as CODE=TYPE (repeatable)",
        ),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def build_session(
    ctx,
    csv_files: tuple[str, ...],
    account: Optional[str],
    account_column: Optional[str],
    amount_col: Optional[str],
    debit_col: Optional[str],
    credit_col: Optional[str],
    skip_ids: tuple[str, ...],
    type_overrides: tuple[str, ...],
) -> ReviewSession:
    """Load rules, accounts and files into a review session."""
    db = ctx.obj["db"]
    account_service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, account_service, account)

    if bool(debit_col) != bool(credit_col):
        click.echo("Error: --debit-col and --credit-col must be given together", err=True)
        ctx.exit(1)

    rule_service = RuleService(db)
    session = ReviewSession(rules=rule_service.load(), accounts=account_service.list_accounts())
    session.add_files(load_statement_files(csv_files))

    changes = {}
    if account_id is not None:
        changes["account_id"] = account_id
    if account_column:
        changes["account_column"] = account_column
    if debit_col:
        changes.update(amount_columns=2, debit_column=debit_col, credit_column=credit_col)
    elif amount_col:
        changes.update(amount_columns=1, amount_column=amount_col)
    if changes:
        for file_name in list(session.configs):
            session.update_config(file_name, **changes)

    try:
        for override in type_overrides:
            code, sep, txn_type = override.partition("=")
            if not sep or txn_type not in TRANSACTION_TYPES:
                raise click.BadParameter(
                    f"'{override}' is not CODE=TYPE with TYPE one of {', '.join(TRANSACTION_TYPES)}",
                    param_hint="--set-type",
                )
            session.bulk_set_type(code, txn_type)
        for record_id in skip_ids:
            session.override(record_id, skip=True)
    except ValueError as e:
        handle_domain_error(ctx, e)

    return session


def _flags(record: DraftRecord) -> str:
    flags = ""
    if record.is_transfer:
        flags += "M" if record.is_transfer_mirror else "T"
    if record.skip:
        flags += "S"
    if record.account_warning:
        flags += "!"
    return flags


def print_records(session: ReviewSession) -> None:
    """Print the reviewable records as a table."""
    names = {acc.id: acc.name for acc in session.accounts}

    click.echo(f"\n{len(session.records)} record(s):")
    click.echo("-" * 130)
    click.echo(
        f"{'ID':<22} {'Date':<11} {'Amount':>10} {'Type':<12} {'Category':<14} "
        f"{'From':<14} {'To':<14} {'Flags':<5} Description"
    )
    click.echo("-" * 130)
    for r in session.records:
        from_name = names.get(r.resolved_from_account_id, "")
        to_name = names.get(r.resolved_to_account_id, "")
        click.echo(
            f"{r.id[:22]:<22} {r.raw_date[:11]:<11} {r.raw_amount:>10,.2f} {r.resolved_type:<12} "
            f"{r.resolved_category[:14]:<14} {from_name[:14]:<14} {to_name[:14]:<14} "
            f"{_flags(r):<5} {r.resolved_description[:40]}"
        )

    warnings = [r for r in session.records if r.account_warning]
    if warnings:
        click.echo("\nAccount warnings:")
        for r in warnings:
            click.echo(f"  {r.id}: {r.account_warning}")

    stats = session.stats()
    click.echo(
        f"\nTotal: {stats['total']}  Transfers: {stats['transfers']}  "
        f"Skipped: {stats['skipped']}  Warnings: {stats['warnings']}  "
        f"To import: {stats['to_import']}"
    )
    click.echo("Flags: T transfer, M mirror leg (not imported), S skipped, ! account warning")


@click.command("review")
@statement_options
@click.pass_context
def review(ctx, csv_files, **options):
    """Preview how statement files will be imported, without importing."""
    session = build_session(ctx, csv_files, **options)
    print_records(session)


@click.command("import")
@statement_options
@click.option("--yes", "-y", is_flag=True, help="Import without asking for confirmation")
@click.pass_context
def import_statements(ctx, csv_files, yes: bool, **options):
    """Review statement files and import them into the ledger."""
    session = build_session(ctx, csv_files, **options)
    print_records(session)

    to_import = len(session.committable())
    if to_import == 0:
        click.echo("\nNothing to import.")
        return
    if not yes and not click.confirm(f"\nImport {to_import} transaction(s)?"):
        click.echo("Import cancelled.")
        return

    try:
        result = LedgerService(ctx.obj["db"]).commit(session)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nImport complete:")
    click.echo(f"  Imported: {result['committed']} transactions")
    click.echo(f"  Not imported: {result['excluded']} records")


def register_commands(cli):
    """Register review and import commands with main CLI."""
    cli.add_command(review)
    cli.add_command(import_statements)
