"""Tests for review and import commands."""

import pytest

from reconkit.cli.main import cli


@pytest.fixture
def bank_accounts(account_service):
    account_service.create_account("Halifax Current")
    account_service.create_account("NatWest Current")


def run(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


def test_review_pairs_transfer_across_files(cli_runner, temp_db, fixtures_dir):
    """Review shows the paired transfer and does not import."""
    result = run(
        cli_runner, temp_db, "review", str(fixtures_dir / "halifax.csv"), str(fixtures_dir / "natwest.csv")
    )

    assert result.exit_code == 0
    assert "Transfer to NatWest" in result.output
    assert "Transfer from Halifax" in result.output
    assert "Transfers: 1" in result.output
    assert temp_db.list_transactions() == []


def test_import_without_accounts_imports_nothing(cli_runner, temp_db, fixtures_dir):
    """Rows with no account are never imported."""
    result = run(cli_runner, temp_db, "import", str(fixtures_dir / "natwest.csv"), "--yes")

    assert result.exit_code == 0
    assert "Nothing to import." in result.output


def test_import_with_account(cli_runner, temp_db, fixtures_dir, bank_accounts):
    """Every row goes to the chosen account."""
    result = run(
        cli_runner,
        temp_db,
        "import",
        str(fixtures_dir / "natwest.csv"),
        "--account",
        "natwest current",
        "--yes",
    )

    assert result.exit_code == 0
    assert "Import complete" in result.output
    assert "Imported: 3 transactions" in result.output
    assert len(temp_db.list_transactions()) == 3


def test_import_skip(cli_runner, temp_db, fixtures_dir, bank_accounts):
    """Skipped records are counted as not imported."""
    result = run(
        cli_runner,
        temp_db,
        "import",
        str(fixtures_dir / "natwest.csv"),
        "--account",
        "NatWest Current",
        "--skip",
        "natwest.csv:4",
        "--yes",
    )

    assert result.exit_code == 0
    assert "Imported: 2 transactions" in result.output
    assert "Not imported: 1 records" in result.output


def test_import_skip_unknown_record(cli_runner, temp_db, fixtures_dir):
    result = run(cli_runner, temp_db, "review", str(fixtures_dir / "natwest.csv"), "--skip", "natwest.csv:99")

    assert result.exit_code == 1
    assert "not found" in result.output


def test_import_unknown_account(cli_runner, temp_db, fixtures_dir):
    result = run(cli_runner, temp_db, "review", str(fixtures_dir / "natwest.csv"), "--account", "Nope")

    assert result.exit_code == 1
    assert "not found" in result.output


def test_set_type_override(cli_runner, temp_db, fixtures_dir):
    """--set-type changes every row with the bank code."""
    result = run(cli_runner, temp_db, "review", str(fixtures_dir / "natwest.csv"), "--set-type", "pos=investing")

    assert result.exit_code == 0
    assert "investing" in result.output


def test_set_type_invalid(cli_runner, temp_db, fixtures_dir):
    result = run(cli_runner, temp_db, "review", str(fixtures_dir / "natwest.csv"), "--set-type", "POS")

    assert result.exit_code == 2


def test_debit_col_requires_credit_col(cli_runner, temp_db, fixtures_dir):
    result = run(cli_runner, temp_db, "review", str(fixtures_dir / "halifax.csv"), "--debit-col", "Debit Amount")

    assert result.exit_code == 1
    assert "--credit-col" in result.output


def test_annotated_import(cli_runner, temp_db, fixtures_dir, sample_accounts):
    """Per-row annotations resolve accounts; unknown ones block only their row."""
    result = run(cli_runner, temp_db, "import", str(fixtures_dir / "annotated.csv"), "--yes")

    assert result.exit_code == 0
    assert "Account warnings:" in result.output
    assert "Unknown Bank" in result.output
    assert "Imported: 3 transactions" in result.output
    assert "Not imported: 1 records" in result.output

    debt_rows = temp_db.list_transactions(account_id=sample_accounts["Amex"].id)
    assert [t.debt_id for t in debt_rows] == [sample_accounts["Amex"].id]


def test_import_transfer_once(cli_runner, temp_db, fixtures_dir, account_service):
    """With an account per file the transfer is written once, from the debit leg."""
    account_service.create_account("Everything")

    result = run(
        cli_runner,
        temp_db,
        "import",
        str(fixtures_dir / "halifax.csv"),
        str(fixtures_dir / "natwest.csv"),
        "--account",
        "Everything",
        "--yes",
    )

    assert result.exit_code == 0
    assert "Imported: 5 transactions" in result.output
    transfers = [t for t in temp_db.list_transactions() if t.type == "transfer"]
    assert len(transfers) == 1
    assert transfers[0].description == "Transfer to NatWest"


def test_import_requires_files(cli_runner, temp_db):
    result = run(cli_runner, temp_db, "import")

    assert result.exit_code == 2


def test_import_store_failure(cli_runner, temp_db, fixtures_dir, bank_accounts, monkeypatch):
    """A failed ledger write exits 1 and writes nothing."""
    from reconkit.database.sqlalchemy_db import SQLAlchemyDatabase
    from reconkit.domain.errors import StoreError

    def fail(self, entries):
        raise StoreError("database is locked")

    monkeypatch.setattr(SQLAlchemyDatabase, "create_transactions", fail)

    result = run(
        cli_runner, temp_db, "import", str(fixtures_dir / "natwest.csv"), "--account", "NatWest Current", "--yes"
    )

    assert result.exit_code == 1
    assert "Nothing was committed" in result.output
    assert "run the import again" in result.output
    assert temp_db.list_transactions() == []
