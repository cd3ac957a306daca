"""Shared pytest fixtures for reconkit tests."""

import tempfile
import os
from datetime import datetime, UTC
from decimal import Decimal
from pathlib import Path
import pytest

from reconkit.database.factories import create_sqlite_database
from reconkit.domain.account import AccountService
from reconkit.domain.entities import Account, DraftRecord, GENERIC, INCOME, EXPENSE
from reconkit.domain.rules import RuleService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def rule_service(temp_db):
    """Create a RuleService with a temporary database."""
    return RuleService(temp_db)


@pytest.fixture
def sample_accounts(account_service):
    """Create one account of each kind and return them by name."""
    account_service.create_account(name="Monzo Current", kind="asset")
    account_service.create_account(name="Marcus", kind="savings")
    account_service.create_account(name="Amex", kind="debt")
    return {acc.name: acc for acc in account_service.list_accounts()}


@pytest.fixture
def make_account():
    """Build an Account entity without a database."""

    def _make(account_id: int, name: str, kind: str = "asset") -> Account:
        return Account(id=account_id, name=name, kind=kind, created_at=datetime.now(UTC))

    return _make


@pytest.fixture
def make_record():
    """Build a DraftRecord with sensible defaults."""

    def _make(record_id: str, amount: str, description: str = "", raw_date: str = "2026-02-20", **fields):
        value = Decimal(amount)
        defaults = dict(
            id=record_id,
            raw_date=raw_date,
            raw_type_code="",
            raw_description=description,
            raw_amount=value,
            source_format=GENERIC,
            resolved_type=INCOME if value >= 0 else EXPENSE,
            resolved_description=description,
            source_file="test.csv",
        )
        defaults.update(fields)
        return DraftRecord(**defaults)

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
