"""Tests for LedgerService commits."""

from decimal import Decimal

import pytest

from reconkit.domain.entities import RuleSet, StatementFile
from reconkit.domain.errors import CommitError, StoreError, ValidationError
from reconkit.domain.ledger import LedgerService
from reconkit.domain.review import ReviewSession
from reconkit.domain.rules import DEFAULT_TRANSFER_RULES
from reconkit.domain.type_rules import DEFAULT_TYPE_RULES


@pytest.fixture
def accounts(account_service):
    account_service.create_account("Halifax Current")
    account_service.create_account("NatWest Current")
    return {acc.name: acc for acc in account_service.list_accounts()}


@pytest.fixture
def session(fixtures_dir, accounts):
    review = ReviewSession(
        RuleSet(type_rules=DEFAULT_TYPE_RULES, transfer_rules=DEFAULT_TRANSFER_RULES),
        accounts.values(),
    )
    review.add_files(
        [
            StatementFile("halifax.csv", (fixtures_dir / "halifax.csv").read_text()),
            StatementFile("natwest.csv", (fixtures_dir / "natwest.csv").read_text()),
        ]
    )
    review.update_config("halifax.csv", account_id=accounts["Halifax Current"].id)
    review.update_config("natwest.csv", account_id=accounts["NatWest Current"].id)
    return review


def test_commit_writes_committable_records(temp_db, session, accounts):
    """Mirrors are excluded and the transfer is written once."""
    result = LedgerService(temp_db).commit(session)

    assert result["committed"] == 5
    assert result["excluded"] == 1
    assert len(result["ids"]) == 5

    transactions = temp_db.list_transactions()
    transfers = [t for t in transactions if t.type == "transfer"]
    assert len(transfers) == 1
    assert transfers[0].account_id == accounts["Halifax Current"].id
    assert transfers[0].counterparty_account_id == accounts["NatWest Current"].id
    assert transfers[0].amount == Decimal("-50.00")


def test_commit_clears_session(temp_db, session):
    LedgerService(temp_db).commit(session)

    assert session.records == []
    assert session.files == []


def test_failed_commit_leaves_session(temp_db, session, monkeypatch):
    """A store failure commits nothing and keeps the session for a retry."""

    def fail(entries):
        raise StoreError("locked")

    monkeypatch.setattr(temp_db, "create_transactions", fail)

    with pytest.raises(CommitError):
        LedgerService(temp_db).commit(session)

    assert len(session.records) == 6
    assert temp_db.list_transactions() == []


def test_bad_date_blocks_commit(temp_db, accounts):
    """A committable record with an unreadable date stops the whole commit."""
    review = ReviewSession(RuleSet(), accounts.values())
    review.add_files([StatementFile("g.csv", "date,description,amount\nsoon,Thing,-1\n2026-01-01,Ok,-2\n")])
    review.update_config("g.csv", account_id=accounts["Halifax Current"].id)

    with pytest.raises(ValidationError, match="g.csv:2"):
        LedgerService(temp_db).commit(review)

    assert temp_db.list_transactions() == []


def test_skipped_records_not_committed(temp_db, session):
    session.override("natwest.csv:4", skip=True)

    result = LedgerService(temp_db).commit(session)

    assert result["committed"] == 4
    assert all(t.description != "TESCO STORES 2231" for t in temp_db.list_transactions())
