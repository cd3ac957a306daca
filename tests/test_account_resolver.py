"""Tests for account resolution by name, ID and statement annotation."""

from decimal import Decimal

import pytest

from reconkit.domain.errors import NotFoundError
from reconkit.utils.account_resolver import (
    resolve_account,
    resolve_accounts,
    split_annotation,
)


@pytest.fixture
def accounts(make_account):
    return [
        make_account(1, "Monzo Current"),
        make_account(2, "Marcus", "savings"),
        make_account(3, "Halifax", "debt"),
    ]


def test_resolve_account_by_id(accounts):
    """Integer and numeric string IDs resolve."""
    assert resolve_account(accounts, 2) == 2
    assert resolve_account(accounts, "3") == 3


def test_resolve_account_by_name_case_insensitive(accounts):
    """Names are matched without regard to case."""
    assert resolve_account(accounts, "monzo current") == 1


def test_resolve_account_missing(accounts):
    """Unknown names and IDs raise NotFoundError."""
    with pytest.raises(NotFoundError):
        resolve_account(accounts, 99)
    with pytest.raises(NotFoundError, match="Nope"):
        resolve_account(accounts, "Nope")


def test_split_annotation():
    """Markers pick the account kind and are removed from the name."""
    assert split_annotation("Halifax#Debt") == ("Halifax", "debt")
    assert split_annotation("Marcus #savings") == ("Marcus", "savings")
    assert split_annotation(" Monzo Current ") == ("Monzo Current", "asset")


def test_configured_account_follows_direction():
    """Inflows land on the to side, outflows on the from side."""
    inflow = resolve_accounts(Decimal("10"), 7, None, [], [])
    outflow = resolve_accounts(Decimal("-10"), 7, None, [], [])

    assert (inflow.from_account_id, inflow.to_account_id) == (None, 7)
    assert (outflow.from_account_id, outflow.to_account_id) == (7, None)


def test_no_account_configured():
    """Without a configured account or annotation both sides stay empty."""
    resolution = resolve_accounts(Decimal("-1"), None, None, [], [])

    assert resolution.from_account_id is None
    assert resolution.to_account_id is None
    assert resolution.warning is None


def test_debt_annotation_searches_debt_accounts(accounts):
    """A #Debt annotation is looked up among debt accounts only."""
    assets = [a for a in accounts if a.kind != "debt"]
    debts = [a for a in accounts if a.kind == "debt"]

    resolution = resolve_accounts(Decimal("150"), 1, "Halifax#Debt", assets, debts)

    assert resolution.to_account_id == 3
    assert resolution.warning is None


def test_annotation_overrides_configured_account(accounts):
    """A matched annotation wins over the file's account."""
    resolution = resolve_accounts(Decimal("300"), 1, "marcus#savings", accounts[:2], [])

    assert resolution.to_account_id == 2


def test_unknown_annotation_warns(accounts):
    """An annotation with no matching account leaves both sides empty."""
    resolution = resolve_accounts(Decimal("-4.20"), 1, "Unknown Bank", accounts[:2], [])

    assert resolution.from_account_id is None
    assert resolution.to_account_id is None
    assert "Unknown Bank" in resolution.warning


def test_debt_annotation_does_not_match_asset(accounts):
    """A debt annotation never resolves to an asset account of the same name."""
    resolution = resolve_accounts(Decimal("-5"), None, "Monzo Current#Debt", accounts[:2], [accounts[2]])

    assert resolution.warning is not None
    assert "debt" in resolution.warning
