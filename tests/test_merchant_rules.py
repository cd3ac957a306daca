"""Tests for merchant rule matching and application."""

from decimal import Decimal

import pytest

from reconkit.domain.entities import MerchantRule
from reconkit.domain.errors import ValidationError
from reconkit.domain.merchant_rules import (
    apply_merchant_rules,
    description_matches,
    rule_matches,
    validate_merchant_rule,
)


def test_substring_match_is_case_insensitive():
    """Plain patterns match anywhere in the description, ignoring case."""
    rule = MerchantRule(id="1", contains="tesco")

    assert description_matches(rule, "TESCO STORES 2231")
    assert not description_matches(rule, "SAINSBURYS")


def test_regex_match():
    """Regex patterns are searched case-insensitively."""
    rule = MerchantRule(id="1", contains=r"^amazon\b", use_regex=True)

    assert description_matches(rule, "AMAZON MARKETPLACE")
    assert not description_matches(rule, "PAY AMAZON")


def test_invalid_regex_falls_back_to_substring():
    """A pattern that does not compile is matched as text."""
    rule = MerchantRule(id="1", contains="50% (off", use_regex=True)

    assert description_matches(rule, "SALE 50% (OFF TODAY")
    assert not description_matches(rule, "SALE")


def test_rule_without_conditions_never_matches(make_record):
    """With every match flag off a rule fires for nothing."""
    rule = MerchantRule(id="1", match_description=False, contains="", set_category="Oops")

    records = apply_merchant_rules([make_record("a", "-1", "anything")], [rule])

    assert records[0].resolved_category == ""


def test_empty_pattern_never_matches(make_record):
    """A description condition with no pattern does not match."""
    rule = MerchantRule(id="1", contains="")

    assert not rule_matches(rule, make_record("a", "-1", "anything"))


def test_conditions_are_and_gated(make_record):
    """Every enabled condition must pass."""
    rule = MerchantRule(
        id="1",
        contains="netflix",
        match_amount=True,
        match_amount_value=Decimal("10.99"),
    )

    assert rule_matches(rule, make_record("a", "-10.99", "NETFLIX.COM"))
    assert not rule_matches(rule, make_record("b", "-15.99", "NETFLIX.COM"))
    assert not rule_matches(rule, make_record("c", "-10.99", "SPOTIFY"))


def test_type_condition_uses_resolved_type(make_record):
    """A type condition compares against the resolved type."""
    rule = MerchantRule(id="1", match_description=False, match_type=True, match_type_value="income")

    assert rule_matches(rule, make_record("a", "5", "x"))
    assert not rule_matches(rule, make_record("b", "-5", "x"))


def test_first_matching_rule_wins(make_record):
    """Once a rule fires later rules are ignored for that record."""
    rules = [
        MerchantRule(id="1", contains="tesco", set_category="Groceries"),
        MerchantRule(id="2", contains="tesco", set_category="Other", set_notes="never"),
    ]

    record = apply_merchant_rules([make_record("a", "-5", "TESCO")], rules)[0]

    assert record.resolved_category == "Groceries"
    assert record.resolved_notes == ""


def test_empty_set_actions_leave_fields_alone(make_record):
    """Only non-empty set-actions change the record."""
    rule = MerchantRule(id="1", contains="tesco", set_type="expense")
    original = make_record("a", "-5", "TESCO", resolved_category="Food")

    record = apply_merchant_rules([original], [rule])[0]

    assert record.resolved_type == "expense"
    assert record.resolved_category == "Food"
    assert record.resolved_description == "TESCO"


def test_account_action_clears_warning(make_record):
    """Setting an account resolves an annotation warning."""
    rule = MerchantRule(id="1", contains="corner", set_from_account_id=4)
    original = make_record("a", "-4.20", "Corner Shop", account_warning="No account")

    record = apply_merchant_rules([original], [rule])[0]

    assert record.resolved_from_account_id == 4
    assert record.account_warning is None


def test_application_is_idempotent_and_pure(make_record):
    """Applying twice equals applying once and inputs stay unchanged."""
    rules = [MerchantRule(id="1", contains="tesco", set_description="Tesco", set_category="Groceries")]
    original = [make_record("a", "-5", "TESCO STORES"), make_record("b", "-1", "OTHER")]

    once = apply_merchant_rules(original, rules)
    twice = apply_merchant_rules(once, rules)

    assert once == twice
    assert original[0].resolved_description == "TESCO STORES"
    assert once[0].resolved_description == "Tesco"


def test_rules_match_raw_description(make_record):
    """Rules read the raw description, not a rewritten one."""
    rule = MerchantRule(id="1", contains="TESCO", set_category="Groceries")
    record = make_record("a", "-5", "TESCO STORES", resolved_description="Tesco")

    assert apply_merchant_rules([record], [rule])[0].resolved_category == "Groceries"


@pytest.mark.parametrize(
    "rule",
    [
        MerchantRule(id="1", match_description=False),
        MerchantRule(id="1", contains=""),
        MerchantRule(id="1", contains="(", use_regex=True),
        MerchantRule(id="1", contains="x", match_type=True, match_type_value="gift"),
        MerchantRule(id="1", contains="x", match_amount=True),
        MerchantRule(id="1", contains="x", set_type="gift"),
    ],
)
def test_validate_rejects_bad_rules(rule):
    """Rules that could never match sensibly are rejected before saving."""
    with pytest.raises(ValidationError):
        validate_merchant_rule(rule)


def test_validate_accepts_good_rule():
    """A well-formed rule passes validation."""
    validate_merchant_rule(MerchantRule(id="1", contains="tesco", set_category="Groceries"))
