"""Merchant rule matching and application."""

import re
from dataclasses import replace
from typing import Iterable

from reconkit.domain.entities import DraftRecord, MerchantRule, TRANSACTION_TYPES
from reconkit.domain.errors import ValidationError, invalid_transaction_type
from reconkit.utils.logger import get_logger

log = get_logger("merchant_rules")


def _contains(rule: MerchantRule, description: str) -> bool:
    return rule.contains.lower() in description.lower()


def description_matches(rule: MerchantRule, description: str) -> bool:
    """Test a rule's description pattern against a raw description.

    Regex patterns are compiled case-insensitively. A pattern that fails to
    compile is treated as a plain substring instead.
    """
    if not rule.contains:
        return False
    if not rule.use_regex:
        return _contains(rule, description)
    try:
        pattern = re.compile(rule.contains, re.IGNORECASE)
    except re.error as e:
        log.debug("Rule {} has invalid pattern {!r} ({}), matching as text", rule.id, rule.contains, e)
        return _contains(rule, description)
    return pattern.search(description) is not None


def rule_matches(rule: MerchantRule, record: DraftRecord) -> bool:
    """Return True when every enabled condition of the rule passes.

    A rule with no enabled condition never matches.
    """
    if not rule.has_condition:
        return False
    if rule.match_description and not description_matches(rule, record.raw_description):
        return False
    if rule.match_type:
        if not rule.match_type_value or record.resolved_type != rule.match_type_value:
            return False
    if rule.match_amount:
        if rule.match_amount_value is None or abs(record.raw_amount) != rule.match_amount_value:
            return False
    return True


def apply_rule(rule: MerchantRule, record: DraftRecord) -> DraftRecord:
    """Copy the record with every non-empty set-action applied."""
    changes = {}
    if rule.set_description:
        changes["resolved_description"] = rule.set_description
    if rule.set_category:
        changes["resolved_category"] = rule.set_category
    if rule.set_type:
        changes["resolved_type"] = rule.set_type
    if rule.set_from_account_id is not None:
        changes["resolved_from_account_id"] = rule.set_from_account_id
    if rule.set_to_account_id is not None:
        changes["resolved_to_account_id"] = rule.set_to_account_id
    if rule.set_notes:
        changes["resolved_notes"] = rule.set_notes
    if rule.set_from_account_id is not None or rule.set_to_account_id is not None:
        changes["account_warning"] = None
    return replace(record, **changes)


def apply_merchant_rules(
    records: Iterable[DraftRecord], rules: Iterable[MerchantRule]
) -> list[DraftRecord]:
    """Apply the first matching rule to each record.

    Rules are tried in list order; later rules are ignored for a record once
    one has fired. Input records are left untouched.
    """
    rules = list(rules)
    result = []
    for record in records:
        for rule in rules:
            if rule_matches(rule, record):
                record = apply_rule(rule, record)
                break
        result.append(record)
    return result


def validate_merchant_rule(rule: MerchantRule) -> None:
    """Check a rule before it is saved.

    Raises:
        ValidationError: If the rule has no match condition, an enabled
            condition without a value, an invalid regex or an unknown type
    """
    if not rule.has_condition:
        raise ValidationError("Merchant rule must enable at least one match condition")
    if rule.match_description and not rule.contains:
        raise ValidationError("Merchant rule matches on description but has no pattern")
    if rule.match_description and rule.use_regex:
        try:
            re.compile(rule.contains)
        except re.error as e:
            raise ValidationError(f"Invalid pattern '{rule.contains}': {e}")
    if rule.match_type and rule.match_type_value not in TRANSACTION_TYPES:
        raise ValidationError(invalid_transaction_type(rule.match_type_value))
    if rule.match_amount and rule.match_amount_value is None:
        raise ValidationError("Merchant rule matches on amount but has no amount")
    if rule.set_type and rule.set_type not in TRANSACTION_TYPES:
        raise ValidationError(invalid_transaction_type(rule.set_type))
