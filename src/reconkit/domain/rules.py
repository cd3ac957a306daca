"""Rule store domain service."""

from dataclasses import replace
from typing import Iterable

from reconkit.database.base import Database
from reconkit.domain.entities import (
    MerchantRule,
    RuleSet,
    TransferRule,
    TypeMappingRule,
    TRANSACTION_TYPES,
)
from reconkit.domain.errors import (
    NotFoundError,
    StoreError,
    ValidationError,
    invalid_transaction_type,
    merchant_rule_not_found,
)
from reconkit.domain.merchant_rules import validate_merchant_rule
from reconkit.domain.type_rules import DEFAULT_TYPE_RULES
from reconkit.utils.logger import get_logger

log = get_logger("rules")

DEFAULT_TRANSFER_RULES = (
    TransferRule(
        id="tr1",
        label="Halifax → NatWest (weekly savings)",
        from_description_contains="CAMERON REES",
        to_description_contains="C REES",
        tolerance_days=2,
    ),
)

TYPE = "type"
MERCHANT = "merchant"
TRANSFER = "transfer"


def _store_id(rule_id: str) -> int:
    try:
        return int(rule_id)
    except (TypeError, ValueError):
        raise NotFoundError(merchant_rule_not_found(rule_id))


class RuleService:
    """Service keeping the in-memory rule sets and the rule store in step.

    The in-memory rules are the source of truth for the session. A failed
    store write is logged, leaves the in-memory rules as edited and marks
    the rule category as unsaved in ``saved``.
    """

    def __init__(self, db: Database):
        """Initialize rule service.

        Args:
            db: Database instance used as the rule store
        """
        self.db = db
        self.type_rules: list[TypeMappingRule] = list(DEFAULT_TYPE_RULES)
        self.merchant_rules: list[MerchantRule] = []
        self.transfer_rules: list[TransferRule] = list(DEFAULT_TRANSFER_RULES)
        self.saved: dict[str, bool] = {}

    def load(self) -> RuleSet:
        """Load all rule sets; empty stored sets keep the built-in defaults."""
        type_rules = self.db.list_type_rules()
        if type_rules:
            self.type_rules = type_rules
        merchant_rules = self.db.list_merchant_rules()
        if merchant_rules:
            self.merchant_rules = merchant_rules
        transfer_rules = self.db.list_transfer_rules()
        if transfer_rules:
            self.transfer_rules = transfer_rules
        return self.rule_set()

    def rule_set(self) -> RuleSet:
        return RuleSet(
            type_rules=tuple(self.type_rules),
            merchant_rules=tuple(self.merchant_rules),
            transfer_rules=tuple(self.transfer_rules),
        )

    def _write_failed(self, category: str, error: StoreError) -> None:
        log.error("Saving {} rules failed: {}", category, error)
        self.saved[category] = False

    def save_type_rules(self, rules: Iterable[TypeMappingRule]) -> bool:
        """Replace the type mapping rules, skipping rows without a bank code.

        Returns:
            True if the store accepted the rules

        Raises:
            ValidationError: If a rule maps to an unknown type
        """
        rules = [r for r in rules if r.bank_code.strip()]
        for rule in rules:
            if rule.maps_to not in TRANSACTION_TYPES:
                raise ValidationError(invalid_transaction_type(rule.maps_to))
        self.type_rules = rules
        try:
            self.type_rules = self.db.replace_type_rules(rules)
        except StoreError as e:
            self._write_failed(TYPE, e)
            return False
        self.saved[TYPE] = True
        return True

    def save_merchant_rules(self, rules: Iterable[MerchantRule]) -> bool:
        """Replace the merchant rules, skipping rules with no match condition.

        Returns:
            True if the store accepted the rules

        Raises:
            ValidationError: If a remaining rule fails validation
        """
        rules = [r for r in rules if r.has_condition]
        for rule in rules:
            validate_merchant_rule(rule)
        self.merchant_rules = rules
        try:
            self.merchant_rules = self.db.replace_merchant_rules(rules)
        except StoreError as e:
            self._write_failed(MERCHANT, e)
            return False
        self.saved[MERCHANT] = True
        return True

    def save_transfer_rules(self, rules: Iterable[TransferRule]) -> bool:
        """Replace the transfer rules, skipping rules without a from-pattern.

        Returns:
            True if the store accepted the rules

        Raises:
            ValidationError: If a rule has a negative tolerance or no to-pattern
        """
        rules = [r for r in rules if r.from_description_contains.strip()]
        for rule in rules:
            if not rule.to_description_contains.strip():
                raise ValidationError(f"Transfer rule '{rule.label}' has no to-description pattern")
            if rule.tolerance_days < 0:
                raise ValidationError("Tolerance days cannot be negative")
        self.transfer_rules = rules
        try:
            self.transfer_rules = self.db.replace_transfer_rules(rules)
        except StoreError as e:
            self._write_failed(TRANSFER, e)
            return False
        self.saved[TRANSFER] = True
        return True

    def persist_merchant_rule(self, rule: MerchantRule) -> MerchantRule:
        """Append a new merchant rule and store it straight away.

        Returns:
            The rule carrying its store-assigned ID, or the rule unchanged
            (temporary ID) if the store write failed

        Raises:
            ValidationError: If the rule fails validation
        """
        validate_merchant_rule(rule)
        try:
            sort_order = self.db.count_merchant_rules()
            rule = replace(rule, id=str(self.db.insert_merchant_rule(rule, sort_order)))
            self.saved[MERCHANT] = True
        except StoreError as e:
            self._write_failed(MERCHANT, e)
        self.merchant_rules.append(rule)
        return rule

    def update_merchant_rule(self, rule: MerchantRule) -> None:
        """Update a merchant rule in memory and in the store, keeping its order.

        Raises:
            NotFoundError: If no in-memory rule has this ID
            ValidationError: If the rule fails validation
        """
        validate_merchant_rule(rule)
        index = next((i for i, r in enumerate(self.merchant_rules) if r.id == rule.id), None)
        if index is None:
            raise NotFoundError(merchant_rule_not_found(rule.id))
        self.merchant_rules[index] = rule
        try:
            store_id = _store_id(rule.id)
            sort_order = self.db.get_merchant_rule_sort_order(store_id)
            self.db.update_merchant_rule(store_id, rule, sort_order if sort_order is not None else 0)
            self.saved[MERCHANT] = True
        except (StoreError, NotFoundError) as e:
            self._write_failed(MERCHANT, StoreError(str(e)))

    def delete_merchant_rule(self, rule_id: str) -> None:
        """Remove a merchant rule from memory and the store.

        Raises:
            NotFoundError: If no in-memory rule has this ID
        """
        if not any(r.id == rule_id for r in self.merchant_rules):
            raise NotFoundError(merchant_rule_not_found(rule_id))
        self.merchant_rules = [r for r in self.merchant_rules if r.id != rule_id]
        try:
            self.db.delete_merchant_rule(_store_id(rule_id))
            self.saved[MERCHANT] = True
        except (StoreError, NotFoundError) as e:
            self._write_failed(MERCHANT, StoreError(str(e)))
