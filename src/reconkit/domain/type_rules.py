"""Bank type code to canonical type resolution."""

from decimal import Decimal
from typing import Iterable

from reconkit.domain.entities import TypeMappingRule, INCOME, EXPENSE, TRANSFER

DEFAULT_TYPE_RULES = (
    # NatWest
    TypeMappingRule(id="nw1", bank_code="BAC", maps_to=INCOME),
    TypeMappingRule(id="nw2", bank_code="D/D", maps_to=EXPENSE),
    TypeMappingRule(id="nw3", bank_code="S/O", maps_to=EXPENSE),
    TypeMappingRule(id="nw4", bank_code="CHG", maps_to=EXPENSE),
    # Halifax
    TypeMappingRule(id="hx1", bank_code="DEB", maps_to=EXPENSE),
    TypeMappingRule(id="hx2", bank_code="FPI", maps_to=INCOME),
    TypeMappingRule(id="hx3", bank_code="FPO", maps_to=EXPENSE),
    TypeMappingRule(id="hx4", bank_code="DD", maps_to=EXPENSE),
    TypeMappingRule(id="hx5", bank_code="SO", maps_to=EXPENSE),
    TypeMappingRule(id="hx6", bank_code="BGC", maps_to=INCOME),
    TypeMappingRule(id="hx7", bank_code="TFR", maps_to=TRANSFER),
)


def build_type_lookup(rules: Iterable[TypeMappingRule]) -> dict[str, str]:
    """Index rules by upper-cased bank code; later rules overwrite earlier ones."""
    lookup = {}
    for rule in rules:
        if rule.bank_code.strip():
            lookup[rule.bank_code.strip().upper()] = rule.maps_to
    return lookup


def resolve_type(bank_code: str, amount: Decimal, lookup: dict[str, str]) -> str:
    """Map a bank code to a canonical type, falling back to the amount sign."""
    mapped = lookup.get(bank_code.strip().upper())
    if mapped:
        return mapped
    return INCOME if amount >= 0 else EXPENSE
