"""Mapper functions to convert between domain entities and SQLAlchemy models.

Rule ids are strings in the domain (rules created during a session carry a
temporary id until saved) and integer primary keys in the store.
"""

from decimal import Decimal

from reconkit.domain import entities as domain
from reconkit.database.models import (
    Account as ORMAccount,
    TypeRule as ORMTypeRule,
    MerchantRule as ORMMerchantRule,
    TransferRule as ORMTransferRule,
    Transaction as ORMTransaction,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        kind=orm_account.kind,
        created_at=orm_account.created_at,
    )


def type_rule_to_domain(orm_rule: ORMTypeRule) -> domain.TypeMappingRule:
    """Convert SQLAlchemy TypeRule model to domain TypeMappingRule entity."""
    return domain.TypeMappingRule(
        id=str(orm_rule.id),
        bank_code=orm_rule.bank_code,
        maps_to=orm_rule.maps_to,
    )


def merchant_rule_to_domain(orm_rule: ORMMerchantRule) -> domain.MerchantRule:
    """Convert SQLAlchemy MerchantRule model to domain MerchantRule entity."""
    amount = orm_rule.match_amount_value
    return domain.MerchantRule(
        id=str(orm_rule.id),
        match_description=orm_rule.match_description,
        match_type=orm_rule.match_type,
        match_amount=orm_rule.match_amount,
        use_regex=orm_rule.use_regex,
        contains=orm_rule.contains or "",
        match_type_value=orm_rule.match_type_value or "",
        match_amount_value=Decimal(amount) if amount is not None else None,
        set_description=orm_rule.set_description or "",
        set_category=orm_rule.set_category or "",
        set_type=orm_rule.set_type or "",
        set_from_account_id=orm_rule.set_from_account_id,
        set_to_account_id=orm_rule.set_to_account_id,
        set_notes=orm_rule.set_notes or "",
    )


def merchant_rule_columns(rule: domain.MerchantRule, sort_order: int) -> dict:
    """Return column values for storing a domain MerchantRule."""
    return {
        "contains": rule.contains,
        "match_description": rule.match_description,
        "match_type": rule.match_type,
        "match_amount": rule.match_amount,
        "use_regex": rule.use_regex,
        "match_type_value": rule.match_type_value or None,
        "match_amount_value": rule.match_amount_value,
        "set_description": rule.set_description or None,
        "set_category": rule.set_category or None,
        "set_type": rule.set_type or None,
        "set_from_account_id": rule.set_from_account_id,
        "set_to_account_id": rule.set_to_account_id,
        "set_notes": rule.set_notes or None,
        "sort_order": sort_order,
    }


def transfer_rule_to_domain(orm_rule: ORMTransferRule) -> domain.TransferRule:
    """Convert SQLAlchemy TransferRule model to domain TransferRule entity."""
    return domain.TransferRule(
        id=str(orm_rule.id),
        label=orm_rule.label or "",
        from_description_contains=orm_rule.from_desc_contains,
        to_description_contains=orm_rule.to_desc_contains,
        tolerance_days=orm_rule.tolerance_days,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        debt_id=orm_transaction.debt_id,
        counterparty_account_id=orm_transaction.counterparty_account_id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        amount=orm_transaction.amount,
        type=orm_transaction.type,
        category=orm_transaction.category,
        notes=orm_transaction.notes,
        imported_at=orm_transaction.imported_at,
    )


def ledger_entry_to_orm(entry: domain.LedgerEntry) -> ORMTransaction:
    """Build a SQLAlchemy Transaction model from a ledger entry."""
    return ORMTransaction(
        account_id=entry.account_id,
        debt_id=entry.debt_id,
        counterparty_account_id=entry.counterparty_account_id,
        date=entry.date,
        description=entry.description,
        amount=entry.amount,
        type=entry.type,
        category=entry.category,
        notes=entry.notes,
    )
