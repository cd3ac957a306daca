"""Shared domain error messages and error types."""

from reconkit.domain.entities import TRANSACTION_TYPES


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class StoreError(DomainError):
    """Rule store or ledger write failed."""


class CommitError(DomainError):
    """Bulk ledger commit failed; nothing was committed."""


def account_not_found(account: int | str) -> str:
    """Return message for missing account."""
    if isinstance(account, int):
        return f"Account {account} not found"
    return f"Account '{account}' not found"


def annotated_account_not_found(name: str, kind_label: str) -> str:
    """Return warning for a per-row account annotation with no known account."""
    return f"No {kind_label} account named '{name}'"


def duplicate_account(name: str) -> str:
    """Return message for duplicate account name."""
    return f"Account with name '{name}' already exists"


def merchant_rule_not_found(rule_id: str) -> str:
    """Return message for missing merchant rule."""
    return f"Merchant rule {rule_id} not found"


def record_not_found(record_id: str) -> str:
    """Return message for missing draft record."""
    return f"Record '{record_id}' not found"


def file_not_loaded(file_name: str) -> str:
    """Return message for a statement file that is not loaded."""
    return f"File '{file_name}' is not loaded"


def invalid_transaction_type(value: str) -> str:
    """Return message for unknown canonical type."""
    return (
        f"Invalid transaction type '{value}'. "
        f"Must be one of: {', '.join(TRANSACTION_TYPES)}"
    )
