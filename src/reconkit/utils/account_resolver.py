"""Utilities for resolving accounts by name, ID or statement annotation."""

from decimal import Decimal
from typing import Iterable, Optional

from reconkit.domain.entities import Account, AccountResolution, DEBT, SAVINGS, ASSET
from reconkit.domain.errors import NotFoundError, account_not_found, annotated_account_not_found

# Suffix markers used in a per-row account column, e.g. "Halifax#Debt"
DEBT_MARKER = "#debt"
SAVINGS_MARKER = "#savings"


def resolve_account(accounts: Iterable[Account], account: str | int) -> int:
    """Resolve account name or ID to account ID.

    Args:
        accounts: Known accounts
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If account is not found
    """
    accounts = list(accounts)

    # Try to parse as integer (handles string IDs like "1")
    try:
        account_id = int(account)
    except (ValueError, TypeError):
        account_id = None

    if account_id is not None:
        if any(acc.id == account_id for acc in accounts):
            return account_id
        raise NotFoundError(account_not_found(account_id))

    for acc in accounts:
        if acc.name.lower() == str(account).strip().lower():
            return acc.id

    raise NotFoundError(account_not_found(str(account)))


def split_annotation(annotation: str) -> tuple[str, str]:
    """Split an account annotation into base name and account kind hint.

    - "Halifax#Debt" -> ("Halifax", "debt")
    - "Marcus #Savings" -> ("Marcus", "savings")
    - "Monzo Current" -> ("Monzo Current", "asset")
    """
    name = annotation.strip()
    lower = name.lower()
    for marker, kind in ((DEBT_MARKER, DEBT), (SAVINGS_MARKER, SAVINGS)):
        if lower.endswith(marker):
            return name[: -len(marker)].strip(), kind
    return name, ASSET


def assign_by_direction(amount: Decimal, account_id: Optional[int]) -> AccountResolution:
    """Place an account on the to side for inflows and the from side for outflows."""
    if account_id is None:
        return AccountResolution()
    if amount >= 0:
        return AccountResolution(to_account_id=account_id)
    return AccountResolution(from_account_id=account_id)


def resolve_accounts(
    amount: Decimal,
    configured_account_id: Optional[int],
    annotation: Optional[str],
    asset_accounts: Iterable[Account],
    debt_accounts: Iterable[Account],
) -> AccountResolution:
    """Decide the from/to accounts of one statement row.

    A per-row annotation wins over the file's configured account. Debt
    annotations are looked up among debt accounts, everything else among
    asset and savings accounts. An annotation with no matching account
    leaves both sides empty and carries an advisory warning.

    Args:
        amount: Signed row amount (negative = outflow)
        configured_account_id: Account chosen for the whole file, if any
        annotation: Raw per-row account text, if any
        asset_accounts: Known asset and savings accounts
        debt_accounts: Known debt accounts

    Returns:
        AccountResolution with at most one side set
    """
    if annotation and annotation.strip():
        base_name, kind = split_annotation(annotation)
        candidates = debt_accounts if kind == DEBT else asset_accounts
        for acc in candidates:
            if acc.name.lower() == base_name.lower():
                return assign_by_direction(amount, acc.id)
        kind_label = "debt" if kind == DEBT else "asset or savings"
        return AccountResolution(warning=annotated_account_not_found(base_name, kind_label))

    return assign_by_direction(amount, configured_account_id)
