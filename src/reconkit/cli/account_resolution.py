"""CLI helpers for account resolution and error handling."""

from __future__ import annotations

from typing import Optional

import click
from reconkit.cli.error_handling import handle_domain_error
from reconkit.domain.account import AccountService
from reconkit.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: Optional[str | int]
) -> Optional[int]:
    """Resolve account name or ID, or exit with a CLI error.

    Returns None when no account was given. This keeps error messaging and
    exit behavior consistent across commands.
    """
    if account is None:
        return None
    try:
        return resolve_account(account_service.list_accounts(), account)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
