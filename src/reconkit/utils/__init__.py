"""Utility functions for reconkit."""

from reconkit.utils.csv_line import tokenize_line
from reconkit.utils.date_parser import parse_iso_date
from reconkit.utils.amount_parser import parse_amount
from reconkit.utils.account_resolver import resolve_account, resolve_accounts

__all__ = [
    "tokenize_line",
    "parse_iso_date",
    "parse_amount",
    "resolve_account",
    "resolve_accounts",
]
