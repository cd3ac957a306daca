"""Domain model entities for reconkit.

These are pure data classes, independent of the database schema. Draft
records and rules are immutable; every pipeline stage returns new copies
built with ``dataclasses.replace``.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Optional

# Canonical transaction types
INCOME = "income"
EXPENSE = "expense"
TRANSFER = "transfer"
DEBT_PAYMENT = "debt_payment"
INVESTING = "investing"
TRANSACTION_TYPES = (EXPENSE, INCOME, TRANSFER, DEBT_PAYMENT, INVESTING)

# Bank statement layouts
NATWEST = "natwest"
HALIFAX = "halifax"
GENERIC = "generic"
BANK_FORMATS = (NATWEST, HALIFAX, GENERIC)
BANK_DISPLAY_NAMES = {NATWEST: "NatWest", HALIFAX: "Halifax"}

# Known account kinds
ASSET = "asset"
SAVINGS = "savings"
DEBT = "debt"
ACCOUNT_KINDS = (ASSET, SAVINGS, DEBT)

TRANSFER_CATEGORY = "Transfer"
DEFAULT_CATEGORY = "General"


@dataclass(frozen=True)
class Account:
    """Known asset, savings or debt account."""

    id: int
    name: str
    kind: str
    created_at: datetime

    @property
    def is_debt(self) -> bool:
        return self.kind == DEBT


@dataclass(frozen=True)
class TypeMappingRule:
    """Maps a bank transaction code to a canonical type."""

    id: str
    bank_code: str
    maps_to: str


@dataclass(frozen=True)
class MerchantRule:
    """AND-gated match conditions plus set-actions.

    A condition only takes part when its flag is on. Set-actions with an
    empty value are ignored.
    """

    id: str
    match_description: bool = True
    match_type: bool = False
    match_amount: bool = False
    use_regex: bool = False
    contains: str = ""
    match_type_value: str = ""
    match_amount_value: Optional[Decimal] = None
    set_description: str = ""
    set_category: str = ""
    set_type: str = ""
    set_from_account_id: Optional[int] = None
    set_to_account_id: Optional[int] = None
    set_notes: str = ""

    @property
    def has_condition(self) -> bool:
        return self.match_description or self.match_type or self.match_amount


@dataclass(frozen=True)
class TransferRule:
    """Pairs outgoing and incoming legs of a transfer by description."""

    id: str
    label: str
    from_description_contains: str
    to_description_contains: str
    tolerance_days: int = 2


@dataclass(frozen=True)
class CsvColumnConfig:
    """Per-file column configuration.

    ``amount_columns`` is 1 for a single signed amount column and 2 for
    separate debit/credit columns.
    """

    file_name: str
    account_id: Optional[int] = None
    account_column: str = ""
    amount_columns: int = 1
    amount_column: str = ""
    debit_column: str = ""
    credit_column: str = ""
    headers: tuple[str, ...] = ()


@dataclass(frozen=True)
class StatementFile:
    """Loaded statement text and the name it was loaded from."""

    name: str
    text: str


@dataclass(frozen=True)
class RuleSet:
    """The three rule collections a pipeline pass reads."""

    type_rules: tuple[TypeMappingRule, ...] = ()
    merchant_rules: tuple[MerchantRule, ...] = ()
    transfer_rules: tuple[TransferRule, ...] = ()


@dataclass(frozen=True)
class AccountResolution:
    """Outcome of assigning a row to a from/to account."""

    from_account_id: Optional[int] = None
    to_account_id: Optional[int] = None
    warning: Optional[str] = None


@dataclass(frozen=True)
class DraftRecord:
    """One parsed statement line awaiting review."""

    id: str
    raw_date: str
    raw_type_code: str
    raw_description: str
    raw_amount: Decimal
    source_format: str
    resolved_type: str
    resolved_description: str
    source_file: str
    raw_balance: Optional[Decimal] = None
    resolved_category: str = ""
    resolved_from_account_id: Optional[int] = None
    resolved_to_account_id: Optional[int] = None
    resolved_notes: str = ""
    matched_pair_id: Optional[str] = None
    is_transfer: bool = False
    is_transfer_mirror: bool = False
    skip: bool = False
    raw_account_annotation: Optional[str] = None
    account_warning: Optional[str] = None


@dataclass(frozen=True)
class LedgerEntry:
    """A committable transaction handed to the ledger.

    Exactly one of ``account_id`` and ``debt_id`` is set.
    """

    date: date
    description: str
    amount: Decimal
    type: str
    category: str
    account_id: Optional[int] = None
    debt_id: Optional[int] = None
    counterparty_account_id: Optional[int] = None
    notes: Optional[str] = None
    source_record_id: str = field(default="", compare=False)


@dataclass(frozen=True)
class Transaction:
    """Committed ledger transaction."""

    id: int
    account_id: Optional[int]
    debt_id: Optional[int]
    counterparty_account_id: Optional[int]
    date: date
    description: str
    amount: Decimal
    type: str
    category: str
    notes: Optional[str]
    imported_at: datetime
