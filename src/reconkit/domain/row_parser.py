"""Statement CSV to draft record parsing."""

from decimal import Decimal
from typing import Iterable, Optional

from reconkit.domain.bank_format import detect_bank_format, normalize_date
from reconkit.domain.entities import (
    Account,
    CsvColumnConfig,
    DraftRecord,
    TypeMappingRule,
    NATWEST,
    HALIFAX,
)
from reconkit.domain.type_rules import build_type_lookup, resolve_type
from reconkit.utils.account_resolver import resolve_accounts
from reconkit.utils.amount_parser import parse_amount, parse_amount_or_zero
from reconkit.utils.csv_line import tokenize_line, strip_header
from reconkit.utils.logger import get_logger

log = get_logger("row_parser")


def split_lines(csv_text: str) -> list[str]:
    """Return the non-blank lines of a CSV document."""
    return [line for line in csv_text.splitlines() if line.strip()]


def read_headers(csv_text: str) -> list[str]:
    """Return the quote-stripped header cells, or an empty list."""
    lines = split_lines(csv_text)
    if not lines:
        return []
    return [strip_header(cell) for cell in tokenize_line(lines[0])]


class _Row:
    """Case-insensitive header to cell lookup for one line."""

    def __init__(self, headers: list[str], cells: list[str]):
        self.values = {}
        for idx, header in enumerate(headers):
            key = header.lower()
            if key not in self.values:
                self.values[key] = cells[idx].strip() if idx < len(cells) else ""

    def get(self, *names: str) -> str:
        """Return the first non-empty cell among the given column names."""
        for name in names:
            value = self.values.get(name.lower(), "")
            if value:
                return value
        return ""


def _dual_amount(debit_text: str, credit_text: str) -> Decimal:
    """Credit when it is above zero, otherwise the negated debit."""
    credit = parse_amount_or_zero(credit_text)
    if credit > 0:
        return credit
    debit = parse_amount_or_zero(debit_text)
    return -debit if debit else Decimal("0")


def _balance(row: _Row) -> Optional[Decimal]:
    try:
        return parse_amount(row.get("Balance"))
    except ValueError:
        return None


def parse_statement(
    csv_text: str,
    file_name: str,
    type_rules: Iterable[TypeMappingRule],
    column_config: Optional[CsvColumnConfig],
    asset_accounts: Iterable[Account],
    debt_accounts: Iterable[Account],
) -> list[DraftRecord]:
    """Parse one statement export into draft records.

    Columns are read, in order of precedence, from the explicit column
    configuration, then the detected bank layout's own column names, then
    the generic date/type/description/amount names. Malformed values never
    abort parsing: unparseable dates stay as they are, bad amounts become
    zero and unknown bank codes fall back to the amount sign.

    Args:
        csv_text: Whole file contents
        file_name: Name the file was loaded as
        type_rules: Bank code mapping rules
        column_config: Column configuration, or None for layout defaults
        asset_accounts: Known asset and savings accounts
        debt_accounts: Known debt accounts

    Returns:
        One DraftRecord per non-blank data line
    """
    lines = split_lines(csv_text)
    if len(lines) < 2:
        return []

    headers = [strip_header(cell) for cell in tokenize_line(lines[0])]
    bank_format = detect_bank_format(headers)
    type_lookup = build_type_lookup(type_rules)
    asset_accounts = list(asset_accounts)
    debt_accounts = list(debt_accounts)
    config = column_config

    records = []
    for row_num, line in enumerate(lines[1:], start=2):
        cells = tokenize_line(line)
        if not any(cells):
            continue
        row = _Row(headers, cells)
        balance = None

        dual = bool(
            config is not None
            and config.amount_columns == 2
            and config.debit_column
            and config.credit_column
        )
        single = bool(config is not None and config.amount_columns == 1 and config.amount_column)

        if dual or single:
            raw_date = normalize_date(row.get("Date", "Transaction Date"), bank_format)
            raw_type = row.get("Type", "Transaction Type")
            raw_description = row.get("Description", "Transaction Description")
            if dual:
                raw_amount = _dual_amount(row.get(config.debit_column), row.get(config.credit_column))
            else:
                raw_amount = parse_amount_or_zero(row.get(config.amount_column))
            balance = _balance(row)
        elif bank_format == NATWEST:
            raw_date = normalize_date(row.get("Date"), bank_format)
            raw_type = row.get("Type")
            raw_description = row.get("Description")
            raw_amount = parse_amount_or_zero(row.get("Value"))
            balance = _balance(row)
        elif bank_format == HALIFAX:
            raw_date = normalize_date(row.get("Transaction Date"), bank_format)
            raw_type = row.get("Transaction Type")
            raw_description = row.get("Transaction Description")
            raw_amount = _dual_amount(row.get("Debit Amount"), row.get("Credit Amount"))
            balance = _balance(row)
        else:
            raw_date = row.get("date")
            raw_type = row.get("type")
            raw_description = row.get("description")
            raw_amount = parse_amount_or_zero(row.get("amount"))

        annotation = None
        if config is not None and config.account_column:
            annotation = row.get(config.account_column) or None

        resolution = resolve_accounts(
            raw_amount,
            config.account_id if config is not None else None,
            annotation,
            asset_accounts,
            debt_accounts,
        )
        if resolution.warning:
            log.debug("{}:{} {}", file_name, row_num, resolution.warning)

        records.append(
            DraftRecord(
                id=f"{file_name}:{row_num}",
                raw_date=raw_date,
                raw_type_code=raw_type,
                raw_description=raw_description,
                raw_amount=raw_amount,
                raw_balance=balance,
                source_format=bank_format,
                resolved_type=resolve_type(raw_type, raw_amount, type_lookup),
                resolved_description=raw_description,
                resolved_from_account_id=resolution.from_account_id,
                resolved_to_account_id=resolution.to_account_id,
                source_file=file_name,
                raw_account_annotation=annotation,
                account_warning=resolution.warning,
            )
        )

    return records
