"""Bank statement layout detection."""

from typing import Callable, Iterable

from reconkit.domain.entities import CsvColumnConfig, NATWEST, HALIFAX, GENERIC
from reconkit.utils.date_parser import parse_month_name_date, parse_slash_date


def detect_bank_format(headers: Iterable[str]) -> str:
    """Classify a header row.

    An "Account Name" column marks the NatWest layout, a "Sort Code" column
    the Halifax layout. Every other header set is generic.
    """
    lowered = {h.strip().lower() for h in headers}
    if "account name" in lowered:
        return NATWEST
    if "sort code" in lowered:
        return HALIFAX
    return GENERIC


def _unchanged(raw: str) -> str:
    return raw


DATE_CONVERTERS: dict[str, Callable[[str], str]] = {
    NATWEST: parse_month_name_date,
    HALIFAX: parse_slash_date,
    GENERIC: _unchanged,
}


def normalize_date(raw: str, bank_format: str) -> str:
    """Convert a raw date to YYYY-MM-DD using the layout's date style."""
    return DATE_CONVERTERS.get(bank_format, _unchanged)(raw)


def default_column_config(file_name: str, headers: list[str]) -> CsvColumnConfig:
    """Build the column configuration sniffed from a file's headers.

    Args:
        file_name: Name the file was loaded as
        headers: Quote-stripped header cells

    Returns:
        CsvColumnConfig with no account chosen
    """
    lowered = [h.lower() for h in headers]
    is_halifax = "sort code" in lowered

    def first(predicate) -> str:
        return next((h for h, low in zip(headers, lowered) if predicate(low)), "")

    return CsvColumnConfig(
        file_name=file_name,
        account_id=None,
        account_column=first(lambda low: low == "account"),
        amount_columns=2 if is_halifax else 1,
        amount_column=first(lambda low: low in ("value", "amount")),
        debit_column=first(lambda low: "debit" in low),
        credit_column=first(lambda low: "credit" in low),
        headers=tuple(headers),
    )
