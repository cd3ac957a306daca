"""Date parsing utilities."""

import re
from datetime import date
from typing import Optional

from dateutil import parser as date_parser

YEAR_FIRST = re.compile(r"\d{4}\D")

MONTHS = {
    "jan": "01",
    "feb": "02",
    "mar": "03",
    "apr": "04",
    "may": "05",
    "jun": "06",
    "jul": "07",
    "aug": "08",
    "sep": "09",
    "oct": "10",
    "nov": "11",
    "dec": "12",
}


def parse_month_name_date(raw: str) -> str:
    """Convert a "DD Mon YYYY" date to YYYY-MM-DD.

    Examples:
    - "5 Feb 2026" -> "2026-02-05"
    - "20 feb 2026" -> "2026-02-20"

    An unknown month abbreviation maps to January. Text that does not have
    exactly three space-separated parts is returned unchanged.
    """
    parts = raw.strip().split(" ")
    if len(parts) != 3:
        return raw
    day, month, year = parts
    return f"{year}-{MONTHS.get(month.lower(), '01')}-{day.zfill(2)}"


def parse_slash_date(raw: str) -> str:
    """Convert a "DD/MM/YYYY" date to YYYY-MM-DD, or return it unchanged.

    Day and month are zero-padded, so "5/2/2026" becomes "2026-02-05".
    """
    parts = raw.strip().split("/")
    if len(parts) != 3:
        return raw
    day, month, year = parts
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def parse_iso_date(date_str: str) -> Optional[date]:
    """Leniently parse a normalized date string.

    ISO dates are tried first so that "2026-02-03" is never read day-first.
    Anything dateutil can make sense of is accepted after that.

    Args:
        date_str: Date string, usually YYYY-MM-DD

    Returns:
        Date object, or None when the string cannot be parsed
    """
    if not date_str or not date_str.strip():
        return None
    date_str = date_str.strip()
    try:
        return date_parser.isoparse(date_str).date()
    except (ValueError, OverflowError):
        pass
    # "2026-2-5" is year-month-day; only other layouts are read day-first
    yearfirst = YEAR_FIRST.match(date_str) is not None
    try:
        return date_parser.parse(date_str, yearfirst=yearfirst, dayfirst=not yearfirst).date()
    except (ValueError, OverflowError, TypeError):
        return None
