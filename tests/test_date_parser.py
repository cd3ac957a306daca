"""Tests for date normalization."""

from datetime import date

from reconkit.domain.bank_format import normalize_date
from reconkit.utils.date_parser import parse_month_name_date, parse_slash_date, parse_iso_date


def test_month_name_date():
    """DD Mon YYYY becomes ISO with a zero-padded day."""
    assert parse_month_name_date("5 Feb 2026") == "2026-02-05"
    assert parse_month_name_date("20 feb 2026") == "2026-02-20"


def test_month_name_date_unknown_month_defaults_to_january():
    """An unknown month abbreviation maps to January."""
    assert parse_month_name_date("5 Foo 2026") == "2026-01-05"


def test_month_name_date_unparseable_unchanged():
    """Text without three parts is returned unchanged."""
    assert parse_month_name_date("2026-02-05") == "2026-02-05"
    assert parse_month_name_date("garbage") == "garbage"


def test_slash_date():
    """DD/MM/YYYY becomes ISO."""
    assert parse_slash_date("19/02/2026") == "2026-02-19"


def test_slash_date_unparseable_unchanged():
    """Text without three slash parts is returned unchanged."""
    assert parse_slash_date("19-02-2026") == "19-02-2026"


def test_normalize_date_by_format():
    """The converter follows the detected layout; generic is untouched."""
    assert normalize_date("20 Feb 2026", "natwest") == "2026-02-20"
    assert normalize_date("20/02/2026", "halifax") == "2026-02-20"
    assert normalize_date("20/02/2026", "generic") == "20/02/2026"


def test_parse_iso_date():
    """ISO dates are never read day-first."""
    assert parse_iso_date("2026-02-03") == date(2026, 2, 3)


def test_parse_iso_date_lenient_fallback():
    """Non-ISO text is parsed day-first."""
    assert parse_iso_date("03/02/2026") == date(2026, 2, 3)


def test_parse_iso_date_failure_returns_none():
    """Unparseable or empty text gives None."""
    assert parse_iso_date("not a date") is None
    assert parse_iso_date("") is None


def test_slash_date_zero_pads():
    """Single-digit days and months are padded."""
    assert parse_slash_date("5/2/2026") == "2026-02-05"
    assert parse_iso_date(parse_slash_date("5/2/2026")) == date(2026, 2, 5)


def test_parse_iso_date_unpadded_year_first():
    """Year-first dates without padding are not read day-first."""
    assert parse_iso_date("2026-2-5") == date(2026, 2, 5)
