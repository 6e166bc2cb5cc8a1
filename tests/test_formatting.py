"""Tests for price, date and dimension formatting."""

from datetime import date

import pytest

from outsider_gallery.domain.formatting import (
    format_currency,
    format_dates,
    format_dimensions_cm,
    parse_date,
    parse_number,
)


@pytest.mark.parametrize(
    ("amount", "code", "expected"),
    [
        ("1200.0", "AUD", "$1,200"),
        ("1250.5", "AUD", "$1,250.50"),
        (90, "GBP", "£90"),
        ("15000", "usd", "US$15,000"),
        ("300", "CHF", "CHF 300"),
        ("abc", "AUD", ""),
    ],
)
def test_format_currency(amount: object, code: str, expected: str) -> None:
    assert format_currency(amount, code) == expected


def test_format_currency_respects_fraction_digits() -> None:
    assert format_currency("99.99", "AUD", maximum_fraction_digits=0) == "$100"


def test_parse_number_rejects_non_finite_and_booleans() -> None:
    assert parse_number(" 42.5 ") == 42.5
    assert parse_number("inf") is None
    assert parse_number(True) is None
    assert parse_number("") is None


def test_parse_date_accepts_dates_and_timestamps() -> None:
    assert parse_date("2025-03-05") == date(2025, 3, 5)
    assert parse_date("2025-03-05T10:00:00+10:00") == date(2025, 3, 5)
    assert parse_date("March 5") is None
    assert parse_date(None) is None


@pytest.mark.parametrize(
    ("start", "end", "expected"),
    [
        ("2025-03-05", "2025-03-20", "5 – 20 March 2025"),
        ("2025-03-05", "2025-04-02", "5 March – 2 April 2025"),
        ("2024-12-01", "2025-01-15", "1 December 2024 – 15 January 2025"),
        ("2025-03-05", "2025-03-05", "5 March 2025"),
        ("2025-03-05", None, "5 March 2025"),
        (None, None, ""),
    ],
)
def test_format_dates(start: str | None, end: str | None, expected: str) -> None:
    assert format_dates(start, end) == expected


def test_format_dimensions_cm() -> None:
    assert format_dimensions_cm(120, 80.5, None) == "120 x 80.5 cm"
    assert format_dimensions_cm(30.0, 40.5, 2) == "30 x 40.5 x 2 cm"
    assert format_dimensions_cm(None, None) is None
