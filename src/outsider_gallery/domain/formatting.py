"""Display formatting for prices, date ranges and dimensions."""

import math
from datetime import date, datetime
from decimal import Decimal

_MONTHS = (
    "",
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# en-GB currency symbols; AUD is shown as a plain dollar sign.
_CURRENCY_SYMBOLS = {
    "AUD": "$",
    "GBP": "£",
    "EUR": "€",
    "USD": "US$",
    "NZD": "NZ$",
    "CAD": "CA$",
    "HKD": "HK$",
    "JPY": "JP¥",
    "CNY": "CN¥",
    "INR": "₹",
}


def parse_number(raw: object) -> float | None:
    """Parse a finite number from a number or numeric string."""
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, int | float | Decimal):
        value = float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if not text or "_" in text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    else:
        return None
    return value if math.isfinite(value) else None


def format_currency(
    amount: float | str | Decimal,
    currency_code: str | None,
    maximum_fraction_digits: int | None = None,
) -> str:
    """Format an amount the way the gallery displays prices, e.g. ``$1,200``."""
    value = parse_number(amount)
    if value is None:
        return ""
    code = (currency_code or "").upper() or "USD"
    if maximum_fraction_digits is not None:
        digits = maximum_fraction_digits
    else:
        digits = 0 if value.is_integer() else 2
    number = f"{abs(value):,.{digits}f}"
    sign = "-" if value < 0 else ""
    symbol = _CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{sign}{code} {number}"
    return f"{sign}{symbol}{number}"


def parse_date(raw: date | str | None) -> date | None:
    """Parse ``YYYY-MM-DD`` or ISO timestamps; anything else yields None."""
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        return None
    text = raw.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def _long_date(value: date) -> str:
    return f"{value.day} {_MONTHS[value.month]} {value.year}"


def format_dates(start: date | str | None, end: date | str | None = None) -> str:
    """Format an exhibition date range.

    >>> format_dates("2025-03-05", "2025-03-20")
    '5 – 20 March 2025'
    """
    first = parse_date(start)
    last = parse_date(end)
    if first and last:
        if first == last:
            return _long_date(first)
        if first.year == last.year:
            if first.month == last.month:
                return f"{first.day} – {last.day} {_MONTHS[first.month]} {first.year}"
            return (
                f"{first.day} {_MONTHS[first.month]} – "
                f"{last.day} {_MONTHS[last.month]} {first.year}"
            )
        return f"{_long_date(first)} – {_long_date(last)}"
    one = first or last
    return _long_date(one) if one else ""


def _format_cm(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    text = f"{value:.1f}"
    return text[:-2] if text.endswith(".0") else text


def format_dimensions_cm(
    width: float | None, height: float | None, depth: float | None = None
) -> str | None:
    """Join the known dimensions as ``"W x H x D cm"``."""
    parts = [
        _format_cm(value)
        for value in (width, height, depth)
        if isinstance(value, int | float) and math.isfinite(value)
    ]
    if not parts:
        return None
    return f"{' x '.join(parts)} cm"
