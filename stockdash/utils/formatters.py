"""Display formatting for quote values, US locale conventions.

Every formatter renders an absent value (``None``) as ``"N/A"`` except
``get_change_color_class`` which returns an empty class name.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone, tzinfo
from decimal import ROUND_HALF_UP, Decimal

NOT_AVAILABLE = "N/A"
INVALID_DATE = "Invalid Date"

_CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CNY": "CN¥",
    "CAD": "CA$",
    "AUD": "A$",
    "HKD": "HK$",
    "INR": "₹",
    "KRW": "₩",
}

_LARGE_NUMBER_TIERS = (
    (1e12, "T"),
    (1e9, "B"),
    (1e6, "M"),
    (1e3, "K"),
)

# English abbreviations regardless of LC_TIME
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _non_finite(value: float) -> str | None:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    return None


def _round_half_up(value: float, decimals: int) -> Decimal:
    # exact binary value, ties away from zero (JS toFixed / Intl behavior)
    if value == 0:
        value = 0
    return Decimal(value).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)


def _fixed(value: float, decimals: int = 2) -> str:
    text = _non_finite(value)
    if text is not None:
        return text
    return f"{_round_half_up(value, decimals):.{decimals}f}"


def _grouped(value: float, decimals: int) -> str:
    text = _non_finite(value)
    if text is not None:
        return text
    return f"{_round_half_up(value, decimals):,.{decimals}f}"


def _locale_string(value: float) -> str:
    text = _grouped(value, 3)
    return text.rstrip("0").rstrip(".")


def format_currency(value: float | None, currency: str = "USD") -> str:
    if value is None:
        return NOT_AVAILABLE

    code = currency.upper()
    body = _grouped(abs(value), 2)
    sign = "-" if value < 0 else ""
    symbol = _CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{sign}{code} {body}"
    return f"{sign}{symbol}{body}"


def format_number(value: float | None, decimals: int = 2) -> str:
    if value is None:
        return NOT_AVAILABLE
    return _grouped(value, decimals)


def format_large_number(value: float | None) -> str:
    if value is None:
        return NOT_AVAILABLE

    for threshold, suffix in _LARGE_NUMBER_TIERS:
        if value >= threshold:
            return f"{_fixed(value / threshold)}{suffix}"

    return _locale_string(value)


def format_percentage(value: float | None) -> str:
    if value is None:
        return NOT_AVAILABLE

    sign = "+" if value >= 0 else ""
    return f"{sign}{_fixed(value)}%"


def _to_datetime(timestamp: float, tz: tzinfo) -> datetime | None:
    try:
        return datetime.fromtimestamp(timestamp, tz=tz)
    except (OverflowError, OSError, ValueError):
        return None


def _short_date(moment: datetime) -> str:
    return f"{_MONTHS[moment.month - 1]} {moment.day}, {moment.year}"


def format_date(timestamp: float | None, tz: tzinfo = timezone.utc) -> str:
    if not timestamp:
        return NOT_AVAILABLE
    moment = _to_datetime(timestamp, tz)
    if moment is None:
        return INVALID_DATE
    return _short_date(moment)


def format_date_time(timestamp: float | None, tz: tzinfo = timezone.utc) -> str:
    if not timestamp:
        return NOT_AVAILABLE

    moment = _to_datetime(timestamp, tz)
    if moment is None:
        return INVALID_DATE
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{_short_date(moment)}, {hour:02d}:{moment.minute:02d} {meridiem}"


def get_change_color_class(value: float | None) -> str:
    if value is None:
        return ""
    return "text-green-600" if value >= 0 else "text-red-600"
