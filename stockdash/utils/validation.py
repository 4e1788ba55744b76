from __future__ import annotations

import re
from typing import Any

from stockdash.schemas.quote import TickerValidation

MAX_TICKER_LENGTH = 10
_TICKER_PATTERN = re.compile(r"^[A-Z0-9.-]+$")


def sanitize_ticker(ticker: str) -> str:
    return ticker.strip().upper()


def validate_ticker(ticker: Any) -> TickerValidation:
    """Check ticker syntax without touching the caller's value."""
    if not isinstance(ticker, str):
        return TickerValidation(is_valid=False, message="Ticker must be a string")

    cleaned = sanitize_ticker(ticker)

    if not cleaned:
        return TickerValidation(is_valid=False, message="Ticker cannot be empty")

    if len(cleaned) > MAX_TICKER_LENGTH:
        return TickerValidation(is_valid=False, message="Ticker must be 10 characters or less")

    if not _TICKER_PATTERN.match(cleaned):
        return TickerValidation(is_valid=False, message="Ticker contains invalid characters")

    return TickerValidation(is_valid=True)


def has_valid_length(ticker: str) -> bool:
    return 0 < len(ticker) <= MAX_TICKER_LENGTH
