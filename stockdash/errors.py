from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMIT = "RATE_LIMIT"
    UPSTREAM = "UPSTREAM"


class QuoteError(Exception):
    """Base error for ticker lookups; ``kind`` drives the HTTP mapping."""

    kind: ErrorKind = ErrorKind.UPSTREAM

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TickerValidationError(QuoteError):
    kind = ErrorKind.VALIDATION


class TickerNotFoundError(QuoteError):
    kind = ErrorKind.NOT_FOUND


class ProviderRateLimitError(QuoteError):
    kind = ErrorKind.RATE_LIMIT


class UpstreamError(QuoteError):
    kind = ErrorKind.UPSTREAM


class MissingSymbolError(TickerNotFoundError):
    """Provider answered, but a returned quote carries no symbol."""
