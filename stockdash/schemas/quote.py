from typing import Any

from pydantic import BaseModel


class QuoteRequest(BaseModel):
    ticker: str | None = None


class QuotesRequest(BaseModel):
    # validated by QuoteService.get_quotes
    tickers: Any = None


class TickerValidation(BaseModel):
    is_valid: bool
    message: str | None = None
