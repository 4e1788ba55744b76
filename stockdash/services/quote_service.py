from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any

from stockdash.errors import MissingSymbolError, TickerValidationError
from stockdash.utils.validation import has_valid_length, sanitize_ticker


class QuoteService:
    """Forwards ticker lookups to the quote provider; batches fan out in parallel."""

    def __init__(self, *, provider, max_workers: int = 8) -> None:
        self.provider = provider
        self.max_workers = max(1, max_workers)

    def get_quote(self, ticker: str) -> dict[str, Any]:
        return self.provider.quote(ticker)

    def get_quotes(self, tickers: Any) -> list[dict[str, Any]]:
        if not isinstance(tickers, list) or not tickers or not all(isinstance(t, str) for t in tickers):
            raise TickerValidationError("Valid ticker symbols are required")

        sanitized = [sanitize_ticker(t) for t in tickers]
        if not all(has_valid_length(t) for t in sanitized):
            raise TickerValidationError("Ticker symbols must be 1-10 characters")

        workers = min(self.max_workers, len(sanitized))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="quote-fanout") as executor:
            # map() re-raises the first failed lookup; the batch has no partial result
            quotes = list(executor.map(self.provider.quote, sanitized))

        missing = [t for t, q in zip(sanitized, quotes) if not q or not q.get("symbol")]
        if missing:
            raise MissingSymbolError(f"Stock not found or invalid ticker: {','.join(missing)}")

        print(
            f"[QUOTE][batch_resolve] target_count={len(sanitized)} final_count={len(quotes)} "
            f"workers={workers}",
            flush=True,
        )
        return quotes

    def close(self) -> None:
        close = getattr(self.provider, "close", None)
        if callable(close):
            close()
