from __future__ import annotations

import time
from typing import Any, Dict, Iterable, Optional

import requests
from requests.utils import quote as quote_path

from stockdash.errors import ProviderRateLimitError, TickerNotFoundError, UpstreamError


def _reject_constant(name: str) -> None:
    raise ValueError(f"non-finite number {name} in payload")


class YahooFinanceClient:
    """Yahoo Finance quote client with cookie/crumb handshake and error classification."""

    _BASE_URL = "https://query2.finance.yahoo.com"
    _COOKIE_URL = "https://fc.yahoo.com"
    _USER_AGENT = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
    )

    def __init__(
        self,
        session: Optional[Any] = None,
        base_url: Optional[str] = None,
        cookie_url: Optional[str] = None,
        timeout: float = 5,
        crumb_ttl_sec: int = 3600,
    ) -> None:
        self.session = session or requests.Session()
        self.base_url = (base_url or self._BASE_URL).rstrip("/")
        self.cookie_url = cookie_url or self._COOKIE_URL
        self.timeout = timeout
        self.crumb_ttl_sec = crumb_ttl_sec
        self._crumb: Optional[str] = None
        self._crumb_expires_at: float = 0.0

    @classmethod
    def from_settings(cls, settings) -> "YahooFinanceClient":
        return cls(
            base_url=settings.YAHOO_BASE_URL,
            cookie_url=settings.YAHOO_COOKIE_URL,
            timeout=settings.YAHOO_TIMEOUT_SEC,
            crumb_ttl_sec=settings.YAHOO_CRUMB_TTL_SEC,
        )

    def _headers(self) -> Dict[str, str]:
        return {"user-agent": self._USER_AGENT, "accept": "application/json"}

    def _send(self, url: str, **kwargs: Any):
        try:
            return self.session.get(url, headers=self._headers(), timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise UpstreamError(f"request to {url} failed: {exc}") from exc

    def _issue_crumb(self) -> str:
        # sets the session cookie; the response status itself is irrelevant
        self._send(self.cookie_url, allow_redirects=True)

        response = self._send(f"{self.base_url}/v1/test/getcrumb")
        if response.status_code == 429:
            raise ProviderRateLimitError("rate limit reached while issuing crumb", status_code=429)
        if response.status_code >= 400:
            raise UpstreamError(
                f"crumb request failed with status {response.status_code}",
                status_code=response.status_code,
            )

        crumb = (response.text or "").strip()
        if not crumb or "<" in crumb:
            raise UpstreamError("missing crumb in response")

        self._crumb = crumb
        self._crumb_expires_at = time.time() + self.crumb_ttl_sec
        return crumb

    def get_crumb(self) -> str:
        if self._crumb and time.time() < self._crumb_expires_at:
            return self._crumb
        return self._issue_crumb()

    def invalidate_crumb(self) -> None:
        self._crumb = None
        self._crumb_expires_at = 0.0

    @staticmethod
    def _raise_for_status(response, ticker: str) -> None:
        code = response.status_code
        if code < 400:
            return
        if code == 404:
            raise TickerNotFoundError(f"Not found: {ticker}", status_code=code)
        if code == 429:
            raise ProviderRateLimitError(f"rate limit reached for {ticker}", status_code=code)
        raise UpstreamError(f"provider returned status {code} for {ticker}", status_code=code)

    def _get_json(self, path: str, params: Dict[str, str], ticker: str) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        for attempt in range(2):
            crumb = self.get_crumb()
            response = self._send(url, params={**params, "crumb": crumb})
            if response.status_code == 401 and attempt == 0:
                self.invalidate_crumb()
                continue
            self._raise_for_status(response, ticker)
            try:
                payload = response.json(parse_constant=_reject_constant)
            except ValueError as exc:
                raise UpstreamError(f"invalid JSON from provider for {ticker}") from exc
            if not isinstance(payload, dict):
                raise UpstreamError(f"unexpected payload from provider for {ticker}")
            return payload
        raise UpstreamError(f"provider rejected crumb for {ticker}", status_code=401)

    def quote(self, ticker: str) -> Dict[str, Any]:
        payload = self._get_json("/v7/finance/quote", {"symbols": ticker}, ticker)
        body = payload.get("quoteResponse") or {}
        if body.get("error"):
            raise UpstreamError(f"provider error for {ticker}: {body['error']}")

        results = body.get("result") or []
        if not results:
            raise TickerNotFoundError(f"Not found: {ticker}")
        return results[0]

    def quote_summary(self, ticker: str, modules: Iterable[str]) -> Dict[str, Any]:
        payload = self._get_json(
            f"/v10/finance/quoteSummary/{quote_path(ticker, safe='')}",
            {"modules": ",".join(modules), "formatted": "false"},
            ticker,
        )
        body = payload.get("quoteSummary") or {}
        error = body.get("error")
        if error:
            code = str(error.get("code", "")) if isinstance(error, dict) else str(error)
            if code.lower() == "not found":
                raise TickerNotFoundError(f"Not found: {ticker}")
            raise UpstreamError(f"provider error for {ticker}: {error}")

        results = body.get("result") or []
        if not results:
            raise TickerNotFoundError(f"Not found: {ticker}")
        return results[0]

    def close(self) -> None:
        close = getattr(self.session, "close", None)
        if callable(close):
            close()
