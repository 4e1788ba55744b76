from __future__ import annotations

import json
from typing import Any

from stockdash.utils.formatters import (
    format_currency,
    format_date,
    format_large_number,
    format_percentage,
    get_change_color_class,
)
from stockdash.utils.validation import has_valid_length, sanitize_ticker

STOCK_DETAIL_MODULES = (
    "quoteType",
    "financialData",
    "defaultKeyStatistics",
    "assetProfile",
    "earnings",
    "earningsHistory",
    "earningsTrend",
    "calendarEvents",
)


def _as_number(value: Any) -> float | None:
    if isinstance(value, dict):
        # formatted payloads wrap numbers as {"raw": ..., "fmt": ...}
        value = value.get("raw")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _number(section: dict, key: str) -> float | None:
    return _as_number(section.get(key))


def _ratio_as_percent(value: float | None) -> float | None:
    return None if value is None else value * 100


def _section(summary: dict, name: str) -> dict:
    section = summary.get(name)
    return section if isinstance(section, dict) else {}


def build_display_summary(summary: dict[str, Any]) -> dict[str, str]:
    """Pre-render headline company figures for the stock page."""
    financial = _section(summary, "financialData")
    stats = _section(summary, "defaultKeyStatistics")
    earnings = _section(_section(summary, "calendarEvents"), "earnings")

    currency = financial.get("financialCurrency")
    if not isinstance(currency, str) or not currency.strip():
        currency = "USD"
    revenue_growth = _ratio_as_percent(_number(financial, "revenueGrowth"))

    earnings_dates = earnings.get("earningsDate") or []
    next_earnings = None
    if isinstance(earnings_dates, list) and earnings_dates:
        next_earnings = _as_number(earnings_dates[0])

    return {
        "current_price": format_currency(_number(financial, "currentPrice"), currency),
        "target_mean_price": format_currency(_number(financial, "targetMeanPrice"), currency),
        "total_revenue": format_large_number(_number(financial, "totalRevenue")),
        "enterprise_value": format_large_number(_number(stats, "enterpriseValue")),
        "revenue_growth": format_percentage(revenue_growth),
        "revenue_growth_class": get_change_color_class(revenue_growth),
        "profit_margin": format_percentage(_ratio_as_percent(_number(financial, "profitMargins"))),
        "next_earnings_date": format_date(next_earnings),
        "last_fiscal_year_end": format_date(_number(stats, "lastFiscalYearEnd")),
    }


def load_stock_detail(ticker: Any, provider) -> dict[str, Any]:
    """Page data for /stock/{ticker}; failures come back in-band as ``{"error": ...}``."""
    if not ticker or not isinstance(ticker, str):
        return {"error": "Valid ticker symbol is required"}

    sanitized = sanitize_ticker(ticker)
    if not has_valid_length(sanitized):
        return {"error": "Ticker symbol must be 1-10 characters"}

    try:
        summary = provider.quote_summary(sanitized, STOCK_DETAIL_MODULES)
        # the page data must survive strict JSON encoding
        json.dumps(summary, allow_nan=False)
        display = build_display_summary(summary)
    except Exception as exc:
        print(f"[PAGE][load_error] ticker={sanitized} error={exc!r}", flush=True)
        return {"error": "Failed to fetch company breakdown data"}

    return {"quote": summary, "display": display}
