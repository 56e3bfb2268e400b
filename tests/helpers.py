"""Builders for upstream calendar rows."""

from __future__ import annotations

from typing import Any


def make_row(
    symbol: str | None = "AAPL",
    date: str | None = "2024-01-15",
    *,
    eps_actual: float | None = 1.10,
    eps_estimate: float | None = 1.00,
    revenue_actual: float | None = 2_345_000_000,
    revenue_estimate: float | None = 2_300_000_000,
    hour: str | None = "amc",
    quarter: int | None = 1,
    year: int | None = 2024,
) -> dict[str, Any]:
    """One Finnhub ``earningsCalendar`` row."""
    return {
        "symbol": symbol,
        "date": date,
        "epsActual": eps_actual,
        "epsEstimate": eps_estimate,
        "revenueActual": revenue_actual,
        "revenueEstimate": revenue_estimate,
        "hour": hour,
        "quarter": quarter,
        "year": year,
    }
