"""Earnings event data model."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

from earningsalert.errors import MalformedRecordError


class ReportHour(Enum):
    """Earnings report timing relative to market hours."""

    BMO = "bmo"
    AMC = "amc"
    DMH = "dmh"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: Any) -> ReportHour:
        if not isinstance(code, str):
            return cls.UNKNOWN
        try:
            return cls(code.strip().lower())
        except ValueError:
            return cls.UNKNOWN

    @property
    def label(self) -> str:
        return _HOUR_LABELS[self]


_HOUR_LABELS = {
    ReportHour.BMO: "Before Market Open",
    ReportHour.AMC: "After Market Close",
    ReportHour.DMH: "During Market Hours",
    ReportHour.UNKNOWN: "Unknown",
}


def _optional_float(row: Mapping[str, Any], key: str) -> float | None:
    value = row.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise MalformedRecordError(f"{key} is not a number: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise MalformedRecordError(f"{key} is not a number: {value!r}") from exc
    if math.isnan(number):
        return None
    if math.isinf(number):
        raise MalformedRecordError(f"{key} is not finite: {value!r}")
    return number


@dataclass(frozen=True)
class EarningsEvent:
    """Earnings report event as seen in the upstream calendar.

    Attributes:
        symbol: Ticker symbol.
        report_date: Date of the earnings report.
        fiscal_quarter: Fiscal quarter label (Finnhub sends 1-4).
        fiscal_year: Fiscal year.
        hour: When the report is published (BMO, AMC, DMH, UNKNOWN).
        eps_estimate: Consensus EPS estimate.
        eps_actual: Reported EPS.
        revenue_estimate: Consensus revenue estimate.
        revenue_actual: Reported revenue.
    """

    symbol: str
    report_date: date
    fiscal_quarter: str | None = None
    fiscal_year: int | None = None
    hour: ReportHour = ReportHour.UNKNOWN
    eps_estimate: float | None = None
    eps_actual: float | None = None
    revenue_estimate: float | None = None
    revenue_actual: float | None = None

    @property
    def key(self) -> tuple[str, date]:
        """Dedup key shared with NotificationRecord."""
        return (self.symbol, self.report_date)

    @property
    def is_reportable(self) -> bool:
        """True once actual figures exist; estimate-only rows are never notified."""
        return self.eps_actual is not None or self.revenue_actual is not None

    @classmethod
    def from_record(cls, row: Mapping[str, Any]) -> EarningsEvent:
        """Build an event from a Finnhub ``earningsCalendar`` row.

        Raises:
            MalformedRecordError: Missing symbol/date or non-numeric figures.
        """
        if not isinstance(row, Mapping):
            raise MalformedRecordError(f"record is not an object: {row!r}")

        symbol = row.get("symbol")
        if not isinstance(symbol, str) or not symbol.strip():
            raise MalformedRecordError("missing symbol")

        raw_date = row.get("date")
        if not isinstance(raw_date, str):
            raise MalformedRecordError(f"{symbol}: missing report date")
        try:
            report_date = date.fromisoformat(raw_date.strip()[:10])
        except ValueError as exc:
            raise MalformedRecordError(f"{symbol}: invalid report date {raw_date!r}") from exc

        quarter = row.get("quarter")
        year = row.get("year")
        try:
            fiscal_year = int(year) if year is not None else None
        except (TypeError, ValueError):
            fiscal_year = None

        return cls(
            symbol=symbol.strip(),
            report_date=report_date,
            fiscal_quarter=str(quarter) if quarter is not None else None,
            fiscal_year=fiscal_year,
            hour=ReportHour.from_code(row.get("hour")),
            eps_estimate=_optional_float(row, "epsEstimate"),
            eps_actual=_optional_float(row, "epsActual"),
            revenue_estimate=_optional_float(row, "revenueEstimate"),
            revenue_actual=_optional_float(row, "revenueActual"),
        )
