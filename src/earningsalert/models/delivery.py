"""Delivery queue item — an event plus its presentation fields."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from earningsalert.models.earnings import EarningsEvent
from earningsalert.models.notification import NotificationRecord


class SurpriseClass(Enum):
    """Sign of the EPS surprise."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class DeliveryQueueItem:
    """Transient, never persisted.

    Attributes:
        event: Source earnings event.
        surprise: eps_actual - eps_estimate, or None without both figures.
        surprise_class: Classification of ``surprise``.
        eps_actual_text: Reported EPS for display, or "N/A".
        eps_estimate_text: Estimated EPS for display, or "N/A".
        revenue_actual_text: Reported revenue in billions, or "N/A".
        revenue_estimate_text: Estimated revenue in billions, or "N/A".
        quarter_text: Fiscal quarter for display, or "N/A".
        hour_label: Human phrase for the report time of day.
    """

    event: EarningsEvent
    surprise: float | None
    surprise_class: SurpriseClass
    eps_actual_text: str
    eps_estimate_text: str
    revenue_actual_text: str
    revenue_estimate_text: str
    quarter_text: str
    hour_label: str

    @property
    def symbol(self) -> str:
        return self.event.symbol

    @property
    def report_date(self) -> date:
        return self.event.report_date

    @property
    def key(self) -> tuple[str, date]:
        return self.event.key

    def to_record(self) -> NotificationRecord:
        return NotificationRecord(symbol=self.event.symbol, report_date=self.event.report_date)
