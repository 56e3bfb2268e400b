"""Reconciliation of upstream calendar rows against notification state.

Turns a raw, possibly unsorted and overlapping calendar window into the
ordered queue of events that still need a notification:

1. parse rows, skipping malformed ones
2. drop estimate-only (unreported) events
3. stable-sort by report date
4. drop keys already in state, and repeats of a key within the batch
5. attach presentation fields
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from earningsalert.errors import MalformedRecordError
from earningsalert.models.delivery import DeliveryQueueItem, SurpriseClass
from earningsalert.models.earnings import EarningsEvent
from earningsalert.models.notification import NotificationState

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"

_BILLION = Decimal(1_000_000_000)
_CENTS = Decimal("0.01")


def compute_surprise(eps_actual: float | None, eps_estimate: float | None) -> float | None:
    if eps_actual is None or eps_estimate is None:
        return None
    return eps_actual - eps_estimate


def classify_surprise(surprise: float | None) -> SurpriseClass:
    """Neutral without a signal or on an exact match."""
    if surprise is None or surprise == 0:
        return SurpriseClass.NEUTRAL
    return SurpriseClass.POSITIVE if surprise > 0 else SurpriseClass.NEGATIVE


def format_billions(value: float | None) -> str:
    """``2_345_000_000`` -> ``"$2.35B"``; ``None`` -> ``"N/A"``."""
    if value is None:
        return NOT_AVAILABLE
    billions = Decimal(str(value)) / _BILLION
    with localcontext() as ctx:
        # quantize needs every integer digit plus the two cents
        ctx.prec = max(ctx.prec, billions.adjusted() + 4)
        billions = billions.quantize(_CENTS, rounding=ROUND_HALF_UP)
    return f"${billions}B"


def format_number(value: Any) -> str:
    """Shortest exact decimal form: ``1.10`` -> ``"1.1"``, ``2.0`` -> ``"2"``."""
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, float):
        text = format(Decimal(repr(value)), "f")
        return text[:-2] if text.endswith(".0") else text
    return str(value)


@dataclass
class ReconcileResult:
    """Outcome of one reconciliation pass."""

    queue: list[DeliveryQueueItem]
    parsed: int = 0
    malformed: int = 0
    unreported: int = 0
    already_notified: int = 0
    batch_duplicates: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "parsed": self.parsed,
            "malformed": self.malformed,
            "unreported": self.unreported,
            "already_notified": self.already_notified,
            "batch_duplicates": self.batch_duplicates,
            "queued": len(self.queue),
        }


class ReconciliationEngine:
    """Compute the delivery queue for a calendar window.

    Usage::

        engine = ReconciliationEngine()
        result = engine.reconcile(rows, state)
        for item in result.queue:
            ...
    """

    def reconcile(
        self,
        records: Iterable[Mapping[str, Any] | EarningsEvent],
        state: NotificationState,
    ) -> ReconcileResult:
        result = ReconcileResult(queue=[])

        # 1. Parse
        events: list[EarningsEvent] = []
        for record in records:
            try:
                event = record if isinstance(record, EarningsEvent) else EarningsEvent.from_record(record)
            except MalformedRecordError as exc:
                result.malformed += 1
                logger.warning("Skipping malformed record (%s): %r", exc, record)
                continue
            events.append(event)
        result.parsed = len(events)
        total = result.parsed + result.malformed

        # 2. Reportable only
        reportable = [e for e in events if e.is_reportable]
        result.unreported = len(events) - len(reportable)

        # 3. Stable sort, oldest first
        reportable.sort(key=lambda e: e.report_date)

        # 4. Idempotency gate
        queued_keys: set[tuple[str, date]] = set()
        for event in reportable:
            if event.key in state:
                result.already_notified += 1
                continue
            if event.key in queued_keys:
                result.batch_duplicates += 1
                logger.debug("Duplicate upstream row for %s %s", event.symbol, event.report_date)
                continue
            # 5. Presentation
            try:
                item = self.build_item(event)
            except (ArithmeticError, ValueError) as exc:
                result.malformed += 1
                logger.warning(
                    "Skipping unpresentable event %s %s: %s", event.symbol, event.report_date, exc
                )
                continue
            queued_keys.add(event.key)
            result.queue.append(item)

        logger.info(
            "Reconciled %d records: %d queued, %d already notified, %d unreported, %d malformed",
            total,
            len(result.queue),
            result.already_notified,
            result.unreported,
            result.malformed,
        )
        return result

    @staticmethod
    def build_item(event: EarningsEvent) -> DeliveryQueueItem:
        surprise = compute_surprise(event.eps_actual, event.eps_estimate)
        return DeliveryQueueItem(
            event=event,
            surprise=surprise,
            surprise_class=classify_surprise(surprise),
            eps_actual_text=format_number(event.eps_actual),
            eps_estimate_text=format_number(event.eps_estimate),
            revenue_actual_text=format_billions(event.revenue_actual),
            revenue_estimate_text=format_billions(event.revenue_estimate),
            quarter_text=format_number(event.fiscal_quarter),
            hour_label=event.hour.label,
        )
