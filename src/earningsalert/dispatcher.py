"""Sequential, rate-limited delivery with per-item state commit."""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from earningsalert.channels.base import BaseDeliveryChannel
from earningsalert.errors import DeliveryError
from earningsalert.formatting import render_message
from earningsalert.models.delivery import DeliveryQueueItem
from earningsalert.models.notification import NotificationState

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Progress of one dispatch pass."""

    sent: int = 0
    skipped: int = 0
    delivered: list[tuple[str, date]] = field(default_factory=list)


class NotificationDispatcher:
    """Deliver queue items strictly in order, one at a time.

    Waits ``send_interval`` seconds between two deliveries. Each success is
    added to ``state`` before the next item is attempted; the first
    ``DeliveryError`` stops the pass and is re-raised with the failing
    symbol/date attached. Items after the failure are never attempted.
    """

    def __init__(
        self,
        channel: BaseDeliveryChannel,
        send_interval: float = 3.0,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not math.isfinite(send_interval) or send_interval < 0:
            raise ValueError(f"send_interval must be a finite number >= 0, got {send_interval!r}")
        self.channel = channel
        self.send_interval = send_interval
        self._sleep = sleep
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self.sent_count = 0

    def dispatch(
        self,
        queue: Sequence[DeliveryQueueItem],
        state: NotificationState,
        result: DispatchResult | None = None,
    ) -> DispatchResult:
        """Deliver ``queue`` and record each success in ``state``.

        ``result`` may be supplied by the caller so progress stays visible
        when a ``DeliveryError`` propagates.
        """
        result = result if result is not None else DispatchResult()
        delivered_before = False

        for item in queue:
            # state may have gained this key since reconciliation
            if item.key in state:
                result.skipped += 1
                logger.debug("Already notified, skipping %s (%s)", item.symbol, item.report_date)
                continue

            if delivered_before and self.send_interval > 0:
                self._sleep(self.send_interval)

            message = render_message(item, now=self._clock())
            try:
                self.channel.send(message)
            except DeliveryError as exc:
                exc.symbol = item.symbol
                exc.report_date = item.report_date
                logger.error(
                    "Delivery failed for %s (%s) after %d sent this run: %s",
                    item.symbol,
                    item.report_date,
                    result.sent,
                    exc.message,
                )
                raise

            state.add(item.to_record())
            delivered_before = True
            result.sent += 1
            result.delivered.append(item.key)
            self.sent_count += 1
            logger.info("Sent: %s (%s)", item.symbol, item.report_date.isoformat())

        return result
