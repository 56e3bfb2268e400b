"""EarningsAlertRunner — one load -> fetch -> reconcile -> dispatch -> save pass."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Any

from earningsalert.channels.base import BaseDeliveryChannel
from earningsalert.channels.discord import DiscordWebhookChannel
from earningsalert.config import AlertConfig, CalendarSourceType
from earningsalert.dispatcher import DispatchResult, NotificationDispatcher
from earningsalert.errors import PersistenceError
from earningsalert.models.notification import NotificationState
from earningsalert.reconcile import ReconciliationEngine
from earningsalert.sources import create_source
from earningsalert.sources.base import BaseCalendarSource
from earningsalert.state import JsonStateStore, StateStore

logger = logging.getLogger(__name__)


class RunPhase(Enum):
    """Run lifecycle. FINALIZING is reached from every earlier phase."""

    IDLE = "idle"
    LOADED = "loaded"
    RECONCILED = "reconciled"
    DISPATCHING = "dispatching"
    FINALIZING = "finalizing"
    DONE = "done"


@dataclass
class RunSummary:
    """What one run did."""

    window_start: date | None = None
    window_end: date | None = None
    fetched: int = 0
    queued: int = 0
    sent: int = 0
    total_records: int = 0
    phase: RunPhase = RunPhase.IDLE
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "window_start": self.window_start.isoformat() if self.window_start else None,
            "window_end": self.window_end.isoformat() if self.window_end else None,
            "fetched": self.fetched,
            "queued": self.queued,
            "sent": self.sent,
            "total_records": self.total_records,
            "phase": self.phase.value,
            "error": self.error,
        }


class EarningsAlertRunner:
    """Orchestrator: state -> source -> reconcile -> dispatch -> state.

    State is saved exactly once per run from a ``finally`` block, so the
    records of every confirmed delivery survive fetch errors, delivery
    errors, and unexpected exceptions alike.

    Usage::

        from earningsalert import create_runner_from_env
        runner = create_runner_from_env()
        summary = runner.run()
    """

    def __init__(
        self,
        source: BaseCalendarSource,
        channel: BaseDeliveryChannel,
        store: StateStore,
        lookback_days: int = 7,
        send_interval: float = 3.0,
        engine: ReconciliationEngine | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.source = source
        self.channel = channel
        self.store = store
        self.lookback_days = lookback_days
        self.engine = engine or ReconciliationEngine()
        self.dispatcher = NotificationDispatcher(channel, send_interval=send_interval, sleep=sleep)
        self.phase = RunPhase.IDLE
        self.state: NotificationState | None = None
        self.state_saved = False

    @classmethod
    def from_config(cls, config: AlertConfig, **kwargs: Any) -> EarningsAlertRunner:
        source_kwargs: dict[str, Any] = {}
        if config.source is CalendarSourceType.FINNHUB:
            source_kwargs["api_key"] = config.finnhub_token
            source_kwargs["timeout"] = config.fetch_timeout_seconds
        return cls(
            source=create_source(config.source, **source_kwargs),
            channel=DiscordWebhookChannel(config.webhook_url, timeout=config.delivery_timeout_seconds),
            store=JsonStateStore(config.state_path),
            lookback_days=config.lookback_days,
            send_interval=config.send_interval_seconds,
            **kwargs,
        )

    def fetch_window(self, today: date) -> tuple[date, date]:
        return today - timedelta(days=self.lookback_days), today

    def run(self, today: date | None = None) -> RunSummary:
        """Execute one pass. Errors propagate after state has been saved."""
        summary = RunSummary()
        dispatched = DispatchResult()

        # 1. Load (never fails)
        state = self.store.load()
        self.state = state
        self._enter(RunPhase.LOADED, summary)
        logger.info("Loaded %d notified records", len(state))

        failing = True
        try:
            # 2. Fetch
            start, end = self.fetch_window(today or date.today())
            summary.window_start, summary.window_end = start, end
            rows = self.source.fetch_calendar(start, end)
            summary.fetched = len(rows)
            logger.info("Fetched %d calendar rows for %s..%s", len(rows), start, end)

            # 3. Reconcile
            result = self.engine.reconcile(rows, state)
            summary.queued = len(result.queue)
            self._enter(RunPhase.RECONCILED, summary)

            # 4. Dispatch
            self._enter(RunPhase.DISPATCHING, summary)
            self.dispatcher.dispatch(result.queue, state, result=dispatched)
            failing = False
        except Exception as exc:
            summary.error = str(exc)
            logger.error("Run aborted during %s: %s", self.phase.value, exc)
            raise
        finally:
            summary.sent = dispatched.sent
            self._finalize(state, summary, failing=failing)

        return summary

    # ------------------------------------------------------------ internal

    def _enter(self, phase: RunPhase, summary: RunSummary) -> None:
        logger.debug("Run phase %s -> %s", self.phase.value, phase.value)
        self.phase = phase
        summary.phase = phase

    def _finalize(self, state: NotificationState, summary: RunSummary, failing: bool) -> None:
        self._enter(RunPhase.FINALIZING, summary)
        self.state_saved = False
        try:
            try:
                self.store.save(state)
                self.state_saved = True
            except PersistenceError as exc:
                logger.critical(
                    "State NOT saved, %d records may be re-sent next run: %s",
                    summary.sent,
                    exc,
                )
                if not failing:
                    summary.error = str(exc)
                    raise
        finally:
            try:
                self.channel.close()
            finally:
                self.source.close()
            summary.total_records = len(state)
            self._enter(RunPhase.DONE, summary)
            logger.info("Total records: %d", len(state))
