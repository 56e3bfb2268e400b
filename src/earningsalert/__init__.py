"""earningsalert — notify a Discord channel about newly reported earnings.

Each run fetches a trailing window of the Finnhub earnings calendar, keeps
events that have actual figures and have not been notified yet, posts them
one by one to a webhook, and records every confirmed post in a JSON state
file so the next run never repeats it.

Quick start::

    from earningsalert import create_runner_from_env
    runner = create_runner_from_env()
    summary = runner.run()
"""

from __future__ import annotations

from earningsalert.channels import BaseDeliveryChannel, DiscordWebhookChannel, RecordingChannel
from earningsalert.config import AlertConfig, CalendarSourceType, load_config_from_env
from earningsalert.dispatcher import DispatchResult, NotificationDispatcher
from earningsalert.errors import (
    ConfigurationError,
    DeliveryError,
    EarningsAlertError,
    ErrorCode,
    FetchError,
    MalformedRecordError,
    PersistenceError,
)
from earningsalert.formatting import Message, MessageField, render_message
from earningsalert.models.delivery import DeliveryQueueItem, SurpriseClass
from earningsalert.models.earnings import EarningsEvent, ReportHour
from earningsalert.models.notification import NotificationRecord, NotificationState
from earningsalert.reconcile import (
    ReconcileResult,
    ReconciliationEngine,
    classify_surprise,
    format_billions,
)
from earningsalert.runner import EarningsAlertRunner, RunPhase, RunSummary
from earningsalert.sources import BaseCalendarSource, create_source
from earningsalert.state import JsonStateStore, MemoryStateStore, StateStore

__version__ = "0.1.0"

__all__ = [
    # Runner
    "EarningsAlertRunner",
    "RunPhase",
    "RunSummary",
    "create_runner_from_env",
    # Config
    "AlertConfig",
    "CalendarSourceType",
    "load_config_from_env",
    # Errors
    "EarningsAlertError",
    "ErrorCode",
    "ConfigurationError",
    "FetchError",
    "DeliveryError",
    "PersistenceError",
    "MalformedRecordError",
    # Models
    "EarningsEvent",
    "ReportHour",
    "NotificationRecord",
    "NotificationState",
    "DeliveryQueueItem",
    "SurpriseClass",
    # Pipeline
    "ReconciliationEngine",
    "ReconcileResult",
    "classify_surprise",
    "format_billions",
    "NotificationDispatcher",
    "DispatchResult",
    "Message",
    "MessageField",
    "render_message",
    # State
    "StateStore",
    "JsonStateStore",
    "MemoryStateStore",
    # Sources and channels
    "BaseCalendarSource",
    "create_source",
    "BaseDeliveryChannel",
    "DiscordWebhookChannel",
    "RecordingChannel",
]


def create_runner_from_env() -> EarningsAlertRunner:
    """Zero-config factory — reads credentials and settings from env vars.

    See ``earningsalert.config.load_config_from_env`` for the variables.

    Raises:
        ConfigurationError: DISCORD_EARNINGS_WEBHOOK or FINNHUB_TOKEN missing.
    """
    return EarningsAlertRunner.from_config(load_config_from_env())
