"""Earnings alert configuration."""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from earningsalert.errors import ConfigurationError

WEBHOOK_ENV = "DISCORD_EARNINGS_WEBHOOK"
TOKEN_ENV = "FINNHUB_TOKEN"
TOKEN_FALLBACK_ENV = "FINNHUB_API_KEY"

DEFAULT_STATE_PATH = Path("earnings/earnings-finnhub-state.json")


class CalendarSourceType(Enum):
    """Supported upstream calendar backends."""

    FINNHUB = "finnhub"
    MOCK = "mock"


@dataclass
class AlertConfig:
    """Configuration for EarningsAlertRunner.

    Attributes:
        webhook_url: Discord webhook receiving the notifications.
        finnhub_token: Finnhub API token for the earnings calendar.
        source: Upstream calendar backend.
        state_path: JSON file holding already-notified (symbol, date) keys.
        lookback_days: Size of the trailing fetch window, in days.
        send_interval_seconds: Minimum pause between two deliveries.
        fetch_timeout_seconds: Timeout for the single calendar request.
        delivery_timeout_seconds: Timeout for each webhook POST.
    """

    webhook_url: str
    finnhub_token: str
    source: CalendarSourceType = CalendarSourceType.FINNHUB
    state_path: Path = DEFAULT_STATE_PATH
    lookback_days: int = 7
    send_interval_seconds: float = 3.0
    fetch_timeout_seconds: float = 30.0
    delivery_timeout_seconds: float = 15.0

    def __post_init__(self) -> None:
        self.state_path = Path(self.state_path)
        if not self.webhook_url.startswith(("https://", "http://")):
            raise ConfigurationError(f"{WEBHOOK_ENV} must be an http(s) URL")
        if self.lookback_days < 0:
            raise ConfigurationError("lookback_days must be >= 0")
        for name in ("send_interval_seconds", "fetch_timeout_seconds", "delivery_timeout_seconds"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigurationError(f"{name} must be a finite number")
        if self.send_interval_seconds < 0:
            raise ConfigurationError("send_interval_seconds must be >= 0")
        if self.fetch_timeout_seconds <= 0 or self.delivery_timeout_seconds <= 0:
            raise ConfigurationError("timeouts must be > 0")


def _number(env: Mapping[str, str], name: str, default: float, cast: type) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc


def load_config_from_env(env: Mapping[str, str] | None = None) -> AlertConfig:
    """Build an AlertConfig from environment variables.

    Environment variables:
        DISCORD_EARNINGS_WEBHOOK: Discord webhook URL (required).
        FINNHUB_TOKEN: Finnhub API token (required; FINNHUB_API_KEY also accepted).
        EARNINGS_SOURCE: Calendar backend — "finnhub" or "mock" (default: "finnhub").
        EARNINGS_STATE_FILE: State file path.
        EARNINGS_LOOKBACK_DAYS: Trailing window in days (default: 7).
        EARNINGS_SEND_INTERVAL: Seconds between deliveries (default: 3).
        EARNINGS_FETCH_TIMEOUT: Calendar request timeout in seconds (default: 30).
        EARNINGS_DELIVERY_TIMEOUT: Webhook request timeout in seconds (default: 15).

    Raises:
        ConfigurationError: One line per missing required variable.
    """
    env = os.environ if env is None else env

    webhook = env.get(WEBHOOK_ENV, "").strip()
    token = (env.get(TOKEN_ENV, "") or env.get(TOKEN_FALLBACK_ENV, "")).strip()

    missing: list[str] = []
    if not webhook:
        missing.append(WEBHOOK_ENV)
    if not token:
        missing.append(TOKEN_ENV)
    if missing:
        raise ConfigurationError(
            "\n".join(f"Missing {name}" for name in missing),
            missing=missing,
        )

    source_name = env.get("EARNINGS_SOURCE", "finnhub").strip().lower() or "finnhub"
    try:
        source = CalendarSourceType(source_name)
    except ValueError as exc:
        supported = ", ".join(t.value for t in CalendarSourceType)
        raise ConfigurationError(
            f"Unsupported EARNINGS_SOURCE '{source_name}'. Supported: {supported}"
        ) from exc

    return AlertConfig(
        webhook_url=webhook,
        finnhub_token=token,
        source=source,
        state_path=Path(env.get("EARNINGS_STATE_FILE", "").strip() or DEFAULT_STATE_PATH),
        lookback_days=int(_number(env, "EARNINGS_LOOKBACK_DAYS", 7, int)),
        send_interval_seconds=_number(env, "EARNINGS_SEND_INTERVAL", 3.0, float),
        fetch_timeout_seconds=_number(env, "EARNINGS_FETCH_TIMEOUT", 30.0, float),
        delivery_timeout_seconds=_number(env, "EARNINGS_DELIVERY_TIMEOUT", 15.0, float),
    )
