"""Finnhub earnings calendar source.

Uses the ``/calendar/earnings`` endpoint through the official client::

    pip install finnhub-python
"""

from __future__ import annotations

from datetime import date
from typing import Any

import requests

from earningsalert.errors import ErrorCode, FetchError
from earningsalert.sources.base import BaseCalendarSource

try:
    import finnhub
    _FINNHUB_AVAILABLE = True
except ImportError:
    _FINNHUB_AVAILABLE = False


class FinnhubCalendarSource(BaseCalendarSource):
    """Fetch the market-wide earnings calendar from Finnhub.io."""

    name = "finnhub"

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float = 30.0,
        client: Any | None = None,
    ) -> None:
        self.timeout = timeout

        if client is not None:
            self.client = client
            return

        if not _FINNHUB_AVAILABLE:
            raise FetchError(
                "finnhub-python is not installed. Run: pip install finnhub-python",
                code=ErrorCode.SOURCE_ERROR,
            )

        self.api_key = api_key
        if not self.api_key:
            raise FetchError(
                "Finnhub API key required.",
                code=ErrorCode.AUTH_FAILED,
            )

        self.client = finnhub.Client(api_key=self.api_key)
        # the client reads this per request
        self.client.DEFAULT_TIMEOUT = timeout

    def fetch_calendar(self, start: date, end: date) -> list[dict[str, Any]]:
        window = f"{start.isoformat()}..{end.isoformat()}"
        try:
            data = self.client.earnings_calendar(
                _from=start.isoformat(),
                to=end.isoformat(),
                symbol="",
            )
        except requests.exceptions.Timeout as exc:
            raise FetchError(
                f"Finnhub earnings calendar timed out after {self.timeout:g}s ({window})",
                code=ErrorCode.TIMEOUT,
                retryable=True,
            ) from exc
        except Exception as exc:
            code = ErrorCode.SOURCE_ERROR
            status = getattr(exc, "status_code", None)
            if status == 429:
                code = ErrorCode.RATE_LIMITED
            elif status in (401, 403):
                code = ErrorCode.AUTH_FAILED
            raise FetchError(
                f"Finnhub earnings calendar failed ({window}): {exc}",
                code=code,
                retryable=code is not ErrorCode.AUTH_FAILED,
            ) from exc

        if not isinstance(data, dict):
            raise FetchError(
                f"Finnhub earnings calendar returned {type(data).__name__}, expected object ({window})",
                code=ErrorCode.MALFORMED_PAYLOAD,
            )

        rows = data.get("earningsCalendar")
        if rows is None:
            return []
        if not isinstance(rows, list):
            raise FetchError(
                f"Finnhub earningsCalendar is {type(rows).__name__}, expected list ({window})",
                code=ErrorCode.MALFORMED_PAYLOAD,
            )
        return rows

    def close(self) -> None:
        self.client.close()
