"""Mock calendar source for testing and CI — no API keys required."""

from __future__ import annotations

from datetime import date
from typing import Any

from earningsalert.errors import FetchError
from earningsalert.sources.base import BaseCalendarSource


class MockCalendarSource(BaseCalendarSource):
    """In-memory source that returns preloaded rows.

    Use ``set_rows`` to pre-load the calendar and ``set_error`` to make the
    next fetches fail. Rows are returned regardless of the requested window;
    the requested windows are kept in ``requests``.
    """

    name = "mock"

    def __init__(self, rows: list[dict[str, Any]] | None = None, **_: Any) -> None:
        self._rows: list[dict[str, Any]] = list(rows or [])
        self._error: FetchError | None = None
        self.requests: list[tuple[date, date]] = []
        self.closed = False

    # --- Pre-load helpers ---

    def set_rows(self, rows: list[dict[str, Any]]) -> None:
        self._rows = list(rows)

    def set_error(self, error: FetchError | None) -> None:
        self._error = error

    # --- Source implementation ---

    def fetch_calendar(self, start: date, end: date) -> list[dict[str, Any]]:
        self.requests.append((start, end))
        if self._error is not None:
            raise self._error
        return [dict(row) for row in self._rows]

    def close(self) -> None:
        self.closed = True
