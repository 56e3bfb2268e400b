"""Abstract base class for earnings calendar sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any


class BaseCalendarSource(ABC):
    """Abstract base for all upstream earnings calendars.

    Sources return raw rows rather than parsed events: row validation is the
    reconciliation engine's job, so one bad row never fails the whole fetch.
    """

    name = "base"

    @abstractmethod
    def fetch_calendar(self, start: date, end: date) -> list[dict[str, Any]]:
        """Fetch earnings calendar rows for a date window.

        Args:
            start: First report date (inclusive).
            end: Last report date (inclusive).

        Returns:
            Rows shaped like Finnhub's ``earningsCalendar`` entries, in
            upstream order.

        Raises:
            FetchError: Source unreachable, timed out, or payload malformed.
        """
        ...

    def close(self) -> None:
        """Release network resources. No-op by default."""
