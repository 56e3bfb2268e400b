"""Earnings calendar sources."""

from __future__ import annotations

from typing import Any

from earningsalert.config import CalendarSourceType
from earningsalert.sources.base import BaseCalendarSource


def create_source(source_type: CalendarSourceType, **kwargs: Any) -> BaseCalendarSource:
    """Instantiate a source by type, forwarding kwargs to its constructor.

    The Finnhub module is only imported when selected, so mock runs work
    without finnhub-python installed.
    """
    if source_type is CalendarSourceType.FINNHUB:
        from earningsalert.sources.finnhub import FinnhubCalendarSource

        return FinnhubCalendarSource(**kwargs)
    if source_type is CalendarSourceType.MOCK:
        from earningsalert.sources.mock import MockCalendarSource

        return MockCalendarSource(**kwargs)
    raise ValueError(f"Unsupported calendar source: {source_type!r}")


__all__ = ["BaseCalendarSource", "create_source"]
