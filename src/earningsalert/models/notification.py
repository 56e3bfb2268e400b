"""Notification record and in-memory notification state."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any


@dataclass(frozen=True)
class NotificationRecord:
    """Durable marker that (symbol, report_date) has been notified."""

    symbol: str
    report_date: date

    @property
    def key(self) -> tuple[str, date]:
        return (self.symbol, self.report_date)

    def to_dict(self) -> dict[str, str]:
        return {"symbol": self.symbol, "date": self.report_date.isoformat()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NotificationRecord:
        symbol = data["symbol"]
        if not isinstance(symbol, str) or not symbol:
            raise ValueError(f"invalid symbol: {symbol!r}")
        return cls(symbol=symbol, report_date=date.fromisoformat(data["date"]))


class NotificationState:
    """Ordered, duplicate-free collection of NotificationRecord.

    Insertion order is kept so the persisted file reads chronologically by
    delivery. Owned by a single run; not thread-safe.
    """

    def __init__(self, records: Iterable[NotificationRecord] = ()) -> None:
        self._records: list[NotificationRecord] = []
        self._keys: set[tuple[str, date]] = set()
        for record in records:
            self.add(record)

    def add(self, record: NotificationRecord) -> bool:
        """Append ``record``; returns False if its key is already present."""
        if record.key in self._keys:
            return False
        self._records.append(record)
        self._keys.add(record.key)
        return True

    def contains(self, symbol: str, report_date: date) -> bool:
        return (symbol, report_date) in self._keys

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __iter__(self) -> Iterator[NotificationRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def to_list(self) -> list[dict[str, str]]:
        return [r.to_dict() for r in self._records]
