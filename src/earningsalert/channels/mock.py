"""Recording channel for tests — keeps messages in memory."""

from __future__ import annotations

from earningsalert.channels.base import BaseDeliveryChannel
from earningsalert.errors import DeliveryError
from earningsalert.formatting import Message


class RecordingChannel(BaseDeliveryChannel):
    """Collects sent messages; optionally fails on the N-th send (1-based)."""

    def __init__(self, fail_on: int | None = None, error: BaseException | None = None) -> None:
        self.messages: list[Message] = []
        self.attempts = 0
        self.closed = False
        self._fail_on = fail_on
        self._error = error

    def send(self, message: Message) -> None:
        self.attempts += 1
        if self._fail_on is not None and self.attempts == self._fail_on:
            raise self._error or DeliveryError(f"send #{self.attempts} rejected")
        self.messages.append(message)

    def close(self) -> None:
        self.closed = True

    @property
    def titles(self) -> list[str]:
        return [m.title for m in self.messages]
