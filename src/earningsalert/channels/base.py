"""Abstract base class for delivery channels."""

from __future__ import annotations

from abc import ABC, abstractmethod

from earningsalert.formatting import Message


class BaseDeliveryChannel(ABC):
    """Every concrete channel must implement ``send``.

    A send either succeeds or raises ``DeliveryError``; there is no
    partial delivery.
    """

    @abstractmethod
    def send(self, message: Message) -> None:
        """Deliver one message."""
        raise NotImplementedError

    def close(self) -> None:
        """Release network resources. Safe to call more than once."""

    def __enter__(self) -> BaseDeliveryChannel:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
