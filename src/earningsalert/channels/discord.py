"""Discord webhook delivery channel."""

from __future__ import annotations

import logging
from typing import Any

import requests

from earningsalert.channels.base import BaseDeliveryChannel
from earningsalert.errors import DeliveryError, ErrorCode
from earningsalert.formatting import Message

logger = logging.getLogger(__name__)


class DiscordWebhookChannel(BaseDeliveryChannel):
    """POST one embed per message to a Discord webhook.

    ``wait=true`` makes Discord confirm the message was created before
    responding, so a 2xx really means delivered. Mentions are suppressed.
    """

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 15.0,
        session: requests.Session | None = None,
    ) -> None:
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @staticmethod
    def build_payload(message: Message) -> dict[str, Any]:
        return {
            "embeds": [message.to_embed()],
            "allowed_mentions": {"parse": []},
        }

    def send(self, message: Message) -> None:
        try:
            response = self.session.post(
                self.webhook_url,
                params={"wait": "true"},
                json=self.build_payload(message),
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as exc:
            raise DeliveryError(
                f"Discord webhook timed out after {self.timeout:g}s",
                code=ErrorCode.TIMEOUT,
                retryable=True,
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise DeliveryError(
                f"Discord webhook unreachable: {exc}",
                code=ErrorCode.CHANNEL_ERROR,
                retryable=True,
            ) from exc

        status = response.status_code
        if 200 <= status < 300:
            return

        if status == 429:
            code, retryable = ErrorCode.RATE_LIMITED, True
        elif status in (401, 403, 404):
            code, retryable = ErrorCode.AUTH_FAILED, False
        else:
            code, retryable = ErrorCode.CHANNEL_ERROR, status >= 500
        raise DeliveryError(
            f"Discord webhook returned HTTP {status}: {response.text[:200]}",
            code=code,
            retryable=retryable,
            status_code=status,
        )

    def close(self) -> None:
        self.session.close()
