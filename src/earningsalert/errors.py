"""Earnings alert error types."""

from __future__ import annotations

from datetime import date
from enum import Enum


class ErrorCode(Enum):
    """Error classification codes."""

    CONFIGURATION = "configuration"
    RATE_LIMITED = "rate_limited"
    AUTH_FAILED = "auth_failed"
    TIMEOUT = "timeout"
    SOURCE_ERROR = "source_error"
    CHANNEL_ERROR = "channel_error"
    MALFORMED_PAYLOAD = "malformed_payload"
    MALFORMED_RECORD = "malformed_record"
    PERSISTENCE = "persistence"


class EarningsAlertError(Exception):
    """Base exception with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether a later run may reasonably succeed.
    """

    default_code = ErrorCode.SOURCE_ERROR

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.retryable = retryable


class ConfigurationError(EarningsAlertError):
    """Required configuration is missing or invalid. Raised before any side effect."""

    default_code = ErrorCode.CONFIGURATION

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = list(missing or [])


class FetchError(EarningsAlertError):
    """Upstream calendar source unreachable or returned a malformed payload."""

    default_code = ErrorCode.SOURCE_ERROR


class DeliveryError(EarningsAlertError):
    """Delivery channel rejected or failed a send.

    ``symbol`` and ``report_date`` are filled in by the dispatcher once the
    failing queue item is known.
    """

    default_code = ErrorCode.CHANNEL_ERROR

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        retryable: bool = False,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, code=code, retryable=retryable)
        self.status_code = status_code
        self.symbol: str | None = None
        self.report_date: date | None = None

    def __str__(self) -> str:
        if self.symbol is None:
            return self.message
        when = self.report_date.isoformat() if self.report_date else "?"
        return f"{self.message} [{self.symbol} {when}]"


class PersistenceError(EarningsAlertError):
    """State could not be written. Risks duplicate notifications on the next run."""

    default_code = ErrorCode.PERSISTENCE


class MalformedRecordError(EarningsAlertError):
    """A single upstream record could not be parsed. Skipped, never fatal."""

    default_code = ErrorCode.MALFORMED_RECORD
