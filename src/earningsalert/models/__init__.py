"""Earnings alert models."""

from earningsalert.models.earnings import EarningsEvent, ReportHour
from earningsalert.models.notification import NotificationRecord, NotificationState
from earningsalert.models.delivery import DeliveryQueueItem, SurpriseClass

__all__ = [
    "EarningsEvent",
    "ReportHour",
    "NotificationRecord",
    "NotificationState",
    "DeliveryQueueItem",
    "SurpriseClass",
]
