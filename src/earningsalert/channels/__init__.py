"""Delivery channels."""

from earningsalert.channels.base import BaseDeliveryChannel
from earningsalert.channels.discord import DiscordWebhookChannel
from earningsalert.channels.mock import RecordingChannel

__all__ = ["BaseDeliveryChannel", "DiscordWebhookChannel", "RecordingChannel"]
