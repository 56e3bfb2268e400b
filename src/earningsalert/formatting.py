"""Render delivery queue items into channel messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from earningsalert.models.delivery import DeliveryQueueItem, SurpriseClass

EMBED_COLOR = 0x0000FF
AUTHOR_NAME = "Source: Finnhub"

STATUS_GLYPHS = {
    SurpriseClass.POSITIVE: "\U0001F7E2",  # green circle
    SurpriseClass.NEGATIVE: "\U0001F534",  # red circle
    SurpriseClass.NEUTRAL: "\U0001F535",  # blue circle
}

QUOTE_URL = "https://finance.yahoo.com/quote/{symbol}"
CROSS_REFERENCES = (
    ("Earnings Hub", "https://earningshub.com/quote/{symbol}"),
    ("Earnings Whispers", "https://www.earningswhispers.com/epsdetails/{symbol}"),
    ("Yahoo Finance", QUOTE_URL),
)


@dataclass(frozen=True)
class MessageField:
    name: str
    value: str
    inline: bool = True


@dataclass(frozen=True)
class Message:
    """One rich notification, channel-agnostic."""

    title: str
    url: str
    color: int
    fields: tuple[MessageField, ...]
    footer: str
    author: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_embed(self) -> dict[str, Any]:
        """Discord embed object."""
        return {
            "title": self.title,
            "url": self.url,
            "color": self.color,
            "fields": [
                {"name": f.name, "value": f.value, "inline": f.inline}
                for f in self.fields
            ],
            "footer": {"text": self.footer},
            "author": {"name": self.author},
            "timestamp": self.timestamp.isoformat(),
        }


def render_message(item: DeliveryQueueItem, now: datetime | None = None) -> Message:
    symbol = item.symbol
    glyph = STATUS_GLYPHS[item.surprise_class]
    footer = "\n".join(
        f"{name}: {template.format(symbol=symbol)}" for name, template in CROSS_REFERENCES
    )
    return Message(
        title=f"{glyph} {symbol}",
        url=QUOTE_URL.format(symbol=symbol),
        color=EMBED_COLOR,
        fields=(
            MessageField("Earnings Date", item.report_date.isoformat()),
            MessageField("Report Hour", item.hour_label),
            MessageField("Quarter", item.quarter_text),
            MessageField("EPS", item.eps_actual_text),
            MessageField("EPS Estimate", item.eps_estimate_text),
            MessageField("Revenue", item.revenue_actual_text),
            MessageField("Revenue Estimate", item.revenue_estimate_text),
        ),
        footer=footer,
        author=AUTHOR_NAME,
        timestamp=now or datetime.now(timezone.utc),
    )
