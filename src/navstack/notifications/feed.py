"""RSS 2.0 rendering for the recent-updates log."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from email.utils import format_datetime
from html import escape
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger

if TYPE_CHECKING:
    from .log import NotificationEvent


@dataclass
class FeedSettings:
    """Channel metadata for the generated feed.

    Attributes:
        title: Channel title.
        link: Site URL the channel points at.
        description: Channel description.
        timezone: IANA zone used for item ``pubDate`` values.
    """

    title: str = "Navigation updates"
    link: str = ""
    description: str = "Recently added links"
    timezone: str = "UTC"


def escape_xml(value: str | None) -> str:
    """Escape ``& < > " '`` for element text."""
    return escape(value or "", quote=True)


def _zone(name: str) -> tzinfo:
    if not name or name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown feed timezone '{name}', using UTC")
        return timezone.utc


def format_pub_date(date: datetime, tz: tzinfo) -> str:
    return format_datetime(date.astimezone(tz))


def render_rss(events: Iterable[NotificationEvent], settings: FeedSettings | None = None) -> str:
    """Render the events, in the given order, as an RSS 2.0 document."""
    settings = settings or FeedSettings()
    tz = _zone(settings.timezone)

    items = []
    for event in events:
        items.append(
            "    <item>\n"
            f"      <title>{escape_xml(event.title)}</title>\n"
            f"      <link>{escape_xml(event.url)}</link>\n"
            f"      <description>{escape_xml(event.description)}</description>\n"
            f'      <guid isPermaLink="false">{escape_xml(event.url)}</guid>\n'
            f"      <pubDate>{format_pub_date(event.date, tz)}</pubDate>\n"
            "    </item>\n"
        )

    return (
        '<?xml version="1.0" encoding="UTF-8" ?>\n'
        '<rss version="2.0">\n'
        "  <channel>\n"
        f"    <title>{escape_xml(settings.title)}</title>\n"
        f"    <link>{escape_xml(settings.link)}</link>\n"
        f"    <description>{escape_xml(settings.description)}</description>\n"
        f"{''.join(items)}"
        "  </channel>\n"
        "</rss>\n"
    )
