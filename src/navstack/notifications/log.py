"""Bounded, most-recent-first log of added links.

The log is owned by one :class:`NotificationLog` instance and handed to
whatever needs to record or read it. Every persist writes the JSON state
file and regenerates the RSS feed from the in-memory log.
"""

from __future__ import annotations

import json
import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from loguru import logger

from navstack.core.exceptions import FileIOError
from navstack.core.utils.file_io import read_text, safe_write
from navstack.taxonomy.models import LinkEntry

from .feed import FeedSettings, render_rss

DEFAULT_CAPACITY = 40


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class NotificationEvent:
    """A successful insert, as shown in the updates log and feed."""

    title: str
    logo: str
    url: str
    description: str
    date: datetime = field(default_factory=_utcnow)

    @classmethod
    def from_link(cls, link: LinkEntry, date: datetime | None = None) -> NotificationEvent:
        return cls(
            title=link.title or "",
            logo=link.logo or "",
            url=link.url or "",
            description=link.description or "",
            date=date or _utcnow(),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NotificationEvent:
        raw_date = data.get("date")
        date = datetime.fromisoformat(raw_date.replace("Z", "+00:00")) if raw_date else _utcnow()
        if date.tzinfo is None:
            date = date.replace(tzinfo=timezone.utc)
        return cls(
            title=data.get("title", ""),
            logo=data.get("logo", ""),
            url=data.get("url", ""),
            description=data.get("description", ""),
            date=date,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "logo": self.logo,
            "url": self.url,
            "description": self.description,
            "date": self.date.isoformat(),
        }


class NotificationLog:
    """Most-recent-first event log capped at ``capacity`` entries.

    Args:
        capacity: Maximum number of events kept; the oldest is dropped first.
        state_path: JSON file holding the persisted events. None disables it.
        feed_path: RSS file regenerated on every persist. None disables it.
        feed: Channel metadata for the RSS file.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        state_path: str | None = None,
        feed_path: str | None = None,
        feed: FeedSettings | None = None,
    ):
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self.state_path = state_path or None
        self.feed_path = feed_path or None
        self.feed = feed or FeedSettings()
        self._events: deque[NotificationEvent] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._events)

    def record(self, event: NotificationEvent) -> None:
        """Prepend ``event``; the oldest entry falls off once the log is full."""
        with self._lock:
            self._events.appendleft(event)

    def events(self) -> list[NotificationEvent]:
        """Return a snapshot of the log, most recent first."""
        with self._lock:
            return list(self._events)

    def persist(self) -> None:
        """Write the JSON state file and regenerate the RSS feed.

        Raises:
            FileIOError: either file could not be written.
        """
        events = self.events()
        if self.state_path:
            payload = [event.to_dict() for event in events[: self.capacity]]
            safe_write(self.state_path, json.dumps(payload, ensure_ascii=False, indent=2))
        if self.feed_path:
            safe_write(self.feed_path, render_rss(events, self.feed))
        logger.debug(f"Persisted {len(events)} notification(s)")

    def load(self) -> None:
        """Replace the in-memory log with the persisted state, if any."""
        if not self.state_path:
            return
        text = read_text(self.state_path)
        if not text:
            return
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise FileIOError(f"Invalid notification state in {self.state_path}: {e}") from e
        if not isinstance(data, list):
            raise FileIOError(f"Invalid notification state in {self.state_path}: expected a list")

        try:
            loaded = [NotificationEvent.from_dict(item) for item in data if isinstance(item, dict)]
        except (TypeError, ValueError, AttributeError) as e:
            raise FileIOError(f"Invalid notification entry in {self.state_path}: {e}") from e
        with self._lock:
            self._events = deque(loaded[: self.capacity], maxlen=self.capacity)
        logger.debug(f"Loaded {len(self._events)} notification(s) from {self.state_path}")
