"""Outbound notification channels.

Both channels are best-effort: an unconfigured channel is skipped, and
:class:`NotificationDispatcher` logs and swallows delivery failures so a
committed document write is never reported as failed.
"""

from __future__ import annotations

import asyncio
import json
import urllib.error
import urllib.request
from html import escape as html_escape
from typing import Any, Protocol

from loguru import logger
from telegram import Bot

from navstack.core.exceptions import APIError

from .log import NotificationEvent

TELEGRAM_HEADLINE = "New link added to the navigation site!"


class Notifier(Protocol):
    name: str

    @property
    def enabled(self) -> bool: ...

    async def send(self, event: NotificationEvent) -> None: ...


def format_chat_message(event: NotificationEvent, navigation_url: str = "") -> str:
    """Build the Telegram HTML message for an added link."""
    lines = [
        f"<b>{html_escape(TELEGRAM_HEADLINE)}</b>",
        f"Name: {html_escape(event.title)}",
        f"Logo: {html_escape(event.logo)}",
        f"URL: {html_escape(event.url)}",
        f"Description: {html_escape(event.description)}",
    ]
    if navigation_url:
        lines.append(f"Open navigation: {html_escape(navigation_url)}")
    return "\n".join(lines)


class TelegramNotifier:
    """Post a message to one chat through a Telegram bot."""

    name = "telegram"

    def __init__(self, bot_token: str = "", chat_id: str | int = "", navigation_url: str = ""):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.navigation_url = navigation_url

    @property
    def enabled(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    async def send(self, event: NotificationEvent) -> None:
        if not self.enabled:
            return
        text = format_chat_message(event, self.navigation_url)
        async with Bot(self.bot_token) as bot:
            await bot.send_message(chat_id=self.chat_id, text=text, parse_mode="HTML")


class WebhookNotifier:
    """POST a JSON payload describing the added link to a URL."""

    name = "webhook"

    def __init__(self, url: str = "", navigation_url: str = "", timeout: int = 10):
        self.url = url
        self.navigation_url = navigation_url
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    def build_payload(self, event: NotificationEvent) -> dict[str, Any]:
        return {
            "title": event.title,
            "logo": event.logo,
            "url": event.url,
            "description": event.description,
            "navigation_url": self.navigation_url,
        }

    def _post(self, payload: dict[str, Any]) -> None:
        data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        req = urllib.request.Request(
            url=self.url,
            data=data,
            method="POST",
            headers={"Content-Type": "application/json"},
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                resp.read()
        except urllib.error.HTTPError as e:
            raise APIError(f"Webhook {e.code}: {e.reason}", status=e.code) from e
        except urllib.error.URLError as e:
            raise APIError(f"Webhook request failed: {e}") from e

    async def send(self, event: NotificationEvent) -> None:
        if not self.enabled:
            return
        await asyncio.to_thread(self._post, self.build_payload(event))


class NotificationDispatcher:
    """Send an event to every configured channel, one after another."""

    def __init__(self, notifiers: list[Notifier] | None = None):
        self.notifiers = list(notifiers or [])

    async def dispatch(self, event: NotificationEvent) -> list[str]:
        """Deliver ``event``; returns the names of channels that succeeded."""
        delivered: list[str] = []
        for notifier in self.notifiers:
            if not notifier.enabled:
                continue
            try:
                await notifier.send(event)
            except Exception as e:
                logger.warning(f"{notifier.name} notification failed for '{event.title}': {e}")
                continue
            delivered.append(notifier.name)
        return delivered
