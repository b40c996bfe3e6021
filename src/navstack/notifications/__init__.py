"""Recent-updates log, RSS feed and outbound notification channels."""

from .channels import NotificationDispatcher, TelegramNotifier, WebhookNotifier, format_chat_message
from .feed import FeedSettings, render_rss
from .log import DEFAULT_CAPACITY, NotificationEvent, NotificationLog

__all__ = [
    "DEFAULT_CAPACITY",
    "FeedSettings",
    "NotificationDispatcher",
    "NotificationEvent",
    "NotificationLog",
    "TelegramNotifier",
    "WebhookNotifier",
    "format_chat_message",
    "render_rss",
]
