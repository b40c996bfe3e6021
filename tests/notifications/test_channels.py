"""Tests for navstack.notifications.channels."""

from __future__ import annotations

import json
import urllib.error
from unittest.mock import AsyncMock, patch

import pytest

from navstack.core.exceptions import APIError
from navstack.notifications import (
    NotificationDispatcher,
    NotificationEvent,
    TelegramNotifier,
    WebhookNotifier,
    format_chat_message,
)


@pytest.fixture
def event():
    return NotificationEvent(title="A & B", logo="https://a.com/l.png", url="https://a.com", description="<demo>")


class _DummyResp:
    def read(self):
        return b"ok"

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class _RecordingNotifier:
    def __init__(self, name, enabled=True, fail=False):
        self.name = name
        self.enabled = enabled
        self.fail = fail
        self.sent: list[NotificationEvent] = []

    async def send(self, event):
        if self.fail:
            raise RuntimeError("channel down")
        self.sent.append(event)


class TestFormatChatMessage:
    def test_escapes_html(self, event):
        text = format_chat_message(event, "https://nav.site")
        assert text.startswith("<b>")
        assert "Name: A &amp; B" in text
        assert "Description: &lt;demo&gt;" in text
        assert text.endswith("Open navigation: https://nav.site")

    def test_without_navigation_url(self, event):
        assert "Open navigation" not in format_chat_message(event)


class TestTelegramNotifier:
    def test_disabled_without_credentials(self):
        assert not TelegramNotifier(bot_token="t").enabled
        assert not TelegramNotifier(chat_id="1").enabled
        assert TelegramNotifier(bot_token="t", chat_id="1").enabled

    @pytest.mark.asyncio
    async def test_send_uses_bot(self, event):
        bot = AsyncMock()
        with patch("navstack.notifications.channels.Bot") as bot_cls:
            bot_cls.return_value.__aenter__.return_value = bot
            await TelegramNotifier(bot_token="tkn", chat_id="42").send(event)

        bot_cls.assert_called_once_with("tkn")
        kwargs = bot.send_message.call_args.kwargs
        assert kwargs["chat_id"] == "42"
        assert kwargs["parse_mode"] == "HTML"
        assert "A &amp; B" in kwargs["text"]

    @pytest.mark.asyncio
    async def test_unconfigured_send_is_noop(self, event):
        with patch("navstack.notifications.channels.Bot") as bot_cls:
            await TelegramNotifier().send(event)
        bot_cls.assert_not_called()


class TestWebhookNotifier:
    def test_payload_keeps_wire_field_names(self, event):
        payload = WebhookNotifier(url="https://hook", navigation_url="https://nav").build_payload(event)
        assert payload == {
            "title": "A & B",
            "logo": "https://a.com/l.png",
            "url": "https://a.com",
            "description": "<demo>",
            "navigation_url": "https://nav",
        }

    @pytest.mark.asyncio
    @patch("navstack.notifications.channels.urllib.request.urlopen")
    async def test_send_posts_json(self, mock_urlopen, event):
        mock_urlopen.return_value = _DummyResp()

        await WebhookNotifier(url="https://hook.example/x").send(event)

        req = mock_urlopen.call_args[0][0]
        assert req.get_method() == "POST"
        assert req.full_url == "https://hook.example/x"
        assert json.loads(req.data)["title"] == "A & B"

    @pytest.mark.asyncio
    @patch("navstack.notifications.channels.urllib.request.urlopen")
    async def test_http_error_raises_api_error(self, mock_urlopen, event):
        mock_urlopen.side_effect = urllib.error.URLError("refused")

        with pytest.raises(APIError):
            await WebhookNotifier(url="https://hook.example/x").send(event)


class TestDispatcher:
    @pytest.mark.asyncio
    async def test_failures_are_swallowed(self, event):
        broken = _RecordingNotifier("broken", fail=True)
        working = _RecordingNotifier("working")

        delivered = await NotificationDispatcher([broken, working]).dispatch(event)

        assert delivered == ["working"]
        assert working.sent == [event]

    @pytest.mark.asyncio
    async def test_disabled_channels_skipped(self, event):
        off = _RecordingNotifier("off", enabled=False)
        assert await NotificationDispatcher([off]).dispatch(event) == []
        assert off.sent == []
