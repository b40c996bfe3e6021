"""Shared setup logic for CLI commands."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Coroutine
from typing import Any, TypeVar

import click

from navstack.core.config import Config
from navstack.core.exceptions import ConfigurationError, NavstackError

T = TypeVar("T")


def load_config(config_file: str | None = None) -> Config:
    return Config(config_file=config_file)


def build_store(config: Config, local: bool = False):
    """Return the GitHub store, or the local data directory store when ``local``."""
    if local:
        from navstack.store.local import LocalDocumentStore

        return LocalDocumentStore(config.get_path("paths.data_dir"))

    from navstack.store.github import GitHubDocumentStore

    token = config.get("github.token", "")
    repo = config.get("github.repo", "")
    if not token or not repo:
        raise ConfigurationError("Set github.token and github.repo (GITHUB_TOKEN / GITHUB_REPO) first.")
    return GitHubDocumentStore(
        repo=repo,
        token=token,
        branch=config.get("github.branch", "main"),
        data_dir=config.get("github.data_dir", "data/"),
        api_base=config.get("github.api_base", "https://api.github.com"),
    )


def build_notification_log(config: Config):
    from navstack.notifications.feed import FeedSettings
    from navstack.notifications.log import NotificationLog

    log = NotificationLog(
        state_path=config.get_path("paths.state_file"),
        feed_path=config.get_path("paths.feed_file"),
        feed=FeedSettings(
            title=config.get("feed.title", ""),
            link=config.get("feed.link", ""),
            description=config.get("feed.description", ""),
            timezone=config.get("feed.timezone", "UTC"),
        ),
    )
    log.load()
    return log


def build_service(config: Config, local: bool = False, export_local: bool = True):
    """Wire a NavigationService from config.

    Args:
        config: Loaded configuration.
        local: Serve documents from ``paths.data_dir`` instead of GitHub.
        export_local: Build bookmarks from ``paths.data_dir`` even when
            documents are otherwise served from GitHub.
    """
    from navstack.bookmarks.exporter import BookmarkExporter
    from navstack.notifications.channels import NotificationDispatcher, TelegramNotifier, WebhookNotifier
    from navstack.service import NavigationService

    store = build_store(config, local=local)
    navigation_url = config.get("site.navigation_url", "")
    dispatcher = NotificationDispatcher(
        [
            TelegramNotifier(
                bot_token=config.get("telegram.bot_token", ""),
                chat_id=config.get("telegram.chat_id", ""),
                navigation_url=navigation_url,
            ),
            WebhookNotifier(url=config.get("webhook.url", ""), navigation_url=navigation_url),
        ]
    )
    exporter = BookmarkExporter(
        store=build_store(config, local=True) if export_local else store,
        output_dir=config.get_path("bookmarks.output_dir"),
        file_name=config.get("bookmarks.file_name", "bookmarks.html"),
        title=config.get("bookmarks.title", ""),
        heading=config.get("bookmarks.heading", ""),
    )
    return NavigationService(
        store=store,
        notification_log=build_notification_log(config),
        dispatcher=dispatcher,
        exporter=exporter,
    )


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a service coroutine, turning navstack errors into CLI errors."""
    try:
        return asyncio.run(coro)
    except NavstackError as e:
        raise click.ClickException(str(e)) from e


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, ensure_ascii=False, indent=2))


def get_config_from_ctx(ctx: click.Context) -> Config:
    return (ctx.find_root().obj or {}).get("config") or load_config()


def get_service(ctx: click.Context, local: bool | None = None, export_local: bool = True):
    """Build the service for the current invocation from the group's options."""
    opts = ctx.find_root().obj or {}
    if local is None:
        local = opts.get("local", False)
    try:
        return build_service(get_config_from_ctx(ctx), local=local, export_local=export_local)
    except NavstackError as e:
        raise click.ClickException(str(e)) from e
