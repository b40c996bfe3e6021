"""
Hierarchical configuration management.

Loads configuration from multiple sources with this precedence (highest wins):
    1. Environment variables (NAVSTACK_SECTION__KEY)
    2. Unprefixed deployment variables (GITHUB_TOKEN, ...)
    3. Config file (YAML or JSON)
    4. Built-in defaults

Usage:
    config = Config(config_file="navstack.yaml")

    config.get("github.repo")          # dot-notation access
    config.get("paths.state_file")     # returns resolved path
"""

import json
import os
from typing import Any

import yaml

_DEFAULT_ENV_PREFIX = "NAVSTACK_"
_DEFAULT_DATA_DIR_NAME = ".navstack-data"

# Unprefixed variable names, kept so existing
# docker-compose files keep working.
LEGACY_ENV_KEYS: dict[str, str] = {
    "GITHUB_TOKEN": "github.token",
    "GITHUB_REPO": "github.repo",
    "GITHUB_BRANCH": "github.branch",
    "DATA_DIR": "github.data_dir",
    "TELEGRAM_BOT_TOKEN": "telegram.bot_token",
    "TELEGRAM_CHAT_ID": "telegram.chat_id",
    "NAVIGATION_URL": "site.navigation_url",
    "WEBHOOK_URL": "webhook.url",
    "STORAGE_FILE_PATH": "paths.state_file",
    "RSS_FILE_PATH": "paths.feed_file",
    "RSS_TITLE": "feed.title",
    "RSS_LINK": "feed.link",
    "RSS_DESCRIPTION": "feed.description",
    "BOOKMARKS_OUTPUT_DIR": "bookmarks.output_dir",
    "BOOKMARKS_TITLE": "bookmarks.title",
    "BOOKMARKS_H1": "bookmarks.heading",
}


class Config:
    """
    Central configuration manager.

    Loads and merges configuration from defaults, a config file, and
    environment variables. Env vars use double-underscore to denote nesting:
    NAVSTACK_GITHUB__REPO=me/site -> config["github"]["repo"] = "me/site"
    """

    def __init__(
        self,
        config_file: str | None = None,
        env_prefix: str = _DEFAULT_ENV_PREFIX,
        data_dir: str | None = None,
        defaults: dict[str, Any] | None = None,
        legacy_env: bool = True,
    ):
        """
        Args:
            config_file: Path to YAML or JSON configuration file.
            env_prefix: Prefix for environment variable overrides.
            data_dir: Base directory for local state. Defaults to ~/.navstack-data.
            defaults: Additional default values to merge.
            legacy_env: Also read the unprefixed deployment variable names.
        """
        self.config_file = config_file
        self.env_prefix = env_prefix or ""
        self.legacy_env = legacy_env
        self._data_dir = data_dir or os.path.join("~", _DEFAULT_DATA_DIR_NAME)
        self._extra_defaults = defaults or {}
        self.config_data: dict[str, Any] = {}

        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from all sources."""
        self.config_data = self._get_default_config()

        if self._extra_defaults:
            self._update_dict(self.config_data, self._extra_defaults)

        if self.config_file and os.path.exists(self.config_file):
            file_config = self._load_file(self.config_file)
            self._update_dict(self.config_data, file_config)

        if self.legacy_env:
            self._load_from_legacy_env()
        # Prefixed env vars override everything
        self._load_from_env()

    def _get_default_config(self) -> dict[str, Any]:
        data_dir = os.path.expanduser(self._data_dir)
        static_dir = os.path.join(data_dir, "static")
        return {
            "paths": {
                "data_dir": os.path.join(data_dir, "data"),
                "state_file": os.path.join(data_dir, "notifications.json"),
                "feed_file": os.path.join(static_dir, "rss.xml"),
            },
            "github": {
                "token": "",
                "repo": "",
                "branch": "main",
                "data_dir": "data/",
                "api_base": "https://api.github.com",
            },
            "telegram": {
                "bot_token": "",
                "chat_id": "",
            },
            "webhook": {
                "url": "",
            },
            "site": {
                "navigation_url": "",
            },
            "feed": {
                "title": "Navigation updates",
                "link": "",
                "description": "Recently added links",
                "timezone": "UTC",
            },
            "bookmarks": {
                "output_dir": os.path.join(static_dir, "bookmarks"),
                "file_name": "bookmarks.html",
                "title": "Navigation Bookmarks",
                "heading": "Navigation Bookmarks",
            },
            "logging": {
                "level": "WARNING",
                "file": "",
            },
        }

    @staticmethod
    def _load_file(path: str) -> dict[str, Any]:
        """Load a YAML or JSON config file."""
        ext = os.path.splitext(path)[1].lower()
        with open(path) as f:
            if ext in (".yaml", ".yml"):
                return yaml.safe_load(f) or {}
            elif ext == ".json":
                return json.load(f)
        return {}

    def _update_dict(self, target: dict, source: dict) -> None:
        """Recursively merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._update_dict(target[key], value)
            else:
                target[key] = value

    def _load_from_legacy_env(self) -> None:
        for env_key, key_path in LEGACY_ENV_KEYS.items():
            value = os.environ.get(env_key)
            if value:
                self.set(key_path, value)

    def _load_from_env(self) -> None:
        """Override config values from environment variables."""
        if not self.env_prefix:
            return
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(self.env_prefix):
                continue
            config_key = env_key[len(self.env_prefix) :].lower()
            key_parts = config_key.split("__")

            current = self.config_data
            for part in key_parts[:-1]:
                if part not in current:
                    current[part] = {}
                current = current[part]
            current[key_parts[-1]] = env_value

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dot-notation path.

        Args:
            key_path: e.g. "github.repo", "paths.feed_file"
            default: Returned when key is not found.
        """
        parts = key_path.split(".")
        current = self.config_data
        for part in parts:
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def set(self, key_path: str, value: Any) -> None:
        """Set a config value by dot-notation path, creating intermediate dicts."""
        parts = key_path.split(".")
        current = self.config_data
        for part in parts[:-1]:
            if part not in current:
                current[part] = {}
            current = current[part]
        current[parts[-1]] = value

    def get_path(self, key_path: str) -> str:
        """Return a configured path with ``~`` expanded, or "" when unset."""
        value = self.get(key_path) or ""
        return os.path.expanduser(str(value)) if value else ""
