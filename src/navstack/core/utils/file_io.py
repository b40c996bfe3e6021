"""File helpers for generated artifacts (notification state, feed, bookmarks)."""

from __future__ import annotations

import os

from loguru import logger

from navstack.core.exceptions import FileIOError


def safe_write(filepath: str, content: str, mode: str = "w", encoding: str = "utf-8") -> None:
    """Write content to a file, creating parent directories as needed.

    The content is written to a sibling temp file first and then moved over
    the target, so readers never observe a half-written file.
    """
    directory = os.path.dirname(filepath) or "."
    tmp_path = f"{filepath}.tmp"
    try:
        os.makedirs(directory, exist_ok=True)
        with open(tmp_path, mode, encoding=encoding) as f:
            f.write(content)
        os.replace(tmp_path, filepath)
    except OSError as e:
        logger.error(f"Could not write {filepath}: {e}")
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise FileIOError(f"Cannot write {filepath}: {e}") from e


def read_text(filepath: str, encoding: str = "utf-8") -> str | None:
    """Return the file's text, or None when it does not exist."""
    if not os.path.exists(filepath):
        return None
    try:
        with open(filepath, encoding=encoding) as f:
            return f.read()
    except OSError as e:
        raise FileIOError(f"Cannot read {filepath}: {e}") from e
