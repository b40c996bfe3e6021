"""
Local directory document store.

Reads the same YAML files a static site build uses (for bookmark export)
and serves as a drop-in backend for development. The revision token is the
SHA-1 of the file content, mirroring the remote store's semantics.
"""

import hashlib
import os
from pathlib import Path

import aiofiles
import aiofiles.os
from loguru import logger

from .base import (
    DocumentNotFoundError,
    DocumentStore,
    StoredDocument,
    StoreConflictError,
    UpstreamError,
    is_document_name,
)


def content_revision(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


class LocalDocumentStore(DocumentStore):
    """Documents stored as files directly inside ``base_path``."""

    def __init__(self, base_path: str):
        self.base_path = Path(base_path).expanduser().resolve()

    def _get_full_path(self, name: str) -> Path:
        """Resolve a document name to a file directly under ``base_path``."""
        raw = name.strip()
        if not raw or "\x00" in raw or "/" in raw or "\\" in raw or raw in (".", ".."):
            raise UpstreamError(f"Invalid document name: '{name}'")
        return self.base_path / raw

    async def fetch_document(self, path: str) -> StoredDocument:
        full_path = self._get_full_path(path)
        if not full_path.is_file():
            raise DocumentNotFoundError(f"Document not found: {path}")
        try:
            async with aiofiles.open(full_path, encoding="utf-8") as f:
                text = await f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {full_path}: {e}")
            raise UpstreamError(f"Cannot read {full_path}: {e}") from e
        return StoredDocument(path=path, text=text, revision=content_revision(text))

    async def write_document(
        self,
        path: str,
        text: str,
        revision: str | None = None,
        message: str | None = None,
    ) -> str:
        full_path = self._get_full_path(path)

        if full_path.exists():
            async with aiofiles.open(full_path, encoding="utf-8") as f:
                current = content_revision(await f.read())
            if revision != current:
                raise StoreConflictError(f"{path} changed since revision {revision}")
        elif revision is not None:
            raise StoreConflictError(f"{path} was removed since revision {revision}")

        try:
            await aiofiles.os.makedirs(self.base_path, exist_ok=True)
            async with aiofiles.open(full_path, "w", encoding="utf-8") as f:
                await f.write(text)
        except OSError as e:
            logger.error(f"Failed to write {full_path}: {e}")
            raise UpstreamError(f"Cannot write {full_path}: {e}") from e

        logger.debug(f"Wrote {full_path}{f' ({message})' if message else ''}")
        return content_revision(text)

    async def list_document_paths(self) -> list[str]:
        if not self.base_path.is_dir():
            raise UpstreamError(f"Data directory not found: {self.base_path}")
        names = await aiofiles.os.listdir(self.base_path)
        return sorted(n for n in names if is_document_name(n) and os.path.isfile(self.base_path / n))
