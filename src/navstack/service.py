"""Request-level operations over the navigation data.

Every mutating call is one read-modify-write cycle: fetch the document
fresh, mutate it in memory, write the whole file back with the revision it
was read at, then record and announce the change. There is no lock and no
retry around the cycle; two concurrent writers can race and the later
write wins. A conflict reported by the store is surfaced, not retried.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from navstack.bookmarks.exporter import BookmarkExporter
from navstack.core.exceptions import ConfigurationError, FileIOError, LinkNotFoundError, MissingFieldError
from navstack.notifications.channels import NotificationDispatcher
from navstack.notifications.log import NotificationEvent, NotificationLog
from navstack.store.base import DocumentNotFoundError, DocumentStore, StoredDocument
from navstack.taxonomy import document as taxonomy
from navstack.taxonomy.models import Document, LinkEntry

NO_UPDATES = {"message": "No updates yet"}


def _require(**values: Any) -> None:
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise MissingFieldError(missing)


def recent_updates(log: NotificationLog) -> list[dict[str, Any]] | dict[str, str]:
    """The updates log as plain dicts, or :data:`NO_UPDATES` when empty."""
    events = log.events()
    if not events:
        return dict(NO_UPDATES)
    return [event.to_dict() for event in events]


class NavigationService:
    """Link CRUD, search, recent updates and bookmark export.

    Args:
        store: Backend holding the navigation documents.
        notification_log: Recent-updates log; a fresh empty one by default.
        dispatcher: Outbound channels announcing added links.
        exporter: Bookmark exporter used by :meth:`export_bookmarks`.
    """

    def __init__(
        self,
        store: DocumentStore,
        notification_log: NotificationLog | None = None,
        dispatcher: NotificationDispatcher | None = None,
        exporter: BookmarkExporter | None = None,
    ):
        self.store = store
        self.notification_log = notification_log if notification_log is not None else NotificationLog()
        self.dispatcher = dispatcher if dispatcher is not None else NotificationDispatcher()
        self.exporter = exporter

    # ── Reads ──────────────────────────────────────────────────────

    async def list_documents(self) -> list[str]:
        return await self.store.list_document_paths()

    async def read_document(self, filename: str) -> str:
        _require(filename=filename)
        stored = await self.store.fetch_document(filename)
        return stored.text

    async def _load(self, filename: str) -> tuple[StoredDocument, Document]:
        stored = await self.store.fetch_document(filename)
        return stored, taxonomy.parse(stored.text)

    async def search(self, filename: str, keyword: str) -> list[LinkEntry]:
        """Links in one document whose title or description contains ``keyword``."""
        _require(keyword=keyword, filename=filename)
        _, doc = await self._load(filename)
        results = taxonomy.find_links(doc, keyword)
        logger.debug(f"Search '{keyword}' in {filename}: {len(results)} hit(s)")
        return results

    def recent_updates(self) -> list[dict[str, Any]] | dict[str, str]:
        return recent_updates(self.notification_log)

    # ── Mutations ──────────────────────────────────────────────────

    async def add_link(
        self,
        filename: str,
        taxonomy_name: str,
        entry: LinkEntry,
        term: str | None = None,
        icon: str | None = None,
    ) -> NotificationEvent:
        """Append a link and announce it.

        A document that does not exist yet is created.
        """
        missing = entry.missing_fields()
        if missing:
            raise MissingFieldError(missing)
        _require(filename=filename, taxonomy=taxonomy_name)

        try:
            stored, doc = await self._load(filename)
            revision = stored.revision
        except DocumentNotFoundError:
            logger.info(f"{filename} does not exist yet, creating it")
            doc, revision = [], None

        taxonomy.insert_link(doc, taxonomy_name, entry, term=term, icon=icon)
        await self.store.write_document(filename, taxonomy.serialize(doc), revision=revision)
        logger.info(f"Added '{entry.title}' to {filename} under {taxonomy_name}{f' / {term}' if term else ''}")

        event = NotificationEvent.from_link(entry)
        self.notification_log.record(event)
        self._persist_log()
        await self.dispatcher.dispatch(event)
        return event

    async def update_link(self, filename: str, title: str, patch: dict[str, Any]) -> int:
        """Merge ``patch`` into every link titled ``title``; returns the match count."""
        _require(filename=filename, title=title, updated_data=patch)
        stored, doc = await self._load(filename)

        matched = taxonomy.update_link(doc, title, patch)
        if not matched:
            raise LinkNotFoundError(title, filename)

        await self.store.write_document(filename, taxonomy.serialize(doc), revision=stored.revision)
        logger.info(f"Updated {matched} link(s) titled '{title}' in {filename}")
        return matched

    async def delete_link(self, filename: str, title: str) -> int:
        """Remove every link titled ``title``; returns the number removed."""
        _require(filename=filename, title=title)
        stored, doc = await self._load(filename)

        deleted = taxonomy.delete_link(doc, title)
        if not deleted:
            raise LinkNotFoundError(title, filename)

        await self.store.write_document(filename, taxonomy.serialize(doc), revision=stored.revision)
        logger.info(f"Deleted {deleted} link(s) titled '{title}' from {filename}")
        return deleted

    # ── Export ─────────────────────────────────────────────────────

    async def export_bookmarks(self) -> str:
        """Regenerate the bookmark file; returns its path."""
        if self.exporter is None:
            raise ConfigurationError("No bookmark exporter configured")
        return await self.exporter.export_file()

    def _persist_log(self) -> None:
        try:
            self.notification_log.persist()
        except FileIOError as e:
            logger.error(f"Could not persist notification log: {e}")
