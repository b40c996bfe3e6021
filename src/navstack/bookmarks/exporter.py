"""Flatten navigation documents into a Netscape bookmark file.

Categories and terms become folder headings and links become bookmarks,
in strict document -> category -> term -> link order. The whole file is
rendered in memory before anything touches the disk.
"""

from __future__ import annotations

import os
import time
from collections.abc import Iterable
from dataclasses import dataclass
from html import escape
from typing import Any

from loguru import logger

from navstack.core.exceptions import DocumentFormatError, ExportError
from navstack.core.utils.file_io import safe_write
from navstack.store.base import DocumentStore, StoreError
from navstack.taxonomy.document import parse
from navstack.taxonomy.models import Document, LinkEntry

DEFAULT_FILE_NAME = "bookmarks.html"
DEFAULT_TITLE = "Navigation Bookmarks"


def _text(value: Any) -> str:
    """YAML scalars such as ``taxonomy: 2024`` arrive as numbers."""
    return "" if value is None else str(value)


@dataclass
class BookmarkItem:
    """A folder heading (``is_header``) or a leaf bookmark."""

    title: str
    url: str = ""
    is_header: bool = False

    @classmethod
    def header(cls, title: Any) -> BookmarkItem:
        return cls(title=_text(title), is_header=True)

    @classmethod
    def leaf(cls, link: LinkEntry) -> BookmarkItem:
        return cls(title=_text(link.title), url=_text(link.url))


def export(documents: Iterable[Document]) -> list[BookmarkItem]:
    """Flatten documents into bookmark items without reordering anything."""
    items: list[BookmarkItem] = []
    for doc in documents:
        for category in doc:
            if category.taxonomy:
                items.append(BookmarkItem.header(category.taxonomy))
            items.extend(BookmarkItem.leaf(link) for link in category.links or [])
            for term in category.terms or []:
                if term.term:
                    items.append(BookmarkItem.header(term.term))
                items.extend(BookmarkItem.leaf(link) for link in term.links or [])
    return items


def render(
    items: Iterable[BookmarkItem],
    title: str = DEFAULT_TITLE,
    heading: str = DEFAULT_TITLE,
    add_date: int | None = None,
) -> str:
    """Render items as a Netscape bookmark file, one line per item."""
    stamp = int(time.time()) if add_date is None else add_date
    lines = [
        "<!DOCTYPE NETSCAPE-Bookmark-file-1>",
        '<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">',
        f"<TITLE>{escape(title, quote=False)}</TITLE>",
        f"<H1>{escape(heading, quote=False)}</H1>",
        "<DL><p>",
    ]
    for item in items:
        if item.is_header:
            lines.append(f'    <DT><H3 ADD_DATE="{stamp}">{escape(item.title, quote=False)}</H3>')
        else:
            lines.append(f'    <DT><A HREF="{escape(item.url)}">{escape(item.title, quote=False)}</A>')
    lines.append("</DL><p>")
    return "\n".join(lines) + "\n"


class BookmarkExporter:
    """Build the bookmark file from every document in a store.

    Args:
        store: Where the navigation documents are read from.
        output_dir: Directory receiving the bookmark file.
        file_name: Name of the bookmark file inside ``output_dir``.
        title: ``<TITLE>`` of the generated file.
        heading: ``<H1>`` of the generated file.
    """

    def __init__(
        self,
        store: DocumentStore,
        output_dir: str,
        file_name: str = DEFAULT_FILE_NAME,
        title: str = DEFAULT_TITLE,
        heading: str = DEFAULT_TITLE,
    ):
        self.store = store
        self.output_dir = os.path.expanduser(output_dir)
        self.file_name = file_name or DEFAULT_FILE_NAME
        self.title = title or DEFAULT_TITLE
        self.heading = heading or self.title

    @property
    def output_path(self) -> str:
        return os.path.join(self.output_dir, self.file_name)

    async def load_documents(self) -> list[Document]:
        """Fetch and parse every document, in name order."""
        try:
            names = sorted(await self.store.list_document_paths())
            documents = []
            for name in names:
                stored = await self.store.fetch_document(name)
                documents.append(parse(stored.text))
        except (StoreError, DocumentFormatError) as e:
            raise ExportError(f"Bookmark export aborted: {e}") from e
        return documents

    async def export_file(self) -> str:
        """Regenerate the bookmark file and return its path."""
        documents = await self.load_documents()
        items = export(documents)
        content = render(items, self.title, self.heading)
        safe_write(self.output_path, content)
        logger.info(f"Exported {len(items)} bookmark item(s) from {len(documents)} document(s) to {self.output_path}")
        return self.output_path
