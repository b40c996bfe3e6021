"""Parse, serialize and mutate navigation documents.

All mutations work in place on a parsed :data:`Document`. Insert looks up
the first category/term with an exactly equal name; update, delete and
search visit every link list, so duplicated categories or terms in a
hand-edited file are still fully covered.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import yaml

from navstack.core.exceptions import DocumentFormatError, MissingFieldError

from .models import CategoryNode, Document, LinkEntry, TermNode

DOCUMENT_MARKER = "---\n"


class _NoAliasDumper(yaml.SafeDumper):
    """Never emit ``&id001`` anchors for repeated objects."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def parse(text: str | None) -> Document:
    """Deserialize YAML text into a list of categories.

    Empty or null input yields an empty document.
    """
    if not text:
        return []
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentFormatError(f"Invalid YAML: {e}") from e
    if data is None:
        return []
    if not isinstance(data, list):
        raise DocumentFormatError(f"Expected a list of categories, got {type(data).__name__}")
    return [CategoryNode.from_dict(item) for item in data]


def serialize(doc: Document) -> str:
    """Emit the document as YAML with a leading ``---`` marker."""
    data = [category.to_dict() for category in doc]
    body = yaml.dump(
        data,
        Dumper=_NoAliasDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=float("inf"),
    )
    return DOCUMENT_MARKER + body


def iter_link_lists(doc: Document) -> Iterator[list[LinkEntry]]:
    """Yield every link list: each category's own links, then its terms' links."""
    for category in doc:
        if category.links is not None:
            yield category.links
        for term in category.terms or []:
            if term.links is not None:
                yield term.links


def _find_category(doc: Document, taxonomy: str) -> CategoryNode | None:
    return next((c for c in doc if c.taxonomy == taxonomy), None)


def _find_term(category: CategoryNode, term: str) -> TermNode | None:
    return next((t for t in category.terms or [] if t.term == term), None)


def insert_link(
    doc: Document,
    taxonomy: str,
    entry: LinkEntry,
    term: str | None = None,
    icon: str | None = None,
) -> Document:
    """Append ``entry`` under ``taxonomy`` (and ``term`` when given).

    Missing categories and terms are created at the end of their list.
    ``icon`` is only used when a new category is created.

    Raises:
        MissingFieldError: title, url, logo or description is missing or
            empty. Nothing is modified in that case.
    """
    missing = entry.missing_fields()
    if missing:
        raise MissingFieldError(missing)

    category = _find_category(doc, taxonomy)
    if category is None:
        category = CategoryNode(taxonomy=taxonomy, icon=icon or None)
        doc.append(category)

    if term:
        if category.terms is None:
            category.terms = []
        node = _find_term(category, term)
        if node is None:
            node = TermNode(term=term)
            category.terms.append(node)
        if node.links is None:
            node.links = []
        node.links.append(entry)
    else:
        if category.links is None:
            category.links = []
        category.links.append(entry)

    return doc


def update_link(doc: Document, title: str, patch: dict[str, Any]) -> int:
    """Merge ``patch`` into every link titled ``title``. Returns the match count."""
    matched = 0
    for links in iter_link_lists(doc):
        for link in links:
            if link.title == title:
                link.merge(patch)
                matched += 1
    return matched


def delete_link(doc: Document, title: str) -> int:
    """Remove every link titled ``title``. Returns the number removed."""
    deleted = 0
    for links in iter_link_lists(doc):
        kept = [link for link in links if link.title != title]
        deleted += len(links) - len(kept)
        links[:] = kept
    return deleted


def find_links(doc: Document, keyword: str) -> list[LinkEntry]:
    """Return links whose title or description contains ``keyword``, in document order."""
    return [link for links in iter_link_lists(doc) for link in links if link.matches(keyword)]
