"""Navigation document model: categories, terms and links.

Provides the node types plus parse/serialize and the in-place mutation
operations used by the service layer.
"""

from .document import (
    delete_link,
    find_links,
    insert_link,
    iter_link_lists,
    parse,
    serialize,
    update_link,
)
from .models import CategoryNode, Document, LinkEntry, TermNode

__all__ = [
    "CategoryNode",
    "Document",
    "LinkEntry",
    "TermNode",
    "delete_link",
    "find_links",
    "insert_link",
    "iter_link_lists",
    "parse",
    "serialize",
    "update_link",
]
