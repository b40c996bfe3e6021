"""
Abstract base class for document stores.

A store holds the navigation YAML files by name. Every read returns the
document's current revision token; passing that token back on write lets
the backend refuse an overwrite of a newer version. Omitting the token
means "create".
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from navstack.core.exceptions import NavstackError

DOCUMENT_EXTENSIONS = (".yml", ".yaml")


def is_document_name(name: str) -> bool:
    return isinstance(name, str) and name.endswith(DOCUMENT_EXTENSIONS)


@dataclass
class StoredDocument:
    """Text of one document plus the revision it was read at."""

    path: str
    text: str
    revision: str | None = None


class DocumentStore(ABC):
    """Abstract base class for document store backends."""

    @abstractmethod
    async def fetch_document(self, path: str) -> StoredDocument:
        """Load a document. Raises DocumentNotFoundError if it does not exist."""

    @abstractmethod
    async def write_document(
        self,
        path: str,
        text: str,
        revision: str | None = None,
        message: str | None = None,
    ) -> str:
        """Write the full document text and return the new revision token."""

    @abstractmethod
    async def list_document_paths(self) -> list[str]:
        """List document names (``.yml``/``.yaml`` only)."""


class StoreError(NavstackError):
    """Base exception for document store errors."""


class DocumentNotFoundError(StoreError, KeyError):
    """Raised when a document doesn't exist."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Document not found"


class StoreConflictError(StoreError):
    """Raised when the stored revision no longer matches the one being replaced."""


class UpstreamError(StoreError):
    """Raised for any other backend failure."""
