"""
Document stores for navstack.

Provides the async DocumentStore interface with a GitHub contents-API
backend and a local directory backend.
"""

from .base import (
    DOCUMENT_EXTENSIONS,
    DocumentNotFoundError,
    DocumentStore,
    StoreConflictError,
    StoredDocument,
    StoreError,
    UpstreamError,
    is_document_name,
)
from .github import GitHubClient, GitHubDocumentStore
from .local import LocalDocumentStore

__all__ = [
    "DOCUMENT_EXTENSIONS",
    "DocumentNotFoundError",
    "DocumentStore",
    "GitHubClient",
    "GitHubDocumentStore",
    "LocalDocumentStore",
    "StoreConflictError",
    "StoreError",
    "StoredDocument",
    "UpstreamError",
    "is_document_name",
]
