"""GitHub contents-API document store.

Documents live under ``data_dir`` of one branch of a repository. Reads use
the contents endpoint so the file's blob ``sha`` comes back with the text;
that ``sha`` is the revision token required to overwrite the file.

Uses the standard library HTTP client; blocking calls run in a worker
thread so the store can be awaited like the other backends.
"""

from __future__ import annotations

import asyncio
import base64
import json
import urllib.error
import urllib.parse
import urllib.request
from typing import Any

from loguru import logger

from navstack.core.exceptions import APIError

from .base import (
    DocumentNotFoundError,
    DocumentStore,
    StoredDocument,
    StoreConflictError,
    UpstreamError,
    is_document_name,
)

DEFAULT_API_BASE = "https://api.github.com"


class GitHubClient:
    """Minimal GitHub REST client with token auth."""

    def __init__(self, token: str, timeout: int = 20, api_base: str = DEFAULT_API_BASE):
        if not token:
            raise ValueError("token is required")
        self.token = token
        self.timeout = timeout
        self.api_base = api_base.rstrip("/")

    def request(
        self,
        method: str,
        path: str,
        *,
        query: dict[str, Any] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self.api_base}/{path.lstrip('/')}"
        if query:
            url = f"{url}?{urllib.parse.urlencode(query)}"

        headers = {
            "Authorization": f"token {self.token}",
            "Accept": "application/vnd.github.v3+json",
        }
        data = None
        if payload is not None:
            headers["Content-Type"] = "application/json"
            data = json.dumps(payload).encode("utf-8")

        req = urllib.request.Request(url=url, data=data, method=method.upper(), headers=headers)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", errors="ignore") if hasattr(e, "read") else ""
            raise APIError(f"GitHub API {e.code}: {body or e.reason}", status=e.code) from e
        except urllib.error.URLError as e:
            raise APIError(f"GitHub API request failed: {e}") from e

        if not raw:
            return {}
        return json.loads(raw.decode("utf-8", errors="ignore"))


class GitHubDocumentStore(DocumentStore):
    """Navigation documents stored in a GitHub repository."""

    def __init__(
        self,
        repo: str,
        token: str,
        branch: str = "main",
        data_dir: str = "data/",
        client: GitHubClient | None = None,
        api_base: str = DEFAULT_API_BASE,
    ):
        if not repo:
            raise ValueError("repo is required")
        self.repo = repo
        self.branch = branch
        self.data_dir = data_dir.strip("/")
        self.client = client or GitHubClient(token, api_base=api_base)

    def _contents_path(self, name: str = "") -> str:
        parts = [p for p in (self.data_dir, name.lstrip("/")) if p]
        quoted = urllib.parse.quote("/".join(parts))
        return f"/repos/{self.repo}/contents/{quoted}"

    async def _call(self, method: str, path: str, **kwargs: Any) -> Any:
        return await asyncio.to_thread(self.client.request, method, path, **kwargs)

    async def fetch_document(self, path: str) -> StoredDocument:
        try:
            data = await self._call("GET", self._contents_path(path), query={"ref": self.branch})
        except APIError as e:
            if e.status == 404:
                raise DocumentNotFoundError(f"Document not found: {path}") from e
            logger.error(f"Failed to read {path} from {self.repo}: {e}")
            raise UpstreamError(f"Could not read {path}: {e}") from e

        if not isinstance(data, dict) or data.get("type", "file") != "file":
            raise UpstreamError(f"{path} is not a file in {self.repo}")

        sha = data.get("sha")
        encoded = data.get("content") or ""
        # Files over 1 MB come back with encoding "none" and no inline content.
        if data.get("encoding") == "none" or (not encoded and data.get("size", 0)):
            encoded = await self._fetch_blob(path, sha)
        text = base64.b64decode(encoded).decode("utf-8") if encoded else ""
        return StoredDocument(path=path, text=text, revision=sha)

    async def _fetch_blob(self, path: str, sha: str | None) -> str:
        """Return the base64 content of a blob too large for the contents endpoint."""
        if not sha:
            raise UpstreamError(f"{path} has no inline content and no blob sha")
        try:
            blob = await self._call("GET", f"/repos/{self.repo}/git/blobs/{sha}")
        except APIError as e:
            logger.error(f"Failed to read blob {sha} of {path} from {self.repo}: {e}")
            raise UpstreamError(f"Could not read {path}: {e}") from e
        if not isinstance(blob, dict) or blob.get("encoding") != "base64" or not blob.get("content"):
            raise UpstreamError(f"Could not read {path}: blob {sha} returned no content")
        return blob["content"]

    async def write_document(
        self,
        path: str,
        text: str,
        revision: str | None = None,
        message: str | None = None,
    ) -> str:
        payload: dict[str, Any] = {
            "message": message or (f"Update {path}" if revision else f"Create {path}"),
            "content": base64.b64encode(text.encode("utf-8")).decode("ascii"),
            "branch": self.branch,
        }
        if revision:
            payload["sha"] = revision

        try:
            data = await self._call("PUT", self._contents_path(path), payload=payload)
        except APIError as e:
            if e.status in (409, 422):
                raise StoreConflictError(f"{path} changed upstream: {e}") from e
            logger.error(f"Failed to write {path} to {self.repo}: {e}")
            raise UpstreamError(f"Could not write {path}: {e}") from e

        new_revision = (data.get("content") or {}).get("sha", "") if isinstance(data, dict) else ""
        logger.debug(f"Wrote {path} to {self.repo}@{self.branch} ({new_revision[:7]})")
        return new_revision

    async def list_document_paths(self) -> list[str]:
        try:
            data = await self._call("GET", self._contents_path(), query={"ref": self.branch})
        except APIError as e:
            logger.error(f"Failed to list {self.data_dir} in {self.repo}: {e}")
            raise UpstreamError(f"Could not list documents: {e}") from e

        entries = data if isinstance(data, list) else []
        return [entry["name"] for entry in entries if isinstance(entry, dict) and is_document_name(entry.get("name"))]
