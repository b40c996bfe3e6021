"""Node types of a navigation document.

A document is a list of categories. Each category may hold links directly
and/or a list of terms (sub-categories), each holding its own links::

    - taxonomy: Tools
      icon: fas fa-tools
      links:
        - title: Example
          logo: https://e.com/l.png
          url: https://e.com
          description: demo
      list:
        - term: CLI
          links: [...]

Optional keys that are absent stay ``None`` and are omitted again on
serialization; an explicitly empty list stays ``[]``. Keys the model does not
know are kept in ``extra`` in their original order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from navstack.core.exceptions import DocumentFormatError

LINK_FIELDS = ("title", "logo", "url", "description")
REQUIRED_LINK_FIELDS = ("title", "url", "logo", "description")


def _split_known(data: dict[str, Any], known: tuple[str, ...]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


def _require_mapping(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DocumentFormatError(f"Expected a mapping for {what}, got {type(value).__name__}")
    return value


def _require_list(value: Any, what: str) -> list | None:
    if value is None:
        return None
    if not isinstance(value, list):
        raise DocumentFormatError(f"Expected a list for {what}, got {type(value).__name__}")
    return value


@dataclass
class LinkEntry:
    """One navigable link. ``title`` is the identity key for update/delete."""

    title: str | None = None
    logo: str | None = None
    url: str | None = None
    description: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> LinkEntry:
        data = _require_mapping(data, "link")
        return cls(
            title=data.get("title"),
            logo=data.get("logo"),
            url=data.get("url"),
            description=data.get("description"),
            extra=_split_known(data, LINK_FIELDS),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for name in LINK_FIELDS:
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        out.update(self.extra)
        return out

    def missing_fields(self) -> list[str]:
        """Return the required fields that are absent or empty."""
        return [name for name in REQUIRED_LINK_FIELDS if not getattr(self, name)]

    def merge(self, patch: dict[str, Any]) -> None:
        """Overwrite fields present in ``patch``; everything else is retained."""
        for key, value in patch.items():
            if key in LINK_FIELDS:
                setattr(self, key, value)
            else:
                self.extra[key] = value

    def matches(self, keyword: str) -> bool:
        """Literal, case-sensitive substring match on title or description."""
        return any(isinstance(text, str) and keyword in text for text in (self.title, self.description))


@dataclass
class TermNode:
    """A sub-category inside one CategoryNode's ``list``."""

    term: str | None = None
    links: list[LinkEntry] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> TermNode:
        data = _require_mapping(data, "term")
        links = _require_list(data.get("links"), f"links of term '{data.get('term')}'")
        return cls(
            term=data.get("term"),
            links=[LinkEntry.from_dict(item) for item in links] if links is not None else None,
            extra=_split_known(data, ("term", "links")),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.term is not None:
            out["term"] = self.term
        if self.links is not None:
            out["links"] = [link.to_dict() for link in self.links]
        out.update(self.extra)
        return out


@dataclass
class CategoryNode:
    """A top-level taxonomy group with direct links and/or terms."""

    taxonomy: str | None = None
    icon: str | None = None
    links: list[LinkEntry] | None = None
    terms: list[TermNode] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> CategoryNode:
        data = _require_mapping(data, "category")
        name = data.get("taxonomy")
        links = _require_list(data.get("links"), f"links of taxonomy '{name}'")
        terms = _require_list(data.get("list"), f"list of taxonomy '{name}'")
        return cls(
            taxonomy=name,
            icon=data.get("icon"),
            links=[LinkEntry.from_dict(item) for item in links] if links is not None else None,
            terms=[TermNode.from_dict(item) for item in terms] if terms is not None else None,
            extra=_split_known(data, ("taxonomy", "icon", "links", "list")),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.taxonomy is not None:
            out["taxonomy"] = self.taxonomy
        if self.icon is not None:
            out["icon"] = self.icon
        if self.links is not None:
            out["links"] = [link.to_dict() for link in self.links]
        if self.terms is not None:
            out["list"] = [term.to_dict() for term in self.terms]
        out.update(self.extra)
        return out


Document = list[CategoryNode]
