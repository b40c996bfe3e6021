"""Tests for navstack.taxonomy.models."""

import pytest

from navstack.core.exceptions import DocumentFormatError
from navstack.taxonomy.models import CategoryNode, LinkEntry, TermNode


class TestLinkEntry:
    def test_from_dict_keeps_unknown_keys(self):
        link = LinkEntry.from_dict({"title": "A", "url": "u", "qrcode": "q"})
        assert link.title == "A"
        assert link.logo is None
        assert link.extra == {"qrcode": "q"}

    def test_to_dict_canonical_order_and_omits_absent(self):
        link = LinkEntry(title="A", url="u", description="d", extra={"qrcode": "q"})
        assert list(link.to_dict()) == ["title", "url", "description", "qrcode"]

    def test_missing_fields(self):
        link = LinkEntry(title="A", url="", logo=None, description="d")
        assert link.missing_fields() == ["url", "logo"]

    def test_merge_overwrites_only_given_fields(self):
        link = LinkEntry(title="A", logo="l", url="u", description="d")
        link.merge({"url": "u2", "note": "x"})
        assert link.url == "u2"
        assert link.logo == "l"
        assert link.extra == {"note": "x"}

    def test_matches_is_case_sensitive_substring(self):
        link = LinkEntry(title="Example", description="a demo link")
        assert link.matches("demo")
        assert link.matches("Exam")
        assert not link.matches("example")

    def test_matches_ignores_non_string_fields(self):
        link = LinkEntry(title=None, description=None)
        assert not link.matches("x")

    def test_non_mapping_rejected(self):
        with pytest.raises(DocumentFormatError, match="mapping"):
            LinkEntry.from_dict(["not", "a", "dict"])


class TestCategoryNode:
    def test_list_key_maps_to_terms(self):
        node = CategoryNode.from_dict({"taxonomy": "Tools", "list": [{"term": "CLI", "links": []}]})
        assert node.links is None
        assert node.terms == [TermNode(term="CLI", links=[])]
        assert node.to_dict() == {"taxonomy": "Tools", "list": [{"term": "CLI", "links": []}]}

    def test_empty_and_absent_lists_are_kept_apart(self):
        empty = CategoryNode.from_dict({"taxonomy": "A", "links": []})
        absent = CategoryNode.from_dict({"taxonomy": "A"})
        assert empty.to_dict() == {"taxonomy": "A", "links": []}
        assert absent.to_dict() == {"taxonomy": "A"}

    def test_links_must_be_a_list(self):
        with pytest.raises(DocumentFormatError, match="list"):
            CategoryNode.from_dict({"taxonomy": "A", "links": "oops"})
