"""Tests for front-matter splitting, coercion, and rendering."""

from __future__ import annotations

import pytest

from lessonctl.domain.errors import MalformedDocument
from lessonctl.domain.frontmatter import (
    order_front_matter,
    parse_front_matter,
    render_front_matter,
    split_front_matter,
)


class TestSplitFrontMatter:
    def test_basic_split(self) -> None:
        fm, body, start = split_front_matter("---\nlayout: page\ntitle: Classes\n---\nBody\n", "d")
        assert fm == {"layout": "page", "title": "Classes"}
        assert body == ["Body", ""]
        assert start == 5

    def test_missing_header(self) -> None:
        with pytest.raises(MalformedDocument, match="Missing front-matter"):
            split_front_matter("Body only\n", "d")

    def test_unterminated_header(self) -> None:
        with pytest.raises(MalformedDocument, match="Unterminated"):
            split_front_matter("---\ntitle: T\nBody\n", "d")

    def test_invalid_yaml(self) -> None:
        with pytest.raises(MalformedDocument, match="Invalid front-matter YAML"):
            split_front_matter("---\ntitle: [unclosed\n---\n", "d")

    def test_non_mapping_header(self) -> None:
        with pytest.raises(MalformedDocument, match="mapping"):
            split_front_matter("---\n- a\n- b\n---\n", "d")

    def test_empty_header(self) -> None:
        fm, _body, _start = split_front_matter("---\n---\nBody\n", "d")
        assert fm == {}

    def test_indented_delimiter_stays_in_block_scalar(self) -> None:
        text = "---\ntitle: T\nsummary: |\n  intro\n  ---\n  more\n---\nBody\n"
        fm, body, start = split_front_matter(text, "tour/x")
        assert fm["summary"] == "intro\n---\nmore\n"
        assert body == ["Body", ""]
        assert start == 8

    def test_closing_delimiter_must_start_line(self) -> None:
        with pytest.raises(MalformedDocument, match="Unterminated"):
            split_front_matter("---\ntitle: T\n ---\nBody\n", "tour/x")


class TestValueCoercion:
    def test_quoted_string(self) -> None:
        assert parse_front_matter('---\ntitle: "Classes"\n---\n') == {"title": "Classes"}

    def test_scalars_become_strings(self) -> None:
        fm = parse_front_matter("---\nnum: 3\ndraft: true\nempty:\n---\n")
        assert fm == {"num": "3", "draft": "true", "empty": ""}

    def test_date(self) -> None:
        assert parse_front_matter("---\ndate: 2024-01-15\n---\n") == {"date": "2024-01-15"}

    def test_list_joined(self) -> None:
        fm = parse_front_matter("---\nlanguages: [ba, es, ko]\n---\n")
        assert fm == {"languages": "ba, es, ko"}

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("2.10", "2.10"), ("1.0", "1.0"), ("0x1F", "0x1F"), ("1e3", "1e3"), ("007", "007")],
    )
    def test_numbers_keep_source_text(self, raw: str, expected: str) -> None:
        fm = parse_front_matter(f"---\ntitle: T\nversion: {raw}\n---\n")
        assert fm == {"title": "T", "version": expected}

    def test_numbers_in_list_keep_source_text(self) -> None:
        fm = parse_front_matter("---\nversions: [2.10, 3.0]\n---\n")
        assert fm == {"versions": "2.10, 3.0"}

    def test_nested_mapping_rejected(self) -> None:
        with pytest.raises(MalformedDocument) as exc_info:
            parse_front_matter("---\ntitle: T\nmeta:\n  a: 1\n---\n", "tour/x")
        assert exc_info.value.line == 3
        assert "meta" in exc_info.value.message


class TestRenderFrontMatter:
    def test_canonical_order(self) -> None:
        ordered = order_front_matter({"partof": "tour", "title": "T", "layout": "tour"})
        assert list(ordered) == ["layout", "title", "partof"]

    def test_render_shape(self) -> None:
        text = render_front_matter({"title": "Classes", "layout": "page"})
        assert text == "---\nlayout: page\ntitle: Classes\n---\n"

    def test_render_empty(self) -> None:
        assert render_front_matter({}) == "---\n---\n"

    @pytest.mark.parametrize(
        "front_matter",
        [
            {"layout": "page", "title": "Classes"},
            {"title": "Classes: an introduction", "num": "3", "draft": "true"},
            {"title": "# not a comment", "empty": "", "date": "2024-01-15"},
            {"title": "null", "previous-page": "unified-types"},
        ],
    )
    def test_round_trip_recovers_pairs(self, front_matter: dict[str, str]) -> None:
        assert parse_front_matter(render_front_matter(front_matter)) == front_matter
