"""Tests for the Loader: path resolution, reads, writes, discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from lessonctl.domain.errors import NotFound
from lessonctl.infrastructure.filesystem import (
    doc_id_for_path,
    find_documents,
    load_document_text,
    resolve_document_path,
    write_output,
)


class TestResolveDocumentPath:
    def test_with_and_without_suffix(self, tmp_path: Path) -> None:
        expected = tmp_path / "tour" / "classes.md"
        assert resolve_document_path(tmp_path, "tour/classes") == expected
        assert resolve_document_path(tmp_path, "tour/classes.md") == expected

    def test_traversal_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(NotFound, match="escapes"):
            resolve_document_path(tmp_path / "lib", "../secret")

    def test_empty_identifier(self, tmp_path: Path) -> None:
        with pytest.raises(NotFound):
            resolve_document_path(tmp_path, "")

    def test_inverse(self, tmp_path: Path) -> None:
        path = resolve_document_path(tmp_path, "tour/classes")
        assert doc_id_for_path(tmp_path, path) == "tour/classes"


class TestLoadDocumentText:
    def test_reads_text(self, tmp_path: Path) -> None:
        (tmp_path / "a.md").write_text("---\ntitle: A\n---\n", encoding="utf-8")
        assert load_document_text(tmp_path, "a") == "---\ntitle: A\n---\n"

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(NotFound) as exc_info:
            load_document_text(tmp_path, "tour/missing")
        assert exc_info.value.doc_id == "tour/missing"
        assert exc_info.value.code == "NOT_FOUND"

    def test_directory_is_not_a_document(self, tmp_path: Path) -> None:
        (tmp_path / "tour.md").mkdir()
        with pytest.raises(NotFound):
            load_document_text(tmp_path, "tour")

    def test_undecodable(self, tmp_path: Path) -> None:
        (tmp_path / "bad.md").write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(NotFound, match="Cannot read"):
            load_document_text(tmp_path, "bad")


class TestWriteOutput:
    def test_creates_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "_site" / "tour" / "classes.html"
        write_output(target, "<p>x</p>")
        assert target.read_text(encoding="utf-8") == "<p>x</p>"


class TestFindDocuments:
    def test_sorted_ids(self, library_root: Path) -> None:
        assert find_documents(library_root) == [
            "tour/classes",
            "tour/traits",
            "tour/unified-types",
        ]

    def test_skips_hidden_and_excluded(self, tmp_path: Path) -> None:
        for rel in ("a.md", ".hidden/b.md", "drafts/c.md", ".lessonctl/d.md", "e.txt"):
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("x", encoding="utf-8")
        assert find_documents(tmp_path, exclude=["drafts"]) == ["a"]

    def test_skips_output_directory(self, tmp_path: Path) -> None:
        (tmp_path / "_site").mkdir()
        (tmp_path / "_site" / "copy.md").write_text("x", encoding="utf-8")
        (tmp_path / "a.md").write_text("x", encoding="utf-8")
        assert find_documents(tmp_path, skip=[tmp_path / "_site"]) == ["a"]

    def test_custom_suffix(self, tmp_path: Path) -> None:
        (tmp_path / "a.markdown").write_text("x", encoding="utf-8")
        (tmp_path / "b.md").write_text("x", encoding="utf-8")
        assert find_documents(tmp_path, suffix=".markdown") == ["a"]

    def test_missing_root(self, tmp_path: Path) -> None:
        assert find_documents(tmp_path / "nope") == []
