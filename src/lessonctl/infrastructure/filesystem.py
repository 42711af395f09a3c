"""Filesystem operations: the Loader and document discovery.

Document identifiers are posix-style paths relative to the content root,
without the file suffix (``tour/classes`` for ``tour/classes.md``). The
suffix may be given explicitly; it is stripped during normalisation.

Pure parsing lives in :mod:`lessonctl.domain.parser`. This module only
reads and writes files.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from lessonctl.domain.errors import NotFound
from lessonctl.domain.links import normalize_doc_id

# Directories never searched for documents.
_SKIP_DIRS = frozenset({".lessonctl", ".git", ".venv", "node_modules", "__pycache__"})


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------


def resolve_document_path(root: Path, doc_id: str, *, suffix: str = ".md") -> Path:
    """Resolve *doc_id* to a file path under *root*.

    Raises:
        NotFound: *doc_id* is empty or escapes *root*.
    """
    normalized = normalize_doc_id(doc_id)
    if not normalized or normalized == ".":
        raise NotFound(doc_id, "Empty document identifier")

    path = root / f"{normalized}{suffix}"
    # Guard against path traversal via crafted identifiers
    if not path.resolve().is_relative_to(root.resolve()):
        raise NotFound(doc_id, f"Document identifier escapes the content root: {doc_id}")
    return path


def doc_id_for_path(root: Path, path: Path, *, suffix: str = ".md") -> str:
    """Inverse of :func:`resolve_document_path`."""
    rel = path.relative_to(root).as_posix()
    return rel[: -len(suffix)] if suffix and rel.endswith(suffix) else rel


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def load_document_text(root: Path, doc_id: str, *, suffix: str = ".md") -> str:
    """Read the raw text of a document. No side effects beyond the read.

    Raises:
        NotFound: no readable file exists for *doc_id*.
    """
    path = resolve_document_path(root, doc_id, suffix=suffix)
    if not path.is_file():
        raise NotFound(doc_id)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise NotFound(doc_id, f"Cannot read {path}: {exc}") from exc


def write_output(path: Path, text: str) -> None:
    """Write rendered output, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def find_documents(
    root: Path,
    *,
    suffix: str = ".md",
    exclude: Iterable[str] = (),
    skip: Iterable[Path] = (),
) -> list[str]:
    """Discover every document under *root* and return sorted identifiers.

    Hidden directories, :data:`_SKIP_DIRS`, directory names listed in
    *exclude*, and any directory in *skip* (e.g. the render output
    directory) are not searched.
    """
    if not root.is_dir():
        return []

    excluded = _SKIP_DIRS | frozenset(exclude)
    skipped = [p.resolve() for p in skip]

    results: list[str] = []
    for path in root.rglob(f"*{suffix}"):
        if not path.is_file():
            continue
        rel_parts = path.relative_to(root).parts[:-1]
        if any(part in excluded or part.startswith(".") for part in rel_parts):
            continue
        resolved = path.resolve()
        if any(resolved.is_relative_to(s) for s in skipped):
            continue
        results.append(doc_id_for_path(root, path, suffix=suffix))

    return sorted(results)
