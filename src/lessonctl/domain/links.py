"""Link extraction and cross-reference resolution.

Pure functions, no infrastructure dependencies. Links are only looked
for in prose blocks: fenced content is literal and never linked.

Three link syntaxes are recognised:

- markdown links ``[text](target)`` (images ``![alt](src)`` are skipped);
- wikilinks ``[[target]]`` and ``[[target|text]]``;
- reference definitions ``[ref]: target`` backing ``[text][ref]`` links
  (footnotes ``[^1]:`` are skipped).
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass

from lessonctl.domain.blocks import Document, ProseBlock

# [text](target "optional title"); target stops at whitespace or ')'.
_MARKDOWN_LINK_PATTERN = re.compile(r"(?<!!)\[(?P<text>[^\[\]]*)\]\((?P<target><[^>]*>|[^\s)]*)")
# [[Target]] or [[Target|Display Text]]
_WIKILINK_PATTERN = re.compile(r"\[\[([^\[\]]+)\]\]")
# [ref]: target "optional title", at most three spaces of indent.
_REFERENCE_DEFINITION_PATTERN = re.compile(
    r"^ {0,3}\[(?P<label>[^\[\]^][^\[\]]*)\]:[ \t]*(?P<target><[^>]*>|\S+)", re.MULTILINE
)
# Inline code spans are skipped so `[a](b)` inside backticks is not a link.
_CODE_SPAN_PATTERN = re.compile(r"(`+)(?:.+?)\1", re.DOTALL)
_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")

# Suffixes stripped from link targets before lookup.
DOCUMENT_SUFFIXES: tuple[str, ...] = (".md", ".markdown", ".html")


@dataclass(frozen=True)
class DocumentLink:
    """A link found in a prose block."""

    target: str  # raw target as written
    text: str | None = None
    line: int = 0
    wiki: bool = False


def _mask_code_spans(text: str) -> str:
    """Blank out inline code spans, keeping newlines so line numbers hold."""
    return _CODE_SPAN_PATTERN.sub(lambda m: re.sub(r"[^\n]", " ", m.group(0)), text)


def _unbracket(target: str) -> str:
    if target.startswith("<") and target.endswith(">"):
        return target[1:-1]
    return target


def extract_links(text: str, *, start_line: int = 1) -> list[DocumentLink]:
    """Extract markdown links, wikilinks and reference definitions from *text*.

    Links are returned in source order. ``line`` is computed from
    *start_line*, the source line of the first line of *text*.
    """
    masked = _mask_code_spans(text)
    found: list[tuple[int, DocumentLink]] = []

    for match in _WIKILINK_PATTERN.finditer(masked):
        parts = match.group(1).split("|", 1)
        target = parts[0].strip()
        display = parts[1].strip() if len(parts) > 1 else None
        line = start_line + masked.count("\n", 0, match.start())
        found.append((match.start(), DocumentLink(target, display, line, wiki=True)))

    for match in _MARKDOWN_LINK_PATTERN.finditer(masked):
        target = _unbracket(match.group("target"))
        line = start_line + masked.count("\n", 0, match.start())
        found.append((match.start(), DocumentLink(target, match.group("text"), line)))

    for match in _REFERENCE_DEFINITION_PATTERN.finditer(masked):
        target = _unbracket(match.group("target"))
        line = start_line + masked.count("\n", 0, match.start())
        found.append((match.start(), DocumentLink(target, match.group("label"), line)))

    found.sort(key=lambda pair: pair[0])
    return [link for _pos, link in found]


def document_links(document: Document) -> list[DocumentLink]:
    """All links in the prose blocks of *document*, in source order."""
    links: list[DocumentLink] = []
    for block in document.body:
        if isinstance(block, ProseBlock) and block.text:
            links.extend(extract_links(block.text, start_line=block.line or 1))
    return links


def is_internal(target: str) -> bool:
    """Whether *target* points at another document in the library.

    External: URL schemes (``https:``, ``mailto:``), protocol-relative
    ``//host`` targets, and pure in-page ``#anchors``.
    """
    if not target or target.startswith("#") or target.startswith("//"):
        return False
    return _SCHEME_PATTERN.match(target) is None


def normalize_doc_id(doc_id: str) -> str:
    """Canonical identifier: posix separators, no leading ``./``, no suffix."""
    normalized = posixpath.normpath(doc_id.replace("\\", "/")).lstrip("/")
    for suffix in DOCUMENT_SUFFIXES:
        if normalized.endswith(suffix):
            return normalized[: -len(suffix)]
    return normalized


def resolve_target(target: str, source_id: str) -> str:
    """Resolve an internal link *target* written in document *source_id*.

    Fragments and queries are dropped, relative targets resolve from the
    source document's directory and a leading ``/`` from the library root.
    Wikilink-style bare names resolve the same way as relative paths.
    """
    path = re.split(r"[#?]", target, maxsplit=1)[0].strip()
    if path.startswith("/"):
        return normalize_doc_id(path)
    base = posixpath.dirname(normalize_doc_id(source_id))
    return normalize_doc_id(posixpath.join(base, path))
