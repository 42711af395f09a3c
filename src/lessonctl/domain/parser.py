"""Parser: raw lesson text to :class:`Document`.

The body is split on fence delimiters into an alternating sequence of
prose and fenced blocks. Fences follow the CommonMark rules:

- an opening fence is at least three backticks or tildes, indented by
  at most three spaces, optionally followed by an info string;
- the closing fence uses the same character, at least as many of them,
  and nothing but whitespace after;
- everything between the two is literal content.

A prose block (possibly empty) precedes every fenced block. Prose after
the last fence is only kept when it contains non-whitespace.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from lessonctl.domain.blocks import UNTAGGED, Block, Document, FencedBlock, ProseBlock
from lessonctl.domain.errors import MalformedDocument
from lessonctl.domain.frontmatter import split_front_matter

_OPEN_FENCE = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})(?P<info>.*)$")


@dataclass(frozen=True)
class _Fence:
    char: str
    length: int
    indent: int
    info: str
    line: int

    def closes(self, line: str) -> bool:
        stripped = line.lstrip(" ")
        if len(line) - len(stripped) > 3:
            return False
        run = len(stripped) - len(stripped.lstrip(self.char))
        return run >= self.length and stripped[run:].strip() == ""


def _open_fence(line: str, lineno: int) -> _Fence | None:
    match = _OPEN_FENCE.match(line)
    if match is None:
        return None
    fence = match.group("fence")
    info = match.group("info").strip()
    # CommonMark: a backtick fence's info string may not contain backticks.
    if fence[0] == "`" and "`" in info:
        return None
    return _Fence(
        char=fence[0],
        length=len(fence),
        indent=len(match.group("indent")),
        info=info,
        line=lineno,
    )


def _dedent(line: str, indent: int) -> str:
    """Strip up to *indent* leading spaces (fence indentation)."""
    strip = min(indent, len(line) - len(line.lstrip(" ")))
    return line[strip:]


def _prose(lines: list[str], start: int) -> ProseBlock:
    """Build a prose block, trimming surrounding blank lines.

    *start* is the source line of ``lines[0]``; the block's line points at
    its first non-blank line (or *start* when empty).
    """
    first = 0
    while first < len(lines) and not lines[first].strip():
        first += 1
    last = len(lines)
    while last > first and not lines[last - 1].strip():
        last -= 1
    line = start + first if first < len(lines) else start
    return ProseBlock(text="\n".join(lines[first:last]), line=line)


def parse_body(lines: list[str], doc_id: str, *, start_line: int = 1) -> list[Block]:
    """Split body *lines* into alternating prose and fenced blocks.

    Raises:
        MalformedDocument: a fence is opened but never closed.
    """
    blocks: list[Block] = []
    prose: list[str] = []
    prose_start = start_line
    fence: _Fence | None = None
    content: list[str] = []

    for offset, line in enumerate(lines):
        lineno = start_line + offset
        if fence is None:
            opened = _open_fence(line, lineno)
            if opened is None:
                prose.append(line)
                continue
            blocks.append(_prose(prose, prose_start))
            prose = []
            fence = opened
            content = []
        elif fence.closes(line):
            language = fence.info.split()[0] if fence.info else UNTAGGED
            blocks.append(
                FencedBlock(
                    language=language,
                    content="\n".join(content),
                    info=fence.info,
                    fence=fence.char * fence.length,
                    line=fence.line,
                )
            )
            fence = None
            prose_start = lineno + 1
        else:
            content.append(_dedent(line, fence.indent))

    if fence is not None:
        msg = f"Unterminated fence {fence.char * fence.length!r} opened here"
        raise MalformedDocument(doc_id, msg, line=fence.line)

    trailing = _prose(prose, prose_start)
    if not blocks or trailing.text.strip():
        blocks.append(trailing)
    return blocks


def parse_document(text: str, doc_id: str = "<string>") -> Document:
    """Parse raw lesson text into an immutable :class:`Document`.

    Raises:
        MalformedDocument: invalid or missing front-matter, empty title,
            or an unterminated fence.
    """
    front_matter, body_lines, body_start = split_front_matter(text, doc_id)
    if not front_matter.get("title", "").strip():
        raise MalformedDocument(doc_id, "Front-matter is missing a non-empty 'title'", line=1)

    blocks = parse_body(body_lines, doc_id, start_line=body_start)
    return Document(doc_id=doc_id, front_matter=front_matter, body=tuple(blocks))
