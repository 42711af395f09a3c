"""Document and block types.

A :class:`Document` is the parsed form of one lesson page: its
front-matter mapping plus the body as an ordered sequence of blocks.
Blocks alternate between prose and fenced code/transcript regions, in
source order. All types are immutable once built.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# Language marker for fences opened without an info string.
UNTAGGED = "untagged"


@dataclass(frozen=True)
class ProseBlock:
    """Free text between fences (markdown, passed to the prose transform)."""

    text: str
    line: int = field(default=0, compare=False)

    kind = "prose"


@dataclass(frozen=True)
class FencedBlock:
    """A fenced code or REPL-transcript region with literal content."""

    language: str
    content: str
    info: str = field(default="", compare=False)  # full info string, e.g. "scala mdoc:reset"
    fence: str = field(default="```", compare=False)
    line: int = field(default=0, compare=False)

    kind = "fenced"

    def __post_init__(self) -> None:
        if not self.language:
            msg = f"FencedBlock language must be non-empty (use {UNTAGGED!r})"
            raise ValueError(msg)

    @property
    def tagged(self) -> bool:
        return self.language != UNTAGGED


Block = ProseBlock | FencedBlock


@dataclass(frozen=True)
class Document:
    """A parsed lesson document.

    ``front_matter`` is exposed as a read-only mapping; ``body`` is a
    tuple so the block sequence cannot be reordered after parsing.
    """

    doc_id: str
    front_matter: Mapping[str, str]
    body: tuple[Block, ...] = ()

    def __post_init__(self) -> None:
        # Copy so callers holding the original dict cannot mutate us.
        object.__setattr__(self, "front_matter", MappingProxyType(dict(self.front_matter)))
        object.__setattr__(self, "body", tuple(self.body))

    @property
    def title(self) -> str:
        return self.front_matter.get("title", "")

    @property
    def layout(self) -> str | None:
        return self.front_matter.get("layout")

    @property
    def prose_blocks(self) -> list[ProseBlock]:
        return [b for b in self.body if isinstance(b, ProseBlock)]

    @property
    def fenced_blocks(self) -> list[FencedBlock]:
        return [b for b in self.body if isinstance(b, FencedBlock)]

    def summary(self) -> dict[str, object]:
        """JSON-friendly description used by ``show`` and ``list``."""
        return {
            "id": self.doc_id,
            "title": self.title,
            "layout": self.layout,
            "front_matter": dict(self.front_matter),
            "blocks": [_block_summary(b) for b in self.body],
            "block_count": len(self.body),
        }


def _block_summary(block: Block) -> dict[str, object]:
    if isinstance(block, FencedBlock):
        return {
            "kind": block.kind,
            "line": block.line,
            "language": block.language,
            "info": block.info,
            "lines": block.content.count("\n") + 1 if block.content else 0,
        }
    return {
        "kind": block.kind,
        "line": block.line,
        "chars": len(block.text),
    }
