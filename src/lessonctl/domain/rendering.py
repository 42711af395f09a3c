"""Block-level rendering of a Document to HTML markup.

Each block maps to exactly one container element, in source order:

- prose goes through a prose-to-markup transform supplied by the caller;
- fenced blocks become ``<pre><code class="language-TAG">`` with the
  tag copied verbatim, leaving highlighting to a downstream tool.

Rendering is a pure function of the document and the transform, so the
same inputs always produce byte-identical output.
"""

from __future__ import annotations

from collections.abc import Callable
from html import escape

from lessonctl.domain.blocks import Block, Document, FencedBlock

ProseTransform = Callable[[str], str]


def render_fenced(block: FencedBlock) -> str:
    """Render a fenced block with its language tag preserved."""
    code_attrs = ""
    if block.tagged:
        code_attrs = f' class="language-{escape(block.language, quote=True)}"'
    info_attr = f' data-info="{escape(block.info, quote=True)}"' if block.info else ""
    return f"<pre{info_attr}><code{code_attrs}>{escape(block.content, quote=False)}</code></pre>"


def render_block(block: Block, prose_transform: ProseTransform) -> str:
    """Render one block inside its ``div.block`` container."""
    if isinstance(block, FencedBlock):
        inner = render_fenced(block)
    else:
        inner = prose_transform(block.text) if block.text else ""
    return f'<div class="block block-{block.kind}" data-line="{block.line}">{inner}</div>'


def render_document(document: Document, prose_transform: ProseTransform) -> str:
    """Render every block of *document* in order, joined by newlines."""
    return "\n".join(render_block(block, prose_transform) for block in document.body)
