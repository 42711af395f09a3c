"""Prose-to-markup transform backed by Python-Markdown."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import markdown

logger = logging.getLogger(__name__)


class MarkdownTransform:
    """Callable converting a prose block's markdown to HTML.

    One ``markdown.Markdown`` instance is reused and reset before every
    conversion, so earlier blocks (footnotes, reference links) never leak
    into later ones and the output stays deterministic.
    """

    def __init__(self, extensions: Sequence[str] = ("extra",)) -> None:
        self.extensions = list(extensions)
        self._md = markdown.Markdown(extensions=self.extensions, output_format="html")
        logger.debug("Markdown transform ready with extensions %s", self.extensions)

    def __call__(self, text: str) -> str:
        self._md.reset()
        return self._md.convert(text)
