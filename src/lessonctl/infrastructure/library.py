"""Library: the single dependency injected into every service.

A Library is a directory of lesson documents plus the settings that say
where they live and how they render. It owns the Loader (file reads and
discovery), the prose transform, and the page template environment.
Documents are loaded fresh on every call; nothing parsed is cached
between documents.
"""

from __future__ import annotations

import logging
from functools import cached_property
from typing import TYPE_CHECKING

from lessonctl.domain.parser import parse_document
from lessonctl.infrastructure.filesystem import (
    find_documents,
    load_document_text,
    resolve_document_path,
)
from lessonctl.infrastructure.markup import MarkdownTransform
from lessonctl.infrastructure.templates import build_template_environment

if TYPE_CHECKING:
    from pathlib import Path

    from jinja2 import Environment

    from lessonctl.config.settings import LessonSettings
    from lessonctl.domain.blocks import Document

logger = logging.getLogger(__name__)


class Library:
    """Access to the documents under a content root."""

    def __init__(self, settings: LessonSettings) -> None:
        self.settings = settings
        self.root: Path = settings.content_root
        self.suffix = settings.content.suffix

    # --- Loader ---

    def path_for(self, doc_id: str) -> Path:
        return resolve_document_path(self.root, doc_id, suffix=self.suffix)

    def read_text(self, doc_id: str) -> str:
        """Raw text of *doc_id*. Raises ``NotFound``."""
        logger.debug("Loading document %s from %s", doc_id, self.root)
        return load_document_text(self.root, doc_id, suffix=self.suffix)

    def load(self, doc_id: str) -> Document:
        """Load and parse *doc_id*. Raises ``NotFound`` or ``MalformedDocument``."""
        return parse_document(self.read_text(doc_id), doc_id)

    def document_ids(self) -> list[str]:
        """Identifiers of every document in the library, sorted."""
        return find_documents(
            self.root,
            suffix=self.suffix,
            exclude=self.settings.content.exclude,
            skip=[self.settings.output_dir],
        )

    # --- Rendering collaborators ---

    @cached_property
    def prose_transform(self) -> MarkdownTransform:
        return MarkdownTransform(self.settings.render.markdown_extensions)

    @cached_property
    def templates(self) -> Environment:
        return build_template_environment("page", library_root=self.settings.library_root)
