"""RenderService: turn lesson documents into HTML.

Block rendering is :func:`lessonctl.domain.rendering.render_document`;
this service supplies the collaborators (Python-Markdown for prose, the
Jinja2 page template) and handles file output. Validation findings are
reported as warnings and never stop a render.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from markupsafe import Markup

from lessonctl.domain.errors import LessonError
from lessonctl.domain.links import normalize_doc_id
from lessonctl.domain.rendering import render_document
from lessonctl.domain.validation import validate_document
from lessonctl.infrastructure.filesystem import write_output
from lessonctl.services.base import BaseService
from lessonctl.services.result import (
    PARTIAL_FAILURE,
    WRITE_FAILED,
    ServiceError,
    ServiceResult,
)
from lessonctl.services.telemetry import count, trace_span, traced

if TYPE_CHECKING:
    from lessonctl.domain.blocks import Document

logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = ".html"


class RenderService(BaseService):
    """Renders documents to HTML fragments or full pages."""

    def render_fragment(self, document: Document) -> str:
        """Block markup only, no page chrome."""
        return render_document(document, self._library.prose_transform)

    def render_page(self, document: Document) -> str:
        """Full HTML page wrapping the block markup in the page template."""
        template = self._library.templates.get_template(
            self._library.settings.render.page_template
        )
        return template.render(
            doc_id=document.doc_id,
            title=document.title,
            layout=document.layout,
            front_matter=dict(document.front_matter),
            content=Markup(self.render_fragment(document)),
        )

    def _warnings_for(self, document: Document, known_ids: set[str]) -> list[str]:
        cfg = self._library.settings.check
        violations = validate_document(
            document,
            known_ids,
            required_keys=cfg.required_keys,
            check_link_targets=cfg.check_links,
            warn_untagged=cfg.warn_untagged,
        )
        return [
            f"{v.doc_id}:{v.line}: {v.message}" if v.line else f"{v.doc_id}: {v.message}"
            for v in violations
        ]

    @traced
    def render(
        self,
        doc_id: str,
        *,
        output: Path | None = None,
        fragment: bool = False,
    ) -> ServiceResult:
        """Render one document.

        With *output* the markup is written there and ``data["path"]`` is
        set; otherwise the markup is returned in ``data["html"]``.
        """
        try:
            document = self._library.load(normalize_doc_id(doc_id))
        except LessonError as exc:
            return self._failure("render", exc)

        with trace_span("render_blocks"):
            html = self.render_fragment(document) if fragment else self.render_page(document)
        warnings = self._warnings_for(document, set(self._library.document_ids()))

        data: dict[str, Any] = {
            "id": document.doc_id,
            "title": document.title,
            "block_count": len(document.body),
        }
        if output is not None:
            try:
                write_output(output, html)
            except OSError as exc:
                error = ServiceError(
                    code=WRITE_FAILED,
                    message=f"Cannot write {output}: {exc.strerror or exc}",
                    detail={"doc_id": document.doc_id, "path": str(output)},
                )
                return ServiceResult.failure("render", error)
            data["path"] = str(output)
        else:
            data["html"] = html
        return ServiceResult.success("render", data, warnings=warnings)

    @traced
    def render_all(self, *, output_dir: Path | None = None) -> ServiceResult:
        """Render every document to ``<output_dir>/<doc_id>.html``.

        A document that fails to load, parse or be written is listed
        under ``failures`` and does not stop the others.
        """
        target_dir = output_dir or self._library.settings.output_dir
        doc_ids = self._library.document_ids()
        known_ids = set(doc_ids)

        rendered: list[dict[str, Any]] = []
        failures: list[dict[str, Any]] = []
        warnings: list[str] = []

        for doc_id in doc_ids:
            try:
                document = self._library.load(doc_id)
            except LessonError as exc:
                logger.warning("Skipping %s: %s", doc_id, exc)
                failures.append({"id": doc_id, "code": exc.code, "error": str(exc)})
                count("failed")
                continue
            path = target_dir / f"{doc_id}{OUTPUT_SUFFIX}"
            try:
                with trace_span(f"render:{doc_id}"):
                    write_output(path, self.render_page(document))
            except OSError as exc:
                logger.warning("Cannot write %s: %s", path, exc)
                failures.append({"id": doc_id, "code": WRITE_FAILED, "error": str(exc)})
                count("failed")
                continue
            warnings.extend(self._warnings_for(document, known_ids))
            rendered.append({"id": doc_id, "path": str(path), "blocks": len(document.body)})
            count("rendered")

        data: dict[str, Any] = {
            "output_dir": str(target_dir),
            "rendered": rendered,
            "failures": failures,
            "count": len(rendered),
        }
        if failures:
            error = ServiceError(
                code=PARTIAL_FAILURE,
                message=f"{len(failures)} of {len(doc_ids)} document(s) failed to render",
                detail={"failed": [f["id"] for f in failures]},
            )
            return ServiceResult.failure("render_all", error, data=data, warnings=warnings)
        return ServiceResult.success("render_all", data, warnings=warnings)
