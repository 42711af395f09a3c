"""DocumentService: list the library and inspect parsed documents."""

from __future__ import annotations

from lessonctl.domain.errors import LessonError
from lessonctl.domain.links import normalize_doc_id
from lessonctl.services.base import BaseService
from lessonctl.services.result import ServiceResult
from lessonctl.services.telemetry import traced


class DocumentService(BaseService):
    """Read-only operations over the library's documents."""

    @traced
    def list_documents(self) -> ServiceResult:
        """Identifiers of every document under the content root."""
        ids = self._library.document_ids()
        items = [{"id": doc_id} for doc_id in ids]
        return ServiceResult.success(
            "list_documents",
            {"items": items, "count": len(items), "root": str(self._library.root)},
        )

    @traced
    def show(self, doc_id: str) -> ServiceResult:
        """Parse *doc_id* and describe its front-matter and blocks."""
        try:
            document = self._library.load(normalize_doc_id(doc_id))
        except LessonError as exc:
            return self._failure("show", exc)
        return ServiceResult.success("show", document.summary())
