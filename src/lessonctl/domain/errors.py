"""Exceptions raised by the document pipeline.

Services catch :class:`LessonError` and convert it into a failed
``ServiceResult``. Validation violations are not exceptions: they are
collected into a report (see :mod:`lessonctl.domain.validation`).
"""

from __future__ import annotations


class LessonError(Exception):
    """Base class for pipeline errors tied to a document identifier."""

    code = "LESSON_ERROR"

    def __init__(self, doc_id: str, message: str, *, line: int | None = None) -> None:
        self.doc_id = doc_id
        self.message = message
        self.line = line
        super().__init__(str(self))

    def __str__(self) -> str:
        location = self.doc_id
        if self.line is not None:
            location = f"{location}:{self.line}"
        return f"{location}: {self.message}"

    def to_detail(self) -> dict[str, str | int]:
        """Detail payload for a ``ServiceError``."""
        detail: dict[str, str | int] = {"doc_id": self.doc_id}
        if self.line is not None:
            detail["line"] = self.line
        return detail


class NotFound(LessonError):
    """The loader cannot locate the requested document."""

    code = "NOT_FOUND"

    def __init__(self, doc_id: str, message: str | None = None) -> None:
        super().__init__(doc_id, message or f"Document not found: {doc_id}")


class MalformedDocument(LessonError):
    """Unterminated fence or missing required front-matter."""

    code = "MALFORMED_DOCUMENT"
