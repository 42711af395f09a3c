"""The return type shared by every service call.

Services never let a :class:`~lessonctl.domain.errors.LessonError`
escape: they answer with a :class:`ServiceResult`, ``ok=False`` and a
:class:`ServiceError` describing what went wrong. The CLI decides how
to print it and which exit code to use.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field

from lessonctl.domain.errors import LessonError

# Codes for failures that are not a single LessonError.
VALIDATION_FAILED = "VALIDATION_FAILED"
PARTIAL_FAILURE = "PARTIAL_FAILURE"
WRITE_FAILED = "WRITE_FAILED"


class ServiceError(BaseModel):
    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: LessonError) -> ServiceError:
        """``NOT_FOUND`` / ``MALFORMED_DOCUMENT`` payload with doc_id and line."""
        return cls(code=exc.code, message=str(exc), detail=exc.to_detail())


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: False when the operation failed, or when a batch found errors.
        op: Operation name; output renderers are chosen by it.
        data: Payload. Batch operations fill it on failure too, so the
            report can still be shown.
        warnings: Findings that did not stop the operation.
        error: Set when ``ok`` is False.
        meta: Telemetry span tree under ``"telemetry"`` when verbose.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def success(
        cls, op: str, data: dict[str, Any] | None = None, *, warnings: Iterable[str] = ()
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data or {}, warnings=list(warnings))

    @classmethod
    def failure(
        cls,
        op: str,
        error: ServiceError,
        *,
        data: dict[str, Any] | None = None,
        warnings: Iterable[str] = (),
    ) -> ServiceResult:
        return cls(ok=False, op=op, data=data or {}, warnings=list(warnings), error=error)
