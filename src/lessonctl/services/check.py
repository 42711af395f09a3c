"""CheckService: validate documents and report violations.

Follows the linter pattern: every requested document is loaded, parsed
and validated, and all findings are collected into one report. A
document that cannot be loaded or parsed becomes an error-severity issue
instead of aborting the batch.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from lessonctl.domain.errors import LessonError, MalformedDocument
from lessonctl.domain.links import normalize_doc_id
from lessonctl.domain.validation import (
    CODE_MALFORMED,
    CODE_NOT_FOUND,
    SEVERITY_ERROR,
    Violation,
    severity_at_least,
    validate_document,
)
from lessonctl.services.base import BaseService
from lessonctl.services.result import VALIDATION_FAILED, ServiceError, ServiceResult
from lessonctl.services.telemetry import count, trace_span, traced

logger = logging.getLogger(__name__)


class CheckService(BaseService):
    """Validates lesson documents against the configured rules."""

    def _violations_for(self, doc_id: str, known_ids: set[str]) -> list[Violation]:
        cfg = self._library.settings.check
        try:
            document = self._library.load(doc_id)
        except LessonError as exc:
            code = CODE_MALFORMED if isinstance(exc, MalformedDocument) else CODE_NOT_FOUND
            return [Violation(doc_id, code, SEVERITY_ERROR, exc.message, line=exc.line)]

        return validate_document(
            document,
            known_ids,
            required_keys=cfg.required_keys,
            check_link_targets=cfg.check_links,
            warn_untagged=cfg.warn_untagged,
        )

    @traced
    def check(
        self,
        doc_ids: Sequence[str] | None = None,
        *,
        min_severity: str = "warning",
    ) -> ServiceResult:
        """Validate *doc_ids* (default: every document in the library).

        The result is ``ok`` unless an error-severity violation remains
        after *min_severity* filtering; the full report is in ``data``
        either way.
        """
        with trace_span("discover") as span:
            known_ids = set(self._library.document_ids())
            if span is not None:
                span.annotate("documents", len(known_ids))
        targets = [normalize_doc_id(d) for d in doc_ids] if doc_ids else sorted(known_ids)

        violations: list[Violation] = []
        with trace_span("validate"):
            for doc_id in targets:
                found = self._violations_for(doc_id, known_ids)
                logger.debug("Checked %s: %d violation(s)", doc_id, len(found))
                violations.extend(found)
                count("documents")

        issues: list[dict[str, Any]] = [
            v.to_dict() for v in violations if severity_at_least(v.severity, min_severity)
        ]
        errors = sum(1 for i in issues if i["severity"] == SEVERITY_ERROR)
        data: dict[str, Any] = {
            "issues": issues,
            "count": len(issues),
            "errors": errors,
            "warnings": len(issues) - errors,
            "documents": len(targets),
        }

        if errors:
            failing = len({i["doc_id"] for i in issues if i["severity"] == SEVERITY_ERROR})
            error = ServiceError(
                code=VALIDATION_FAILED,
                message=f"{errors} error(s) in {failing} document(s)",
                detail={"errors": errors, "documents": failing},
            )
            return ServiceResult.failure("check", error, data=data)
        return ServiceResult.success("check", data)
