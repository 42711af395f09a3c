"""BaseService: shared foundation for lessonctl services.

Every service receives a :class:`Library` at construction time and
converts pipeline exceptions into failed ``ServiceResult`` values.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lessonctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from lessonctl.domain.errors import LessonError
    from lessonctl.infrastructure.library import Library

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class RenderService(BaseService):
            def render(self, doc_id: str) -> ServiceResult:
                try:
                    document = self._library.load(doc_id)
                except LessonError as exc:
                    return self._failure("render", exc)
                ...
    """

    def __init__(self, library: Library) -> None:
        self._library = library

    @staticmethod
    def _failure(op: str, exc: LessonError) -> ServiceResult:
        logger.debug("%s failed: %s", op, exc)
        return ServiceResult.failure(op, ServiceError.from_exception(exc))
