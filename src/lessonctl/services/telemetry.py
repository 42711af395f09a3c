"""Timing spans for service calls.

Tracing is off unless ``--verbose`` turns it on. A ``@traced`` service
method then opens a root span, ``trace_span`` blocks inside it open
children, and :func:`count` tallies per-span counters (documents
validated, pages written). The finished tree lands in
``ServiceResult.meta["telemetry"]`` and is logged through structlog.
"""

from __future__ import annotations

import functools
import time
from collections import Counter
from collections.abc import Callable, Generator, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from lessonctl.services.result import ServiceResult

_log = structlog.get_logger("lessonctl.telemetry")

_tracing: ContextVar[bool] = ContextVar("lessonctl_tracing", default=False)
_active_span: ContextVar[Span | None] = ContextVar("lessonctl_active_span", default=None)


@dataclass
class Span:
    """One timed region; children nest in call order."""

    name: str
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    counters: Counter[str] = field(default_factory=Counter)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def end(self) -> None:
        self.finished = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            out["annotations"] = dict(self.annotations)
        if self.counters:
            out["counters"] = dict(self.counters)
        if self.children:
            out["children"] = [child.to_dict() for child in self.children]
        return out


@contextmanager
def _activate(span: Span) -> Iterator[Span]:
    token = _active_span.set(span)
    try:
        yield span
    finally:
        span.end()
        _active_span.reset(token)


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Open a child of the active span; yields None when not tracing."""
    parent = _active_span.get() if _tracing.get() else None
    if parent is None:
        yield None
        return
    child = Span(name=name)
    parent.children.append(child)
    with _activate(child):
        yield child


def count(key: str, amount: int = 1) -> None:
    """Add *amount* to counter *key* on the active span, if any."""
    span = _active_span.get() if _tracing.get() else None
    if span is not None:
        span.counters[key] += amount


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:
    """Run a service method under a root span when tracing is on."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _tracing.get():
            return func(*args, **kwargs)

        with _activate(Span(name=func.__qualname__)) as span:
            result = func(*args, **kwargs)

        if not isinstance(result, ServiceResult):
            return result
        _log.debug(
            "span.complete",
            span_name=span.name,
            duration_ms=round(span.duration_ms, 2),
            ok=result.ok,
            **dict(span.counters),
        )
        meta = dict(result.meta or {})
        meta["telemetry"] = span.to_dict()
        return result.model_copy(update={"meta": meta})  # type: ignore[return-value]

    return wrapper


def enable_telemetry() -> None:
    _tracing.set(True)


def disable_telemetry() -> None:
    _tracing.set(False)
