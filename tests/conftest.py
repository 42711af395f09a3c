"""Shared pytest fixtures for lessonctl tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from lessonctl.config.settings import LessonSettings
from lessonctl.infrastructure.library import Library
from lessonctl.services.telemetry import disable_telemetry

CLASSES_LESSON = """\
---
layout: tour
title: Classes
---
Classes in Scala are blueprints for creating objects. See [traits](traits.html)
and [[unified-types|the type hierarchy]].

```scala
class User

val user1 = new User
```

A transcript from the REPL:

```scala mdoc
scala> class Person { }
// defined class Person
```
"""

TRAITS_LESSON = """\
---
layout: tour
title: Traits
---
Traits are used to share interfaces and fields between [classes](classes.md#defining).
"""

UNIFIED_TYPES_LESSON = """\
---
layout: tour
title: Unified Types
---
In Scala, all values have a type.
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Iterator[None]:
    """Keep --verbose telemetry from leaking between tests."""
    yield
    disable_telemetry()


@pytest.fixture
def write_doc(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write ``<tmp_path>/<doc_id>.md`` and return its path."""

    def _write(doc_id: str, text: str) -> Path:
        path = tmp_path / f"{doc_id}.md"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def library_root(tmp_path: Path, write_doc: Callable[[str, str], Path]) -> Path:
    """Temporary library with three linked tour lessons.

    This is the single source of truth for the sample library layout.
    """
    write_doc("tour/classes", CLASSES_LESSON)
    write_doc("tour/traits", TRAITS_LESSON)
    write_doc("tour/unified-types", UNIFIED_TYPES_LESSON)
    return tmp_path


@pytest.fixture
def library(library_root: Path) -> Library:
    """Library over the sample lessons with default settings."""
    return Library(LessonSettings.from_cli(library_root=library_root))


@pytest.fixture
def _isolated_library(library_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the sample library so the CLI picks it up.

    Use via ``@pytest.mark.usefixtures("_isolated_library")``.
    """
    monkeypatch.delenv("LESSONCTL_CONFIG", raising=False)
    monkeypatch.chdir(library_root)
