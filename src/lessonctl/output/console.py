"""Rich Console factory and theme for lessonctl output.

Consoles render into a StringIO buffer so formatters keep returning
plain strings. Outside a terminal (tests, pipes) Rich drops color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LESSON_THEME = Theme(
    {
        "lesson.ok": "bold green",
        "lesson.error": "bold red",
        "lesson.warning": "bold yellow",
        "lesson.op": "bold cyan",
        "lesson.key": "dim",
        "lesson.id": "bold blue",
        "lesson.path": "dim",
        "lesson.title": "bold",
        "lesson.block.prose": "green",
        "lesson.block.fenced": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Console writing into memory; read it back with :func:`get_output`."""
    return Console(
        file=StringIO(),
        theme=LESSON_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Everything printed to a :func:`create_console` console so far."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_block(kind: str) -> str:
    """Rich style name for a block kind (``prose`` or ``fenced``)."""
    return f"lesson.block.{kind}" if kind in ("prose", "fenced") else ""
