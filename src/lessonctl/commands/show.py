"""Command: parse a document and describe its blocks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lessonctl.commands._base import LessonCommand

if TYPE_CHECKING:
    from lessonctl.commands._context import AppContext


@click.command(
    cls=LessonCommand,
    examples="""\
  lessonctl show tour/classes
  lessonctl --json show tour/classes.md""",
)
@click.argument("doc_id")
@click.pass_obj
def show(app: AppContext, doc_id: str) -> None:
    """Show the front-matter and block sequence of DOC_ID."""
    from lessonctl.services.documents import DocumentService

    app.emit(DocumentService(app.library).show(doc_id))
