"""Command: list the documents in the library."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lessonctl.commands._base import LessonCommand

if TYPE_CHECKING:
    from lessonctl.commands._context import AppContext


@click.command(
    "list",
    cls=LessonCommand,
    examples="""\
  lessonctl list
  lessonctl -q list
  lessonctl --json list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List known document identifiers."""
    from lessonctl.services.documents import DocumentService

    app.emit(DocumentService(app.library).list_documents())
