"""Command: validate lesson documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lessonctl.commands._base import LessonCommand

if TYPE_CHECKING:
    from lessonctl.commands._context import AppContext


@click.command(
    cls=LessonCommand,
    examples="""\
  lessonctl check
  lessonctl check tour/classes tour/traits
  lessonctl check --errors-only
  lessonctl --json check --min-severity error""",
)
@click.argument("doc_ids", nargs=-1)
@click.option(
    "--min-severity",
    type=click.Choice(["warning", "error"]),
    default="warning",
    help="Hide issues below this severity.",
)
@click.option("--errors-only", is_flag=True, help="Shortcut for --min-severity error.")
@click.pass_obj
def check(
    app: AppContext,
    doc_ids: tuple[str, ...],
    min_severity: str,
    errors_only: bool,
) -> None:
    """Validate documents (all of them when no DOC_IDS are given)."""
    from lessonctl.services.check import CheckService

    threshold = "error" if errors_only else min_severity
    app.emit(CheckService(app.library).check(list(doc_ids) or None, min_severity=threshold))
