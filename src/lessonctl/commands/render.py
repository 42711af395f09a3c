"""Command: render documents to HTML."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from lessonctl.commands._base import LessonCommand

if TYPE_CHECKING:
    from lessonctl.commands._context import AppContext


@click.command(
    cls=LessonCommand,
    examples="""\
  lessonctl render tour/classes
  lessonctl render tour/classes --fragment
  lessonctl render tour/classes --output build/classes.html
  lessonctl render --all
  lessonctl render --all --output-dir public""",
)
@click.argument("doc_id", required=False)
@click.option("--all", "render_all", is_flag=True, help="Render every document.")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write a single document here instead of stdout.",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Target directory for --all (default: [render] output_dir).",
)
@click.option("--fragment", is_flag=True, help="Emit block markup without the page template.")
@click.pass_obj
def render(
    app: AppContext,
    doc_id: str | None,
    render_all: bool,
    output: Path | None,
    output_dir: Path | None,
    fragment: bool,
) -> None:
    """Render DOC_ID (or every document with --all) to HTML."""
    from lessonctl.services.render import RenderService

    if render_all == (doc_id is not None):
        msg = "Give exactly one of DOC_ID or --all."
        raise click.UsageError(msg)
    if render_all and (output is not None or fragment):
        msg = "--output and --fragment apply to a single document."
        raise click.UsageError(msg)

    svc = RenderService(app.library)
    if render_all:
        app.emit(svc.render_all(output_dir=output_dir))
    else:
        assert doc_id is not None
        app.emit(svc.render(doc_id, output=output, fragment=fragment))
