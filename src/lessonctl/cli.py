"""The ``lessonctl`` entry point: global flags, settings and subcommands."""

from __future__ import annotations

import click

from lessonctl import __version__
from lessonctl.commands import register_commands
from lessonctl.commands._base import LessonGroup
from lessonctl.commands._context import AppContext
from lessonctl.config.settings import LessonSettings


@click.group(
    cls=LessonGroup,
    invoke_without_command=True,
    examples="""\
  lessonctl list
  lessonctl check
  lessonctl -v show tour/classes
  lessonctl --json check tour/classes
  lessonctl -c site/lessonctl.toml render --all""",
)
@click.version_option(version=__version__, prog_name="lessonctl")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON on stdout.")
@click.option("-q", "--quiet", is_flag=True, help="Print identifiers or OK lines only.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and a timing tree per command.")
@click.option("--log-json", is_flag=True, help="Write log lines to stderr as JSON.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="Use this lessonctl.toml instead of searching for one.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """lessonctl: validate and render lesson documents."""
    settings = LessonSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
