"""AppContext: the object every lessonctl command receives.

The root group builds it from :class:`LessonSettings` and hands it down
with ``@click.pass_obj``. It owns logging and telemetry setup, the lazily
opened :class:`Library`, and the rule for printing a result.
"""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import click

from lessonctl.config.logging import configure_logging
from lessonctl.output.formatters import OutputSettings, format_result
from lessonctl.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from lessonctl.config.settings import LessonSettings
    from lessonctl.infrastructure.library import Library
    from lessonctl.services.result import ServiceResult


class AppContext:
    """Shared state for one CLI invocation.

    Nothing touches the content root until a command asks for
    :attr:`library`, so ``--help`` and ``--examples`` work anywhere.
    """

    def __init__(self, settings: LessonSettings) -> None:
        self.settings = settings
        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )
        if settings.verbose:
            enable_telemetry()

    @cached_property
    def library(self) -> Library:
        from lessonctl.infrastructure.library import Library

        return Library(self.settings)

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and set the exit status.

        Success goes to stdout, with warnings as ``WARNING:`` lines on
        stderr (omitted for ``--json``, which already carries them, and
        ``--quiet``). Failure goes to stderr and exits with status 1.
        """
        output = format_result(result, settings=self.output_settings)
        if not result.ok:
            click.echo(output, err=True)
            raise SystemExit(1)

        click.echo(output)
        if self.settings.json_output or self.settings.quiet:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
