"""Output mode selection for ServiceResult.

The CLI renders results for humans (Rich), for scripts (``--json``), or
minimally (``--quiet``). Rendered HTML is the exception: a successful
``render`` without ``--output`` prints the markup itself so it can be
piped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from lessonctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from lessonctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Global output flags, taken from the CLI settings."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display according to *settings*."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if result.ok and result.op == "render" and "html" in result.data:
        return str(result.data["html"])
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
