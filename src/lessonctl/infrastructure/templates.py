"""Shared Jinja2 template loading with per-library override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader


def build_template_environment(group: str, *, library_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with user overrides before packaged defaults.

    Overrides are loaded from ``.lessonctl/templates/`` inside the library,
    either namespaced (``.lessonctl/templates/page/``) or flat.
    Autoescaping is on: rendered blocks are passed in as ``Markup``.
    """
    loaders: list[BaseLoader] = []
    if library_root is not None:
        template_root = library_root / ".lessonctl" / "templates"
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("lessonctl", f"templates/{group}"))
    return Environment(
        loader=ChoiceLoader(loaders),
        keep_trailing_newline=True,
        autoescape=True,
    )
