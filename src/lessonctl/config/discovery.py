"""Locate the ``lessonctl.toml`` that applies to a directory.

``LESSONCTL_CONFIG`` names the file outright. Otherwise the nearest
``lessonctl.toml`` in the directory or one of its ancestors is used, the
way git finds ``.git``.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "lessonctl.toml"
CONFIG_ENV_VAR = "LESSONCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for *start* (default: cwd), or None."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
