"""LessonSettings: one frozen object for CLI flags, env vars and lessonctl.toml.

Sources, strongest first:

1. keyword arguments (the global CLI flags);
2. ``LESSONCTL_*`` environment variables, ``__`` for nesting
   (``LESSONCTL_RENDER__OUTPUT_DIR=public``);
3. the ``lessonctl.toml`` in effect;
4. the defaults in :mod:`lessonctl.config.models`.

Relative paths in the config (``[content] root``, ``[render]
output_dir``) are taken from the directory holding the config file.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from lessonctl.config.discovery import find_config
from lessonctl.config.models import CheckConfig, ContentConfig, RenderConfig

# The TOML file for the settings object under construction. Sources are
# chosen in a classmethod, so the path cannot travel as an argument.
_toml_file: ContextVar[Path | None] = ContextVar("lessonctl_toml_file", default=None)


class LessonSettings(BaseSettings):
    """Settings for one lessonctl invocation."""

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="LESSONCTL_",
        env_nested_delimiter="__",
    )

    library_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    content: ContentConfig = Field(default_factory=ContentConfig)
    check: CheckConfig = Field(default_factory=CheckConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)

    @property
    def content_root(self) -> Path:
        """Directory documents are loaded from."""
        return (self.library_root / self.content.root).resolve()

    @property
    def output_dir(self) -> Path:
        """Directory ``render --all`` writes to."""
        return (self.library_root / self.render.output_dir).resolve()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]
        toml_file = _toml_file.get()
        if toml_file is not None:
            sources.append(TomlConfigSettingsSource(settings_cls, toml_file=toml_file))
        return tuple(sources)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        library_root: Path | None = None,
        **cli_flags: Any,
    ) -> LessonSettings:
        """Build settings for a CLI run.

        An explicit *config_path* wins over discovery. Without one,
        ``lessonctl.toml`` is searched for upwards from *library_root*
        (or the working directory). *library_root* defaults to the
        directory of the config file found.

        Raises:
            click.ClickException: the config file is not valid TOML.
        """
        toml_file: Path | None
        if config_path:
            toml_file = Path(config_path) if Path(config_path).is_file() else None
        else:
            toml_file = find_config(library_root)

        if library_root is None:
            library_root = toml_file.parent if toml_file else Path.cwd()

        token = _toml_file.set(toml_file)
        try:
            return cls(library_root=library_root, config_path=toml_file, **cli_flags)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_file}: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _toml_file.reset(token)
