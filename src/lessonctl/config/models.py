"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, lessonctl.toml only contains
overrides. An empty lessonctl.toml (or none at all) is a valid library.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from lessonctl.domain.validation import DEFAULT_REQUIRED_KEYS

# --- lessonctl.toml sections ---


class ContentConfig(BaseModel):
    """[content] section."""

    model_config = {"frozen": True}

    root: str = "."
    suffix: str = ".md"
    exclude: list[str] = Field(default_factory=list)


class CheckConfig(BaseModel):
    """[check] section."""

    model_config = {"frozen": True}

    required_keys: list[str] = Field(default_factory=lambda: list(DEFAULT_REQUIRED_KEYS))
    check_links: bool = True
    warn_untagged: bool = True


class RenderConfig(BaseModel):
    """[render] section."""

    model_config = {"frozen": True}

    output_dir: str = "_site"
    markdown_extensions: list[str] = Field(default_factory=lambda: ["extra"])
    page_template: str = "page.html.j2"
