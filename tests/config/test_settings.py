"""Tests for LessonSettings: defaults, TOML source, env vars, CLI flags."""

from __future__ import annotations

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from lessonctl.config.settings import LessonSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "LESSONCTL_CONFIG",
        "LESSONCTL_CHECK__CHECK_LINKS",
        "LESSONCTL_RENDER__OUTPUT_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = LessonSettings.from_cli(library_root=tmp_path)
        assert settings.library_root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.content.suffix == ".md"
        assert settings.check.required_keys == ["layout", "title"]
        assert settings.render.markdown_extensions == ["extra"]
        assert settings.content_root == tmp_path.resolve()
        assert settings.output_dir == (tmp_path / "_site").resolve()

    def test_frozen(self, tmp_path: Path) -> None:
        settings = LessonSettings.from_cli(library_root=tmp_path)
        with pytest.raises(ValidationError):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_sparse_override(self, tmp_path: Path) -> None:
        (tmp_path / "lessonctl.toml").write_text(
            '[content]\nroot = "docs"\n[render]\noutput_dir = "public"\n', encoding="utf-8"
        )
        settings = LessonSettings.from_cli(library_root=tmp_path)
        assert settings.content_root == (tmp_path / "docs").resolve()
        assert settings.output_dir == (tmp_path / "public").resolve()
        assert settings.content.suffix == ".md"
        assert settings.check.check_links is True

    def test_root_from_config_location(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "lessonctl.toml").write_text("", encoding="utf-8")
        nested = tmp_path / "tour"
        nested.mkdir()
        monkeypatch.chdir(nested)
        settings = LessonSettings.from_cli()
        assert settings.library_root.resolve() == tmp_path.resolve()

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        config = tmp_path / "site.toml"
        config.write_text("[check]\nwarn_untagged = false\n", encoding="utf-8")
        settings = LessonSettings.from_cli(config_path=str(config))
        assert settings.config_path == config
        assert settings.library_root == tmp_path
        assert settings.check.warn_untagged is False

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "lessonctl.toml").write_text("[content\n", encoding="utf-8")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            LessonSettings.from_cli(library_root=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "lessonctl.toml").write_text(
            '[render]\noutput_dir = "public"\n', encoding="utf-8"
        )
        monkeypatch.setenv("LESSONCTL_RENDER__OUTPUT_DIR", "build")
        settings = LessonSettings.from_cli(library_root=tmp_path)
        assert settings.render.output_dir == "build"

    def test_nested_env_bool(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LESSONCTL_CHECK__CHECK_LINKS", "false")
        settings = LessonSettings.from_cli(library_root=tmp_path)
        assert settings.check.check_links is False

    def test_cli_flags_win(self, tmp_path: Path) -> None:
        settings = LessonSettings.from_cli(library_root=tmp_path, verbose=True, json_output=True)
        assert settings.verbose is True
        assert settings.json_output is True
