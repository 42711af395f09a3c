"""Tests for the render CLI command."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from lessonctl.cli import cli


@pytest.mark.usefixtures("_isolated_library")
class TestRenderCommand:
    def test_page_to_stdout(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["render", "tour/classes"])
        assert result.exit_code == 0
        assert result.stdout.startswith("<!DOCTYPE html>")
        assert '<code class="language-scala">' in result.stdout

    def test_fragment(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["render", "tour/classes", "--fragment"])
        assert result.exit_code == 0
        assert result.stdout.startswith('<div class="block block-prose"')

    def test_output_file(self, cli_runner: CliRunner, library_root: Path) -> None:
        result = cli_runner.invoke(cli, ["render", "tour/traits", "-o", "build/traits.html"])
        assert result.exit_code == 0
        assert "build/traits.html" in result.stdout
        assert (library_root / "build" / "traits.html").is_file()

    def test_warnings_on_stderr(
        self, cli_runner: CliRunner, write_doc: Callable[[str, str], Path]
    ) -> None:
        write_doc("tour/draft", "---\ntitle: Draft\n---\nText\n")
        result = cli_runner.invoke(cli, ["render", "tour/draft", "--fragment"])
        assert result.exit_code == 0
        assert "WARNING:" in result.stderr
        assert "WARNING:" not in result.stdout

    def test_missing_document(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "render", "tour/nope"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "NOT_FOUND"

    def test_render_all(self, cli_runner: CliRunner, library_root: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "render", "--all"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["data"]["count"] == 3
        assert (library_root / "_site" / "tour" / "classes.html").is_file()

    def test_render_all_output_dir(self, cli_runner: CliRunner, library_root: Path) -> None:
        result = cli_runner.invoke(cli, ["render", "--all", "--output-dir", "public"])
        assert result.exit_code == 0
        assert (library_root / "public" / "tour" / "unified-types.html").is_file()

    def test_render_all_partial_failure(
        self, cli_runner: CliRunner, write_doc: Callable[[str, str], Path]
    ) -> None:
        write_doc("tour/broken", "---\nlayout: tour\n---\n")
        result = cli_runner.invoke(cli, ["render", "--all"])
        assert result.exit_code == 1
        assert "tour/broken" in result.stderr

    @pytest.mark.parametrize(
        "args",
        [
            ["render"],
            ["render", "tour/classes", "--all"],
            ["render", "--all", "--fragment"],
            ["render", "--all", "-o", "x.html"],
        ],
    )
    def test_usage_errors(self, cli_runner: CliRunner, args: list[str]) -> None:
        result = cli_runner.invoke(cli, args)
        assert result.exit_code == 2
