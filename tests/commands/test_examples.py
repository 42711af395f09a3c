"""Tests for the --examples flag on every command."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from lessonctl.cli import cli

EXAMPLES_COMMANDS: list[tuple[list[str], str]] = [
    (["--examples"], "lessonctl list"),
    (["check", "--examples"], "lessonctl check --errors-only"),
    (["list", "--examples"], "lessonctl -q list"),
    (["show", "--examples"], "lessonctl show tour/classes"),
    (["render", "--examples"], "lessonctl render --all"),
]


@pytest.mark.parametrize(("args", "expected"), EXAMPLES_COMMANDS)
def test_examples_flag(cli_runner: CliRunner, args: list[str], expected: str) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    assert expected in result.output
