"""Subcommand modules for lessonctl.

Provides register_commands(), which imports command modules lazily so
``lessonctl --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every command on the root CLI group."""
    from lessonctl.commands.check import check
    from lessonctl.commands.list_cmd import list_cmd
    from lessonctl.commands.render import render
    from lessonctl.commands.show import show

    cli.add_command(check)
    cli.add_command(list_cmd)
    cli.add_command(show)
    cli.add_command(render)
