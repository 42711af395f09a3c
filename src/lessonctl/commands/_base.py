"""Click base classes that add an ``--examples`` flag.

Usage examples stay out of ``--help`` and print on request::

    @click.command(cls=LessonCommand, examples="  lessonctl check")
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Adds an eager ``--examples`` option when examples text is given."""

    params: list[click.Parameter]

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return

        def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
            if value and not ctx.resilient_parsing:
                click.echo(f"Examples for '{ctx.command_path}':\n\n{examples}")
                ctx.exit(0)

        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                is_eager=True,
                expose_value=False,
                callback=_print_examples,
                help="Show usage examples and exit.",
            )
        )


class LessonCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class LessonGroup(_ExamplesMixin, click.Group):
    """Group whose ``@group.command`` defaults to :class:`LessonCommand`."""

    command_class = LessonCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
