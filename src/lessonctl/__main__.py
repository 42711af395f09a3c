"""Allow ``python -m lessonctl``."""

from lessonctl.cli import cli

cli()
