"""Route lessonctl logging through structlog onto stderr.

stdout carries rendered HTML and ``--json`` payloads, so every log line,
structlog or stdlib, goes to stderr. ``--log-json`` switches from the
console renderer to one sorted JSON object per line.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Third-party loggers held at WARNING even under --verbose.
_QUIET_LOGGERS = ("MARKDOWN", "markdown")


def _level_for(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    return logging.ERROR if quiet else logging.WARNING


def _pre_chain() -> list[structlog.types.Processor]:
    """Processors applied to structlog events and stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _stderr_handler(*, log_json: bool) -> logging.Handler:
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if log_json
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_json: bool = False
) -> None:
    """Install the stderr handler and set the ``lessonctl`` level.

    Args:
        verbose: DEBUG for ``lessonctl.*``; wins over *quiet*.
        quiet: ERROR for ``lessonctl.*``.
        log_json: JSON lines instead of the console renderer.
    """
    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_stderr_handler(log_json=log_json))
    root.setLevel(logging.WARNING)

    logging.getLogger("lessonctl").setLevel(_level_for(verbose=verbose, quiet=quiet))
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
