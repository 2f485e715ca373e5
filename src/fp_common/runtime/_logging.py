"""Structured logging for fp-common.

Library loggers are structlog loggers wrapped around the stdlib loggers of
the `fp_common` hierarchy, so level filtering and handlers stay under the
application's control and nothing is printed unless it configures logging.
`configure_logging` is an opt-in shortcut that attaches a structlog
`ProcessorFormatter` handler to the `fp_common` logger only; the global
structlog configuration is never touched. The library itself only logs at
debug level.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

__all__ = ['LOGGER_NAME', 'configure_logging', 'get_logger']

LOGGER_NAME = 'fp_common'


def _get_shared_processors() -> list[Any]:
    """Get processors shared between library loggers and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
    ]


def _get_structlog_processors() -> list[Any]:
    return [
        structlog.stdlib.filter_by_level,
        *_get_shared_processors(),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]


def _get_renderer(json_output: bool = True) -> Any:
    """Get the appropriate renderer based on output format."""
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


class _Handler(logging.StreamHandler):
    """Marks the handler installed by configure_logging so it can be replaced."""


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
) -> None:
    """Render fp-common's log records to stderr.

    Calling it again replaces the handler installed by the previous call.
    Records are not propagated to the root logger while the handler is
    installed.

    Args:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
            Unknown names fall back to INFO.
        json_output: If True, emit JSON logs. If False, use console output.
    """
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_get_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _get_renderer(json_output),
        ],
    )

    handler = _Handler(sys.stderr)
    handler.setFormatter(formatter)

    library_logger = logging.getLogger(LOGGER_NAME)
    for existing in [h for h in library_logger.handlers if isinstance(h, _Handler)]:
        library_logger.removeHandler(existing)
    library_logger.addHandler(handler)
    library_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    library_logger.propagate = False


def get_logger(name: str = LOGGER_NAME) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger over the stdlib logger `name`.

    Args:
        name: Logger name, normally the calling module's `__name__`.

    Returns:
        A structlog BoundLogger whose events carry the bound fields.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_get_structlog_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )
