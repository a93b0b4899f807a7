# src/tracy/core/logging.py
"""Logging setup for tracy runs.

structlog renders every event, including records from modules that log
through the stdlib: ProcessorFormatter sends those through the same
processor chain, so a run's output is uniformly JSON or uniformly console
text.

Events go to stderr unless a stream is given. When tracy runs as a CLI,
stdout carries the case file and nothing else.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

if TYPE_CHECKING:
    from tracy.core.config import LoggingSettings


def _drop_formatter_bookkeeping(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Strip the _record/_from_structlog keys ProcessorFormatter adds."""
    event_dict.pop("_record", None)
    event_dict.pop("_from_structlog", None)
    return event_dict


def _pre_chain() -> list[Any]:
    # Applied once to every event, whichever API produced it.
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]


def _render_chain(json_output: bool) -> list[Any]:
    if json_output:
        return [
            _drop_formatter_bookkeeping,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [
        _drop_formatter_bookkeeping,
        structlog.dev.ConsoleRenderer(colors=False),
    ]


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib logging to one handler.

    Replaces any handlers already on the root logger, so calling this
    again switches format, level or stream cleanly.

    Args:
        json_output: Emit one JSON object per event instead of console text.
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR).
        stream: Destination stream. Defaults to the current sys.stderr.
    """
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Loggers are created at import time; caching would pin the first config
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(ProcessorFormatter(processors=_render_chain(json_output), foreign_pre_chain=pre_chain))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper())


def configure_from_settings(settings: LoggingSettings, stream: TextIO | None = None) -> None:
    """Apply the logging section of TracySettings."""
    configure_logging(json_output=settings.json_output, level=settings.level, stream=stream)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger named after a module."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
