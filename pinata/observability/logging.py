"""Structured logging setup for the client and CLI.

Client events are structlog events delivered to the standard library
``pinata`` logger. That logger carries a ``NullHandler``, so an application
that never configures logging sees no output from the client; one that does
receives the events through its own handlers, or through
:func:`configure_logging`.
"""

import logging
import sys
from typing import TextIO

import structlog

from pinata.observability.redact import redact_event


LIBRARY_LOGGER_NAME = "pinata"

logging.getLogger(LIBRARY_LOGGER_NAME).addHandler(logging.NullHandler())

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    redact_event,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
]

# Handler installed by configure_logging, replaced on reconfiguration
_handler: logging.Handler | None = None


def get_logger(name: str = LIBRARY_LOGGER_NAME) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger backed by a standard library logger.

    Events below the stdlib logger's effective level are dropped before any
    processing. The processor chain is fixed here and does not depend on
    the global structlog configuration.

    Args:
        name: Stdlib logger name; keep it under ``pinata`` for client code.

    Returns:
        Bound logger instance.
    """
    logger: structlog.stdlib.BoundLogger = structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )
    return logger


def configure_logging(
    level: int = logging.INFO,
    output: TextIO | None = None,
    json_format: bool = True,
) -> None:
    """Render client log events to a stream.

    Every event passes through :func:`redact_event` before rendering, so
    credentials never reach the output even if a caller logs them.

    Args:
        level: Minimum level to emit (default: INFO).
        output: Stream to write to (default: the current stderr).
        json_format: One JSON object per line when True, colored console
            output otherwise.
    """
    global _handler  # noqa: PLW0603

    stream = output or sys.stderr
    renderer: structlog.types.Processor
    if json_format:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    if _handler is not None:
        library_logger.removeHandler(_handler)
    library_logger.addHandler(handler)
    library_logger.setLevel(level)
    library_logger.propagate = False
    _handler = handler


def reset_logging() -> None:
    """Undo :func:`configure_logging`, leaving the client silent again."""
    global _handler  # noqa: PLW0603

    library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    if _handler is not None:
        library_logger.removeHandler(_handler)
        _handler = None
    library_logger.setLevel(logging.NOTSET)
    library_logger.propagate = True
    structlog.contextvars.clear_contextvars()


def bind_command_context(command: str) -> None:
    """Tag all subsequent events with the CLI command being run."""
    structlog.contextvars.bind_contextvars(command=command)


def clear_command_context() -> None:
    """Remove the CLI command tag from log events."""
    structlog.contextvars.unbind_contextvars("command")
