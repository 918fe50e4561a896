"""Observability: structured logging and credential redaction."""

from pinata.observability.logging import (
    LIBRARY_LOGGER_NAME,
    bind_command_context,
    clear_command_context,
    configure_logging,
    get_logger,
    reset_logging,
)
from pinata.observability.redact import REDACTED_VALUE, redact_event, redact_headers


__all__ = [
    "LIBRARY_LOGGER_NAME",
    "bind_command_context",
    "clear_command_context",
    "configure_logging",
    "get_logger",
    "reset_logging",
    "REDACTED_VALUE",
    "redact_event",
    "redact_headers",
]
