"""Credential redaction for request headers and log events."""

from collections.abc import MutableMapping
from typing import Any

from pinata.credentials import API_KEY_HEADER, SECRET_API_KEY_HEADER


# Headers that carry credentials or session state
SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "cookie",
        "proxy-authorization",
        "set-cookie",
        API_KEY_HEADER,
        SECRET_API_KEY_HEADER,
    }
)

# Event keys that may hold a credential when passed to a logger directly
SENSITIVE_EVENT_KEYS = frozenset({"jwt", "token", "secret", "api_secret"})

REDACTED_VALUE = "[REDACTED]"


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Mask credential headers for logging.

    The bearer token and both Pinata key headers are replaced with
    [REDACTED]; every other header is kept.

    Args:
        headers: Original headers dictionary.

    Returns:
        New dictionary with sensitive values redacted.
    """
    return {
        key: REDACTED_VALUE if is_sensitive_header(key) else value
        for key, value in headers.items()
    }


def is_sensitive_header(header_name: str) -> bool:
    """Check if a header name is sensitive (case-insensitive)."""
    return header_name.lower() in SENSITIVE_HEADERS


def redact_event(
    _logger: Any, _method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Structlog processor masking credentials anywhere in an event.

    Top-level keys named like a credential are masked, and any ``headers``
    mapping is passed through :func:`redact_headers`, so a call site that
    forgets to redact still cannot leak a JWT or API secret.
    """
    for key in list(event_dict):
        if key.lower() in SENSITIVE_EVENT_KEYS or is_sensitive_header(key):
            event_dict[key] = REDACTED_VALUE

    headers = event_dict.get("headers")
    if isinstance(headers, dict):
        event_dict["headers"] = redact_headers(headers)

    return event_dict
