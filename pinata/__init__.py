"""Async Python client for the Pinata IPFS files API.

This package provides:
- A :class:`Pinata` client for files, groups and CID hot swaps
- Bearer (JWT) and API key pair credentials
- Automatic retries with linear backoff on transient failures
- Typed models and errors for every response
"""

from pinata.client import Pinata
from pinata.config import API_BASE_URL, UPLOAD_BASE_URL, PinataConfiguration
from pinata.credentials import (
    BearerCredentials,
    Credentials,
    KeyPairCredentials,
    Network,
    additional_headers,
    authorization_header,
)
from pinata.errors import (
    BadRequestError,
    DecodingError,
    EncodingError,
    ErrorKind,
    InvalidURLError,
    NetworkError,
    NotFoundError,
    PinataError,
    ServerError,
    UnauthorizedError,
    UnknownError,
)
from pinata.models import (
    FilesPage,
    GroupsPage,
    PinataFile,
    PinataGroup,
    PinataSwap,
    parse_timestamp,
)
from pinata.observability import configure_logging
from pinata.settings import AppSettings, MissingCredentialsError, get_settings
from pinata.transport import RetryPolicy


__all__ = [
    # Client
    "Pinata",
    # Config
    "PinataConfiguration",
    "API_BASE_URL",
    "UPLOAD_BASE_URL",
    "AppSettings",
    "MissingCredentialsError",
    "get_settings",
    "RetryPolicy",
    # Credentials
    "BearerCredentials",
    "KeyPairCredentials",
    "Credentials",
    "Network",
    "authorization_header",
    "additional_headers",
    # Models
    "PinataFile",
    "PinataGroup",
    "PinataSwap",
    "FilesPage",
    "GroupsPage",
    "parse_timestamp",
    # Errors
    "PinataError",
    "ErrorKind",
    "BadRequestError",
    "UnauthorizedError",
    "NotFoundError",
    "ServerError",
    "EncodingError",
    "DecodingError",
    "NetworkError",
    "InvalidURLError",
    "UnknownError",
    # Logging
    "configure_logging",
]
