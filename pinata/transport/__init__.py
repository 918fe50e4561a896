"""Request execution layer shared by every API operation.

This module provides:
- Request construction with credential headers (JSON and multipart bodies)
- HTTP status classification into success, retryable and terminal outcomes
- A retry policy with linear backoff
- Typed decoding of ``{"data": ...}`` envelopes
- Per-process call metrics
"""

from pinata.transport.constants import (
    DEFAULT_BASE_DELAY_MS,
    DEFAULT_MAX_ATTEMPTS,
    RETRYABLE_STATUS_CODES,
)
from pinata.transport.decoder import decode_data
from pinata.transport.executor import RequestExecutor, classify_response
from pinata.transport.metrics import TransportMetrics
from pinata.transport.models import (
    AttemptOutcome,
    Host,
    HttpMethod,
    JsonBody,
    OperationDescriptor,
    OutcomeStatus,
    RetryPolicy,
)
from pinata.transport.multipart import MultipartForm, MultipartPart, build_upload_form
from pinata.transport.protocols import Transport
from pinata.transport.request_builder import RequestBuilder, encode_json


__all__ = [
    # Execution
    "RequestExecutor",
    "classify_response",
    "Transport",
    # Building
    "RequestBuilder",
    "encode_json",
    "MultipartForm",
    "MultipartPart",
    "build_upload_form",
    # Decoding
    "decode_data",
    # Models
    "AttemptOutcome",
    "Host",
    "HttpMethod",
    "JsonBody",
    "OperationDescriptor",
    "OutcomeStatus",
    "RetryPolicy",
    # Constants
    "DEFAULT_BASE_DELAY_MS",
    "DEFAULT_MAX_ATTEMPTS",
    "RETRYABLE_STATUS_CODES",
    # Metrics
    "TransportMetrics",
]
