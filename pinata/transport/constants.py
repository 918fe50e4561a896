"""HTTP constants for the request execution layer.

Centralizes status codes and retry defaults to avoid duplication across modules.
"""

from http import HTTPStatus


# HTTP Status Code Ranges
HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 300
HTTP_STATUS_BAD_REQUEST = HTTPStatus.BAD_REQUEST.value
HTTP_STATUS_UNAUTHORIZED = HTTPStatus.UNAUTHORIZED.value
HTTP_STATUS_NOT_FOUND = HTTPStatus.NOT_FOUND.value

# Statuses expected to clear up on their own
RETRYABLE_STATUS_CODES = frozenset(
    {
        HTTPStatus.TOO_MANY_REQUESTS.value,
        HTTPStatus.INTERNAL_SERVER_ERROR.value,
        HTTPStatus.BAD_GATEWAY.value,
        HTTPStatus.SERVICE_UNAVAILABLE.value,
        HTTPStatus.GATEWAY_TIMEOUT.value,
    }
)

# Retry defaults (total attempts, linear backoff step)
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY_MS = 500

DEFAULT_TIMEOUT_SECONDS = 60.0

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_OCTET_STREAM = "application/octet-stream"
CONTENT_TYPE_MULTIPART = "multipart/form-data"
