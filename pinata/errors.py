"""Error types for the Pinata client."""

from enum import Enum


class ErrorKind(str, Enum):
    """Classification of client errors for retry decisions and reporting.

    - BAD_REQUEST: 400, request rejected as malformed
    - UNAUTHORIZED: 401, credentials missing or invalid
    - NOT_FOUND: 404, resource does not exist
    - SERVER_ERROR: any other non-2xx status
    - ENCODING_FAILED: request body could not be built
    - DECODING_FAILED: response body did not match the expected shape
    - NETWORK_ERROR: transport-layer fault (connect, timeout, DNS)
    - INVALID_URL: request URL could not be constructed
    - UNKNOWN: unclassified error
    """

    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    SERVER_ERROR = "SERVER_ERROR"
    ENCODING_FAILED = "ENCODING_FAILED"
    DECODING_FAILED = "DECODING_FAILED"
    NETWORK_ERROR = "NETWORK_ERROR"
    INVALID_URL = "INVALID_URL"
    UNKNOWN = "UNKNOWN"


RETRYABLE_KINDS = frozenset({ErrorKind.SERVER_ERROR, ErrorKind.NETWORK_ERROR})


class PinataError(Exception):
    """Base exception for all Pinata client errors.

    Provides structured error information for logging and retry decisions.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: dict[str, str | int | None] | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            kind: Classification of the error.
            message: Human-readable error message.
            details: Additional structured error details.
        """
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details or {}

    @property
    def retryable(self) -> bool:
        """Whether the request that produced this error may be attempted again."""
        return self.kind in RETRYABLE_KINDS

    def to_dict(self) -> dict[str, str | bool | dict[str, str | int | None]]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "kind": self.kind.value,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }


class BadRequestError(PinataError):
    """The API rejected the request as malformed.

    The response body is kept verbatim as the diagnostic message.
    """

    def __init__(self, message: str) -> None:
        super().__init__(ErrorKind.BAD_REQUEST, f"Bad request: {message}")
        self.body = message


class UnauthorizedError(PinataError):
    """Authentication failed due to invalid or missing credentials."""

    def __init__(self) -> None:
        super().__init__(
            ErrorKind.UNAUTHORIZED, "Unauthorized: Invalid or missing credentials"
        )


class NotFoundError(PinataError):
    """The requested resource was not found."""

    def __init__(self) -> None:
        super().__init__(ErrorKind.NOT_FOUND, "Not found")


class ServerError(PinataError):
    """The API answered with a non-success status outside the client-error set."""

    def __init__(self, status_code: int) -> None:
        super().__init__(
            ErrorKind.SERVER_ERROR,
            f"Server error: {status_code}",
            details={"status_code": status_code},
        )
        self.status_code = status_code


class EncodingError(PinataError):
    """Failed to encode the request body."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(ErrorKind.ENCODING_FAILED, f"Encoding failed: {cause}")
        self.cause = cause


class DecodingError(PinataError):
    """Failed to decode the response body."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(ErrorKind.DECODING_FAILED, f"Decoding failed: {cause}")
        self.cause = cause


class NetworkError(PinataError):
    """The transport failed before an HTTP status was received."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(
            ErrorKind.NETWORK_ERROR,
            f"Network error: {cause}",
            details={"cause": type(cause).__name__},
        )
        self.cause = cause
        self.__cause__ = cause


class InvalidURLError(PinataError):
    """Failed to construct a valid request URL."""

    def __init__(self, path: str) -> None:
        super().__init__(
            ErrorKind.INVALID_URL, f"Invalid URL: {path}", details={"path": path}
        )
        self.path = path


class UnknownError(PinataError):
    """An error that fits no other classification."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorKind.UNKNOWN, f"Unknown error: {message}")
