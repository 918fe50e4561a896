"""Data models for the request execution layer."""

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from pinata.errors import PinataError
from pinata.transport.constants import DEFAULT_BASE_DELAY_MS, DEFAULT_MAX_ATTEMPTS
from pinata.transport.multipart import MultipartForm


class Host(str, Enum):
    """Logical API host a request is sent to.

    - API: metadata, listing, update, delete, group and swap operations
    - UPLOAD: file ingestion
    """

    API = "api"
    UPLOAD = "upload"


class HttpMethod(str, Enum):
    """HTTP verbs used by the API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class JsonBody(BaseModel):
    """A request body to be serialized as JSON."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    value: Any


QueryValue = str | int | None


class OperationDescriptor(BaseModel):
    """Everything needed to build one API request.

    Path segments are kept separate so each can be percent-encoded on its own.
    Query parameters whose value is None are omitted from the URL.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    method: HttpMethod
    path: Annotated[tuple[str, ...], Field(min_length=1)]
    host: Host = Host.API
    query: dict[str, QueryValue] = Field(default_factory=dict)
    body: JsonBody | MultipartForm | None = None
    headers: dict[str, str] = Field(default_factory=dict)

    @property
    def display_path(self) -> str:
        """Path as written, without encoding, for errors and logs."""
        return "/".join(self.path)


class OutcomeStatus(str, Enum):
    """Classification of a single attempt.

    - SUCCESS: 2xx status, body available
    - RETRYABLE: transient failure, another attempt may succeed
    - TERMINAL: failure that another attempt cannot fix
    """

    SUCCESS = "SUCCESS"
    RETRYABLE = "RETRYABLE"
    TERMINAL = "TERMINAL"


class AttemptOutcome(BaseModel):
    """Result of one transport attempt."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    status: OutcomeStatus
    status_code: int | None = Field(
        default=None, description="HTTP status code if one was received"
    )
    body: bytes = Field(default=b"", description="Response body")
    error: PinataError | None = Field(
        default=None, description="Error details if the attempt failed"
    )

    @classmethod
    def success(cls, status_code: int, body: bytes) -> "AttemptOutcome":
        """Build a successful outcome."""
        return cls(status=OutcomeStatus.SUCCESS, status_code=status_code, body=body)

    @classmethod
    def failure(
        cls, error: PinataError, status_code: int | None = None
    ) -> "AttemptOutcome":
        """Build a failed outcome, retryable or terminal according to the error."""
        status = OutcomeStatus.RETRYABLE if error.retryable else OutcomeStatus.TERMINAL
        return cls(status=status, status_code=status_code, error=error)

    @property
    def is_success(self) -> bool:
        """Check if the attempt succeeded."""
        return self.status == OutcomeStatus.SUCCESS


class RetryPolicy(BaseModel):
    """Configuration for retry behavior.

    ``max_attempts`` counts every try, the first one included. Backoff is
    linear: the wait after attempt ``n`` (0-indexed) is
    ``base_delay_ms * (n + 1)``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_attempts: Annotated[int, Field(ge=1, le=10)] = DEFAULT_MAX_ATTEMPTS
    base_delay_ms: Annotated[int, Field(ge=0, le=60000)] = DEFAULT_BASE_DELAY_MS

    def should_retry(self, outcome: AttemptOutcome, attempt: int) -> bool:
        """Determine if another attempt should follow.

        Args:
            outcome: Outcome of the attempt that just finished.
            attempt: Index of that attempt (0-indexed).

        Returns:
            True if the outcome is retryable and budget remains.
        """
        if outcome.status != OutcomeStatus.RETRYABLE:
            return False
        return attempt < self.max_attempts - 1

    def get_delay_ms(self, attempt: int) -> int:
        """Calculate the wait after a failed attempt.

        Args:
            attempt: Index of the failed attempt (0-indexed).

        Returns:
            Delay in milliseconds.
        """
        return self.base_delay_ms * (attempt + 1)
