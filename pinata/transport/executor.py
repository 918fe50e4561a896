"""Request execution with status classification and retries."""

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
import structlog

from pinata.config import PinataConfiguration
from pinata.errors import (
    BadRequestError,
    NetworkError,
    NotFoundError,
    PinataError,
    ServerError,
    UnauthorizedError,
    UnknownError,
)
from pinata.observability import get_logger, redact_headers
from pinata.transport.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
    HTTP_STATUS_UNAUTHORIZED,
    RETRYABLE_STATUS_CODES,
)
from pinata.transport.decoder import decode_data
from pinata.transport.metrics import TransportMetrics
from pinata.transport.models import (
    AttemptOutcome,
    OperationDescriptor,
    OutcomeStatus,
    RetryPolicy,
)
from pinata.transport.protocols import Transport
from pinata.transport.request_builder import RequestBuilder


logger = get_logger()

SleepFunc = Callable[[float], Awaitable[None]]


def classify_response(status_code: int, body: bytes) -> AttemptOutcome:
    """Classify an HTTP status into an attempt outcome.

    Client mistakes and auth/resource errors are terminal; overload and
    gateway failures are retryable; any other non-2xx status is terminal.

    Args:
        status_code: HTTP status code.
        body: Response body.

    Returns:
        Outcome for the attempt.
    """
    if HTTP_STATUS_OK_MIN <= status_code < HTTP_STATUS_OK_MAX:
        return AttemptOutcome.success(status_code, body)

    if status_code in RETRYABLE_STATUS_CODES:
        return AttemptOutcome(
            status=OutcomeStatus.RETRYABLE,
            status_code=status_code,
            error=ServerError(status_code),
        )

    error: PinataError
    if status_code == HTTP_STATUS_BAD_REQUEST:
        message = body.decode("utf-8", errors="replace") or "Bad request"
        error = BadRequestError(message)
    elif status_code == HTTP_STATUS_UNAUTHORIZED:
        error = UnauthorizedError()
    elif status_code == HTTP_STATUS_NOT_FOUND:
        error = NotFoundError()
    else:
        error = ServerError(status_code)

    return AttemptOutcome(
        status=OutcomeStatus.TERMINAL,
        status_code=status_code,
        error=error,
    )


class RequestExecutor:
    """Executes operations against the API with retries and failure isolation.

    Provides:
    - Request construction with credential headers
    - Status classification into success, retryable and terminal outcomes
    - Linear backoff between retryable attempts
    - Typed decoding of response envelopes
    - Metrics collection

    All per-call state lives in local variables, so concurrent calls on one
    executor never interfere.
    """

    def __init__(
        self,
        config: PinataConfiguration,
        transport: Transport,
        policy: RetryPolicy | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """Initialize the executor.

        Args:
            config: Client configuration.
            transport: Object that sends requests, usually an httpx.AsyncClient.
            policy: Retry policy; defaults to three attempts, 500 ms step.
            sleep: Awaitable delay, in seconds, used between attempts.
        """
        self._builder = RequestBuilder(config)
        self._transport = transport
        self._policy = policy or RetryPolicy()
        self._sleep = sleep
        self._metrics = TransportMetrics.get_instance()
        self._log = logger.bind(component="transport")

    @property
    def policy(self) -> RetryPolicy:
        """Active retry policy."""
        return self._policy

    async def execute(self, operation: OperationDescriptor) -> bytes:
        """Execute an operation and return the raw success body.

        Args:
            operation: What to send.

        Returns:
            Body of the 2xx response.

        Raises:
            PinataError: Terminal error on first occurrence, or the most
                recent retryable error once attempts are exhausted.
        """
        start_time_ns = time.perf_counter_ns()
        log = self._log.bind(
            method=operation.method.value,
            host=operation.host.value,
            path=operation.display_path,
        )

        try:
            request = self._builder.build(operation)
            body = await self._execute_with_retry(request, log)
        except PinataError as e:
            self._metrics.record_failure(e.kind)
            log.warning("request_failed", **e.to_dict())
            raise
        finally:
            duration_ms = (time.perf_counter_ns() - start_time_ns) / 1_000_000
            self._metrics.record_call(operation.host.value, duration_ms)

        log.info(
            "request_complete",
            bytes=len(body),
            duration_ms=round(duration_ms, 2),
        )
        return body

    async def execute_decoded(
        self, operation: OperationDescriptor, payload_type: Any
    ) -> Any:
        """Execute an operation and decode the ``data`` payload of its response.

        Args:
            operation: What to send.
            payload_type: Expected type of the payload.

        Returns:
            The decoded payload.

        Raises:
            PinataError: As for :meth:`execute`; DecodingError if the body
                does not match ``payload_type``.
        """
        body = await self.execute(operation)
        try:
            return decode_data(body, payload_type)
        except PinataError as e:
            self._metrics.record_failure(e.kind)
            self._log.warning(
                "response_decode_failed",
                path=operation.display_path,
                **e.to_dict(),
            )
            raise

    async def _execute_with_retry(
        self,
        request: httpx.Request,
        log: structlog.stdlib.BoundLogger,
    ) -> bytes:
        """Run the attempt loop for one request.

        Args:
            request: Built request, reused unchanged for every attempt.
            log: Bound logger.

        Returns:
            Body of the successful response.

        Raises:
            PinataError: See :meth:`execute`.
        """
        last_error: PinataError | None = None

        for attempt in range(self._policy.max_attempts):
            outcome = await self._execute_single(request, log, attempt)

            if outcome.is_success:
                return outcome.body

            last_error = outcome.error
            if last_error is None:
                break

            if not self._policy.should_retry(outcome, attempt):
                if outcome.status == OutcomeStatus.RETRYABLE:
                    log.warning(
                        "retries_exhausted",
                        attempts=attempt + 1,
                        max_attempts=self._policy.max_attempts,
                    )
                raise last_error

            delay_ms = self._policy.get_delay_ms(attempt)
            self._metrics.record_retry()
            log.info(
                "retry_scheduled",
                attempt=attempt,
                delay_ms=delay_ms,
                status_code=outcome.status_code,
                error_kind=last_error.kind.value,
            )
            await self._sleep(delay_ms / 1000.0)

        raise last_error or UnknownError("Request failed after retries")

    async def _execute_single(
        self,
        request: httpx.Request,
        log: structlog.stdlib.BoundLogger,
        attempt: int,
    ) -> AttemptOutcome:
        """Send one attempt and classify it.

        Args:
            request: Request to send.
            log: Bound logger.
            attempt: Current attempt number.

        Returns:
            Outcome of the attempt.
        """
        log.debug(
            "attempt_started",
            attempt=attempt,
            headers=redact_headers(dict(request.headers)),
        )

        self._metrics.record_attempt(len(request.content))
        try:
            response = await self._transport.send(request)
            body = await response.aread()
        except httpx.HTTPError as e:
            log.debug("transport_fault", attempt=attempt, error=str(e))
            return AttemptOutcome.failure(NetworkError(e))

        self._metrics.record_response(response.status_code, len(body))
        return classify_response(response.status_code, body)
