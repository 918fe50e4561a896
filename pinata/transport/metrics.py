"""Metrics collection for the request execution layer."""

from dataclasses import dataclass, field
from typing import ClassVar

from pinata.errors import ErrorKind


@dataclass
class TransportMetrics:
    """Process-wide counters for API calls.

    A call is one ``execute`` invocation; it makes one or more attempts,
    and each attempt that reaches the server yields a response. Singleton,
    shared by every client in the process.
    """

    calls_by_host: dict[str, int] = field(default_factory=dict)
    attempts_total: int = 0
    responses_by_status: dict[int, int] = field(default_factory=dict)
    retries_total: int = 0
    failures_by_kind: dict[str, int] = field(default_factory=dict)
    bytes_sent_total: int = 0
    bytes_received_total: int = 0
    duration_ms_total: float = 0.0

    _instance: ClassVar["TransportMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "TransportMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    @property
    def calls_total(self) -> int:
        """Number of finished calls across all hosts."""
        return sum(self.calls_by_host.values())

    def record_call(self, host: str, duration_ms: float) -> None:
        """Record a finished call, successful or not.

        Args:
            host: Logical host the call targeted.
            duration_ms: Wall time including backoff waits.
        """
        self.calls_by_host[host] = self.calls_by_host.get(host, 0) + 1
        self.duration_ms_total += duration_ms

    def record_attempt(self, bytes_sent: int) -> None:
        """Record one transport attempt.

        Args:
            bytes_sent: Size of the request body.
        """
        self.attempts_total += 1
        self.bytes_sent_total += bytes_sent

    def record_response(self, status_code: int, bytes_received: int) -> None:
        """Record a response received from the server.

        Args:
            status_code: HTTP status code.
            bytes_received: Size of the response body.
        """
        self.responses_by_status[status_code] = (
            self.responses_by_status.get(status_code, 0) + 1
        )
        self.bytes_received_total += bytes_received

    def record_retry(self) -> None:
        """Record a scheduled retry."""
        self.retries_total += 1

    def record_failure(self, kind: ErrorKind) -> None:
        """Record a call that ended in an error.

        Args:
            kind: Classification of the failure.
        """
        key = kind.value
        self.failures_by_kind[key] = self.failures_by_kind.get(key, 0) + 1

    @property
    def avg_duration_ms(self) -> float:
        """Average call duration in milliseconds, 0.0 before any call."""
        if self.calls_total == 0:
            return 0.0
        return self.duration_ms_total / self.calls_total

    def to_dict(self) -> dict[str, int | float | dict[str, int] | dict[int, int]]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "calls_total": self.calls_total,
            "calls_by_host": dict(self.calls_by_host),
            "attempts_total": self.attempts_total,
            "responses_by_status": dict(self.responses_by_status),
            "retries_total": self.retries_total,
            "failures_by_kind": dict(self.failures_by_kind),
            "bytes_sent_total": self.bytes_sent_total,
            "bytes_received_total": self.bytes_received_total,
            "avg_duration_ms": round(self.avg_duration_ms, 2),
        }
