"""Shared pytest fixtures."""

from collections.abc import Iterator

import pytest

from pinata.observability import reset_logging
from pinata.transport.metrics import TransportMetrics


@pytest.fixture(autouse=True)
def reset_metrics() -> Iterator[None]:
    """Give every test a fresh metrics singleton."""
    TransportMetrics.reset()
    yield
    TransportMetrics.reset()


@pytest.fixture(autouse=True)
def reset_log_handlers() -> Iterator[None]:
    """Undo logging configuration and bound context after each test."""
    yield
    reset_logging()
