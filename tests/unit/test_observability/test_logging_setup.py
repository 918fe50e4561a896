"""Unit tests for structured logging configuration and redaction."""

import io
import json
import logging

import pytest

from pinata.client import Pinata
from pinata.errors import NotFoundError
from pinata.observability import (
    LIBRARY_LOGGER_NAME,
    bind_command_context,
    clear_command_context,
    configure_logging,
    get_logger,
)
from pinata.observability.redact import REDACTED_VALUE, redact_event
from tests.helpers.transport import ScriptedHandler, make_transport


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_output(self) -> None:
        """Test that events are rendered as one JSON object per line."""
        output = io.StringIO()
        configure_logging(output=output)

        get_logger().bind(component="transport").info(
            "request_complete", status_code=200
        )

        event = json.loads(output.getvalue().strip())
        assert event["event"] == "request_complete"
        assert event["component"] == "transport"
        assert event["status_code"] == 200
        assert event["level"] == "info"
        assert "timestamp" in event

    def test_level_filtering(self) -> None:
        """Test that events below the configured level are dropped."""
        output = io.StringIO()
        configure_logging(level=logging.WARNING, output=output)

        get_logger().info("attempt_started")

        assert output.getvalue() == ""

    def test_credentials_never_rendered(self) -> None:
        """Test that headers and secrets are masked even when logged raw."""
        output = io.StringIO()
        configure_logging(output=output)

        get_logger().info(
            "attempt_started",
            headers={"Authorization": "Bearer secret-jwt", "Accept": "*/*"},
        )
        get_logger().info("settings_loaded", api_secret="secret-key")

        text = output.getvalue()
        assert "secret-jwt" not in text
        assert "secret-key" not in text
        assert REDACTED_VALUE in text
        assert "*/*" in text

    def test_console_output(self) -> None:
        """Test the human-readable renderer."""
        output = io.StringIO()
        configure_logging(output=output, json_format=False)

        get_logger().warning("retries_exhausted")

        assert "retries_exhausted" in output.getvalue()

    def test_command_context(self) -> None:
        """Test that the bound command tags events until cleared."""
        output = io.StringIO()
        configure_logging(output=output)

        bind_command_context("upload")
        get_logger().info("upload_complete")
        clear_command_context()
        get_logger().info("request_complete")

        first, second = (json.loads(line) for line in output.getvalue().splitlines())
        assert first["command"] == "upload"
        assert "command" not in second


class TestRedactEvent:
    """Tests for the redaction processor."""

    def test_masks_credential_keys(self) -> None:
        """Test masking of top-level credential fields."""
        event = {"event": "x", "jwt": "abc", "pinata_api_key": "k", "cid": "Qm"}

        result = redact_event(None, "info", event)

        assert result["jwt"] == REDACTED_VALUE
        assert result["pinata_api_key"] == REDACTED_VALUE
        assert result["cid"] == "Qm"

    def test_masks_header_maps(self) -> None:
        """Test masking inside a headers mapping."""
        event = {"event": "x", "headers": {"pinata_secret_api_key": "s"}}

        result = redact_event(None, "debug", event)

        assert result["headers"] == {"pinata_secret_api_key": REDACTED_VALUE}


class TestUnconfiguredLogging:
    """Tests for client behavior when the application sets up no logging."""

    async def test_client_call_prints_nothing(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that a successful call writes nothing to stdout or stderr."""
        handler = ScriptedHandler([(200, b"")])
        client = Pinata.from_jwt("abc", transport=make_transport(handler))

        await client.delete_file("file-123")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    async def test_failed_call_prints_nothing(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that warning-level failure events stay silent too."""
        handler = ScriptedHandler([(404, b"")])
        client = Pinata.from_jwt("abc", transport=make_transport(handler))

        with pytest.raises(NotFoundError):
            await client.get_file("missing")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    async def test_events_reach_stdlib_logging(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that applications can collect events with their own handlers."""
        caplog.set_level(logging.DEBUG, logger=LIBRARY_LOGGER_NAME)
        handler = ScriptedHandler([(200, b"")])
        client = Pinata.from_jwt("secret-jwt", transport=make_transport(handler))

        await client.delete_file("file-123")

        records = [r for r in caplog.records if r.name == LIBRARY_LOGGER_NAME]
        events = [record.msg["event"] for record in records]
        assert "attempt_started" in events
        assert "request_complete" in events
        assert "secret-jwt" not in str([record.msg for record in records])
