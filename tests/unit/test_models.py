"""Unit tests for wire models and timestamp parsing."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from pinata.models import PinataFile, PinataSwap, parse_timestamp


class TestParseTimestamp:
    """Tests for ISO-8601 timestamp parsing."""

    def test_fractional_seconds(self) -> None:
        """Test the fractional-seconds variant."""
        assert parse_timestamp("2024-01-15T10:30:00.123Z") == datetime(
            2024, 1, 15, 10, 30, 0, 123000, tzinfo=UTC
        )

    def test_whole_seconds(self) -> None:
        """Test the whole-second variant."""
        assert parse_timestamp("2024-01-15T10:30:00Z") == datetime(
            2024, 1, 15, 10, 30, 0, tzinfo=UTC
        )

    def test_nanosecond_fraction(self) -> None:
        """Test that digits past microseconds are dropped, not rejected."""
        assert parse_timestamp("2024-01-15T10:30:00.123456789Z") == datetime(
            2024, 1, 15, 10, 30, 0, 123456, tzinfo=UTC
        )

    def test_seven_digit_fraction_with_offset(self) -> None:
        """Test a long fraction followed by an explicit offset."""
        assert parse_timestamp("2024-01-15T12:30:00.1234567+02:00") == datetime(
            2024, 1, 15, 10, 30, 0, 123456, tzinfo=UTC
        )

    def test_offset(self) -> None:
        """Test that explicit offsets are kept."""
        parsed = parse_timestamp("2024-01-15T12:30:00+02:00")

        assert parsed == datetime(2024, 1, 15, 10, 30, 0, tzinfo=UTC)
        assert parsed.utcoffset() is not None

    @pytest.mark.parametrize(
        "value", ["not-a-date", "", "2024-01-15", "2024-01-15T10:30:00"]
    )
    def test_rejects_invalid(self, value: str) -> None:
        """Test that strings outside both formats are rejected."""
        with pytest.raises(ValueError, match="Cannot decode date"):
            parse_timestamp(value)

    def test_rejects_non_string(self) -> None:
        """Test that numbers are not accepted as dates."""
        with pytest.raises(ValueError, match="Cannot decode date"):
            parse_timestamp(1705314600)

    def test_datetime_passthrough(self) -> None:
        """Test that datetimes are returned unchanged."""
        value = datetime(2024, 1, 15, tzinfo=UTC)

        assert parse_timestamp(value) is value


class TestModels:
    """Tests for model construction."""

    def test_file_is_immutable(self) -> None:
        """Test that decoded files cannot be mutated."""
        file = PinataFile(
            id="f", cid="Qm", size=1, created_at="2024-01-15T10:30:00Z"
        )

        with pytest.raises(ValidationError):
            file.size = 2  # type: ignore[misc]

    def test_swap_requires_mapped_cid(self) -> None:
        """Test that required fields are enforced."""
        with pytest.raises(ValidationError):
            PinataSwap.model_validate({"created_at": "2024-01-15T10:30:00Z"})
