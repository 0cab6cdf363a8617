"""Tests for time expression parsing."""

from datetime import datetime

import pytest  # type: ignore[import-not-found]

from tempo.core.timeparse import parse_time

NOW = datetime(2025, 11, 16, 18, 0, 0)


class TestParseTime:
    """Test parse_time."""

    def test_clock_time_uses_reference_day(self) -> None:
        """Test that a bare clock time is taken on the reference day."""
        assert parse_time("9:00am", NOW) == datetime(2025, 11, 16, 9, 0)
        assert parse_time("10:30am", NOW) == datetime(2025, 11, 16, 10, 30)

    def test_relative_expression(self) -> None:
        """Test a relative expression against the reference time."""
        assert parse_time("2 hours ago", NOW) == datetime(2025, 11, 16, 16, 0)

    def test_absolute_date(self) -> None:
        """Test a full date and time."""
        assert parse_time("2025-11-14 13:15", NOW) == datetime(2025, 11, 14, 13, 15)

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_blank_input(self, text: object) -> None:
        """Test that blank input does not match."""
        assert parse_time(text, NOW) is None  # type: ignore[arg-type]

    def test_gibberish(self) -> None:
        """Test that text without a time does not match."""
        assert parse_time("qwxz plorg", NOW) is None

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("9", datetime(2025, 11, 16, 9, 0)),
            ("0", datetime(2025, 11, 16, 0, 0)),
            (" 17 ", datetime(2025, 11, 16, 17, 0)),
        ],
    )
    def test_bare_hour(self, text: str, expected: datetime) -> None:
        """Test that a bare number is an hour of the reference day."""
        assert parse_time(text, NOW) == expected

    def test_bare_number_out_of_range(self) -> None:
        """Test that a number that cannot be an hour does not match."""
        assert parse_time("24", NOW) is None
        assert parse_time("930", NOW) is None
