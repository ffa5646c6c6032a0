"""Unit tests for comment timestamp parsing."""

from datetime import UTC, date, datetime

from ziora.domain.value import is_on_day, local_date, parse_timestamp


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_parses_iso_with_zulu(self):
        """ISO strings with a Z suffix should parse as UTC."""
        # Act
        moment = parse_timestamp("2025-06-22T10:15:00.000Z")

        # Assert
        assert moment == datetime(2025, 6, 22, 10, 15, tzinfo=UTC)

    def test_parses_locale_format(self):
        """Locale strings should parse as naive local time."""
        # Act
        moment = parse_timestamp("22/06/2025, 00:46:48")

        # Assert
        assert moment == datetime(2025, 6, 22, 0, 46, 48)
        assert moment.tzinfo is None

    def test_parses_locale_format_without_padding(self):
        """Single-digit day and month should be accepted."""
        # Act
        moment = parse_timestamp("2/6/2025, 09:05:00")

        # Assert
        assert moment == datetime(2025, 6, 2, 9, 5)

    def test_unparseable_returns_none(self):
        """Garbage, empty strings and non-strings should return None."""
        # Act & Assert
        assert parse_timestamp("yesterday") is None
        assert parse_timestamp("") is None
        assert parse_timestamp(None) is None
        assert parse_timestamp(12345) is None


class TestIsOnDay:
    """Tests for is_on_day."""

    def test_locale_timestamp_matches_its_day(self):
        """A naive locale timestamp is compared on its own calendar day."""
        # Act & Assert
        assert is_on_day("22/06/2025, 00:46:48", date(2025, 6, 22))
        assert not is_on_day("22/06/2025, 00:46:48", date(2025, 6, 21))

    def test_aware_timestamp_uses_local_day(self):
        """Aware timestamps are converted to local time before comparing."""
        # Arrange
        moment = datetime(2025, 6, 22, 12, 0, tzinfo=UTC)

        # Act & Assert
        assert is_on_day(moment, local_date(moment))

    def test_unparseable_never_matches(self):
        """Unparseable timestamps never count for any day."""
        # Act & Assert
        assert not is_on_day("not a date", date(2025, 6, 22))
