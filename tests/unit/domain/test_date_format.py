"""
Unit tests for named date formats.
"""

from datetime import datetime, timedelta, timezone

from demoapp.domain.date_format import (
    RFC1123,
    RFC3339,
    RFC3339_NANO,
    UNIX,
    UNIX_DATE,
    format_date,
)

UTC_NOON = datetime(2024, 3, 5, 12, 30, 45, 120000, tzinfo=timezone.utc)
PLUS_TWO = datetime(2024, 3, 5, 12, 30, 45, tzinfo=timezone(timedelta(hours=2)))


class TestFormatDate:
    """Unit tests for format_date."""

    def test_rfc3339_utc(self):
        """Test RFC3339 uses Z for UTC."""
        assert format_date(RFC3339, UTC_NOON) == "2024-03-05T12:30:45Z"

    def test_rfc3339_offset(self):
        """Test RFC3339 renders numeric offsets."""
        assert format_date(RFC3339, PLUS_TWO) == "2024-03-05T12:30:45+02:00"

    def test_rfc3339_nano_trims_trailing_zeros(self):
        """Test RFC3339Nano drops trailing zeros of the fraction."""
        assert format_date(RFC3339_NANO, UTC_NOON) == "2024-03-05T12:30:45.12Z"

    def test_rfc3339_nano_without_fraction(self):
        """Test RFC3339Nano omits an all-zero fraction."""
        assert format_date(RFC3339_NANO, PLUS_TWO) == "2024-03-05T12:30:45+02:00"

    def test_rfc1123(self):
        """Test RFC1123 layout."""
        assert format_date(RFC1123, UTC_NOON) == "Tue, 05 Mar 2024 12:30:45 UTC"

    def test_unix_date_pads_day_with_space(self):
        """Test UnixDate pads single-digit days with a space."""
        assert format_date(UNIX_DATE, UTC_NOON) == "Tue Mar  5 12:30:45 UTC 2024"

    def test_unix_is_epoch_seconds(self):
        """Test Unix renders whole seconds since the epoch."""
        assert format_date(UNIX, UTC_NOON) == str(int(UTC_NOON.timestamp()))

    def test_unknown_format_uses_default(self):
        """Test unknown names fall back to the default layout."""
        assert format_date("Kitchen", UTC_NOON) == "2024-03-05 12:30:45"

    def test_empty_format_uses_default(self):
        """Test an empty name falls back to the default layout."""
        assert format_date("", UTC_NOON) == "2024-03-05 12:30:45"

    def test_current_time_when_not_given(self):
        """Test the current time is used by default."""
        result = format_date(UNIX)

        assert abs(int(result) - int(datetime.now().timestamp())) <= 2
