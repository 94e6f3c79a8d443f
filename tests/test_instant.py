"""
Tests for coercion and arithmetic on pendulum instants.
"""

from datetime import date, datetime, timezone

import pendulum
import pytest

from daterange.config import RangeConfig, configure
from daterange.domain.exceptions import InvalidInstantError, InvalidUnitError
from daterange.domain.instant import (
    difference,
    format_instant,
    microseconds_between,
    milliseconds_between,
    normalize_unit,
    shift,
    to_instant,
    to_microseconds,
    to_milliseconds,
    to_native,
)


class TestToInstant:
    """Tests for coercing endpoint-like values."""

    def test_pendulum_datetime_passes_through(self):
        """Test that pendulum instants are returned unchanged."""
        instant = pendulum.datetime(2024, 1, 1, tz="Europe/Berlin")

        assert to_instant(instant) is instant

    def test_naive_datetime_uses_timezone(self):
        """Test that naive datetimes are read in the given timezone."""
        instant = to_instant(datetime(2024, 1, 1, 12), tz="Europe/Berlin")

        assert instant.timezone_name == "Europe/Berlin"
        assert instant.hour == 12

    def test_naive_pendulum_datetime_uses_timezone(self):
        """Test that naive pendulum instants are placed in the given timezone."""
        instant = to_instant(pendulum.naive(2024, 1, 1, 12), tz="Europe/Berlin")

        assert instant.timezone_name == "Europe/Berlin"
        assert instant.hour == 12
        assert instant == pendulum.datetime(2024, 1, 1, 11, tz="UTC")

    def test_aware_datetime_keeps_instant(self):
        """Test that aware datetimes keep their point in time."""
        instant = to_instant(datetime(2024, 1, 1, 12, tzinfo=timezone.utc), tz="Europe/Berlin")

        assert instant == pendulum.datetime(2024, 1, 1, 12, tz="UTC")

    def test_date_becomes_midnight(self):
        """Test that dates become the start of the day."""
        instant = to_instant(date(2024, 2, 29))

        assert instant == pendulum.datetime(2024, 2, 29, tz="UTC")

    def test_epoch_milliseconds(self):
        """Test numbers as milliseconds since the epoch."""
        assert to_instant(0) == pendulum.datetime(1970, 1, 1, tz="UTC")
        assert to_instant(86_400_000) == pendulum.datetime(1970, 1, 2, tz="UTC")
        assert to_instant(1.5).microsecond == 1500

    def test_strings(self):
        """Test ISO-8601 strings with and without time."""
        assert to_instant("2024-01-01") == pendulum.datetime(2024, 1, 1, tz="UTC")
        assert to_instant("2024-01-01T10:00:00+01:00") == pendulum.datetime(2024, 1, 1, 9, tz="UTC")

    def test_configured_timezone(self):
        """Test that the configured timezone is the default."""
        configure(RangeConfig(timezone="America/New_York"))

        assert to_instant("2024-01-01T10:00").timezone_name == "America/New_York"

    def test_invalid_values(self):
        """Test values that are not instants."""
        for value in (None, True, object(), "garbage", "P1D"):
            with pytest.raises(InvalidInstantError):
                to_instant(value)

    def test_parse_error_is_chained(self):
        """Test that the underlying parse error is kept as the cause."""
        with pytest.raises(InvalidInstantError) as excinfo:
            to_instant("2024-13-45")

        assert excinfo.value.__cause__ is not None


class TestUnits:
    """Tests for unit names and unit arithmetic."""

    def test_normalize_unit(self):
        """Test singular, plural and mixed-case names."""
        assert normalize_unit("day") == "day"
        assert normalize_unit("Days") == "day"
        assert normalize_unit(" weeks ") == "week"
        assert normalize_unit("milliseconds") == "millisecond"

    def test_unknown_unit(self):
        """Test that unknown names raise InvalidUnitError."""
        with pytest.raises(InvalidUnitError):
            normalize_unit("fortnight")

        with pytest.raises(InvalidUnitError):
            normalize_unit(None)

    def test_shift(self):
        """Test calendar and fixed steps."""
        jan31 = pendulum.datetime(2024, 1, 31, tz="UTC")

        assert shift(jan31, 1, "month") == pendulum.datetime(2024, 2, 29, tz="UTC")
        assert shift(jan31, 2, "days") == pendulum.datetime(2024, 2, 2, tz="UTC")
        assert shift(jan31, 250, "millisecond").microsecond == 250000

    def test_difference(self):
        """Test signed differences in milliseconds and units."""
        start = pendulum.datetime(2024, 1, 1, tz="UTC")
        end = pendulum.datetime(2024, 3, 1, tz="UTC")

        assert difference(start, end) == 60 * 24 * 60 * 60 * 1000
        assert difference(start, end, "months") == 2
        assert difference(start, end, "days") == 60
        assert difference(end, start) == -60 * 24 * 60 * 60 * 1000

    def test_milliseconds_truncate_toward_zero(self):
        """Test sub-millisecond remainders in both directions."""
        start = pendulum.datetime(2024, 1, 1, tz="UTC")
        end = start.add(microseconds=1999)

        assert milliseconds_between(start, end) == 1
        assert milliseconds_between(end, start) == -1


class TestConversions:
    """Tests for native, numeric and text forms."""

    def test_to_native(self):
        """Test conversion to a plain datetime."""
        instant = pendulum.datetime(2024, 1, 1, 12, 30, tz="Europe/Berlin")

        native = to_native(instant)

        assert type(native) is datetime
        assert native == instant
        assert native.utcoffset() == instant.utcoffset()

    def test_to_milliseconds(self):
        """Test epoch milliseconds across timezones."""
        assert to_milliseconds(pendulum.datetime(1970, 1, 1, 0, 0, 1, tz="UTC")) == 1000
        assert to_milliseconds(pendulum.datetime(1970, 1, 1, 1, tz="Europe/Berlin")) == 0

    def test_format_instant(self):
        """Test the canonical text form."""
        instant = pendulum.datetime(2024, 1, 1, 9, 5, 3, tz="Europe/Berlin")

        assert format_instant(instant) == "2024-01-01T09:05:03+01:00"

    def test_to_microseconds(self):
        """Test epoch microseconds, including naive values read as UTC."""
        assert to_microseconds(pendulum.datetime(1970, 1, 1, 0, 0, 0, 250, tz="UTC")) == 250
        assert to_microseconds(pendulum.naive(1970, 1, 1, 0, 0, 1)) == 1_000_000

    def test_differences_across_dst_start(self):
        """Test that differences count elapsed time when the offset changes."""
        start = pendulum.datetime(2024, 3, 31, 0, tz="Europe/Berlin")
        end = pendulum.datetime(2024, 3, 31, 4, tz="Europe/Berlin")

        # 02:00-03:00 does not exist on this day
        assert milliseconds_between(start, end) == 3 * 60 * 60 * 1000
        assert microseconds_between(end, start) == -3 * 60 * 60 * 1_000_000

    def test_differences_across_dst_end(self):
        """Test that the repeated hour in autumn is counted."""
        start = pendulum.datetime(2024, 10, 27, 0, tz="Europe/Berlin")
        end = pendulum.datetime(2024, 10, 27, 4, tz="Europe/Berlin")

        assert milliseconds_between(start, end) == 5 * 60 * 60 * 1000
