"""Tests for sunrise, sunset and daylight checks."""

from datetime import date, datetime, timedelta, timezone

from navplan.weather.sun import is_daylight, sun_times

SCHIPHOL = (52.3086, 4.7639)
LONGYEARBYEN = (78.2461, 15.4656)


class TestSunTimes:
    """Tests for sun_times."""

    def test_schiphol_in_october(self) -> None:
        """Sunrise around 06:10 UTC, sunset around 16:35 UTC."""
        times = sun_times(*SCHIPHOL, date(2026, 10, 18))
        assert times.sunrise.tzinfo is not None
        assert times.sunrise.utcoffset() == timedelta(0)
        assert times.sunrise.hour == 6
        assert times.sunset.hour == 16
        assert times.sunrise < times.sunset

    def test_polar_night(self) -> None:
        """No sunrise in Svalbard at midwinter."""
        times = sun_times(*LONGYEARBYEN, date(2026, 12, 21))
        assert times.sunrise is None
        assert times.sunset is None


class TestIsDaylight:
    """Tests for is_daylight."""

    def test_noon_and_night(self) -> None:
        assert is_daylight(*SCHIPHOL, datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc))
        assert not is_daylight(*SCHIPHOL, datetime(2026, 10, 18, 20, 0, tzinfo=timezone.utc))

    def test_naive_time_is_utc(self) -> None:
        """Naive times are read as UTC."""
        assert is_daylight(*SCHIPHOL, datetime(2026, 10, 18, 9, 30))
        assert not is_daylight(*SCHIPHOL, datetime(2026, 10, 18, 5, 0))

    def test_offset_is_converted(self) -> None:
        """09:30 CEST is 07:30 UTC, after sunrise."""
        cest = timezone(timedelta(hours=2))
        assert is_daylight(*SCHIPHOL, datetime(2026, 10, 18, 9, 30, tzinfo=cest))

    def test_polar_regions_use_sun_elevation(self) -> None:
        """Midnight sun in June, polar night in December."""
        assert is_daylight(*LONGYEARBYEN, datetime(2026, 6, 21, 0, 0, tzinfo=timezone.utc))
        assert not is_daylight(*LONGYEARBYEN, datetime(2026, 12, 21, 11, 0, tzinfo=timezone.utc))
