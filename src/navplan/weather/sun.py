"""Sunrise, sunset and daylight checks for day VFR planning.

Times are UTC. Naive datetimes are taken to be UTC.

Typical usage:
    from navplan.weather.sun import is_daylight, sun_times

    times = sun_times(52.3086, 4.7639, date(2026, 10, 18))
    times.sunset  # 2026-10-18 16:3x UTC
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone

from astral import Observer
from astral.sun import elevation, sun

from navplan.core.logging_system import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SunTimes:
    """Sunrise and sunset for one position and day.

    Both are None during polar day or polar night.
    """

    sunrise: datetime | None
    sunset: datetime | None


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def sun_times(latitude: float, longitude: float, day: date) -> SunTimes:
    """Compute sunrise and sunset (UTC) at a position."""
    try:
        times = sun(Observer(latitude=latitude, longitude=longitude), date=day, tzinfo=timezone.utc)
    except ValueError as e:
        logger.debug("No sunrise/sunset at %.4f, %.4f on %s: %s", latitude, longitude, day, e)
        return SunTimes(sunrise=None, sunset=None)
    return SunTimes(sunrise=times["sunrise"], sunset=times["sunset"])


def is_daylight(latitude: float, longitude: float, moment: datetime) -> bool:
    """True when moment falls between sunrise and sunset at the position.

    Without a sunrise or sunset that day (polar regions) the sun's elevation
    decides.
    """
    moment = _as_utc(moment)
    times = sun_times(latitude, longitude, moment.date())
    if times.sunrise is None or times.sunset is None:
        return elevation(Observer(latitude=latitude, longitude=longitude), moment) > 0.0
    return times.sunrise <= moment <= times.sunset
