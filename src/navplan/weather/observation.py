"""Weather observation model and provider interface.

Observations arrive already decoded (wind, visibility, ceiling); decoding
METAR/TAF text is the provider's job. The planner only uses the wind of the
station at the start of each leg.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class FlightCategory(Enum):
    """Flight category from ceiling and visibility.

    Attributes:
        VFR: Ceiling above 3000 ft and visibility above 8 km
        MVFR: Ceiling 1000-3000 ft or visibility 5-8 km
        IFR: Ceiling 500-1000 ft or visibility 1.6-5 km
        LIFR: Ceiling below 500 ft or visibility below 1.6 km
    """

    VFR = "VFR"
    MVFR = "MVFR"
    IFR = "IFR"
    LIFR = "LIFR"


def classify_flight_category(visibility_m: float | None, ceiling_ft: float | None) -> FlightCategory:
    """Classify conditions into a flight category.

    Args:
        visibility_m: Prevailing visibility in meters (None = unrestricted)
        ceiling_ft: Lowest broken/overcast layer in feet (None = no ceiling)

    Returns:
        The most restrictive category either value falls into.

    Examples:
        >>> classify_flight_category(9999, None)
        <FlightCategory.VFR: 'VFR'>
        >>> classify_flight_category(3000, 800)
        <FlightCategory.IFR: 'IFR'>
    """
    vis = float("inf") if visibility_m is None else visibility_m
    ceiling = float("inf") if ceiling_ft is None else ceiling_ft

    if ceiling < 500 or vis < 1600:
        return FlightCategory.LIFR
    if ceiling < 1000 or vis < 5000:
        return FlightCategory.IFR
    if ceiling <= 3000 or vis <= 8000:
        return FlightCategory.MVFR
    return FlightCategory.VFR


@dataclass(frozen=True)
class WeatherObservation:
    """Decoded surface observation for one station.

    Attributes:
        station_id: Reporting station (ICAO code)
        wind_direction: Direction the wind comes from, degrees true
        wind_speed: Mean wind speed in knots
        wind_gust: Gust speed in knots (optional)
        flight_category: VFR/MVFR/IFR/LIFR
        raw: Raw report text
        observation_time: ISO-8601 observation time (optional)
        visibility_m: Visibility in meters (optional)
        ceiling_ft: Ceiling in feet (optional)

    Raises:
        ValueError: If wind speed or gust is negative.
    """

    station_id: str
    wind_direction: float
    wind_speed: float
    wind_gust: float | None = None
    flight_category: FlightCategory = FlightCategory.VFR
    raw: str = ""
    observation_time: str | None = None
    visibility_m: float | None = None
    ceiling_ft: float | None = None

    def __post_init__(self) -> None:
        if self.wind_speed < 0:
            raise ValueError(f"Wind speed cannot be negative: {self.wind_speed}")
        if self.wind_gust is not None and self.wind_gust < 0:
            raise ValueError(f"Wind gust cannot be negative: {self.wind_gust}")

    @property
    def is_calm(self) -> bool:
        """True when there is no wind to correct for."""
        return self.wind_speed == 0


class WeatherProvider(ABC):
    """Source of current observations by station identifier.

    Implementations may hit the network; failures propagate as exceptions
    and are turned into an error state by the orchestrator.
    """

    @abstractmethod
    def get_observation(self, station_id: str) -> WeatherObservation | None:
        """Latest observation for a station, or None if none is available."""

    def get_observations(self, station_ids: Iterable[str]) -> dict[str, WeatherObservation]:
        """Batched lookup; stations without an observation are omitted."""
        result = {}
        for station_id in dict.fromkeys(station_ids):
            observation = self.get_observation(station_id)
            if observation is not None:
                result[station_id] = observation
        return result


class InMemoryWeatherProvider(WeatherProvider):
    """Provider backed by a dictionary, for offline use and tests.

    Examples:
        >>> provider = InMemoryWeatherProvider()
        >>> provider.update(WeatherObservation("EHRD", 210, 8))
        >>> provider.get_observation("ehrd").wind_speed
        8
    """

    def __init__(self, observations: Iterable[WeatherObservation] = ()) -> None:
        self._observations: dict[str, WeatherObservation] = {}
        for observation in observations:
            self.update(observation)

    def update(self, observation: WeatherObservation) -> None:
        """Store or replace the observation for its station."""
        self._observations[observation.station_id.upper()] = observation
        logger.debug("Weather for %s: %03.0f/%.0f kt", observation.station_id,
                     observation.wind_direction, observation.wind_speed)

    def get_observation(self, station_id: str) -> WeatherObservation | None:
        return self._observations.get(station_id.upper())
