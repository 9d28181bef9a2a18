"""Weather observations consumed by the planning engine."""

from navplan.weather.observation import (
    FlightCategory,
    InMemoryWeatherProvider,
    WeatherObservation,
    WeatherProvider,
    classify_flight_category,
)
from navplan.weather.sun import SunTimes, is_daylight, sun_times

__all__ = [
    "FlightCategory",
    "InMemoryWeatherProvider",
    "SunTimes",
    "WeatherObservation",
    "WeatherProvider",
    "classify_flight_category",
    "is_daylight",
    "sun_times",
]
