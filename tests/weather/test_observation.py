"""Tests for weather observations and providers."""

import pytest

from navplan.weather import (
    FlightCategory,
    InMemoryWeatherProvider,
    WeatherObservation,
    WeatherProvider,
    classify_flight_category,
)


class TestFlightCategory:
    """Tests for classify_flight_category."""

    @pytest.mark.parametrize(
        "visibility,ceiling,expected",
        [
            (None, None, FlightCategory.VFR),
            (9999, 3500, FlightCategory.VFR),
            (9999, 3000, FlightCategory.MVFR),
            (8000, None, FlightCategory.MVFR),
            (4000, None, FlightCategory.IFR),
            (9999, 900, FlightCategory.IFR),
            (1500, None, FlightCategory.LIFR),
            (9999, 400, FlightCategory.LIFR),
            (6000, 700, FlightCategory.IFR),
        ],
    )
    def test_classification(self, visibility, ceiling, expected: FlightCategory) -> None:
        """The most restrictive of ceiling and visibility wins."""
        assert classify_flight_category(visibility, ceiling) is expected


class TestWeatherObservation:
    """Tests for WeatherObservation."""

    def test_calm(self) -> None:
        """Zero wind is calm."""
        assert WeatherObservation("EHRD", 0, 0).is_calm
        assert not WeatherObservation("EHRD", 210, 5).is_calm

    def test_negative_wind_rejected(self) -> None:
        """Negative speeds are invalid."""
        with pytest.raises(ValueError):
            WeatherObservation("EHRD", 210, -1)
        with pytest.raises(ValueError):
            WeatherObservation("EHRD", 210, 10, wind_gust=-5)


class TestInMemoryWeatherProvider:
    """Tests for the in-memory provider."""

    def test_lookup_is_case_insensitive(self) -> None:
        """Station ids match regardless of case."""
        provider = InMemoryWeatherProvider([WeatherObservation("EHRD", 210, 15)])
        assert provider.get_observation("ehrd").wind_direction == 210
        assert provider.get_observation("EHAM") is None

    def test_update_replaces(self) -> None:
        """A newer observation replaces the old one."""
        provider = InMemoryWeatherProvider([WeatherObservation("EHRD", 210, 15)])
        provider.update(WeatherObservation("EHRD", 220, 20))
        assert provider.get_observation("EHRD").wind_speed == 20

    def test_batch_omits_missing_stations(self) -> None:
        """Stations without data are left out of the batch."""
        provider = InMemoryWeatherProvider(
            [WeatherObservation("EHRD", 210, 15), WeatherObservation("EHAM", 220, 18)]
        )
        result = provider.get_observations(["EHRD", "EHLE", "EHAM", "EHRD"])
        assert set(result) == {"EHRD", "EHAM"}

    def test_batch_queries_each_station_once(self) -> None:
        """Duplicate station ids are looked up once."""
        calls = []

        class CountingProvider(WeatherProvider):
            def get_observation(self, station_id: str) -> WeatherObservation | None:
                calls.append(station_id)
                return None

        CountingProvider().get_observations(["EHRD", "EHRD", "EHAM"])
        assert calls == ["EHRD", "EHAM"]
