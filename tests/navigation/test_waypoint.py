"""Tests for waypoint variants."""

import pytest

from navplan.navigation.waypoint import Frequency, Runway, Waypoint, WaypointKind


class TestConstruction:
    """Tests for waypoint factories and validation."""

    def test_airport(self) -> None:
        """Airport factory sets the kind and extra data."""
        wp = Waypoint.airport(
            "EHRD", 51.9525, 4.4347,
            frequencies=(Frequency("TWR", "118.205"),),
            runways=(Runway("24", 239.0),),
        )
        assert wp.kind is WaypointKind.AIRPORT
        assert wp.frequencies[0].frequency == "118.205"
        assert wp.runways[0].designator == "24"

    def test_navaid_and_fix(self) -> None:
        """Navaid and fix factories set their kinds."""
        assert Waypoint.navaid("GDA", 52.0, 4.7).kind is WaypointKind.NAVAID
        assert Waypoint.fix("SUGOL", 52.2, 4.5).kind is WaypointKind.FIX

    def test_user_waypoint_identifier_from_position(self) -> None:
        """User points get an identifier derived from their position."""
        wp = Waypoint.user(52.2, 4.75)
        assert wp.kind is WaypointKind.USER
        assert wp.identifier == "WP5212N00445E"
        assert wp.name == "USER WP"

    def test_user_waypoint_southern_western_hemisphere(self) -> None:
        """Hemisphere letters follow the sign of the coordinates."""
        assert Waypoint.user(-33.5, -70.25).identifier == "WP3330S07015W"

    @pytest.mark.parametrize("lat,lon", [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.5), (0.0, -181.0)])
    def test_invalid_coordinates(self, lat: float, lon: float) -> None:
        """Out-of-range coordinates are rejected."""
        with pytest.raises(ValueError):
            Waypoint.fix("BAD", lat, lon)

    def test_immutable(self) -> None:
        """Waypoints cannot be modified in place."""
        wp = Waypoint.fix("SUGOL", 52.2, 4.5)
        with pytest.raises(AttributeError):
            wp.latitude = 10.0  # type: ignore[misc]


class TestResolution:
    """Tests for resolved state and weather station selection."""

    def test_unresolved_placeholder(self) -> None:
        """A placeholder without coordinates is not resolved."""
        assert not Waypoint.unresolved("EHRD").is_resolved
        assert not Waypoint.unresolved().is_resolved

    def test_resolved(self) -> None:
        """A point with identifier and coordinates is resolved."""
        assert Waypoint.airport("EHRD", 51.9525, 4.4347).is_resolved

    def test_missing_identifier_is_unresolved(self) -> None:
        """Coordinates alone do not resolve a point."""
        assert not Waypoint(identifier="", latitude=52.0, longitude=4.0).is_resolved

    def test_airport_is_its_own_station(self) -> None:
        """Airports report their own weather by default."""
        assert Waypoint.airport("EHAM", 52.3, 4.76).weather_station == "EHAM"

    def test_nearest_station_wins(self) -> None:
        """An assigned station overrides the airport's own."""
        wp = Waypoint.airport("EHLE", 52.46, 5.53, nearest_weather_station="EHAM")
        assert wp.weather_station == "EHAM"

    def test_fix_without_station(self) -> None:
        """Fixes without an assigned station have no weather."""
        assert Waypoint.fix("SUGOL", 52.2, 4.5).weather_station is None


class TestCopies:
    """Tests for with_* helpers."""

    def test_with_position(self) -> None:
        """Moving a point keeps its other fields."""
        wp = Waypoint.fix("SUGOL", 52.2, 4.5, altitude_ft=2000)
        moved = wp.with_position(52.3, 4.6)
        assert (moved.latitude, moved.longitude) == (52.3, 4.6)
        assert moved.altitude_ft == 2000
        assert wp.latitude == 52.2

    def test_with_altitude(self) -> None:
        """Altitude can be set and cleared."""
        wp = Waypoint.fix("SUGOL", 52.2, 4.5).with_altitude(2500)
        assert wp.altitude_ft == 2500
        assert wp.with_altitude(None).altitude_ft is None
