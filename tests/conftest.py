"""Pytest configuration and fixtures for all tests."""

from datetime import datetime, timezone

import pytest

from navplan.aircraft.profile import AircraftProfile
from navplan.navigation.flight_plan import FlightPlan, Payload
from navplan.navigation.waypoint import Waypoint


@pytest.fixture
def dr400() -> AircraftProfile:
    """Robin DR400 flying at 110 kt burning 35 L/h."""
    return AircraftProfile(
        id="PH-VCR",
        name="Robin DR400/140B",
        cruise_speed_kts=110,
        fuel_burn_lph=35,
        usable_fuel_l=110,
        empty_weight_kg=600,
        max_takeoff_mass_kg=1000,
        cg_min=0.2,
        cg_max=0.8,
        arm_pilot=0.4,
        arm_pax=0.4,
        arm_baggage=1.1,
        arm_fuel=0.8,
    )


@pytest.fixture
def ehrd() -> Waypoint:
    return Waypoint.airport("EHRD", 51.9525, 4.4347, name="Rotterdam The Hague", magnetic_variation=1)


@pytest.fixture
def eham() -> Waypoint:
    return Waypoint.airport("EHAM", 52.3086, 4.7639, name="Amsterdam Schiphol", magnetic_variation=1)


@pytest.fixture
def ehle() -> Waypoint:
    return Waypoint.airport("EHLE", 52.4603, 5.5272, name="Lelystad Airport", magnetic_variation=1)


@pytest.fixture
def gda() -> Waypoint:
    return Waypoint.navaid("GDA", 52.0166, 4.7166, name="Gouda VOR-DME", nearest_weather_station="EHRD")


@pytest.fixture
def sugol() -> Waypoint:
    return Waypoint.fix("SUGOL", 52.2000, 4.5000, name="SUGOL Intersection", nearest_weather_station="EHAM")


@pytest.fixture
def direct_plan(ehrd: Waypoint, eham: Waypoint, dr400: AircraftProfile) -> FlightPlan:
    """Rotterdam direct to Schiphol."""
    return FlightPlan(
        departure=ehrd,
        arrival=eham,
        aircraft=dr400,
        departure_time="2026-10-18T09:30",
        payload=Payload(pilot=80, pax=0, baggage=10, fuel=100),
    )


@pytest.fixture
def fixed_clock():
    """Clock returning a constant UTC time."""
    moment = datetime(2026, 10, 18, 8, 0, tzinfo=timezone.utc)
    return lambda: moment
