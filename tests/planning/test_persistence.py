"""Tests for flight plan persistence."""

import json
from pathlib import Path

import pytest

from navplan.core.resource_path import get_data_path
from navplan.navigation.flight_plan import FlightPlan
from navplan.navigation.waypoint import Frequency, Runway, Waypoint, WaypointKind
from navplan.planning.persistence import (
    InMemoryFlightPlanStore,
    JsonFileFlightPlanStore,
    default_flight_plan,
    flight_plan_from_dict,
    flight_plan_to_dict,
    waypoint_from_dict,
    waypoint_to_dict,
)
from navplan.systems.fuel.policy import ReservePolicy


@pytest.fixture
def route_plan(direct_plan: FlightPlan, gda: Waypoint, sugol: Waypoint, ehle: Waypoint) -> FlightPlan:
    return (direct_plan.add_waypoint(gda).add_waypoint(sugol)
            .with_point("alternate", ehle).with_cruise_altitude(2500))


class TestEncoding:
    """Tests for the JSON layout."""

    def test_plan_round_trip(self, route_plan: FlightPlan) -> None:
        """A decoded plan equals the encoded one."""
        data = json.loads(json.dumps(flight_plan_to_dict(route_plan)))
        assert flight_plan_from_dict(data) == route_plan

    def test_keys(self, route_plan: FlightPlan) -> None:
        """Stored plans use camelCase keys."""
        data = flight_plan_to_dict(route_plan)
        assert data["cruiseAltitude"] == 2500
        assert data["dateTime"] == "2026-10-18T09:30"
        assert data["reserveType"] == "VFR_DAY"
        assert data["aircraftId"] == "PH-VCR"
        assert data["aircraft"]["fuelBurn"] == 35
        assert data["waypoints"][1]["nearestMetarStation"] == "EHAM"
        assert data["waypoints"][0]["alt"] == 1500

    def test_waypoint_details_survive(self) -> None:
        """Frequencies and runways are stored."""
        ehrd = Waypoint.airport(
            "EHRD", 51.9525, 4.4347,
            frequencies=(Frequency("TWR", "118.200"),),
            runways=(Runway("06", 57.0, 2200, 45, "ASPHALT"),),
        )
        data = waypoint_to_dict(ehrd)
        assert data["runways"][0] == {"id": "06", "trueHeading": 57.0, "length": 2200,
                                      "width": 45, "surface": "ASPHALT"}
        assert waypoint_from_dict(data) == ehrd

    def test_null_alternate(self, direct_plan: FlightPlan) -> None:
        data = flight_plan_to_dict(direct_plan)
        assert data["alternate"] is None
        assert flight_plan_from_dict(data).alternate is None


class TestLegacyLayout:
    """Tests for plans written by older versions."""

    @pytest.mark.parametrize(
        "point_type,identifier,kind",
        [
            ("VOR", "GDA", WaypointKind.NAVAID),
            ("WAYPOINT", "SUGOL", WaypointKind.FIX),
            ("WAYPOINT", "wp-map-1718", WaypointKind.USER),
            ("DEP", "EHRD", WaypointKind.AIRPORT),
            ("ARR", "EHAM", WaypointKind.AIRPORT),
            ("airport", "EHLE", WaypointKind.AIRPORT),
        ],
    )
    def test_point_types(self, point_type: str, identifier: str, kind: WaypointKind) -> None:
        point = waypoint_from_dict({"id": identifier, "type": point_type, "lat": 52.0, "lon": 4.7})
        assert point.kind is kind

    def test_icao_key(self) -> None:
        """Old airport records carry "icao" instead of "id"."""
        assert waypoint_from_dict({"icao": "EHRD", "lat": 51.9525, "lon": 4.4347}).identifier == "EHRD"

    def test_missing_identifier(self) -> None:
        with pytest.raises(KeyError):
            waypoint_from_dict({"lat": 52.0, "lon": 4.7})

    def test_missing_fuel_burn_discards_plan(self, direct_plan: FlightPlan) -> None:
        """Plans whose aircraft predates fuel burn are not decoded."""
        data = flight_plan_to_dict(direct_plan)
        del data["aircraft"]["fuelBurn"]
        assert flight_plan_from_dict(data) is None

    def test_defaults_for_missing_fields(self, direct_plan: FlightPlan) -> None:
        data = flight_plan_to_dict(direct_plan)
        for key in ("cruiseAltitude", "dateTime", "payload", "reserveType", "waypoints"):
            del data[key]
        plan = flight_plan_from_dict(data)
        assert plan.cruise_altitude_ft == 1500.0
        assert plan.departure_time == ""
        assert plan.payload.fuel == 0.0
        assert plan.reserve_policy is ReservePolicy.VFR_DAY
        assert plan.waypoints == ()


class TestDefaultPlan:
    """Tests for the first-start plan."""

    def test_route(self) -> None:
        plan = default_flight_plan("2026-10-18T09:30")
        assert plan.route_string() == "EHRD GDA SUGOL EHAM"
        assert plan.aircraft.fuel_burn_lph > 0
        assert plan.departure_time == "2026-10-18T09:30"
        assert plan.payload.pilot == 80
        assert plan.has_endpoints
        assert all(w.altitude_ft == 1500 for w in plan.waypoints)

    def test_departure_time_defaults_to_now(self) -> None:
        assert default_flight_plan().departure_time


class TestStores:
    """Tests for the plan stores."""

    def test_in_memory(self, direct_plan: FlightPlan) -> None:
        store = InMemoryFlightPlanStore(default_factory=lambda: direct_plan)
        assert store.load() == direct_plan

        edited = direct_plan.with_cruise_altitude(3000)
        store.save(edited)
        assert store.load() == edited

    def test_file_round_trip(self, tmp_path: Path, direct_plan: FlightPlan) -> None:
        """Saving creates missing directories."""
        store = JsonFileFlightPlanStore(tmp_path / "nested" / "plan.json")
        store.save(direct_plan)

        assert (tmp_path / "nested" / "plan.json").exists()
        assert store.load() == direct_plan

    def test_missing_file_gives_default(self, tmp_path: Path, direct_plan: FlightPlan) -> None:
        store = JsonFileFlightPlanStore(tmp_path / "plan.json", default_factory=lambda: direct_plan)
        assert store.load() == direct_plan

    @pytest.mark.parametrize("content", ["{not json", "[]", '{"aircraft": {"fuelBurn": 35}}', "null"])
    def test_unreadable_file_gives_default(self, tmp_path: Path, direct_plan: FlightPlan, content: str) -> None:
        """Corrupt or incomplete files fall back to the default plan."""
        path = tmp_path / "plan.json"
        path.write_text(content, encoding="utf-8")
        store = JsonFileFlightPlanStore(path, default_factory=lambda: direct_plan)
        assert store.load() == direct_plan

    def test_plan_without_fuel_burn_gives_default(self, tmp_path: Path, direct_plan: FlightPlan) -> None:
        path = tmp_path / "plan.json"
        data = flight_plan_to_dict(direct_plan.with_cruise_altitude(4500))
        data["aircraft"].pop("fuelBurn")
        path.write_text(json.dumps(data), encoding="utf-8")

        store = JsonFileFlightPlanStore(path, default_factory=lambda: direct_plan)
        assert store.load() == direct_plan

    def test_example_plan(self) -> None:
        """The shipped example plan decodes."""
        plan = JsonFileFlightPlanStore(get_data_path("example_plan.json")).load()
        assert plan.route_string() == "EHRD GDA SUGOL EHAM"
        assert plan.alternate.identifier == "EHLE"
        assert plan.waypoints[0].kind is WaypointKind.NAVAID
        assert plan.waypoints[1].altitude_ft == 2000
        assert plan.payload.pax == 75
