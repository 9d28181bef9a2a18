"""Flight plan persistence.

Plans are stored as JSON objects with camelCase keys::

    {"departure": {...}, "arrival": {...}, "alternate": null,
     "cruiseAltitude": 1500, "waypoints": [{..., "alt": 1500}],
     "dateTime": "2026-10-18T09:30", "payload": {...},
     "reserveType": "VFR_DAY", "aircraftId": "PH-VCR", "aircraft": {...}}

A stored plan that cannot be decoded, or whose aircraft has no fuel burn
(written before aircraft profiles were embedded), is discarded in favour of
:func:`default_flight_plan`.
"""

import json
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

from navplan.aircraft.profile import AircraftProfile
from navplan.aircraft.registry import default_aircraft_profiles
from navplan.core.logging_system import get_logger
from navplan.navigation.flight_plan import FlightPlan, Payload
from navplan.navigation.waypoint import Frequency, Runway, Waypoint, WaypointKind
from navplan.systems.fuel.policy import ReservePolicy

logger = get_logger(__name__)

# Point types written by older versions, mapped to the current kinds.
_LEGACY_KINDS = {
    "VOR": WaypointKind.NAVAID,
    "WAYPOINT": WaypointKind.FIX,
    "DEP": WaypointKind.AIRPORT,
    "ARR": WaypointKind.AIRPORT,
}

_AIRCRAFT_KEYS = {
    "id": "id",
    "name": "name",
    "cruise_speed_kts": "cruiseSpeed",
    "fuel_burn_lph": "fuelBurn",
    "usable_fuel_l": "usableFuel",
    "empty_weight_kg": "emptyWeight",
    "max_takeoff_mass_kg": "maxTakeoffMass",
    "cg_min": "cgMin",
    "cg_max": "cgMax",
    "arm_pilot": "armPilot",
    "arm_pax": "armPax",
    "arm_baggage": "armBaggage",
    "arm_fuel": "armFuel",
}


def _kind_from_type(value: str | None, identifier: str) -> WaypointKind:
    value = (value or "").upper()
    if value == "WAYPOINT" and identifier.startswith("wp-map-"):
        return WaypointKind.USER
    if value in _LEGACY_KINDS:
        return _LEGACY_KINDS[value]
    return WaypointKind(value) if value else WaypointKind.FIX


def waypoint_to_dict(waypoint: Waypoint) -> dict[str, Any]:
    return {
        "id": waypoint.identifier,
        "name": waypoint.name,
        "type": waypoint.kind.value,
        "lat": waypoint.latitude,
        "lon": waypoint.longitude,
        "elevation": waypoint.elevation_ft,
        "magVar": waypoint.magnetic_variation,
        "alt": waypoint.altitude_ft,
        "nearestMetarStation": waypoint.nearest_weather_station,
        "frequencies": [{"type": f.type, "frequency": f.frequency} for f in waypoint.frequencies],
        "runways": [
            {"id": r.designator, "trueHeading": r.true_heading, "length": r.length_m,
             "width": r.width_m, "surface": r.surface}
            for r in waypoint.runways
        ],
    }


def waypoint_from_dict(data: dict[str, Any]) -> Waypoint:
    """Decode a stored point.

    Raises:
        KeyError: If the identifier is missing.
        ValueError: If a coordinate is out of range or the type is unknown.
    """
    identifier = data.get("id", data.get("icao"))
    if identifier is None:
        raise KeyError("id")
    return Waypoint(
        identifier=identifier,
        latitude=float(data.get("lat") or 0.0),
        longitude=float(data.get("lon") or 0.0),
        kind=_kind_from_type(data.get("type"), identifier),
        name=data.get("name") or "",
        elevation_ft=data.get("elevation"),
        magnetic_variation=data.get("magVar"),
        altitude_ft=data.get("alt"),
        nearest_weather_station=data.get("nearestMetarStation"),
        frequencies=tuple(Frequency(type=f["type"], frequency=str(f["frequency"]))
                          for f in data.get("frequencies") or ()),
        runways=tuple(
            Runway(designator=r["id"], true_heading=float(r["trueHeading"]),
                   length_m=float(r.get("length", 0.0)), width_m=float(r.get("width", 0.0)),
                   surface=r.get("surface", "Unknown"))
            for r in data.get("runways") or ()
        ),
    )


def aircraft_to_dict(aircraft: AircraftProfile) -> dict[str, Any]:
    return {key: getattr(aircraft, attr) for attr, key in _AIRCRAFT_KEYS.items()}


def aircraft_from_dict(data: dict[str, Any]) -> AircraftProfile:
    values = {attr: data[key] for attr, key in _AIRCRAFT_KEYS.items() if key in data}
    return AircraftProfile(**values)


def flight_plan_to_dict(plan: FlightPlan) -> dict[str, Any]:
    """Encode a plan as a JSON-serialisable dictionary."""
    return {
        "departure": waypoint_to_dict(plan.departure),
        "arrival": waypoint_to_dict(plan.arrival),
        "alternate": waypoint_to_dict(plan.alternate) if plan.alternate else None,
        "cruiseAltitude": plan.cruise_altitude_ft,
        "waypoints": [waypoint_to_dict(w) for w in plan.waypoints],
        "dateTime": plan.departure_time,
        "payload": {
            "pilot": plan.payload.pilot,
            "pax": plan.payload.pax,
            "baggage": plan.payload.baggage,
            "fuel": plan.payload.fuel,
        },
        "reserveType": plan.reserve_policy.value,
        "aircraftId": plan.aircraft_id,
        "aircraft": aircraft_to_dict(plan.aircraft),
    }


def flight_plan_from_dict(data: dict[str, Any]) -> FlightPlan | None:
    """Decode a stored plan.

    Returns:
        The plan, or None when its aircraft lacks a fuel burn.

    Raises:
        KeyError: If a required key is missing.
        ValueError: If a value is invalid.
        TypeError: If a value has the wrong type.
    """
    aircraft = data.get("aircraft")
    if not aircraft or not aircraft.get("fuelBurn"):
        return None

    alternate = data.get("alternate")
    payload = data.get("payload") or {}
    return FlightPlan(
        departure=waypoint_from_dict(data["departure"]),
        arrival=waypoint_from_dict(data["arrival"]),
        aircraft=aircraft_from_dict(aircraft),
        waypoints=tuple(waypoint_from_dict(w) for w in data.get("waypoints") or ()),
        alternate=waypoint_from_dict(alternate) if alternate else None,
        cruise_altitude_ft=float(data.get("cruiseAltitude", 1500.0)),
        departure_time=data.get("dateTime") or "",
        payload=Payload(**{k: float(payload.get(k, 0.0)) for k in ("pilot", "pax", "baggage", "fuel")}),
        reserve_policy=ReservePolicy(data.get("reserveType", ReservePolicy.VFR_DAY.value)),
    )


def default_flight_plan(departure_time: str | None = None) -> FlightPlan:
    """Plan used on first start or when the stored plan is unusable.

    Rotterdam to Schiphol via Gouda VOR and SUGOL in the DR400 at 1500 ft.
    """
    if departure_time is None:
        departure_time = datetime.now().isoformat(timespec="minutes")
    dr400 = default_aircraft_profiles()[0]
    return FlightPlan(
        departure=Waypoint.airport("EHRD", 51.9525, 4.4347, name="Rotterdam The Hague",
                                   elevation_ft=-4, magnetic_variation=1),
        arrival=Waypoint.airport("EHAM", 52.3086, 4.7639, name="Amsterdam Schiphol",
                                 elevation_ft=-3, magnetic_variation=1),
        aircraft=dr400,
        waypoints=(
            Waypoint.navaid("GDA", 52.0166, 4.7166, name="Gouda VOR-DME", magnetic_variation=1,
                            altitude_ft=1500, nearest_weather_station="EHRD",
                            frequencies=(Frequency("NAV", "113.60"),)),
            Waypoint.fix("SUGOL", 52.2000, 4.5000, name="SUGOL Intersection", magnetic_variation=1,
                         altitude_ft=1500, nearest_weather_station="EHAM"),
        ),
        cruise_altitude_ft=1500.0,
        departure_time=departure_time,
        payload=Payload(pilot=80, pax=0, baggage=10, fuel=100),
        reserve_policy=ReservePolicy.VFR_DAY,
    )


class FlightPlanStore(ABC):
    """Port for loading and saving the current flight plan."""

    @abstractmethod
    def load(self) -> FlightPlan:
        """Return the stored plan, or the default plan."""

    @abstractmethod
    def save(self, plan: FlightPlan) -> None:
        """Replace the stored plan."""


class InMemoryFlightPlanStore(FlightPlanStore):
    """Store keeping the encoded plan in memory."""

    def __init__(self, default_factory: Callable[[], FlightPlan] = default_flight_plan) -> None:
        self._data: dict[str, Any] | None = None
        self.default_factory = default_factory

    def load(self) -> FlightPlan:
        if self._data is not None:
            plan = flight_plan_from_dict(self._data)
            if plan is not None:
                return plan
        return self.default_factory()

    def save(self, plan: FlightPlan) -> None:
        self._data = flight_plan_to_dict(plan)


class JsonFileFlightPlanStore(FlightPlanStore):
    """Store keeping the plan in a JSON file.

    Examples:
        >>> store = JsonFileFlightPlanStore("~/.navplan/plan.json")
        >>> plan = store.load()
        >>> store.save(plan.with_cruise_altitude(2500))
    """

    def __init__(self, path: str | Path, default_factory: Callable[[], FlightPlan] = default_flight_plan) -> None:
        self.path = Path(path).expanduser()
        self.default_factory = default_factory

    def load(self) -> FlightPlan:
        if not self.path.exists():
            logger.info("No stored flight plan at %s, using default", self.path)
            return self.default_factory()

        try:
            with self.path.open("r", encoding="utf-8") as f:
                plan = flight_plan_from_dict(json.load(f))
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("Failed to load flight plan from %s: %s", self.path, e)
            return self.default_factory()

        if plan is None:
            logger.warning("Stored flight plan has no aircraft fuel burn, using default")
            return self.default_factory()

        logger.debug("Loaded flight plan %s", plan.route_string())
        return plan

    def save(self, plan: FlightPlan) -> None:
        """Write the plan.

        Raises:
            OSError: If the file cannot be written.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(flight_plan_to_dict(plan), f, indent=2)
        logger.debug("Saved flight plan to %s", self.path)
