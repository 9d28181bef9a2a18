"""Flight plan model and editing operations.

A flight plan always carries a departure and an arrival, even before their
lookup completes (an unresolved waypoint keeps the shape stable). Interior
waypoints are in route order. Plans are immutable: every edit returns a new
plan, so a plan handed to a computation never changes underneath it.

Typical usage:
    from navplan.navigation.flight_plan import FlightPlan

    plan = FlightPlan(departure=ehrd, arrival=eham, aircraft=dr400)
    plan = plan.add_waypoint(gda).add_waypoint(sugol)
    plan.route_string()  # "EHRD GDA SUGOL EHAM"
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Literal

from navplan.aircraft.profile import AircraftProfile
from navplan.core.logging_system import get_logger
from navplan.navigation.waypoint import Waypoint, WaypointKind
from navplan.systems.fuel.policy import ReservePolicy
from navplan.weather.sun import is_daylight

logger = get_logger(__name__)

PointRole = Literal["departure", "arrival", "alternate"]


@dataclass(frozen=True)
class Payload:
    """Loading of the aircraft.

    Attributes:
        pilot: Front seat occupants in kg
        pax: Rear seat occupants in kg
        baggage: Baggage in kg
        fuel: Fuel on board in litres
    """

    pilot: float = 0.0
    pax: float = 0.0
    baggage: float = 0.0
    fuel: float = 0.0

    def __post_init__(self) -> None:
        for name in ("pilot", "pax", "baggage", "fuel"):
            if getattr(self, name) < 0:
                raise ValueError(f"Payload {name} cannot be negative: {getattr(self, name)}")


@dataclass(frozen=True)
class FlightPlan:
    """VFR flight plan.

    Attributes:
        departure: Departure aerodrome (possibly unresolved)
        arrival: Arrival aerodrome (possibly unresolved)
        aircraft: Denormalized copy of the aircraft profile
        waypoints: Interior route points in route order
        alternate: Alternate aerodrome (optional)
        cruise_altitude_ft: Default cruise altitude in feet MSL
        departure_time: Scheduled departure, ISO-8601 (e.g. "2026-10-18T09:30")
        payload: Occupants, baggage and fuel
        reserve_policy: Fuel reserve policy
    """

    departure: Waypoint
    arrival: Waypoint
    aircraft: AircraftProfile
    waypoints: tuple[Waypoint, ...] = field(default_factory=tuple)
    alternate: Waypoint | None = None
    cruise_altitude_ft: float = 1500.0
    departure_time: str = ""
    payload: Payload = field(default_factory=Payload)
    reserve_policy: ReservePolicy = ReservePolicy.VFR_DAY

    @property
    def aircraft_id(self) -> str:
        """Registration of the referenced aircraft."""
        return self.aircraft.id

    @property
    def has_endpoints(self) -> bool:
        """True when both departure and arrival are resolved."""
        return self.departure.is_resolved and self.arrival.is_resolved

    def route_points(self) -> list[Waypoint]:
        """Departure, interior waypoints and arrival, in route order."""
        return [self.departure, *self.waypoints, self.arrival]

    def route_string(self) -> str:
        """Space-separated route description, e.g. ``"EHRD GDA SUGOL EHAM"``."""
        return " ".join(p.display_name for p in self.route_points() if p.display_name)

    def computation_key(self) -> tuple:
        """Fields a navigation log depends on.

        Two plans with equal keys produce the same log, so payload edits do
        not trigger recomputation.
        """

        def point_key(point: Waypoint | None) -> tuple | None:
            if point is None:
                return None
            return (point.identifier, point.latitude, point.longitude, point.altitude_ft,
                    point.magnetic_variation, point.nearest_weather_station)

        return (
            point_key(self.departure),
            point_key(self.arrival),
            point_key(self.alternate),
            self.aircraft,
            tuple(point_key(p) for p in self.waypoints),
            self.cruise_altitude_ft,
            self.departure_time,
            self.reserve_policy,
        )

    # Editing operations

    def with_point(self, role: PointRole, waypoint: Waypoint | None) -> "FlightPlan":
        """Replace the departure, arrival or alternate.

        Raises:
            ValueError: If role is unknown or departure/arrival is set to None.
        """
        if role not in ("departure", "arrival", "alternate"):
            raise ValueError(f"Unknown point role: {role}")
        if waypoint is None and role != "alternate":
            raise ValueError(f"{role} cannot be removed")
        return replace(self, **{role: waypoint})

    def with_aircraft(self, aircraft: AircraftProfile) -> "FlightPlan":
        """Reference another aircraft profile."""
        return replace(self, aircraft=aircraft)

    def with_cruise_altitude(self, altitude_ft: float) -> "FlightPlan":
        """Change the default cruise altitude."""
        return replace(self, cruise_altitude_ft=altitude_ft)

    def with_payload(self, payload: Payload) -> "FlightPlan":
        """Change the loading."""
        return replace(self, payload=payload)

    def add_waypoint(self, waypoint: Waypoint, index: int | None = None) -> "FlightPlan":
        """Insert a waypoint; appended when index is None.

        Waypoints without a target altitude get the cruise altitude.
        """
        if waypoint.altitude_ft is None:
            waypoint = waypoint.with_altitude(self.cruise_altitude_ft)
        waypoints = list(self.waypoints)
        waypoints.insert(len(waypoints) if index is None else index, waypoint)
        return replace(self, waypoints=tuple(waypoints))

    def add_user_waypoint(self, latitude: float, longitude: float) -> "FlightPlan":
        """Append a user-placed waypoint at a map position."""
        return self.add_waypoint(Waypoint.user(latitude, longitude))

    def move_point(self, index: int | Literal["DEP", "ARR"], latitude: float, longitude: float) -> "FlightPlan":
        """Move the departure ("DEP"), arrival ("ARR") or a waypoint by index.

        Raises:
            IndexError: If the waypoint index is out of range.
        """
        if index == "DEP":
            return replace(self, departure=self.departure.with_position(latitude, longitude))
        if index == "ARR":
            return replace(self, arrival=self.arrival.with_position(latitude, longitude))
        return self.update_waypoint(index, latitude=latitude, longitude=longitude)

    def update_waypoint(self, index: int, **changes) -> "FlightPlan":
        """Replace fields of one waypoint (e.g. ``altitude_ft=2500``).

        Raises:
            IndexError: If the index is out of range.
        """
        index = self._check_index(index)
        waypoints = list(self.waypoints)
        waypoints[index] = replace(waypoints[index], **changes)
        return replace(self, waypoints=tuple(waypoints))

    def remove_waypoint(self, index: int) -> "FlightPlan":
        """Delete one waypoint.

        Raises:
            IndexError: If the index is out of range.
        """
        waypoints = list(self.waypoints)
        del waypoints[self._check_index(index)]
        return replace(self, waypoints=tuple(waypoints))

    def move_waypoint(self, from_index: int, to_index: int) -> "FlightPlan":
        """Reorder: move the waypoint at from_index to to_index.

        Raises:
            IndexError: If either index is out of range.
        """
        waypoints = list(self.waypoints)
        self._check_index(to_index)
        waypoint = waypoints.pop(self._check_index(from_index))
        waypoints.insert(to_index, waypoint)
        return replace(self, waypoints=tuple(waypoints))

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self.waypoints):
            raise IndexError(f"Waypoint index {index} out of range (0-{len(self.waypoints) - 1})")
        return index

    def validate(
        self, min_altitude_ft: float = 0.0, max_altitude_ft: float = 19500.0, arrival_time: str | None = None
    ) -> list[str]:
        """Check the plan for problems that make a log meaningless or unsafe.

        Day VFR plans are also checked for departure and arrival between
        sunrise and sunset. Times without an offset are taken to be UTC.

        Args:
            min_altitude_ft: Lowest acceptable cruise/waypoint altitude
            max_altitude_ft: Highest acceptable cruise/waypoint altitude
            arrival_time: Estimated arrival, ISO-8601 (e.g. from the navigation log)

        Returns:
            List of validation messages (empty if valid).
        """
        errors = []

        if not self.departure.is_resolved:
            errors.append(f"Departure {self.departure.identifier or '(empty)'} is not resolved")
        if not self.arrival.is_resolved:
            errors.append(f"Arrival {self.arrival.identifier or '(empty)'} is not resolved")
        if self.alternate is not None and not self.alternate.is_resolved:
            errors.append(f"Alternate {self.alternate.identifier or '(empty)'} is not resolved")

        if not min_altitude_ft <= self.cruise_altitude_ft <= max_altitude_ft:
            errors.append(
                f"Cruise altitude {self.cruise_altitude_ft:.0f} ft outside "
                f"{min_altitude_ft:.0f}-{max_altitude_ft:.0f} ft"
            )

        for i, waypoint in enumerate(self.waypoints):
            if not waypoint.is_resolved:
                errors.append(f"Waypoint {i + 1} ({waypoint.display_name or 'unnamed'}) is not resolved")
            if waypoint.altitude_ft is not None and not min_altitude_ft <= waypoint.altitude_ft <= max_altitude_ft:
                errors.append(f"Waypoint {waypoint.display_name} altitude {waypoint.altitude_ft:.0f} ft out of range")

        points = self.route_points()
        for a, b in zip(points, points[1:]):
            if a.identifier and a.identifier == b.identifier and a.kind is not WaypointKind.USER:
                errors.append(f"Duplicate consecutive waypoint: {a.identifier}")

        if self.payload.fuel > self.aircraft.usable_fuel_l:
            errors.append(
                f"Fuel on board {self.payload.fuel:.0f} L exceeds usable capacity "
                f"{self.aircraft.usable_fuel_l:.0f} L"
            )

        if self.reserve_policy is ReservePolicy.VFR_DAY:
            for label, point, value in (("Departure", self.departure, self.departure_time),
                                        ("Arrival", self.arrival, arrival_time)):
                moment = _parse_time(value)
                if moment is not None and point.is_resolved and not is_daylight(
                    point.latitude, point.longitude, moment
                ):
                    errors.append(f"{label} {moment:%H:%M} at {point.display_name} is outside daylight (VFR_DAY)")

        if errors:
            logger.debug("Flight plan validation: %s", "; ".join(errors))
        return errors


def _parse_time(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None
