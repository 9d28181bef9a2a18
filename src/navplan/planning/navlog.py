"""Navigation log model.

A navigation log is built atomically by the route aggregator (or decoded from
the remote calculation service) and never modified afterwards; a new flight
plan produces a new log.

The dictionary form uses the camelCase layout of the flight-plan service, so
the same functions decode remote responses and encode logs for export.
Coordinates are ``[lon, lat]`` pairs in that layout.
"""

from dataclasses import dataclass, field
from typing import Any

from navplan.systems.fuel.policy import FuelBreakdown, ReservePolicy


@dataclass(frozen=True)
class LegEndpoint:
    """Start or end point of a leg.

    Attributes:
        identifier: Point identifier
        name: Point name
        latitude: Latitude in degrees
        longitude: Longitude in degrees
        elevation_ft: Elevation in feet (optional)
        altitude_ft: Planned altitude at this point (optional)
    """

    identifier: str
    name: str
    latitude: float
    longitude: float
    elevation_ft: float | None = None
    altitude_ft: float | None = None


@dataclass(frozen=True)
class LegCourse:
    """Course over ground: distance (NM), true and magnetic track (deg)."""

    distance_nm: float
    true_track: float
    magnetic_track: float


@dataclass(frozen=True)
class LegWind:
    """Wind used for a leg, from the station at the leg start."""

    direction: float
    speed: float
    gust: float | None = None
    station_id: str | None = None


@dataclass(frozen=True)
class LegPerformance:
    """Wind-corrected performance of a leg.

    Attributes:
        headwind: Headwind component (kt, negative = tailwind)
        crosswind: Crosswind component (kt, positive = from the right)
        true_airspeed: True airspeed (kt)
        wind_correction_angle: WCA applied (deg)
        true_heading: Heading to fly, true (deg)
        magnetic_heading: Heading to fly, magnetic (deg)
        groundspeed: Groundspeed (kt)
        duration_min: Leg time in minutes
        fuel: Fuel burned on the leg
        degraded: True when no wind correction could be computed
    """

    headwind: float
    crosswind: float
    true_airspeed: float
    wind_correction_angle: float
    true_heading: float
    magnetic_heading: float
    groundspeed: float
    duration_min: float
    fuel: float | None = None
    degraded: bool = False


@dataclass(frozen=True)
class RouteLeg:
    """One computed segment of the route."""

    start: LegEndpoint
    end: LegEndpoint
    course: LegCourse
    altitude_ft: float | None = None
    wind: LegWind | None = None
    performance: LegPerformance | None = None
    arrival_time: str | None = None
    warning: str | None = None

    @property
    def distance_nm(self) -> float:
        return self.course.distance_nm

    @property
    def duration_min(self) -> float:
        """Leg time, 0 when the leg carries no performance."""
        return self.performance.duration_min if self.performance else 0.0

    @property
    def fuel(self) -> float:
        if self.performance and self.performance.fuel is not None:
            return self.performance.fuel
        return 0.0


@dataclass(frozen=True)
class NavigationLog:
    """Complete computed navigation log.

    Invariants: total_distance_nm is the sum of leg distances and
    total_duration_min the sum of leg durations. The alternate leg is not
    part of either total; its fuel is in ``fuel.alternate``.
    """

    legs: tuple[RouteLeg, ...]
    total_distance_nm: float
    total_duration_min: float
    generated_at: str
    total_trip_fuel: float | None = None
    fuel: FuelBreakdown | None = None
    alternate_leg: RouteLeg | None = None
    departure_time: str | None = None
    arrival_time: str | None = None
    warnings: tuple[str, ...] = field(default_factory=tuple)
    remarks: str | None = None


# Dictionary encoding


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


def _endpoint_to_dict(endpoint: LegEndpoint) -> dict[str, Any]:
    waypoint = _drop_none({
        "icao": endpoint.identifier or None,
        "name": endpoint.name or None,
        "coords": [endpoint.longitude, endpoint.latitude],
        "elevation": endpoint.elevation_ft,
    })
    return _drop_none({"waypoint": waypoint, "altitude": endpoint.altitude_ft})


def _endpoint_from_dict(data: dict[str, Any]) -> LegEndpoint:
    waypoint = data["waypoint"]
    lon, lat = waypoint["coords"]
    return LegEndpoint(
        identifier=waypoint.get("icao") or "",
        name=waypoint.get("name") or "",
        latitude=float(lat),
        longitude=float(lon),
        elevation_ft=waypoint.get("elevation"),
        altitude_ft=data.get("altitude"),
    )


def leg_to_dict(leg: RouteLeg) -> dict[str, Any]:
    """Encode a leg in the service layout."""
    data: dict[str, Any] = {
        "start": _endpoint_to_dict(leg.start),
        "end": _endpoint_to_dict(leg.end),
        "course": {
            "distance": leg.course.distance_nm,
            "track": leg.course.true_track,
            "magneticTrack": leg.course.magnetic_track,
        },
    }
    if leg.wind:
        data["wind"] = _drop_none({"direction": leg.wind.direction, "speed": leg.wind.speed,
                                   "gust": leg.wind.gust})
    if leg.arrival_time:
        data["arrivalDate"] = leg.arrival_time
    if leg.performance:
        p = leg.performance
        data["performance"] = _drop_none({
            "headWind": p.headwind,
            "crossWind": p.crosswind,
            "trueAirspeed": p.true_airspeed,
            "windCorrectionAngle": p.wind_correction_angle,
            "trueHeading": p.true_heading,
            "magneticHeading": p.magnetic_heading,
            "groundSpeed": p.groundspeed,
            "duration": p.duration_min,
            "fuelConsumption": p.fuel,
        })
    if leg.warning:
        data["warning"] = leg.warning
    return data


def leg_from_dict(data: dict[str, Any]) -> RouteLeg:
    """Decode a leg from the service layout.

    Raises:
        KeyError: If a required key is missing.
    """
    course = data["course"]
    wind = data.get("wind")
    performance = data.get("performance")
    end = _endpoint_from_dict(data["end"])

    return RouteLeg(
        start=_endpoint_from_dict(data["start"]),
        end=end,
        course=LegCourse(
            distance_nm=float(course["distance"]),
            true_track=float(course["track"]),
            magnetic_track=float(course.get("magneticTrack", course["track"])),
        ),
        altitude_ft=end.altitude_ft,
        wind=LegWind(
            direction=float(wind["direction"]),
            speed=float(wind["speed"]),
            gust=wind.get("gust"),
        ) if wind else None,
        performance=LegPerformance(
            headwind=float(performance["headWind"]),
            crosswind=float(performance["crossWind"]),
            true_airspeed=float(performance["trueAirspeed"]),
            wind_correction_angle=float(performance["windCorrectionAngle"]),
            true_heading=float(performance["trueHeading"]),
            magnetic_heading=float(performance["magneticHeading"]),
            groundspeed=float(performance["groundSpeed"]),
            duration_min=float(performance["duration"]),
            fuel=performance.get("fuelConsumption"),
        ) if performance else None,
        arrival_time=data.get("arrivalDate"),
        warning=data.get("warning"),
    )


def navlog_to_dict(log: NavigationLog) -> dict[str, Any]:
    """Encode a navigation log in the service layout."""
    data: dict[str, Any] = {
        "route": [leg_to_dict(leg) for leg in log.legs],
        "totalDistance": log.total_distance_nm,
        "totalDuration": log.total_duration_min,
        "generatedAt": log.generated_at,
    }
    if log.alternate_leg:
        data["routeAlternate"] = leg_to_dict(log.alternate_leg)
    if log.total_trip_fuel is not None:
        data["totalTripFuel"] = log.total_trip_fuel
    if log.fuel:
        data["fuelBreakdown"] = {
            "trip": log.fuel.trip,
            "contingency": log.fuel.contingency,
            "reserve": log.fuel.reserve,
            "taxi": log.fuel.taxi,
            "alternate": log.fuel.alternate,
            "total": log.fuel.total,
            "policy": log.fuel.policy.value,
            "reserveMinutes": log.fuel.reserve_minutes,
        }
    for key, value in (("departureDate", log.departure_time), ("arrivalDate", log.arrival_time),
                       ("remarks", log.remarks)):
        if value:
            data[key] = value
    if log.warnings:
        data["warnings"] = list(log.warnings)
    return data


def navlog_from_dict(data: dict[str, Any], reserve_policy: ReservePolicy = ReservePolicy.VFR_DAY) -> NavigationLog:
    """Decode a navigation log from the service layout.

    Args:
        data: Decoded JSON object
        reserve_policy: Policy to record when the breakdown does not name one

    Raises:
        KeyError: If a required key is missing.
        ValueError: If a value has the wrong type or policy name.
    """
    fuel = None
    breakdown = data.get("fuelBreakdown")
    if breakdown:
        parts = {key: float(breakdown.get(key) or 0.0)
                 for key in ("trip", "contingency", "reserve", "taxi", "alternate")}
        fuel = FuelBreakdown(
            **parts,
            total=float(breakdown.get("total", sum(parts.values()))),
            policy=ReservePolicy(breakdown["policy"]) if "policy" in breakdown else reserve_policy,
            reserve_minutes=float(breakdown.get("reserveMinutes") or 0.0),
        )

    alternate = data.get("routeAlternate")
    total_trip_fuel = data.get("totalTripFuel")
    return NavigationLog(
        legs=tuple(leg_from_dict(leg) for leg in data["route"]),
        total_distance_nm=float(data["totalDistance"]),
        total_duration_min=float(data["totalDuration"]),
        generated_at=data["generatedAt"],
        total_trip_fuel=float(total_trip_fuel) if total_trip_fuel is not None else None,
        fuel=fuel,
        alternate_leg=leg_from_dict(alternate) if alternate else None,
        departure_time=data.get("departureDate"),
        arrival_time=data.get("arrivalDate"),
        warnings=tuple(data.get("warnings", ())),
        remarks=data.get("remarks"),
    )
