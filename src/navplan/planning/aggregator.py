"""Route aggregator: turn an ordered route into a navigation log.

Typical usage:
    aggregator = RouteAggregator.from_config(ConfigLoader.load_with_defaults())
    log = aggregator.compute(plan, observations={"EHRD": metar})
    print(log.total_distance_nm, log.fuel.total)
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from navplan.aircraft.profile import AircraftProfile
from navplan.core.config import ConfigLoader
from navplan.core.logging_system import get_logger
from navplan.navigation.flight_plan import FlightPlan
from navplan.navigation.waypoint import Waypoint
from navplan.planning.errors import InsufficientWaypointsError
from navplan.planning.leg_builder import LegBuilder
from navplan.planning.navlog import NavigationLog, RouteLeg
from navplan.systems.fuel.policy import FuelPolicyEngine, ReservePolicy
from navplan.weather.observation import WeatherObservation

logger = get_logger(__name__)

MISSING_ENDPOINTS_MESSAGE = "Cannot calculate: departure and arrival are required"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_time(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.warning("Ignoring unparseable departure time: %r", value)
        return None


def _format_time(value: datetime) -> str:
    return value.isoformat(timespec="minutes")


class RouteAggregator:
    """Compute every leg of a route and total distance, time and fuel.

    The aggregator is stateless: it reads its inputs and returns a new log.
    """

    def __init__(
        self,
        fuel_engine: FuelPolicyEngine | None = None,
        leg_builder: LegBuilder | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the aggregator.

        Args:
            fuel_engine: Fuel policy to apply (defaults apply if None)
            leg_builder: Builder for individual legs
            clock: Source of the generation timestamp
        """
        self.fuel_engine = fuel_engine or FuelPolicyEngine()
        self.leg_builder = leg_builder or LegBuilder()
        self.clock = clock

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "RouteAggregator":
        return cls(fuel_engine=FuelPolicyEngine.from_config(config))

    def compute(
        self, plan: FlightPlan, observations: Mapping[str, WeatherObservation] | None = None
    ) -> NavigationLog:
        """Aggregate a flight plan.

        Args:
            plan: Flight plan to compute
            observations: Weather observations keyed by station id

        Returns:
            Navigation log for the plan.

        Raises:
            InsufficientWaypointsError: If departure or arrival is unresolved.
        """
        return self.aggregate(
            plan.route_points(),
            plan.aircraft,
            departure_time=plan.departure_time,
            reserve_policy=plan.reserve_policy,
            default_altitude_ft=plan.cruise_altitude_ft,
            alternate=plan.alternate,
            observations=observations,
        )

    def aggregate(
        self,
        points: Sequence[Waypoint],
        aircraft: AircraftProfile,
        departure_time: str | None = None,
        reserve_policy: ReservePolicy = ReservePolicy.VFR_DAY,
        default_altitude_ft: float = 1500.0,
        alternate: Waypoint | None = None,
        observations: Mapping[str, WeatherObservation] | None = None,
    ) -> NavigationLog:
        """Aggregate an ordered route into a navigation log.

        Args:
            points: Departure, interior waypoints and arrival, in order
            aircraft: Aircraft flying the route
            departure_time: ISO-8601 departure time (optional)
            reserve_policy: Fuel reserve policy
            default_altitude_ft: Altitude for legs whose end has none
            alternate: Alternate aerodrome (optional)
            observations: Weather observations keyed by station id

        Returns:
            Navigation log. Totals cover the route legs only; the alternate
            leg contributes to the alternate fuel.

        Raises:
            InsufficientWaypointsError: If departure or arrival is missing or
                unresolved.
        """
        if len(points) < 2 or not points[0].is_resolved or not points[-1].is_resolved:
            raise InsufficientWaypointsError(MISSING_ENDPOINTS_MESSAGE)

        observations = observations or {}
        warnings: list[str] = []

        route = [points[0]]
        for waypoint in points[1:-1]:
            if waypoint.is_resolved:
                route.append(waypoint)
            else:
                message = f"Skipped unresolved waypoint {waypoint.display_name or '(unnamed)'}"
                logger.warning(message)
                warnings.append(message)
        route.append(points[-1])

        legs = [self._build_leg(start, end, aircraft, default_altitude_ft, observations)
                for start, end in zip(route, route[1:])]

        alternate_leg = None
        if alternate is not None:
            if alternate.is_resolved:
                alternate_leg = self._build_leg(route[-1], alternate, aircraft, default_altitude_ft, observations)
            else:
                message = f"Alternate {alternate.display_name or '(empty)'} is not resolved"
                logger.warning(message)
                warnings.append(message)

        warnings.extend(leg.warning for leg in legs if leg.warning)
        if alternate_leg and alternate_leg.warning:
            warnings.append(alternate_leg.warning)

        total_distance = sum(leg.distance_nm for leg in legs)
        total_duration = sum(leg.duration_min for leg in legs)
        fuel = self.fuel_engine.calculate(
            trip_minutes=total_duration,
            burn_rate=aircraft.fuel_burn_lph,
            policy=reserve_policy,
            alternate_minutes=alternate_leg.duration_min if alternate_leg else 0.0,
        )

        departure = _parse_time(departure_time)
        arrival_time = None
        if departure is not None:
            legs = self._stamp_arrival_times(legs, departure)
            arrival_time = _format_time(departure + timedelta(minutes=total_duration))

        log = NavigationLog(
            legs=tuple(legs),
            total_distance_nm=total_distance,
            total_duration_min=total_duration,
            generated_at=self.clock().isoformat(timespec="seconds"),
            total_trip_fuel=fuel.trip,
            fuel=fuel,
            alternate_leg=alternate_leg,
            departure_time=departure_time or None,
            arrival_time=arrival_time,
            warnings=tuple(warnings),
        )
        logger.info(
            "Navigation log: %d legs, %.1f NM, %.0f min, trip fuel %.1f, total fuel %.1f",
            len(legs), total_distance, total_duration, fuel.trip, fuel.total,
        )
        return log

    def _build_leg(
        self,
        start: Waypoint,
        end: Waypoint,
        aircraft: AircraftProfile,
        default_altitude_ft: float,
        observations: Mapping[str, WeatherObservation],
    ) -> RouteLeg:
        station = start.weather_station
        observation = observations.get(station) if station else None
        return self.leg_builder.build(start, end, aircraft, default_altitude_ft, observation)

    @staticmethod
    def _stamp_arrival_times(legs: list[RouteLeg], departure: datetime) -> list[RouteLeg]:
        stamped = []
        elapsed = 0.0
        for leg in legs:
            elapsed += leg.duration_min
            stamped.append(replace(leg, arrival_time=_format_time(departure + timedelta(minutes=elapsed))))
        return stamped
