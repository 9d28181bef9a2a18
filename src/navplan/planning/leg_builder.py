"""Leg builder: course, wind and performance for one route segment."""

from navplan.aircraft.profile import AircraftProfile
from navplan.core.logging_system import get_logger
from navplan.navigation.geodesy import bearing_deg, distance_nm, true_to_magnetic
from navplan.navigation.waypoint import Waypoint
from navplan.navigation.wind import solve_wind_triangle
from navplan.planning.navlog import LegCourse, LegEndpoint, LegPerformance, LegWind, RouteLeg
from navplan.weather.observation import WeatherObservation

logger = get_logger(__name__)


def endpoint_for(waypoint: Waypoint, altitude_ft: float | None = None) -> LegEndpoint:
    """Snapshot of a waypoint as a leg endpoint."""
    return LegEndpoint(
        identifier=waypoint.identifier,
        name=waypoint.name,
        latitude=waypoint.latitude,
        longitude=waypoint.longitude,
        elevation_ft=waypoint.elevation_ft,
        altitude_ft=altitude_ft,
    )


class LegBuilder:
    """Build a RouteLeg from two waypoints.

    The wind comes from the observation of the weather station assigned to the
    leg start. Without an observation the leg is computed in still air, so a
    leg always has performance. When the wind makes the course impossible to
    hold the leg is still produced, without wind correction: heading equals
    course, groundspeed equals true airspeed, and the leg carries a warning.

    Examples:
        >>> leg = LegBuilder().build(ehrd, eham, dr400, default_altitude_ft=1500)
        >>> round(leg.course.distance_nm, 1)
        24.6
    """

    def build(
        self,
        start: Waypoint,
        end: Waypoint,
        aircraft: AircraftProfile,
        default_altitude_ft: float,
        observation: WeatherObservation | None = None,
    ) -> RouteLeg:
        """Compute one leg.

        Args:
            start: Leg start (resolved)
            end: Leg end (resolved); its target altitude applies to the leg
            aircraft: Aircraft flying the leg
            default_altitude_ft: Altitude when the end point has none
            observation: Weather at the start point's station (optional)

        Returns:
            The computed leg.
        """
        distance = distance_nm(start, end)
        track = bearing_deg(start, end)
        variation = start.magnetic_variation
        course = LegCourse(
            distance_nm=distance,
            true_track=track,
            magnetic_track=true_to_magnetic(track, variation),
        )
        altitude = end.altitude_ft if end.altitude_ft is not None else default_altitude_ft

        tas = aircraft.cruise_speed_kts
        if observation is not None:
            wind = LegWind(
                direction=observation.wind_direction,
                speed=observation.wind_speed,
                gust=observation.wind_gust,
                station_id=observation.station_id,
            )
        else:
            wind = None

        solution = solve_wind_triangle(
            true_course=track,
            true_airspeed=tas,
            wind_direction=wind.direction if wind else 0.0,
            wind_speed=wind.speed if wind else 0.0,
            magnetic_variation=variation,
        )

        warning = None
        if solution.solvable:
            wca = solution.wind_correction_angle
            true_heading = solution.true_heading
            magnetic_heading = solution.magnetic_heading
            groundspeed = solution.groundspeed
        else:
            warning = (
                f"Wind {wind.direction:03.0f}/{wind.speed:.0f} kt too strong for "
                f"{start.display_name}-{end.display_name}: no wind correction applied"
            )
            logger.warning(warning)
            wca = 0.0
            true_heading = course.true_track
            magnetic_heading = course.magnetic_track
            groundspeed = tas

        duration = distance / groundspeed * 60.0
        performance = LegPerformance(
            headwind=solution.headwind,
            crosswind=solution.crosswind,
            true_airspeed=tas,
            wind_correction_angle=wca,
            true_heading=true_heading,
            magnetic_heading=magnetic_heading,
            groundspeed=groundspeed,
            duration_min=duration,
            fuel=duration / 60.0 * aircraft.fuel_burn_lph,
            degraded=not solution.solvable,
        )

        logger.debug(
            "Leg %s-%s: %.1f NM, TT %03.0f, GS %.0f kt, %.1f min",
            start.display_name, end.display_name, distance, track, groundspeed, duration,
        )
        return RouteLeg(
            start=endpoint_for(start, start.altitude_ft),
            end=endpoint_for(end, altitude),
            course=course,
            altitude_ft=altitude,
            wind=wind,
            performance=performance,
            warning=warning,
        )
