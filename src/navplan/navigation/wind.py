"""Wind-triangle solver and runway wind components.

Wind direction is always the direction the wind blows FROM, in degrees true.
Component sign conventions:

- headwind: positive on the nose, negative for a tailwind
- crosswind: positive from the right of the course, negative from the left
- wind correction angle (WCA): positive means heading right of course

Typical usage:
    from navplan.navigation.wind import solve_wind_triangle

    solution = solve_wind_triangle(
        true_course=30.0, true_airspeed=110.0, wind_direction=210.0, wind_speed=15.0
    )
    if solution.solvable:
        print(solution.true_heading, solution.groundspeed)
"""

import math
from dataclasses import dataclass

from navplan.navigation.geodesy import normalize_angle, normalize_heading, true_to_magnetic


@dataclass(frozen=True)
class WindComponents:
    """Wind resolved along and across a direction.

    Attributes:
        headwind: Component along the direction, positive on the nose (kt)
        crosswind: Component across the direction, positive from the right (kt)
    """

    headwind: float
    crosswind: float


@dataclass(frozen=True)
class WindTriangleSolution:
    """Result of solving the wind triangle for one course.

    When the crosswind component is at least the true airspeed there is no
    heading that holds the course. The solution is then marked unsolvable and
    ``wind_correction_angle``, ``true_heading``, ``magnetic_heading`` and
    ``groundspeed`` are None.

    Attributes:
        true_course: Desired track over ground (deg true)
        true_airspeed: Airspeed used for the solution (kt)
        headwind: Headwind component (kt, negative = tailwind)
        crosswind: Crosswind component (kt, positive = from the right)
        solvable: Whether a heading exists that holds the course
        wind_correction_angle: Heading offset from course (deg)
        true_heading: Heading to fly relative to true north
        magnetic_heading: Heading to fly relative to magnetic north
        groundspeed: Speed over ground (kt)
    """

    true_course: float
    true_airspeed: float
    headwind: float
    crosswind: float
    solvable: bool
    wind_correction_angle: float | None = None
    true_heading: float | None = None
    magnetic_heading: float | None = None
    groundspeed: float | None = None


def wind_components(direction: float, wind_direction: float, wind_speed: float) -> WindComponents:
    """Resolve a wind into head and cross components relative to a direction.

    Args:
        direction: Reference direction, e.g. course or runway heading (deg)
        wind_direction: Direction the wind comes from (deg)
        wind_speed: Wind speed (kt)

    Returns:
        WindComponents for the direction.
    """
    angle = math.radians(normalize_angle(wind_direction - direction))
    return WindComponents(
        headwind=wind_speed * math.cos(angle),
        crosswind=wind_speed * math.sin(angle),
    )


def solve_wind_triangle(
    true_course: float,
    true_airspeed: float,
    wind_direction: float,
    wind_speed: float,
    magnetic_variation: float | None = 0.0,
) -> WindTriangleSolution:
    """Solve the wind triangle for heading and groundspeed.

    groundspeed = TAS * cos(WCA) - headwind

    Args:
        true_course: Desired track (deg true)
        true_airspeed: True airspeed (kt), must be positive
        wind_direction: Direction the wind comes from (deg true)
        wind_speed: Wind speed (kt), must not be negative
        magnetic_variation: Variation at the leg start, east positive

    Returns:
        WindTriangleSolution, possibly marked unsolvable.

    Raises:
        ValueError: If true_airspeed <= 0 or wind_speed < 0.

    Examples:
        >>> s = solve_wind_triangle(90.0, 100.0, 90.0, 20.0)
        >>> round(s.groundspeed, 6), round(s.wind_correction_angle, 6)
        (80.0, 0.0)
    """
    if true_airspeed <= 0:
        raise ValueError(f"True airspeed must be positive, got {true_airspeed}")
    if wind_speed < 0:
        raise ValueError(f"Wind speed cannot be negative, got {wind_speed}")

    course = normalize_heading(true_course)
    components = wind_components(course, wind_direction, wind_speed)

    if abs(components.crosswind) >= true_airspeed:
        return WindTriangleSolution(
            true_course=course,
            true_airspeed=true_airspeed,
            headwind=components.headwind,
            crosswind=components.crosswind,
            solvable=False,
        )

    wca_rad = math.asin(components.crosswind / true_airspeed)
    groundspeed = true_airspeed * math.cos(wca_rad) - components.headwind
    if groundspeed <= 0:
        # Headwind at least as strong as the airspeed: the course is never made good.
        return WindTriangleSolution(
            true_course=course,
            true_airspeed=true_airspeed,
            headwind=components.headwind,
            crosswind=components.crosswind,
            solvable=False,
        )

    wca = math.degrees(wca_rad)
    true_heading = normalize_heading(course + wca)

    return WindTriangleSolution(
        true_course=course,
        true_airspeed=true_airspeed,
        headwind=components.headwind,
        crosswind=components.crosswind,
        solvable=True,
        wind_correction_angle=wca,
        true_heading=true_heading,
        magnetic_heading=true_to_magnetic(true_heading, magnetic_variation),
        groundspeed=groundspeed,
    )


@dataclass(frozen=True)
class RunwayWind:
    """Wind components for one runway.

    Attributes:
        designator: Runway designator (e.g. "24")
        wind_angle: Angle between wind and runway heading (deg, -180..180]
        headwind: Headwind component (kt, negative = tailwind)
        crosswind: Crosswind component (kt, positive = from the right)
        favored: True for the runway with the largest headwind
    """

    designator: str
    wind_angle: float
    headwind: float
    crosswind: float
    favored: bool = False


def runway_wind_components(
    wind_direction: float, wind_speed: float, runway_headings: dict[str, float]
) -> list[RunwayWind]:
    """Compute head/cross wind for each runway and mark the favored one.

    Args:
        wind_direction: Direction the wind comes from (deg true)
        wind_speed: Wind speed (kt)
        runway_headings: Mapping of runway designator to true heading

    Returns:
        One RunwayWind per runway, in the input order. With calm wind no
        runway is favored.
    """
    results = []
    for designator, heading in runway_headings.items():
        components = wind_components(heading, wind_direction, wind_speed)
        results.append(
            RunwayWind(
                designator=designator,
                wind_angle=normalize_angle(wind_direction - heading),
                headwind=components.headwind,
                crosswind=components.crosswind,
            )
        )

    if results and wind_speed > 0:
        best = max(range(len(results)), key=lambda i: results[i].headwind)
        winner = results[best]
        results[best] = RunwayWind(
            designator=winner.designator,
            wind_angle=winner.wind_angle,
            headwind=winner.headwind,
            crosswind=winner.crosswind,
            favored=True,
        )

    return results
