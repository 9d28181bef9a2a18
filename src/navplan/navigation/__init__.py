"""Navigation primitives and flight plan model.

Typical usage:
    from navplan.navigation import FlightPlan, NavDatabase, Waypoint

    db = NavDatabase()
    db.load_from_csv(get_data_path("navpoints.csv"))
    plan = FlightPlan(departure=db.lookup("EHRD"), arrival=db.lookup("EHAM"), aircraft=dr400)
"""

from navplan.navigation.flight_plan import FlightPlan, Payload
from navplan.navigation.geodesy import LatLon, bearing_deg, distance_nm
from navplan.navigation.navdata import NavDatabase, WaypointResolver
from navplan.navigation.waypoint import Frequency, Runway, Waypoint, WaypointKind
from navplan.navigation.wind import (
    RunwayWind,
    WindTriangleSolution,
    runway_wind_components,
    solve_wind_triangle,
)

__all__ = [
    "FlightPlan",
    "Frequency",
    "LatLon",
    "NavDatabase",
    "Payload",
    "Runway",
    "RunwayWind",
    "Waypoint",
    "WaypointKind",
    "WaypointResolver",
    "WindTriangleSolution",
    "bearing_deg",
    "distance_nm",
    "runway_wind_components",
    "solve_wind_triangle",
]
