"""Great-circle geodesy on a spherical earth.

Positions are WGS84 latitude/longitude in decimal degrees. Any object with
``latitude`` and ``longitude`` attributes can be passed, including
:class:`~navplan.navigation.waypoint.Waypoint`.

Typical usage:
    from navplan.navigation.geodesy import LatLon, bearing_deg, distance_nm

    ehrd = LatLon(51.9525, 4.4347)
    eham = LatLon(52.3086, 4.7639)
    distance_nm(ehrd, eham)  # ~24.6 NM
    bearing_deg(ehrd, eham)  # ~29.6 degrees true
"""

import math
from typing import NamedTuple, Protocol

EARTH_RADIUS_NM = 3440.065


class GeoPoint(Protocol):
    """Anything with a latitude and a longitude in degrees."""

    @property
    def latitude(self) -> float: ...

    @property
    def longitude(self) -> float: ...


class LatLon(NamedTuple):
    """Plain geographic position."""

    latitude: float
    longitude: float


def normalize_heading(degrees: float) -> float:
    """Normalize a direction to [0, 360).

    Examples:
        >>> normalize_heading(-10.0)
        350.0
        >>> normalize_heading(360.0)
        0.0
    """
    result = degrees % 360.0
    # -1e-15 % 360 rounds to 360.0
    return 0.0 if result >= 360.0 else result


def normalize_angle(degrees: float) -> float:
    """Normalize a signed angle to (-180, 180].

    Examples:
        >>> normalize_angle(190.0)
        -170.0
        >>> normalize_angle(-180.0)
        180.0
    """
    result = normalize_heading(degrees)
    return result - 360.0 if result > 180.0 else result


def distance_nm(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance using the haversine formula.

    Args:
        a: Start position.
        b: End position.

    Returns:
        Distance in nautical miles. Symmetric, and 0.0 for identical points.
    """
    lat1, lon1 = math.radians(a.latitude), math.radians(a.longitude)
    lat2, lon2 = math.radians(b.latitude), math.radians(b.longitude)

    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Rounding can push h slightly above 1 for antipodal points.
    c = 2 * math.asin(math.sqrt(min(1.0, h)))

    return c * EARTH_RADIUS_NM


def bearing_deg(a: GeoPoint, b: GeoPoint) -> float:
    """Initial true bearing from a to b along the great circle.

    Args:
        a: Start position.
        b: End position.

    Returns:
        Bearing in degrees true, in [0, 360). Identical points give 0.0.
    """
    if a.latitude == b.latitude and a.longitude == b.longitude:
        return 0.0

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlon = math.radians(b.longitude - a.longitude)

    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)

    return normalize_heading(math.degrees(math.atan2(y, x)))


def true_to_magnetic(true_degrees: float, magnetic_variation: float | None) -> float:
    """Convert a true direction to magnetic.

    Variation is east-positive: magnetic = true - variation
    (east is least, west is best).

    Args:
        true_degrees: Direction relative to true north.
        magnetic_variation: Signed variation in degrees, east positive.
            None is treated as 0.

    Returns:
        Magnetic direction in [0, 360).
    """
    return normalize_heading(true_degrees - (magnetic_variation or 0.0))
