"""Navigation waypoint definitions.

A waypoint is one of four kinds, fixed when it is created:

- AIRPORT: aerodrome with runways and frequencies, its own weather station
- NAVAID: radio navigation aid (VOR, NDB, DME) with a frequency
- FIX: named intersection or reporting point
- USER: point placed directly on the map by the pilot

Waypoints are immutable; edits produce new instances with
:func:`dataclasses.replace` or the ``with_*`` helpers.
"""

from dataclasses import dataclass, field, replace
from enum import Enum


class WaypointKind(Enum):
    """Waypoint variant discriminant.

    Attributes:
        AIRPORT: Aerodrome reference point
        NAVAID: VOR/NDB/DME station
        FIX: Named intersection or reporting point
        USER: User-placed point
    """

    AIRPORT = "AIRPORT"
    NAVAID = "NAVAID"
    FIX = "FIX"
    USER = "USER"


@dataclass(frozen=True)
class Frequency:
    """Radio frequency published for a point (e.g. TWR 118.205)."""

    type: str
    frequency: str


@dataclass(frozen=True)
class Runway:
    """Runway of an aerodrome.

    Attributes:
        designator: Runway designator (e.g. "24", "18R")
        true_heading: Runway true heading in degrees
        length_m: Length in meters
        width_m: Width in meters
        surface: Surface description
    """

    designator: str
    true_heading: float
    length_m: float = 0.0
    width_m: float = 0.0
    surface: str = "Unknown"


@dataclass(frozen=True)
class Waypoint:
    """Navigable point on a route.

    Attributes:
        identifier: ICAO code, navaid/fix identifier or free-form name
        latitude: WGS84 latitude in degrees [-90, 90]
        longitude: WGS84 longitude in degrees [-180, 180]
        kind: Variant discriminant
        name: Human-readable name
        elevation_ft: Elevation in feet MSL (optional)
        magnetic_variation: Signed variation in degrees, east positive (optional)
        altitude_ft: Target altitude for the leg ending here (optional)
        nearest_weather_station: Station whose observation applies here (optional)
        frequencies: Published frequencies
        runways: Runways (airports only)

    Raises:
        ValueError: If latitude or longitude is out of range.

    Examples:
        >>> ehrd = Waypoint.airport("EHRD", 51.9525, 4.4347, name="Rotterdam The Hague")
        >>> ehrd.is_resolved
        True
    """

    identifier: str
    latitude: float = 0.0
    longitude: float = 0.0
    kind: WaypointKind = WaypointKind.FIX
    name: str = ""
    elevation_ft: float | None = None
    magnetic_variation: float | None = None
    altitude_ft: float | None = None
    nearest_weather_station: str | None = None
    frequencies: tuple[Frequency, ...] = field(default_factory=tuple)
    runways: tuple[Runway, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range [-90, 90]: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range [-180, 180]: {self.longitude}")

    @classmethod
    def airport(cls, identifier: str, latitude: float, longitude: float, **kwargs) -> "Waypoint":
        """Create an aerodrome waypoint."""
        return cls(identifier=identifier, latitude=latitude, longitude=longitude,
                   kind=WaypointKind.AIRPORT, **kwargs)

    @classmethod
    def navaid(cls, identifier: str, latitude: float, longitude: float, **kwargs) -> "Waypoint":
        """Create a radio navaid waypoint."""
        return cls(identifier=identifier, latitude=latitude, longitude=longitude,
                   kind=WaypointKind.NAVAID, **kwargs)

    @classmethod
    def fix(cls, identifier: str, latitude: float, longitude: float, **kwargs) -> "Waypoint":
        """Create a named fix."""
        return cls(identifier=identifier, latitude=latitude, longitude=longitude,
                   kind=WaypointKind.FIX, **kwargs)

    @classmethod
    def user(cls, latitude: float, longitude: float, identifier: str = "", **kwargs) -> "Waypoint":
        """Create a user-placed point.

        Without an identifier one is derived from the position, e.g.
        ``"WP5212N00450E"``.
        """
        if not identifier:
            identifier = _position_identifier(latitude, longitude)
        kwargs.setdefault("name", "USER WP")
        return cls(identifier=identifier, latitude=latitude, longitude=longitude,
                   kind=WaypointKind.USER, **kwargs)

    @classmethod
    def unresolved(cls, identifier: str = "", kind: WaypointKind = WaypointKind.AIRPORT) -> "Waypoint":
        """Placeholder for a point whose lookup has not completed."""
        return cls(identifier=identifier, kind=kind)

    @property
    def is_resolved(self) -> bool:
        """True when the point has an identifier and non-zero coordinates."""
        return bool(self.identifier) and not (self.latitude == 0.0 and self.longitude == 0.0)

    @property
    def weather_station(self) -> str | None:
        """Identifier of the station whose observation applies at this point."""
        if self.nearest_weather_station:
            return self.nearest_weather_station
        if self.kind is WaypointKind.AIRPORT and self.identifier:
            return self.identifier
        return None

    @property
    def display_name(self) -> str:
        """Name to show in a log (identifier when set, else name)."""
        return self.identifier or self.name

    def with_position(self, latitude: float, longitude: float) -> "Waypoint":
        """Copy of this waypoint moved to a new position."""
        return replace(self, latitude=latitude, longitude=longitude)

    def with_altitude(self, altitude_ft: float | None) -> "Waypoint":
        """Copy of this waypoint with a new target altitude."""
        return replace(self, altitude_ft=altitude_ft)

    def __str__(self) -> str:
        return f"{self.display_name or 'WPT'} ({self.kind.value} {self.latitude:.4f}, {self.longitude:.4f})"


def _position_identifier(latitude: float, longitude: float) -> str:
    lat_hemi = "N" if latitude >= 0 else "S"
    lon_hemi = "E" if longitude >= 0 else "W"
    lat = abs(latitude)
    lon = abs(longitude)
    lat_deg, lat_min = int(lat), int((lat - int(lat)) * 60)
    lon_deg, lon_min = int(lon), int((lon - int(lon)) * 60)
    return f"WP{lat_deg:02d}{lat_min:02d}{lat_hemi}{lon_deg:03d}{lon_min:02d}{lon_hemi}"
