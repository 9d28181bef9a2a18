"""Navigation point directory for waypoint lookup and search.

This module provides the waypoint resolution interface used by flight-plan
editing, and an in-memory database implementation loadable from CSV.

Typical usage:
    db = NavDatabase()
    db.load_from_csv(get_data_path("navpoints.csv"))

    ehrd = db.lookup("EHRD")
    matches = db.search("EH")
"""

import csv
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from navplan.navigation.geodesy import GeoPoint, distance_nm
from navplan.navigation.waypoint import Frequency, Runway, Waypoint, WaypointKind

logger = logging.getLogger(__name__)

MIN_SEARCH_LENGTH = 2


class WaypointResolver(ABC):
    """Resolves identifiers and search text into waypoints."""

    @abstractmethod
    def lookup(self, identifier: str) -> Waypoint | None:
        """Find a waypoint by exact identifier (case-insensitive)."""

    @abstractmethod
    def search(self, query: str, limit: int = 10) -> list[Waypoint]:
        """Find waypoints whose identifier or name starts with the query.

        Queries shorter than two characters return an empty list.
        """


class NavDatabase(WaypointResolver):
    """In-memory directory of airports, navaids and fixes.

    Attributes:
        points: Mapping of upper-case identifier to Waypoint

    Examples:
        >>> db = NavDatabase()
        >>> db.add(Waypoint.airport("EHAM", 52.3086, 4.7639, name="Amsterdam Schiphol"))
        >>> db.lookup("eham").name
        'Amsterdam Schiphol'
    """

    def __init__(self) -> None:
        """Initialize empty navigation database."""
        self.points: dict[str, Waypoint] = {}

    def add(self, waypoint: Waypoint) -> None:
        """Add a point, replacing any point with the same identifier."""
        self.points[waypoint.identifier.upper()] = waypoint
        logger.debug("Added nav point: %s", waypoint)

    def lookup(self, identifier: str) -> Waypoint | None:
        if not identifier:
            return None
        return self.points.get(identifier.strip().upper())

    def search(self, query: str, limit: int = 10) -> list[Waypoint]:
        query = query.strip().upper()
        if len(query) < MIN_SEARCH_LENGTH:
            return []

        # Identifier matches rank ahead of name matches.
        by_identifier = [p for key, p in self.points.items() if key.startswith(query)]
        by_name = [
            p
            for key, p in self.points.items()
            if not key.startswith(query) and p.name.upper().startswith(query)
        ]
        by_identifier.sort(key=lambda p: p.identifier)
        by_name.sort(key=lambda p: p.name)
        return (by_identifier + by_name)[:limit]

    def find_near(
        self, position: GeoPoint, radius_nm: float, kind: WaypointKind | None = None
    ) -> list[Waypoint]:
        """Find points within a radius, closest first.

        Args:
            position: Center of the search
            radius_nm: Search radius in nautical miles
            kind: Optional filter by waypoint kind

        Returns:
            Matching waypoints sorted by distance.
        """
        results = []
        for point in self.points.values():
            if kind and point.kind is not kind:
                continue
            d = distance_nm(position, point)
            if d <= radius_nm:
                results.append((d, point))

        results.sort(key=lambda item: item[0])
        return [point for _, point in results]

    def load_from_csv(self, csv_path: str | Path) -> int:
        """Load points from a CSV file.

        Expected columns:
            identifier,name,kind,latitude,longitude,elevation_ft,
            magnetic_variation,nearest_weather_station,frequencies,runways

        ``frequencies`` is ``TYPE=value`` pairs separated by ``;`` and
        ``runways`` is ``designator:true_heading`` pairs separated by ``;``.
        Invalid rows are skipped with a warning.

        Returns:
            Number of points loaded.

        Raises:
            FileNotFoundError: If the CSV file doesn't exist.
        """
        path = Path(csv_path)
        if not path.exists():
            raise FileNotFoundError(f"Nav point CSV not found: {csv_path}")

        count = 0
        with open(path, encoding="utf-8", newline="") as f:
            for row in csv.DictReader(f):
                try:
                    self.add(_parse_row(row))
                    count += 1
                except (KeyError, ValueError) as e:
                    logger.warning("Skipping invalid nav point row %s: %s", row.get("identifier"), e)

        logger.info("Loaded %d nav points from %s", count, path)
        return count

    def count(self) -> int:
        """Return total number of points in the database."""
        return len(self.points)


def _optional_float(value: str | None) -> float | None:
    if value is None or value.strip() == "":
        return None
    return float(value)


def _parse_row(row: dict[str, str]) -> Waypoint:
    frequencies = tuple(
        Frequency(type=kind.strip(), frequency=value.strip())
        for kind, _, value in (item.partition("=") for item in (row.get("frequencies") or "").split(";"))
        if kind.strip()
    )
    runways = tuple(
        Runway(designator=designator.strip(), true_heading=float(heading))
        for designator, _, heading in (item.partition(":") for item in (row.get("runways") or "").split(";"))
        if designator.strip()
    )

    return Waypoint(
        identifier=row["identifier"].strip().upper(),
        name=row.get("name", "").strip(),
        kind=WaypointKind[row["kind"].strip().upper()],
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
        elevation_ft=_optional_float(row.get("elevation_ft")),
        magnetic_variation=_optional_float(row.get("magnetic_variation")),
        nearest_weather_station=(row.get("nearest_weather_station") or "").strip() or None,
        frequencies=frequencies,
        runways=runways,
    )
