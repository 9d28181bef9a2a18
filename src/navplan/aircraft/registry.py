"""Fleet registry: list, save and delete aircraft profiles.

Typical usage:
    registry = AircraftRegistry.load_from_yaml(get_config_path("fleet.yaml"))
    dr400 = registry.get("PH-VCR")
"""

from pathlib import Path
from typing import Any

import yaml

from navplan.aircraft.profile import AircraftProfile
from navplan.core.logging_system import get_logger

logger = get_logger(__name__)

# YAML key -> AircraftProfile field
_YAML_FIELDS = {
    "id": "id",
    "name": "name",
    "cruise_speed": "cruise_speed_kts",
    "fuel_burn": "fuel_burn_lph",
    "usable_fuel": "usable_fuel_l",
    "empty_weight": "empty_weight_kg",
    "max_takeoff_mass": "max_takeoff_mass_kg",
    "cg_min": "cg_min",
    "cg_max": "cg_max",
    "arm_pilot": "arm_pilot",
    "arm_pax": "arm_pax",
    "arm_baggage": "arm_baggage",
    "arm_fuel": "arm_fuel",
}


def default_aircraft_profiles() -> list[AircraftProfile]:
    """Profiles available when no fleet file is configured."""
    return [
        AircraftProfile(
            id="PH-VCR",
            name="Robin DR400/140B",
            cruise_speed_kts=110,
            fuel_burn_lph=35,
            usable_fuel_l=110,
            empty_weight_kg=600,
            max_takeoff_mass_kg=1000,
            cg_min=0.2,
            cg_max=0.8,
            arm_pilot=0.4,
            arm_pax=0.4,
            arm_baggage=1.1,
            arm_fuel=0.8,
        ),
        AircraftProfile(
            id="PH-XYZ",
            name="Piper PA-28-181",
            cruise_speed_kts=105,
            fuel_burn_lph=38,
            usable_fuel_l=136,
            empty_weight_kg=710,
            max_takeoff_mass_kg=1157,
            cg_min=2.1,
            cg_max=2.4,
            arm_pilot=2.1,
            arm_pax=3.0,
            arm_baggage=3.6,
            arm_fuel=2.4,
        ),
    ]


def profile_from_yaml(entry: dict[str, Any]) -> AircraftProfile:
    """Build a profile from one fleet file entry.

    Raises:
        ValueError: If a required key is missing or a value is invalid.
    """
    missing = [key for key in ("id", "cruise_speed", "fuel_burn", "cg_min", "cg_max") if key not in entry]
    if missing:
        raise ValueError(f"Aircraft entry missing keys: {', '.join(missing)}")

    values: dict[str, Any] = {"name": entry["id"], "usable_fuel_l": 0.0,
                              "empty_weight_kg": 0.0, "max_takeoff_mass_kg": 0.0}
    for key, field_name in _YAML_FIELDS.items():
        if key in entry:
            values[field_name] = entry[key] if key in ("id", "name") else float(entry[key])
    return AircraftProfile(**values)


class AircraftRegistry:
    """In-memory fleet of aircraft profiles keyed by registration.

    Examples:
        >>> registry = AircraftRegistry()
        >>> [p.id for p in registry.list()]
        ['PH-VCR', 'PH-XYZ']
    """

    def __init__(self, profiles: list[AircraftProfile] | None = None) -> None:
        """Initialize the registry.

        Args:
            profiles: Initial fleet. Defaults to the built-in profiles.
        """
        initial = default_aircraft_profiles() if profiles is None else profiles
        self._profiles: dict[str, AircraftProfile] = {p.id: p for p in initial}

    @classmethod
    def load_from_yaml(cls, path: str | Path) -> "AircraftRegistry":
        """Load a fleet from YAML.

        The file holds an ``aircraft`` list; invalid entries are skipped with
        a warning.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ValueError: If the file has no ``aircraft`` list.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Fleet file not found: {path}")

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        entries = data.get("aircraft")
        if not isinstance(entries, list):
            raise ValueError(f"Fleet file has no 'aircraft' list: {path}")

        profiles = []
        for entry in entries:
            try:
                profiles.append(profile_from_yaml(entry))
            except (TypeError, ValueError) as e:
                logger.warning("Skipping invalid aircraft entry in %s: %s", path, e)

        logger.info("Loaded %d aircraft profiles from %s", len(profiles), path)
        return cls(profiles)

    def list(self) -> list[AircraftProfile]:
        """All profiles in insertion order."""
        return list(self._profiles.values())

    def get(self, aircraft_id: str) -> AircraftProfile | None:
        """Profile by registration, or None."""
        return self._profiles.get(aircraft_id)

    def save(self, profile: AircraftProfile) -> AircraftProfile:
        """Add or replace a profile."""
        is_new = profile.id not in self._profiles
        self._profiles[profile.id] = profile
        logger.info("%s aircraft profile %s", "Added" if is_new else "Updated", profile.id)
        return profile

    def delete(self, aircraft_id: str) -> bool:
        """Remove a profile.

        Returns:
            True if a profile was removed.
        """
        removed = self._profiles.pop(aircraft_id, None) is not None
        if removed:
            logger.info("Deleted aircraft profile %s", aircraft_id)
        return removed
