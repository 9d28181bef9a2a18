"""Aircraft performance profiles and the fleet registry."""

from navplan.aircraft.profile import AircraftProfile
from navplan.aircraft.registry import AircraftRegistry, default_aircraft_profiles

__all__ = ["AircraftProfile", "AircraftRegistry", "default_aircraft_profiles"]
