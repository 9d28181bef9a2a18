"""Fuel planning: trip, contingency, reserve and taxi fuel."""

from navplan.systems.fuel.policy import (
    FuelBreakdown,
    FuelPolicyEngine,
    FuelPolicyError,
    ReservePolicy,
)

__all__ = ["FuelBreakdown", "FuelPolicyEngine", "FuelPolicyError", "ReservePolicy"]
