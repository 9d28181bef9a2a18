"""Navigation log computation and orchestration."""

from navplan.planning.aggregator import RouteAggregator
from navplan.planning.calculator import (
    LocalNavLogCalculator,
    NavLogCalculator,
    RemoteNavLogCalculator,
    calculator_registry,
)
from navplan.planning.errors import (
    InsufficientWaypointsError,
    NavLogError,
    RemoteCalculationError,
    WeatherUnavailableError,
)
from navplan.planning.leg_builder import LegBuilder
from navplan.planning.navlog import LegCourse, LegPerformance, LegWind, NavigationLog, RouteLeg
from navplan.planning.orchestrator import NavLogOrchestrator, NavLogSnapshot, NavLogState, NavLogUpdatedEvent
from navplan.planning.persistence import (
    FlightPlanStore,
    InMemoryFlightPlanStore,
    JsonFileFlightPlanStore,
    default_flight_plan,
)

__all__ = [
    "FlightPlanStore",
    "InMemoryFlightPlanStore",
    "InsufficientWaypointsError",
    "JsonFileFlightPlanStore",
    "LegBuilder",
    "LegCourse",
    "LegPerformance",
    "LegWind",
    "LocalNavLogCalculator",
    "NavLogCalculator",
    "NavLogError",
    "NavLogOrchestrator",
    "NavLogSnapshot",
    "NavLogState",
    "NavLogUpdatedEvent",
    "NavigationLog",
    "RemoteCalculationError",
    "RemoteNavLogCalculator",
    "RouteAggregator",
    "RouteLeg",
    "WeatherUnavailableError",
    "calculator_registry",
    "default_flight_plan",
]
