"""Navigation log calculators.

A calculator turns a flight plan into a navigation log. Two strategies are
available and selected by name through :func:`calculator_registry`:

- "local": computes in-process with the route aggregator, using a weather
  provider for winds when one is configured
- "remote": posts the plan to the flight-plan service and decodes its answer

Typical usage:
    registry = calculator_registry()
    calculator = registry.create("remote", config)
    log = calculator.compute(plan)
"""

from abc import ABC, abstractmethod
from typing import Any

import requests

from navplan.core.config import ConfigLoader
from navplan.core.logging_system import get_logger
from navplan.core.registry import ComponentRegistry
from navplan.navigation.flight_plan import FlightPlan
from navplan.planning.aggregator import MISSING_ENDPOINTS_MESSAGE, RouteAggregator
from navplan.planning.errors import InsufficientWaypointsError, RemoteCalculationError, WeatherUnavailableError
from navplan.planning.navlog import NavigationLog, navlog_from_dict
from navplan.weather.observation import WeatherObservation, WeatherProvider

logger = get_logger(__name__)

DEFAULT_TIMEOUT_S = 10.0


class NavLogCalculator(ABC):
    """Strategy computing a navigation log for a flight plan."""

    @abstractmethod
    def compute(self, plan: FlightPlan) -> NavigationLog:
        """Compute the navigation log.

        Raises:
            NavLogError: If the log cannot be computed.
        """


class LocalNavLogCalculator(NavLogCalculator):
    """In-process calculator backed by the route aggregator."""

    def __init__(self, aggregator: RouteAggregator | None = None, weather: WeatherProvider | None = None) -> None:
        """Initialize the calculator.

        Args:
            aggregator: Aggregator to use (default fuel policy if None)
            weather: Source of observations; still air everywhere if None
        """
        self.aggregator = aggregator or RouteAggregator()
        self.weather = weather

    @classmethod
    def from_config(cls, config: ConfigLoader, weather: WeatherProvider | None = None) -> "LocalNavLogCalculator":
        return cls(aggregator=RouteAggregator.from_config(config), weather=weather)

    def compute(self, plan: FlightPlan) -> NavigationLog:
        return self.aggregator.compute(plan, self._fetch_weather(plan))

    def _fetch_weather(self, plan: FlightPlan) -> dict[str, WeatherObservation]:
        if self.weather is None:
            return {}

        # Every leg, including the alternate leg, takes the wind at its start.
        stations = []
        for point in plan.route_points():
            station = point.weather_station
            if station and station not in stations:
                stations.append(station)

        try:
            observations = self.weather.get_observations(stations)
        except Exception as e:  # pylint: disable=broad-exception-caught
            raise WeatherUnavailableError(f"Weather unavailable: {e}") from e

        missing = [s for s in stations if s not in observations]
        if missing:
            logger.info("No observation for %s, using still air", ", ".join(missing))
        return observations


class RemoteNavLogCalculator(NavLogCalculator):
    """Calculator delegating to the flight-plan service over HTTP.

    The service receives ``POST {base_url}/flightplan`` with the route string
    and answers with a navigation log, or with ``{"error": "..."}`` and a
    non-2xx status.
    """

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        taxi_fuel: float | None = None,
    ) -> None:
        """Initialize the calculator.

        Args:
            base_url: Service root URL, without trailing slash
            session: HTTP session (a new one if None)
            timeout_s: Request timeout in seconds
            taxi_fuel: Taxi fuel to request; service default if None
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout_s = timeout_s
        self.taxi_fuel = taxi_fuel

    @classmethod
    def from_config(cls, config: ConfigLoader, base_url: str | None = None,
                    session: requests.Session | None = None) -> "RemoteNavLogCalculator":
        return cls(
            base_url=base_url or config.get("remote.base_url"),
            session=session,
            timeout_s=float(config.get("remote.timeout_s", DEFAULT_TIMEOUT_S)),
            taxi_fuel=config.get("fuel.taxi_fuel"),
        )

    def build_request(self, plan: FlightPlan) -> dict[str, Any]:
        """Request body for a plan. Keys without a value are left out."""
        body = {
            "route": plan.route_string(),
            "alternate": plan.alternate.identifier if plan.alternate and plan.alternate.is_resolved else None,
            "aircraftRegistration": plan.aircraft_id,
            "departureDate": plan.departure_time or None,
            "defaultAltitude": plan.cruise_altitude_ft,
            "taxiFuel": self.taxi_fuel,
        }
        return {key: value for key, value in body.items() if value is not None}

    def compute(self, plan: FlightPlan) -> NavigationLog:
        """Request a navigation log from the service.

        Raises:
            InsufficientWaypointsError: If departure or arrival is unresolved.
            RemoteCalculationError: On network failure, an error status or an
                undecodable answer.
        """
        if not plan.has_endpoints:
            raise InsufficientWaypointsError(MISSING_ENDPOINTS_MESSAGE)

        url = f"{self.base_url}/flightplan"
        body = self.build_request(plan)
        logger.info("Requesting navigation log for %s from %s", body["route"], url)

        try:
            response = self.session.post(url, json=body, timeout=self.timeout_s)
        except requests.exceptions.RequestException as e:
            raise RemoteCalculationError(f"Flight plan service unreachable: {e}") from e

        if not response.ok:
            raise RemoteCalculationError(self._error_message(response), status_code=response.status_code)

        try:
            return navlog_from_dict(response.json(), reserve_policy=plan.reserve_policy)
        except (ValueError, KeyError, TypeError) as e:
            raise RemoteCalculationError(f"Invalid flight plan response: {e}") from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and data.get("error"):
            return str(data["error"])
        return f"Failed to calculate flight plan (HTTP {response.status_code})"


def calculator_registry() -> ComponentRegistry:
    """Registry of the available calculators.

    Factories take the configuration as first argument.
    """
    registry = ComponentRegistry()
    registry.register("local", LocalNavLogCalculator.from_config)
    registry.register("remote", RemoteNavLogCalculator.from_config)
    return registry
