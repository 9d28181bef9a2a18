"""Fuel policy engine.

Computes the fuel required for a trip under a reserve policy:

    total = trip + contingency + reserve + taxi + alternate

- trip: trip minutes at cruise burn
- contingency: a fraction (5%) of trip fuel, rounded up to a whole unit
- reserve: policy-dependent final reserve time at cruise burn
- taxi: fixed allowance
- alternate: diversion time at cruise burn (0 without an alternate)

Fuel quantities are in the unit of the burn rate (litres for L/h). Reserve
times are regulatory values and come from configuration.

Typical usage:
    engine = FuelPolicyEngine.from_config(ConfigLoader.load_with_defaults())
    fuel = engine.calculate(trip_minutes=60, burn_rate=35, policy=ReservePolicy.VFR_NIGHT)
    fuel.reserve  # 26.25
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from navplan.core.config import ConfigLoader
from navplan.core.logging_system import get_logger

logger = get_logger(__name__)


class ReservePolicy(Enum):
    """Final reserve policy.

    Attributes:
        VFR_DAY: Day VFR (30 minutes by default)
        VFR_NIGHT: Night VFR (45 minutes by default)
        IFR: IFR (45 minutes by default)
    """

    VFR_DAY = "VFR_DAY"
    VFR_NIGHT = "VFR_NIGHT"
    IFR = "IFR"


class FuelPolicyError(Exception):
    """Raised when a reserve policy has no configured reserve time."""


DEFAULT_RESERVE_MINUTES: dict[ReservePolicy, float] = {
    ReservePolicy.VFR_DAY: 30.0,
    ReservePolicy.VFR_NIGHT: 45.0,
    ReservePolicy.IFR: 45.0,
}
DEFAULT_CONTINGENCY_FRACTION = 0.05
DEFAULT_TAXI_FUEL = 4.0


@dataclass(frozen=True)
class FuelBreakdown:
    """Fuel required for a trip, by contribution.

    Attributes:
        trip: Fuel for the planned legs
        contingency: Contingency on trip fuel
        reserve: Final reserve
        taxi: Taxi allowance
        alternate: Fuel from destination to alternate
        total: Sum of all contributions
        policy: Reserve policy applied
        reserve_minutes: Reserve time applied
    """

    trip: float
    contingency: float
    reserve: float
    taxi: float
    alternate: float
    total: float
    policy: ReservePolicy
    reserve_minutes: float

    def is_sufficient(self, available: float) -> bool:
        """True when the available fuel covers the total."""
        return available >= self.total


def endurance_minutes(fuel: float, burn_rate: float) -> float:
    """Minutes of flight a fuel quantity allows at a burn rate.

    Raises:
        ValueError: If burn_rate is not positive or fuel is negative.
    """
    if burn_rate <= 0:
        raise ValueError(f"Burn rate must be positive: {burn_rate}")
    if fuel < 0:
        raise ValueError(f"Fuel cannot be negative: {fuel}")
    return fuel / burn_rate * 60.0


class FuelPolicyEngine:
    """Apply a fuel policy to a planned trip duration.

    Examples:
        >>> engine = FuelPolicyEngine()
        >>> fuel = engine.calculate(60, 35, ReservePolicy.VFR_DAY)
        >>> fuel.trip, fuel.contingency, fuel.reserve, fuel.taxi, fuel.total
        (35.0, 2.0, 17.5, 4.0, 58.5)
    """

    def __init__(
        self,
        reserve_minutes: Mapping[ReservePolicy | str, float] | None = None,
        contingency_fraction: float = DEFAULT_CONTINGENCY_FRACTION,
        taxi_fuel: float = DEFAULT_TAXI_FUEL,
    ) -> None:
        """Initialize the engine.

        Args:
            reserve_minutes: Reserve time per policy. Keys may be policies or
                their names; missing policies keep their defaults.
            contingency_fraction: Share of trip fuel kept as contingency.
            taxi_fuel: Fixed taxi allowance, in fuel units.

        Raises:
            ValueError: If any value is negative or a policy name is unknown.
        """
        if contingency_fraction < 0:
            raise ValueError(f"Contingency fraction cannot be negative: {contingency_fraction}")
        if taxi_fuel < 0:
            raise ValueError(f"Taxi fuel cannot be negative: {taxi_fuel}")

        self.reserve_minutes: dict[ReservePolicy, float] = dict(DEFAULT_RESERVE_MINUTES)
        for key, minutes in (reserve_minutes or {}).items():
            policy = key if isinstance(key, ReservePolicy) else ReservePolicy(str(key).upper())
            if minutes < 0:
                raise ValueError(f"Reserve minutes cannot be negative for {policy.value}: {minutes}")
            self.reserve_minutes[policy] = float(minutes)

        self.contingency_fraction = contingency_fraction
        self.taxi_fuel = taxi_fuel

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "FuelPolicyEngine":
        """Build the engine from the ``fuel`` configuration section."""
        return cls(
            reserve_minutes=config.get("fuel.reserve_minutes", {}),
            contingency_fraction=float(config.get("fuel.contingency_fraction", DEFAULT_CONTINGENCY_FRACTION)),
            taxi_fuel=float(config.get("fuel.taxi_fuel", DEFAULT_TAXI_FUEL)),
        )

    def reserve_for(self, policy: ReservePolicy, burn_rate: float) -> float:
        """Reserve fuel for a policy at a burn rate.

        Raises:
            FuelPolicyError: If no reserve time is configured for the policy.
        """
        if policy not in self.reserve_minutes:
            raise FuelPolicyError(f"No reserve time configured for policy {policy}")
        return self.reserve_minutes[policy] / 60.0 * burn_rate

    def calculate(
        self,
        trip_minutes: float,
        burn_rate: float,
        policy: ReservePolicy,
        alternate_minutes: float = 0.0,
    ) -> FuelBreakdown:
        """Compute the fuel breakdown for a trip.

        Args:
            trip_minutes: Total planned flight time of the trip legs
            burn_rate: Fuel burn per hour
            policy: Reserve policy
            alternate_minutes: Flight time from destination to alternate

        Returns:
            FuelBreakdown whose total is the exact sum of its parts.

        Raises:
            ValueError: If any input is negative.
            FuelPolicyError: If the policy has no reserve time.
        """
        if trip_minutes < 0:
            raise ValueError(f"Trip duration cannot be negative: {trip_minutes}")
        if burn_rate < 0:
            raise ValueError(f"Burn rate cannot be negative: {burn_rate}")
        if alternate_minutes < 0:
            raise ValueError(f"Alternate duration cannot be negative: {alternate_minutes}")

        trip = trip_minutes / 60.0 * burn_rate
        # Round first so 5% of 20.0 stays 1, not 2.
        contingency = float(math.ceil(round(trip * self.contingency_fraction, 9)))
        reserve = self.reserve_for(policy, burn_rate)
        alternate = alternate_minutes / 60.0 * burn_rate
        taxi = self.taxi_fuel

        breakdown = FuelBreakdown(
            trip=trip,
            contingency=contingency,
            reserve=reserve,
            taxi=taxi,
            alternate=alternate,
            total=trip + contingency + reserve + taxi + alternate,
            policy=policy,
            reserve_minutes=self.reserve_minutes[policy],
        )
        logger.debug(
            "Fuel %s: trip=%.1f cont=%.1f res=%.1f taxi=%.1f alt=%.1f total=%.1f",
            policy.value, trip, contingency, reserve, taxi, alternate, breakdown.total,
        )
        return breakdown
