"""Weight and balance calculation for a flight plan.

The empty aircraft moment is taken at the middle of the CG range because
fleet profiles carry CG limits but no empty-aircraft arm. Fuel volume is
converted to mass with the configured density (0.72 kg/L for AVGAS).
"""

from dataclasses import dataclass

from navplan.aircraft.profile import AircraftProfile
from navplan.core.logging_system import get_logger
from navplan.navigation.flight_plan import Payload
from navplan.systems.weight_balance.station import LoadStation

logger = get_logger(__name__)

AVGAS_DENSITY_KG_PER_L = 0.72


@dataclass(frozen=True)
class WeightBalanceReport:
    """Mass and balance summary for one loading condition.

    Attributes:
        total_weight: Total mass in kg
        total_moment: Total moment in kg·m
        cg: Center of gravity in meters from datum
        within_limits: True when mass and CG are acceptable
        message: Description of the status or problem
    """

    total_weight: float
    total_moment: float
    cg: float
    within_limits: bool
    message: str


class WeightBalanceSystem:
    """Mass and CG of an aircraft profile with a payload.

    Examples:
        >>> wb = WeightBalanceSystem(dr400, Payload(pilot=85, pax=0, baggage=10, fuel=80))
        >>> report = wb.takeoff_report()
        >>> report.within_limits
        True
    """

    def __init__(
        self,
        aircraft: AircraftProfile,
        payload: Payload,
        fuel_density: float = AVGAS_DENSITY_KG_PER_L,
    ) -> None:
        """Initialize weight and balance for a loading.

        Args:
            aircraft: Aircraft profile with arms and limits
            payload: Occupants and baggage in kg, fuel in litres
            fuel_density: Fuel density in kg/L
        """
        self.aircraft = aircraft
        self.payload = payload
        self.fuel_density = fuel_density
        self.empty_arm = aircraft.cg_min + (aircraft.cg_max - aircraft.cg_min) / 2

    def stations(self, fuel_l: float | None = None) -> list[LoadStation]:
        """Load stations for the payload, optionally with a different fuel load.

        Args:
            fuel_l: Fuel on board in litres; defaults to the payload fuel.
        """
        fuel = self.payload.fuel if fuel_l is None else max(0.0, fuel_l)
        return [
            LoadStation("pilot", self.aircraft.arm_pilot, self.payload.pilot, "seat"),
            LoadStation("pax", self.aircraft.arm_pax, self.payload.pax, "seat"),
            LoadStation("baggage", self.aircraft.arm_baggage, self.payload.baggage, "cargo"),
            LoadStation(
                "fuel",
                self.aircraft.arm_fuel,
                fuel * self.fuel_density,
                "fuel",
                max_weight=self.aircraft.usable_fuel_l * self.fuel_density,
            ),
        ]

    def report(self, fuel_l: float | None = None) -> WeightBalanceReport:
        """Compute mass, moment and CG and check them against the limits.

        Args:
            fuel_l: Fuel on board in litres; defaults to the payload fuel.
        """
        stations = self.stations(fuel_l)
        empty_weight = self.aircraft.empty_weight_kg
        total_weight = empty_weight + sum(s.weight for s in stations)
        total_moment = empty_weight * self.empty_arm + sum(s.moment for s in stations)
        cg = total_moment / total_weight if total_weight > 0 else self.empty_arm

        within_limits, message = True, "Within limits"
        overweight = [s.name for s in stations if s.is_overweight()]
        if overweight:
            within_limits, message = False, f"Station over limit: {', '.join(overweight)}"
        elif total_weight > self.aircraft.max_takeoff_mass_kg:
            within_limits = False
            message = f"Overweight: {total_weight:.0f} kg > {self.aircraft.max_takeoff_mass_kg:.0f} kg"
        elif cg < self.aircraft.cg_min:
            within_limits = False
            message = f"CG too far forward: {cg:.3f} m < {self.aircraft.cg_min:.3f} m"
        elif cg > self.aircraft.cg_max:
            within_limits = False
            message = f"CG too far aft: {cg:.3f} m > {self.aircraft.cg_max:.3f} m"

        if not within_limits:
            logger.warning("Weight and balance for %s: %s", self.aircraft.id, message)

        return WeightBalanceReport(
            total_weight=total_weight,
            total_moment=total_moment,
            cg=cg,
            within_limits=within_limits,
            message=message,
        )

    def takeoff_report(self) -> WeightBalanceReport:
        """Mass and balance with the full payload fuel."""
        return self.report()

    def landing_report(self, fuel_burned_l: float) -> WeightBalanceReport:
        """Mass and balance after burning fuel en route.

        Args:
            fuel_burned_l: Fuel used before landing in litres.
        """
        return self.report(self.payload.fuel - fuel_burned_l)
