"""Aircraft performance and weight & balance profile.

Units follow the planning convention of the fleet data: knots for speed,
litres and litres per hour for fuel, kilograms for mass and meters for arms.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AircraftProfile:
    """Performance and loading profile for one aircraft.

    Attributes:
        id: Registration used as the profile key (e.g. "PH-VCR")
        name: Type name (e.g. "Robin DR400/140B")
        cruise_speed_kts: Cruise true airspeed in knots
        fuel_burn_lph: Cruise fuel burn in litres per hour
        usable_fuel_l: Usable fuel capacity in litres
        empty_weight_kg: Empty mass in kilograms
        max_takeoff_mass_kg: Maximum takeoff mass in kilograms
        cg_min: Forward CG limit (m from datum)
        cg_max: Aft CG limit (m from datum)
        arm_pilot: Front seat arm (m)
        arm_pax: Rear seat arm (m)
        arm_baggage: Baggage compartment arm (m)
        arm_fuel: Fuel tank arm (m)

    Raises:
        ValueError: If cg_min >= cg_max, a weight or arm is negative, or
            cruise speed / fuel burn is not positive.

    Examples:
        >>> dr400 = AircraftProfile(
        ...     id="PH-VCR", name="Robin DR400/140B", cruise_speed_kts=110,
        ...     fuel_burn_lph=35, usable_fuel_l=110, empty_weight_kg=600,
        ...     max_takeoff_mass_kg=1000, cg_min=0.2, cg_max=0.8,
        ... )
    """

    id: str
    name: str
    cruise_speed_kts: float
    fuel_burn_lph: float
    usable_fuel_l: float
    empty_weight_kg: float
    max_takeoff_mass_kg: float
    cg_min: float
    cg_max: float
    arm_pilot: float = 0.0
    arm_pax: float = 0.0
    arm_baggage: float = 0.0
    arm_fuel: float = 0.0

    def __post_init__(self) -> None:
        if self.cruise_speed_kts <= 0:
            raise ValueError(f"Cruise speed must be positive: {self.cruise_speed_kts}")
        if self.fuel_burn_lph <= 0:
            raise ValueError(f"Fuel burn must be positive: {self.fuel_burn_lph}")
        if self.cg_min >= self.cg_max:
            raise ValueError(f"CG limits inverted: cg_min={self.cg_min} >= cg_max={self.cg_max}")

        non_negative = {
            "usable_fuel_l": self.usable_fuel_l,
            "empty_weight_kg": self.empty_weight_kg,
            "max_takeoff_mass_kg": self.max_takeoff_mass_kg,
            "arm_pilot": self.arm_pilot,
            "arm_pax": self.arm_pax,
            "arm_baggage": self.arm_baggage,
            "arm_fuel": self.arm_fuel,
        }
        for name, value in non_negative.items():
            if value < 0:
                raise ValueError(f"{name} cannot be negative: {value}")

    @property
    def endurance_minutes(self) -> float:
        """Time to burn all usable fuel at cruise."""
        return self.usable_fuel_l / self.fuel_burn_lph * 60.0
