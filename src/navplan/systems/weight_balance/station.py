"""Load station for weight and balance calculations.

A load station is a point where mass is carried: a seat row, the baggage
compartment or the fuel tanks.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class LoadStation:
    """Represents a mass station in the aircraft.

    Attributes:
        name: Station identifier (e.g. "pilot", "fuel")
        arm: Distance from reference datum in meters
        weight: Mass at the station in kilograms
        station_type: "seat", "cargo" or "fuel"
        max_weight: Structural limit in kilograms (inf when unpublished)

    Examples:
        >>> pilot = LoadStation(name="pilot", arm=0.4, weight=85.0, station_type="seat")
        >>> round(pilot.moment, 1)  # 85 kg x 0.4 m
        34.0
    """

    name: str
    arm: float
    weight: float
    station_type: str
    max_weight: float = math.inf

    def __post_init__(self) -> None:
        if self.weight < 0:
            raise ValueError(f"Station {self.name} weight cannot be negative: {self.weight}")

    @property
    def moment(self) -> float:
        """Moment in kg·m (weight × arm)."""
        return self.weight * self.arm

    def is_overweight(self) -> bool:
        """True if the station exceeds its structural limit."""
        return self.weight > self.max_weight
