"""Weight and balance for a loaded flight plan.

Computes takeoff and landing mass and center of gravity from the aircraft
profile and the plan payload.
"""

from navplan.systems.weight_balance.station import LoadStation
from navplan.systems.weight_balance.weight_balance_system import (
    WeightBalanceReport,
    WeightBalanceSystem,
)

__all__ = ["LoadStation", "WeightBalanceReport", "WeightBalanceSystem"]
