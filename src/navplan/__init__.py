"""NavPlan - VFR flight planning engine.

Computes leg-by-leg navigation logs (track, heading, distance, time and fuel)
from a flight plan, an aircraft profile and wind observations.
"""

__version__ = "0.1.0"
