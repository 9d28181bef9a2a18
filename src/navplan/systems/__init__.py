"""Aircraft planning systems: fuel policy and weight & balance."""
