"""
Physics Constants
=================

Physical constants and reference rig values for the sail model.
Real-world values (sea level, 15°C).
"""

# Fluid properties
AIR_DENSITY = 1.225                  # kg/m³ at sea level, 15°C
WATER_DENSITY = 1025.0               # kg/m³ seawater

# Unit conversions
MS_TO_KNOTS = 1.94384
KNOTS_TO_MS = 0.514444

# Typical freeride rig
SAIL_AREA = 6.5            # m² (6.5 freeride sail)
SAIL_LUFF_LENGTH = 4.7     # m
SAIL_BOOM_LENGTH = 2.0     # m
SAIL_BOOM_HEIGHT = 1.4     # m above the mast foot
