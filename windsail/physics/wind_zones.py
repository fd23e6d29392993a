"""
Wind Zones
==========

Provider variants layered over a base wind source:
- Circular zones with their own wind, blended at the edges
- Power-law height gradient (wind increases above the water)
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence
import logging

import numpy as np

from .vectors import as_vector, direction_from_degrees
from .wind_field import WindProvider

logger = logging.getLogger(__name__)


@dataclass
class WindZone:
    """Circular region of the water with its own wind."""
    center_x: float
    center_z: float
    radius: float                  # m
    speed: float                   # m/s
    direction_degrees: float       # 0 = +Z, 90 = +X
    blend_width: float = 0.0       # m, band inside the edge blended with the base wind

    @property
    def vector(self) -> np.ndarray:
        return direction_from_degrees(self.direction_degrees) * self.speed

    def weight(self, position: np.ndarray) -> float:
        """
        Influence of the zone at a position.

        1.0 well inside the zone, falling linearly to 0.0 across the
        blend band at the edge, 0.0 outside.
        """
        distance = math.hypot(position[0] - self.center_x, position[2] - self.center_z)
        if distance >= self.radius:
            return 0.0
        if self.blend_width <= 0 or distance <= self.radius - self.blend_width:
            return 1.0
        return (self.radius - distance) / self.blend_width


class ZonedWindProvider(WindProvider):
    """
    Base wind with local zones (wind shadows, acceleration around headlands).

    The first zone containing a position takes precedence.
    """

    def __init__(self, base: WindProvider, zones: Optional[List[WindZone]] = None):
        self.base = base
        self.zones = list(zones or [])

    @property
    def wind_direction(self) -> np.ndarray:
        return self.base.wind_direction

    @property
    def wind_speed(self) -> float:
        return self.base.wind_speed

    def add_zone(self, zone: WindZone):
        self.zones.append(zone)

    def wind_at_position(self, position: Sequence[float]) -> np.ndarray:
        pos = as_vector(position)
        base_wind = self.base.wind_at_position(pos)
        for zone in self.zones:
            w = zone.weight(pos)
            if w > 0.0:
                return base_wind + (zone.vector - base_wind) * w
        return base_wind

    def advance(self, dt: float):
        self.base.advance(dt)


class ShearedWindProvider(WindProvider):
    """
    Height gradient over water.

    Wind profile power law: V = V_ref * (z / z_ref)^alpha, applied above
    10 cm; alpha of 0.1-0.3 is typical over water.
    """

    MIN_HEIGHT = 0.1

    def __init__(self, base: WindProvider,
                 reference_height: float = 1.0,
                 shear_exponent: float = 0.14):
        self.base = base
        self.reference_height = reference_height
        self.shear_exponent = min(0.4, max(0.05, shear_exponent))
        if self.shear_exponent != shear_exponent:
            logger.warning(f"Shear exponent {shear_exponent} clamped to {self.shear_exponent}")

    @property
    def wind_direction(self) -> np.ndarray:
        return self.base.wind_direction

    @property
    def wind_speed(self) -> float:
        return self.base.wind_speed

    def height_factor(self, height: float) -> float:
        """Speed multiplier at a height above the water."""
        if height <= self.MIN_HEIGHT:
            return 1.0
        ratio = height / self.reference_height
        return ratio ** self.shear_exponent

    def wind_at_position(self, position: Sequence[float]) -> np.ndarray:
        pos = as_vector(position)
        return self.base.wind_at_position(pos) * self.height_factor(pos[1])

    def advance(self, dt: float):
        self.base.advance(dt)
