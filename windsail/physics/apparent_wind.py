"""
Apparent Wind
=============

Apparent Wind = True Wind - Boat Velocity

This is what the sailor actually feels: the real wind combined with
the wind created by the board's own movement.

Angle convention: the apparent wind angle is measured from the bow to
the direction the wind comes FROM. 0° = head to wind, +90° = wind on
the starboard beam, ±180° = dead astern. Positive = starboard.
"""

from dataclasses import dataclass
from typing import Sequence
import logging

import numpy as np

from .vectors import as_vector, frozen, horizontal, signed_angle
from .wind_field import WindSample

logger = logging.getLogger(__name__)

# Below this speed the wind angle is undefined
MIN_WIND_SPEED = 0.01


@dataclass(frozen=True)
class ApparentWind:
    """Resolved apparent wind."""
    vector: np.ndarray        # m/s, world space, blowing TOWARD
    speed: float              # m/s
    angle_deg: float          # (-180, 180], from the bow, + = starboard

    def __post_init__(self):
        object.__setattr__(self, 'vector', frozen(self.vector))


def wind_angle_from_bow(wind_vector: np.ndarray, boat_forward: np.ndarray) -> float:
    """Signed angle from the bow to where a wind vector comes from."""
    wind_from = -horizontal(wind_vector)
    forward = horizontal(boat_forward)
    if np.linalg.norm(wind_from) < 1e-9:
        return 0.0
    if np.linalg.norm(forward) < 1e-9:
        raise ValueError("Boat forward axis has no horizontal component")
    return signed_angle(forward, wind_from)


class ApparentWindResolver:
    """Combines true wind with boat motion."""

    def resolve(self, true_wind: WindSample,
                boat_velocity: Sequence[float],
                boat_forward: Sequence[float]) -> ApparentWind:
        """
        Resolve the apparent wind for a moving craft.

        Args:
            true_wind: True wind at the craft's position
            boat_velocity: Boat velocity (m/s, world space)
            boat_forward: Boat forward axis (world space)

        Returns:
            ApparentWind; a zero sentinel when the apparent wind is calm
        """
        velocity = as_vector(boat_velocity)
        forward = as_vector(boat_forward)

        apparent = true_wind.vector - velocity
        speed = float(np.linalg.norm(apparent))

        if speed < MIN_WIND_SPEED:
            logger.debug("Apparent wind calm, angle undefined")
            return ApparentWind(vector=np.zeros(3), speed=0.0, angle_deg=0.0)

        angle = wind_angle_from_bow(apparent, forward)
        return ApparentWind(vector=apparent, speed=speed, angle_deg=angle)

    def true_wind_angle(self, true_wind: WindSample,
                        boat_forward: Sequence[float]) -> float:
        """True wind angle from the bow, same convention as the apparent angle."""
        if true_wind.speed < MIN_WIND_SPEED:
            return 0.0
        return wind_angle_from_bow(true_wind.vector, as_vector(boat_forward))
