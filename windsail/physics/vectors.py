"""
Vector Helpers
==============

Small numpy helpers for the horizontal-plane geometry used by the
wind and sail models.

World frame: x = east, y = up, z = north. Compass-style angles are
measured clockwise seen from above, 0° = +Z, 90° = +X.
"""

import math
from typing import Sequence

import numpy as np

UP = np.array([0.0, 1.0, 0.0])
ZERO = np.zeros(3)


def as_vector(v: Sequence[float]) -> np.ndarray:
    """Return a float64 copy of a 3-component vector."""
    arr = np.array(v, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {arr.shape}")
    return arr


def horizontal(v: np.ndarray) -> np.ndarray:
    """Vector with the vertical component removed."""
    return np.array([v[0], 0.0, v[2]])


def normalize(v: np.ndarray) -> np.ndarray:
    """Unit vector, or zero vector for zero-length input."""
    norm = np.linalg.norm(v)
    if norm < 1e-12:
        return np.zeros(3)
    return v / norm


def wrap_angle(angle: float) -> float:
    """Wrap an angle to (-180, 180] degrees."""
    return -((180.0 - angle) % 360.0 - 180.0)


def direction_from_degrees(angle: float) -> np.ndarray:
    """Unit horizontal vector for a compass angle (0° = +Z, 90° = +X)."""
    rad = math.radians(angle)
    return normalize(np.array([math.sin(rad), 0.0, math.cos(rad)]))


def degrees_from_direction(v: np.ndarray) -> float:
    """Compass angle of the horizontal part of a vector, in (-180, 180]."""
    return wrap_angle(math.degrees(math.atan2(v[0], v[2])))


def signed_angle(from_vec: np.ndarray, to_vec: np.ndarray) -> float:
    """
    Signed horizontal angle from one vector to another, in (-180, 180].

    Positive when ``to_vec`` lies clockwise (to starboard) of ``from_vec``.
    """
    return wrap_angle(degrees_from_direction(to_vec) - degrees_from_direction(from_vec))


def right_of(forward: np.ndarray) -> np.ndarray:
    """Starboard axis for a forward axis (up × forward)."""
    return normalize(horizontal(np.cross(UP, forward)))


def frozen(v: np.ndarray) -> np.ndarray:
    """Read-only float copy of a vector."""
    arr = np.array(v, dtype=float)
    arr.setflags(write=False)
    return arr
