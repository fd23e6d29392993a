"""
Sail Aerodynamics
=================

Lift and drag on the sail from the apparent wind and the sail trim.

Coefficient policy (calibrated against the windsurfing polar):
- Attached flow, |AoA| < 60°:  Cl ~1.2, Cd ~0.08 (efficient foil)
- Reaching, 60°-120°:          Cl ~1.0, Cd ~0.10 (more induced drag)
- Stalled, > 120°:             Cl ~0.5, Cd ~0.8  (separated, mostly drag)

Lift acts perpendicular to the apparent wind on the side chosen by the
sail side, so its forward component is L * sin|AWA| and never negative.
Drag acts along the apparent wind.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple
import logging

import numpy as np

from .constants import (
    AIR_DENSITY, SAIL_AREA, SAIL_BOOM_HEIGHT, SAIL_BOOM_LENGTH, SAIL_LUFF_LENGTH,
)
from .vectors import UP, as_vector, frozen, horizontal, normalize, wrap_angle

logger = logging.getLogger(__name__)

# Regime boundaries on |AoA| (degrees)
ATTACHED_LIMIT = 60.0
REACHING_LIMIT = 120.0

# Literal per-regime coefficients (Cl, Cd)
ATTACHED_COEFFICIENTS = (1.2, 0.08)
REACHING_COEFFICIENTS = (1.0, 0.10)
STALLED_COEFFICIENTS = (0.5, 0.8)

# Interpolated curve: plateaus at the literal values, linear blend
# across ±10° around each regime boundary
_CURVE_AOA = np.array([0.0, 50.0, 70.0, 110.0, 130.0, 180.0])
_CURVE_CL = np.array([1.2, 1.2, 1.0, 1.0, 0.5, 0.5])
_CURVE_CD = np.array([0.08, 0.08, 0.10, 0.10, 0.8, 0.8])

# Below this |AWA| the sail side is ambiguous and the tracked side is kept
SIDE_DEADBAND = 5.0


class FlowRegime(Enum):
    """Flow state over the sail."""
    NONE = "none"            # Becalmed or in irons, no usable force
    ATTACHED = "attached"
    REACHING = "reaching"
    STALLED = "stalled"


@dataclass
class SailConfig:
    """Sail configuration."""
    area: float = SAIL_AREA                 # m²
    air_density: float = AIR_DENSITY        # kg/m³
    interpolate: bool = True                # Blend coefficients across regime boundaries

    # Guards
    min_wind_speed: float = 0.5             # m/s apparent, below this the sail is becalmed
    in_irons_angle: float = 25.0            # |AWA| below this gives no usable force
    stall_angle: float = 25.0               # |AoA| above this flags a stalled sail

    # Trim range (sheeted in to fully eased)
    min_trim_angle: float = 12.0
    max_trim_angle: float = 85.0
    optimal_angle_of_attack: float = 17.0   # Best L/D

    # Rig geometry (board frame)
    luff_length: float = SAIL_LUFF_LENGTH   # m
    boom_length: float = SAIL_BOOM_LENGTH   # m
    boom_height: float = SAIL_BOOM_HEIGHT   # m above the mast foot
    mast_foot_height: float = 0.1           # m above the board reference
    mast_foot_forward: float = -0.1         # m, negative = aft of the reference

    @property
    def center_of_effort_height(self) -> float:
        """CE height above the board reference, ~40% up the sail above the boom."""
        return (self.mast_foot_height + self.boom_height
                + (self.luff_length - self.boom_height) * 0.4)


@dataclass(frozen=True)
class SailForces:
    """Aerodynamic output for one evaluation."""
    lift: np.ndarray
    drag: np.ndarray
    angle_of_attack_deg: float
    lift_coefficient: float
    drag_coefficient: float
    sail_side: int
    regime: FlowRegime
    center_of_effort: np.ndarray    # Board frame (starboard, up, forward), m

    def __post_init__(self):
        object.__setattr__(self, 'lift', frozen(self.lift))
        object.__setattr__(self, 'drag', frozen(self.drag))
        object.__setattr__(self, 'center_of_effort', frozen(self.center_of_effort))

    @property
    def total(self) -> np.ndarray:
        return self.lift + self.drag


def regime_for(abs_angle: float) -> FlowRegime:
    """Flow regime for an absolute angle of attack."""
    if abs_angle < ATTACHED_LIMIT:
        return FlowRegime.ATTACHED
    if abs_angle < REACHING_LIMIT:
        return FlowRegime.REACHING
    return FlowRegime.STALLED


class SailAerodynamicsModel:
    """
    Sail force model.

    Tracks which side the sail is on so the side stays defined when the
    board points head to wind.
    """

    def __init__(self, config: Optional[SailConfig] = None):
        self.config = config or SailConfig()
        self.sail_side = 1

    def coefficients(self, abs_angle_of_attack: float) -> Tuple[float, float]:
        """
        Lift and drag coefficients for an absolute angle of attack.

        Args:
            abs_angle_of_attack: |AoA| in degrees (0-180)

        Returns:
            (Cl, Cd)
        """
        a = min(180.0, abs(abs_angle_of_attack))
        if self.config.interpolate:
            cl = float(np.interp(a, _CURVE_AOA, _CURVE_CL))
            cd = float(np.interp(a, _CURVE_AOA, _CURVE_CD))
            return cl, cd

        regime = regime_for(a)
        if regime == FlowRegime.ATTACHED:
            return ATTACHED_COEFFICIENTS
        if regime == FlowRegime.REACHING:
            return REACHING_COEFFICIENTS
        return STALLED_COEFFICIENTS

    def side_for(self, apparent_angle_deg: float) -> int:
        """Sail side for an apparent wind angle, updating the tracked side."""
        if abs(apparent_angle_deg) >= SIDE_DEADBAND:
            self.sail_side = 1 if apparent_angle_deg > 0 else -1
        return self.sail_side

    def compute_forces(self, apparent_wind: Sequence[float],
                       apparent_speed: float,
                       apparent_angle_deg: float,
                       sail_trim_angle_deg: float) -> SailForces:
        """
        Compute lift and drag on the sail.

        Args:
            apparent_wind: Apparent wind vector (m/s, world space)
            apparent_speed: Apparent wind speed (m/s)
            apparent_angle_deg: Apparent wind angle from the bow (+ = starboard)
            sail_trim_angle_deg: Sail angle from the centerline, signed like the AWA

        Returns:
            SailForces with world-space lift and drag vectors
        """
        cfg = self.config
        side = self.side_for(apparent_angle_deg)
        center_of_effort = self.center_of_effort(sail_trim_angle_deg)

        if apparent_speed < cfg.min_wind_speed:
            logger.debug(f"Becalmed: AWS {apparent_speed:.2f} m/s")
            return self._no_force(side, center_of_effort)

        if abs(apparent_angle_deg) < cfg.in_irons_angle:
            logger.debug(f"In irons: AWA {apparent_angle_deg:.1f}°, force zeroed")
            return self._no_force(side, center_of_effort)

        angle_of_attack = wrap_angle(apparent_angle_deg - sail_trim_angle_deg)
        cl, cd = self.coefficients(abs(angle_of_attack))

        q = self.dynamic_pressure(apparent_speed)
        lift_mag = q * cfg.area * cl
        drag_mag = q * cfg.area * cd

        wind = as_vector(apparent_wind)
        flow_dir = normalize(horizontal(wind))
        lift_dir = side * normalize(np.cross(UP, flow_dir))
        drag_dir = normalize(wind)

        return SailForces(
            lift=lift_dir * lift_mag,
            drag=drag_dir * drag_mag,
            angle_of_attack_deg=angle_of_attack,
            lift_coefficient=cl,
            drag_coefficient=cd,
            sail_side=side,
            regime=regime_for(abs(angle_of_attack)),
            center_of_effort=center_of_effort,
        )

    def _no_force(self, side: int, center_of_effort: np.ndarray) -> SailForces:
        return SailForces(
            lift=np.zeros(3),
            drag=np.zeros(3),
            angle_of_attack_deg=0.0,
            lift_coefficient=0.0,
            drag_coefficient=0.0,
            sail_side=side,
            regime=FlowRegime.NONE,
            center_of_effort=center_of_effort,
        )

    def center_of_effort(self, sail_trim_angle_deg: float) -> np.ndarray:
        """
        Sail center of effort in the board frame.

        Starts at the mast foot, rises to the CE height, then moves half a
        boom length along the boom. Easing the sail swings the CE out to
        leeward; a trim signed like a starboard AWA puts it to port.

        Args:
            sail_trim_angle_deg: Sail angle from the centerline, signed like the AWA

        Returns:
            (starboard, up, forward) offset from the board reference in m
        """
        cfg = self.config
        rad = np.radians(sail_trim_angle_deg)
        reach = cfg.boom_length * 0.5
        return np.array([
            -np.sin(rad) * reach,
            cfg.center_of_effort_height,
            cfg.mast_foot_forward - np.cos(rad) * reach,
        ])

    def optimal_trim_angle(self, apparent_angle_deg: float) -> float:
        """
        Trim angle that puts the sail at its best L/D.

        Sail angle = |AWA| - optimal AoA, clamped to 5-85°, signed like
        the apparent wind angle.
        """
        side = self.side_for(apparent_angle_deg)
        trim = abs(apparent_angle_deg) - self.config.optimal_angle_of_attack
        trim = min(85.0, max(5.0, trim))
        return trim * side

    def trim_for_sheet_position(self, sheet_position: float) -> float:
        """Unsigned trim angle for a sheet position (0 = sheeted in, 1 = eased)."""
        position = min(1.0, max(0.0, sheet_position))
        return self.config.min_trim_angle + (
            self.config.max_trim_angle - self.config.min_trim_angle) * position

    def sheet_position_for_trim(self, trim_angle_deg: float) -> float:
        """Sheet position (0-1) that gives a trim angle."""
        span = self.config.max_trim_angle - self.config.min_trim_angle
        position = (abs(trim_angle_deg) - self.config.min_trim_angle) / span
        return min(1.0, max(0.0, position))

    def dynamic_pressure(self, speed: float) -> float:
        """q = 0.5 * rho * V^2 (Pa)."""
        return 0.5 * self.config.air_density * speed * speed

