"""
Force Decomposition
===================

Projects sail lift and drag onto the board axes and assembles the
per-tick SailingState snapshot.

This is the only stage that works in the board frame; everything
upstream stays in world space.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence
import logging

import numpy as np

from .apparent_wind import ApparentWind
from .sail_aero import FlowRegime, SailForces
from .vectors import UP, as_vector, frozen, normalize
from .wind_field import WindSample

logger = logging.getLogger(__name__)

# VMG is undefined in lighter true wind
MIN_VMG_WIND_SPEED = 0.5

# Board speed below which a head-to-wind board counts as stuck in irons
IN_IRONS_MAX_BOAT_SPEED = 1.0

_VECTOR_FIELDS = (
    'true_wind', 'apparent_wind', 'boat_velocity', 'lift', 'drag', 'sail_force',
    'center_of_effort',
)


@dataclass(frozen=True)
class ForceComponents:
    """Sail force split along the board axes."""
    drive_force: float             # N, along the bow
    side_force: float              # N, toward starboard
    total_sail_force: np.ndarray   # N, world space

    def __post_init__(self):
        object.__setattr__(self, 'total_sail_force', frozen(self.total_sail_force))


@dataclass(frozen=True)
class SailingState:
    """
    Snapshot of the sailing craft for one tick.

    Created fresh every tick and never mutated; vectors are read-only.
    """
    # Wind
    true_wind: np.ndarray
    true_wind_speed: float
    true_wind_angle: float          # degrees from bow, + = starboard
    apparent_wind: np.ndarray
    apparent_wind_speed: float
    apparent_wind_angle: float      # degrees from bow, + = starboard

    # Board
    boat_velocity: np.ndarray
    boat_speed: float

    # Sail
    sail_angle: float               # trim, degrees from centerline
    sail_side: int                  # +1 starboard, -1 port
    angle_of_attack: float
    lift_coefficient: float
    drag_coefficient: float
    regime: FlowRegime

    # Forces
    lift: np.ndarray
    drag: np.ndarray
    sail_force: np.ndarray
    drive_force: float
    side_force: float
    center_of_effort: np.ndarray    # World position where sail force acts
    center_of_effort_height: float  # m above the board reference
    heeling_moment: float           # Nm, side force × CE height

    # Derived
    vmg: float
    is_in_irons: bool
    is_sail_stalled: bool

    def __post_init__(self):
        for name in _VECTOR_FIELDS:
            object.__setattr__(self, name, frozen(getattr(self, name)))

    @property
    def lift_drag_ratio(self) -> float:
        drag = float(np.linalg.norm(self.drag))
        if drag < 0.1:
            return 0.0
        return float(np.linalg.norm(self.lift)) / drag

    def to_dict(self) -> Dict[str, Any]:
        """Plain-Python view for JSON output."""
        data = {}
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if isinstance(value, np.ndarray):
                value = [float(x) for x in value]
            elif isinstance(value, FlowRegime):
                value = value.value
            elif isinstance(value, (bool, np.bool_)):
                value = bool(value)
            elif isinstance(value, (float, np.floating)):
                value = float(value)
            data[name] = value
        data['lift_drag_ratio'] = self.lift_drag_ratio
        return data


class ForceDecomposer:
    """Splits sail force into drive and side force and builds the state."""

    def __init__(self, in_irons_angle: float = 25.0, stall_angle: float = 25.0):
        self.in_irons_angle = in_irons_angle
        self.stall_angle = stall_angle

    def decompose(self, lift: Sequence[float], drag: Sequence[float],
                  boat_forward: Sequence[float],
                  boat_right: Sequence[float]) -> ForceComponents:
        """
        Project lift + drag onto the board axes.

        Args:
            lift: Lift vector (N, world space)
            drag: Drag vector (N, world space)
            boat_forward: Board forward axis
            boat_right: Board starboard axis

        Returns:
            ForceComponents with drive, side, and total force
        """
        total = as_vector(lift) + as_vector(drag)
        drive = float(np.dot(total, as_vector(boat_forward)))
        side = float(np.dot(total, as_vector(boat_right)))
        return ForceComponents(drive_force=drive, side_force=side, total_sail_force=total)

    def velocity_made_good(self, boat_velocity: np.ndarray, true_wind: WindSample,
                           course_direction: Optional[Sequence[float]] = None) -> float:
        """
        Velocity made good.

        Toward the wind by default, or along ``course_direction`` when
        a course is given.
        """
        if course_direction is not None:
            course = normalize(as_vector(course_direction))
            return float(np.dot(boat_velocity, course))
        if true_wind.speed <= MIN_VMG_WIND_SPEED:
            return 0.0
        windward = -normalize(true_wind.vector)
        return float(np.dot(boat_velocity, windward))

    def center_of_effort_world(self, local_offset: Sequence[float],
                               boat_forward: Sequence[float],
                               boat_right: Sequence[float],
                               boat_position: Optional[Sequence[float]] = None) -> np.ndarray:
        """Board-frame CE offset (starboard, up, forward) moved into world space."""
        offset = as_vector(local_offset)
        origin = np.zeros(3) if boat_position is None else as_vector(boat_position)
        return (origin
                + as_vector(boat_right) * offset[0]
                + UP * offset[1]
                + as_vector(boat_forward) * offset[2])

    def assemble(self, true_wind: WindSample,
                 true_wind_angle: float,
                 apparent: ApparentWind,
                 boat_velocity: Sequence[float],
                 sail_trim_angle: float,
                 forces: SailForces,
                 boat_forward: Sequence[float],
                 boat_right: Sequence[float],
                 course_direction: Optional[Sequence[float]] = None,
                 boat_position: Optional[Sequence[float]] = None) -> SailingState:
        """
        Build the SailingState for this tick.

        The center of effort is placed relative to ``boat_position``
        (world origin when omitted).
        """
        velocity = as_vector(boat_velocity)
        boat_speed = float(np.linalg.norm(velocity))
        components = self.decompose(forces.lift, forces.drag, boat_forward, boat_right)
        ce_height = float(forces.center_of_effort[1])

        return SailingState(
            true_wind=true_wind.vector,
            true_wind_speed=true_wind.speed,
            true_wind_angle=true_wind_angle,
            apparent_wind=apparent.vector,
            apparent_wind_speed=apparent.speed,
            apparent_wind_angle=apparent.angle_deg,
            boat_velocity=velocity,
            boat_speed=boat_speed,
            sail_angle=sail_trim_angle,
            sail_side=forces.sail_side,
            angle_of_attack=forces.angle_of_attack_deg,
            lift_coefficient=forces.lift_coefficient,
            drag_coefficient=forces.drag_coefficient,
            regime=forces.regime,
            lift=forces.lift,
            drag=forces.drag,
            sail_force=components.total_sail_force,
            drive_force=components.drive_force,
            side_force=components.side_force,
            center_of_effort=self.center_of_effort_world(
                forces.center_of_effort, boat_forward, boat_right, boat_position),
            center_of_effort_height=ce_height,
            heeling_moment=components.side_force * ce_height,
            vmg=self.velocity_made_good(velocity, true_wind, course_direction),
            is_in_irons=(abs(apparent.angle_deg) < self.in_irons_angle
                         and boat_speed < IN_IRONS_MAX_BOAT_SPEED),
            is_sail_stalled=abs(forces.angle_of_attack_deg) > self.stall_angle,
        )
