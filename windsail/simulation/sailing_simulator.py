"""
Sailing Simulator
=================

Per-tick pipeline from wind to sail forces:

    wind.advance(dt) -> wind.sample(position) -> apparent wind
    -> sail lift/drag -> drive/side decomposition -> SailingState

The host integrator owns the rigid body; it passes the board's
position, velocity and axes in every tick and applies the resulting
forces itself.
"""

from dataclasses import dataclass
from typing import Optional, Sequence
import logging

import numpy as np

from ..physics.apparent_wind import ApparentWind, ApparentWindResolver
from ..physics.force_decomposer import ForceDecomposer, SailingState
from ..physics.sail_aero import SailAerodynamicsModel
from ..physics.validation import check_lift_direction, diagnose
from ..physics.vectors import as_vector, direction_from_degrees, horizontal, right_of
from ..physics.wind_field import WindFieldGenerator, WindProvider, WindSample
from ..physics.wind_registry import AmbientWindRegistry
from .config import SimulationConfig

logger = logging.getLogger(__name__)


@dataclass
class BoatInput:
    """Board kinematics supplied by the host each tick."""
    position: np.ndarray
    velocity: np.ndarray              # m/s, world space
    forward: np.ndarray               # Bow axis
    right: Optional[np.ndarray] = None    # Starboard axis, defaults to up × forward
    sail_trim_angle: float = 0.0      # Degrees from centerline, signed like the AWA
    course_direction: Optional[np.ndarray] = None   # VMG reference, windward if None

    def __post_init__(self):
        self.position = as_vector(self.position)
        self.velocity = as_vector(self.velocity)
        self.forward = as_vector(self.forward)
        if np.linalg.norm(horizontal(self.forward)) < 1e-9:
            raise ValueError("Boat forward axis must have a horizontal component")
        if self.right is None:
            self.right = right_of(self.forward)
        else:
            self.right = as_vector(self.right)
        if self.course_direction is not None:
            self.course_direction = as_vector(self.course_direction)

    @classmethod
    def from_heading(cls, heading_deg: float, speed: float,
                     position: Sequence[float] = (0.0, 0.0, 0.0),
                     sail_trim_angle: float = 0.0,
                     course_direction: Optional[Sequence[float]] = None) -> 'BoatInput':
        """
        Board moving straight along a compass heading.

        Args:
            heading_deg: Heading (0 = +Z, 90 = +X)
            speed: Boat speed in m/s
            position: World position
            sail_trim_angle: Sail angle from the centerline
            course_direction: Optional VMG reference direction
        """
        forward = direction_from_degrees(heading_deg)
        return cls(
            position=position,
            velocity=forward * speed,
            forward=forward,
            sail_trim_angle=sail_trim_angle,
            course_direction=course_direction,
        )


class SailingSimulator:
    """
    Wind and sail force pipeline for one craft.

    When no provider is given the simulator builds a WindFieldGenerator
    from its config and advances it. An injected provider is shared and
    advanced by its owner, once per tick, so every craft sees the same
    wind phase.
    """

    def __init__(self, config: Optional[SimulationConfig] = None,
                 wind_provider: Optional[WindProvider] = None):
        """
        Initialize the simulator.

        Args:
            config: Simulation configuration
            wind_provider: Shared wind source (not advanced by this simulator)
        """
        self.config = config or SimulationConfig()

        if wind_provider is None:
            self.wind = WindFieldGenerator(self.config.wind, seed=self.config.seed)
            self._owns_wind = True
        else:
            self.wind = wind_provider
            self._owns_wind = False

        self.resolver = ApparentWindResolver()
        self.sail = SailAerodynamicsModel(self.config.sail)
        self.decomposer = ForceDecomposer(
            in_irons_angle=self.config.sail.in_irons_angle,
            stall_angle=self.config.sail.stall_angle,
        )

        self.time = 0.0
        self.last_state: Optional[SailingState] = None

    @classmethod
    def from_registry(cls, registry: AmbientWindRegistry,
                      config: Optional[SimulationConfig] = None) -> 'SailingSimulator':
        """Simulator using the registered ambient wind provider."""
        return cls(config, wind_provider=registry.require())

    @property
    def owns_wind(self) -> bool:
        return self._owns_wind

    def advance(self, dt: float):
        """
        Move simulated time forward by one tick.

        Args:
            dt: Time step in seconds
        """
        if dt < 0:
            raise ValueError(f"Time step must be non-negative, got {dt}")
        if self._owns_wind:
            self.wind.advance(dt)
        self.time += dt

    def true_wind(self, boat: BoatInput) -> WindSample:
        return self.wind.sample(boat.position)

    def apparent_wind(self, boat: BoatInput) -> ApparentWind:
        """Apparent wind felt by the board at its position."""
        return self.resolver.resolve(self.true_wind(boat), boat.velocity, boat.forward)

    def evaluate(self, boat: BoatInput) -> SailingState:
        """
        Compute the sailing state for the current wind phase.

        Args:
            boat: Board kinematics and sail trim

        Returns:
            SailingState for this tick

        Raises:
            ForceInvariantError: lift points backward while upwind or reaching
        """
        true_wind = self.true_wind(boat)
        apparent = self.resolver.resolve(true_wind, boat.velocity, boat.forward)
        twa = self.resolver.true_wind_angle(true_wind, boat.forward)

        forces = self.sail.compute_forces(
            apparent.vector, apparent.speed, apparent.angle_deg, boat.sail_trim_angle,
        )

        state = self.decomposer.assemble(
            true_wind=true_wind,
            true_wind_angle=twa,
            apparent=apparent,
            boat_velocity=boat.velocity,
            sail_trim_angle=boat.sail_trim_angle,
            forces=forces,
            boat_forward=boat.forward,
            boat_right=boat.right,
            course_direction=boat.course_direction,
            boat_position=boat.position,
        )

        if self.config.check_invariants:
            check_lift_direction(state, boat.forward)

        if logger.isEnabledFor(logging.DEBUG):
            for finding in diagnose(state, boat.forward, self.config.sail):
                logger.debug(f"t={self.time:.2f}s: {finding}")

        self.last_state = state
        return state

    def tick(self, boat: BoatInput, dt: float) -> SailingState:
        """Advance by ``dt`` then evaluate."""
        self.advance(dt)
        return self.evaluate(boat)
