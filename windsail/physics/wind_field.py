"""
Wind Field
==========

Wind providers: the interface every wind source implements, a constant
provider, and the noise-driven wind field generator with smooth
spatial and temporal gusts.

Wind vectors point in the direction the wind blows TOWARD; their
magnitude is the wind speed in m/s.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence
import logging

import numpy as np

from .constants import KNOTS_TO_MS, MS_TO_KNOTS
from .noise import PerlinNoise
from .vectors import as_vector, direction_from_degrees, frozen

logger = logging.getLogger(__name__)

# World-space scale for spatial noise (one noise cell ≈ 100 m)
SPATIAL_SCALE = 0.01

# Direction noise advances at half the gust rate
DIRECTION_PHASE_RATE = 0.5

MAX_SPEED_VARIATION = 0.5
MAX_DIRECTION_VARIATION = 30.0


@dataclass(frozen=True)
class WindSample:
    """Wind at one position and time."""
    direction: np.ndarray     # Unit vector, horizontal, blowing TOWARD
    speed: float              # m/s, >= 0

    def __post_init__(self):
        object.__setattr__(self, 'direction', frozen(self.direction))

    @property
    def vector(self) -> np.ndarray:
        """Wind velocity vector (direction × speed)."""
        return self.direction * self.speed

    @property
    def speed_knots(self) -> float:
        return self.speed * MS_TO_KNOTS

    @classmethod
    def from_vector(cls, vector: Sequence[float]) -> 'WindSample':
        """Build a sample from a wind vector. Calm air points along +Z."""
        v = as_vector(vector)
        speed = float(np.linalg.norm(v))
        if speed < 1e-12:
            return cls(direction=np.array([0.0, 0.0, 1.0]), speed=0.0)
        return cls(direction=v / speed, speed=speed)


@dataclass
class WindFieldConfig:
    """Configuration for the wind field generator."""
    base_speed: float = 8.0                    # m/s
    base_direction_degrees: float = 45.0       # 0 = +Z (north), 90 = +X (east)

    # Variation (gusts)
    enable_variation: bool = True
    speed_variation_fraction: float = 0.2      # ± fraction of base speed (0-0.5)
    direction_variation_degrees: float = 10.0  # ± degrees (0-30)
    gust_frequency: float = 0.1                # Phase advance per second (lower = smoother)

    def __post_init__(self):
        self.clamp()

    def clamp(self):
        """Clamp settings into their valid ranges."""
        if self.base_speed < 0:
            logger.warning(f"Negative base wind speed {self.base_speed} clamped to 0")
            self.base_speed = 0.0

        fraction = min(MAX_SPEED_VARIATION, max(0.0, self.speed_variation_fraction))
        if fraction != self.speed_variation_fraction:
            logger.warning(
                f"Speed variation {self.speed_variation_fraction} clamped to {fraction}"
            )
            self.speed_variation_fraction = fraction

        degrees = min(MAX_DIRECTION_VARIATION, max(0.0, self.direction_variation_degrees))
        if degrees != self.direction_variation_degrees:
            logger.warning(
                f"Direction variation {self.direction_variation_degrees}° clamped to {degrees}°"
            )
            self.direction_variation_degrees = degrees

    @property
    def base_speed_knots(self) -> float:
        return self.base_speed * MS_TO_KNOTS


@dataclass
class NoisePhase:
    """Noise offsets that advance with simulated time."""
    speed_phase: float = 0.0
    direction_phase: float = 0.0

    @classmethod
    def from_seed(cls, seed: int) -> 'NoisePhase':
        """Initial offsets drawn in [0, 1000) from an explicit seed."""
        rng = np.random.default_rng(seed)
        speed_phase, direction_phase = rng.uniform(0.0, 1000.0, size=2)
        return cls(float(speed_phase), float(direction_phase))

    def advanced(self, dt: float, gust_frequency: float) -> 'NoisePhase':
        """Phase after ``dt`` seconds at the given gust frequency."""
        return NoisePhase(
            speed_phase=self.speed_phase + dt * gust_frequency,
            direction_phase=self.direction_phase + dt * gust_frequency * DIRECTION_PHASE_RATE,
        )


class WindProvider(ABC):
    """
    Interface for wind sources.

    Implementations (constant, noise-driven, zoned) are interchangeable
    wherever a consumer needs the wind at a position.
    """

    @abstractmethod
    def wind_at_position(self, position: Sequence[float]) -> np.ndarray:
        """Wind vector at a world position (m/s, blowing TOWARD)."""

    @property
    @abstractmethod
    def wind_direction(self) -> np.ndarray:
        """Base wind direction (unit vector)."""

    @property
    @abstractmethod
    def wind_speed(self) -> float:
        """Base wind speed in m/s."""

    def sample(self, position: Sequence[float]) -> WindSample:
        """Wind at a world position as a WindSample."""
        return WindSample.from_vector(self.wind_at_position(position))

    def advance(self, dt: float):
        """Advance time-dependent state. Static providers ignore this."""


class ConstantWindProvider(WindProvider):
    """Uniform, steady wind."""

    def __init__(self, speed: float = 8.0, direction_degrees: float = 45.0):
        self._speed = max(0.0, speed)
        self._direction = direction_from_degrees(direction_degrees)

    @property
    def wind_direction(self) -> np.ndarray:
        return self._direction.copy()

    @property
    def wind_speed(self) -> float:
        return self._speed

    def wind_at_position(self, position: Sequence[float]) -> np.ndarray:
        return self._direction * self._speed

    def sample(self, position: Sequence[float]) -> WindSample:
        return WindSample(direction=self._direction, speed=self._speed)


class WindFieldGenerator(WindProvider):
    """
    Noise-driven wind field.

    Produces wind that varies smoothly over position and time:
    - Positional noise gives spatial variation across the water
    - Temporal noise gives gusts and lulls
    - A separate noise channel shifts the direction

    Time only moves through ``advance(dt)``; sampling is a pure function
    of position and the current noise phase.
    """

    def __init__(self, config: Optional[WindFieldConfig] = None, seed: int = 0):
        """
        Initialize the wind field.

        Args:
            config: Wind configuration
            seed: Seed for the noise table and initial phase offsets
        """
        self.config = config or WindFieldConfig()
        self.seed = seed
        self._noise = PerlinNoise(seed)
        self._initial_phase = NoisePhase.from_seed(seed)
        self.phase = NoisePhase(self._initial_phase.speed_phase,
                                self._initial_phase.direction_phase)
        self.elapsed = 0.0

    @property
    def wind_direction(self) -> np.ndarray:
        """Base direction the wind blows toward, read from the config."""
        return direction_from_degrees(self.config.base_direction_degrees)

    @property
    def wind_speed(self) -> float:
        return self.config.base_speed

    @property
    def wind_speed_knots(self) -> float:
        return self.config.base_speed * MS_TO_KNOTS

    def advance(self, dt: float):
        """
        Advance the noise phase by one tick.

        Args:
            dt: Elapsed simulated time in seconds
        """
        if dt < 0:
            raise ValueError(f"Time step must be non-negative, got {dt}")
        self.phase = self.phase.advanced(dt, self.config.gust_frequency)
        self.elapsed += dt

    def phase_at(self, simulated_time: float) -> NoisePhase:
        """Noise phase ``simulated_time`` seconds after construction."""
        return self._initial_phase.advanced(simulated_time, self.config.gust_frequency)

    def sample(self, position: Sequence[float],
               simulated_time: Optional[float] = None) -> WindSample:
        """
        Wind at a world position.

        Args:
            position: World position (x, y, z)
            simulated_time: Seconds since construction; defaults to the
                current phase reached through ``advance``

        Returns:
            WindSample with direction and speed
        """
        if not self.config.enable_variation:
            return WindSample(direction=self.wind_direction, speed=self.config.base_speed)

        pos = as_vector(position)
        phase = self.phase if simulated_time is None else self.phase_at(simulated_time)
        cfg = self.config

        # Spatial noise drifts with the speed phase so gusts travel
        pos_noise = self._noise.noise2(
            pos[0] * SPATIAL_SCALE + phase.speed_phase,
            pos[2] * SPATIAL_SCALE,
        )
        time_noise = self._noise.noise1(phase.speed_phase)
        combined = (pos_noise + time_noise) * 0.5

        speed_factor = 1.0 + (combined - 0.5) * 2.0 * cfg.speed_variation_fraction
        speed = cfg.base_speed * speed_factor

        dir_noise = self._noise.noise2(phase.direction_phase, pos[0] * SPATIAL_SCALE)
        dir_offset = (dir_noise - 0.5) * 2.0 * cfg.direction_variation_degrees
        direction = direction_from_degrees(cfg.base_direction_degrees + dir_offset)

        return WindSample(direction=direction, speed=speed)

    def wind_at_position(self, position: Sequence[float]) -> np.ndarray:
        return self.sample(position).vector

    def current_wind_speed(self) -> float:
        """Wind speed sampled at the origin."""
        return float(np.linalg.norm(self.wind_at_position((0.0, 0.0, 0.0))))

    def set_wind(self, speed: float, direction_degrees: float):
        """
        Set base wind speed (m/s) and direction (degrees).

        Takes effect on the next sample.
        """
        self.config.base_speed = speed
        self.config.base_direction_degrees = direction_degrees
        self.config.clamp()
        logger.debug(f"Wind set to {self.config.base_speed:.1f} m/s toward {direction_degrees:.0f}°")

    def set_wind_knots(self, knots: float):
        """Set base wind speed in knots."""
        self.set_wind(knots * KNOTS_TO_MS, self.config.base_direction_degrees)

    def set_variation(self, enabled: bool,
                      speed_fraction: Optional[float] = None,
                      direction_degrees: Optional[float] = None):
        """Enable or disable gusts and adjust their bounds."""
        self.config.enable_variation = enabled
        if speed_fraction is not None:
            self.config.speed_variation_fraction = speed_fraction
        if direction_degrees is not None:
            self.config.direction_variation_degrees = direction_degrees
        self.config.clamp()

