"""
Shared test fixtures for sail physics unit tests.
"""

import pytest

from windsail.physics.apparent_wind import ApparentWindResolver
from windsail.physics.force_decomposer import ForceDecomposer
from windsail.physics.sail_aero import SailAerodynamicsModel
from windsail.physics.wind_field import WindFieldConfig, WindFieldGenerator
from windsail.simulation.config import SimulationConfig
from windsail.simulation.sailing_simulator import BoatInput, SailingSimulator


@pytest.fixture
def steady_wind_config():
    """10 m/s from the north, no gusts."""
    return WindFieldConfig(
        base_speed=10.0,
        base_direction_degrees=180.0,
        enable_variation=False,
    )


@pytest.fixture
def steady_generator(steady_wind_config):
    """Wind field without variation."""
    return WindFieldGenerator(steady_wind_config, seed=1)


@pytest.fixture
def gusty_generator():
    """Wind field with default gusts and a fixed seed."""
    return WindFieldGenerator(WindFieldConfig(), seed=42)


@pytest.fixture
def resolver():
    return ApparentWindResolver()


@pytest.fixture
def sail_model():
    """Default sail model (interpolated coefficients)."""
    return SailAerodynamicsModel()


@pytest.fixture
def decomposer():
    return ForceDecomposer()


@pytest.fixture
def simulator(steady_wind_config):
    """Simulator in steady 10 m/s northerly wind."""
    return SailingSimulator(SimulationConfig(wind=steady_wind_config))


@pytest.fixture
def close_hauled_boat():
    """Stationary board, starboard tack, AWA +45°, trimmed to AoA 17°."""
    return BoatInput.from_heading(315.0, 0.0, sail_trim_angle=28.0)
