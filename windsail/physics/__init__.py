"""
Physics Module
==============

Wind field and sail aerodynamics for a windsurfing craft.
Provides the wind providers, apparent wind resolution, the sail
force model, and the drive/side force decomposition.
"""

from .wind_field import (
    WindProvider, WindFieldGenerator, WindFieldConfig, WindSample,
    ConstantWindProvider, NoisePhase,
)
from .wind_zones import WindZone, ZonedWindProvider, ShearedWindProvider
from .wind_registry import AmbientWindRegistry
from .apparent_wind import ApparentWind, ApparentWindResolver
from .sail_aero import SailAerodynamicsModel, SailConfig, SailForces, FlowRegime
from .force_decomposer import ForceDecomposer, ForceComponents, SailingState
from .validation import (
    ForceInvariantError, HullConfig, ExpectedForces,
    expected_coefficients, expected_forces, expected_boat_speed,
    check_lift_direction, diagnose,
)

__all__ = [
    'WindProvider', 'WindFieldGenerator', 'WindFieldConfig', 'WindSample',
    'ConstantWindProvider', 'NoisePhase',
    'WindZone', 'ZonedWindProvider', 'ShearedWindProvider',
    'AmbientWindRegistry',
    'ApparentWind', 'ApparentWindResolver',
    'SailAerodynamicsModel', 'SailConfig', 'SailForces', 'FlowRegime',
    'ForceDecomposer', 'ForceComponents', 'SailingState',
    'ForceInvariantError', 'HullConfig', 'ExpectedForces',
    'expected_coefficients', 'expected_forces', 'expected_boat_speed',
    'check_lift_direction', 'diagnose',
]
