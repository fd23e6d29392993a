"""
Physics Validation
==================

Reference values for checking the sail model against real windsurfing
behaviour, and the lift-direction invariant.

Expected coefficients for a properly trimmed sail (by |AWA|):
- Upwind (< 60°):      Cl ~1.2, Cd ~0.08, L/D ~10-15
- Reaching (60-120°):  Cl ~1.0, Cd ~0.10
- Downwind (> 120°):   stalled, Cl ~0.5, Cd ~0.8

Expected polar at 10 m/s wind: close-hauled 8-10 kn, beam reach
12-15 kn, broad reach 10-12 kn, running 8-10 kn.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import logging

import numpy as np

from .constants import AIR_DENSITY, SAIL_AREA, WATER_DENSITY
from .force_decomposer import SailingState
from .sail_aero import SailConfig
from .vectors import as_vector

logger = logging.getLogger(__name__)

# Lift must not point backward below this |AWA|
LIFT_INVARIANT_MAX_AWA = 120.0


class ForceInvariantError(RuntimeError):
    """Sail force output breaks a physical invariant (sign error in the model)."""


@dataclass
class HullConfig:
    """Simplified hull resistance for the equilibrium speed estimate."""
    drag_coefficient: float = 0.05
    area: float = 0.3                    # m² wetted reference area
    water_density: float = WATER_DENSITY


@dataclass
class ExpectedForces:
    """Reference sail output for an apparent wind."""
    lift: float          # N
    drag: float          # N
    drive: float         # N
    boat_speed: float    # m/s at equilibrium


def expected_coefficients(abs_awa: float) -> Tuple[float, float]:
    """Reference (Cl, Cd) for a properly trimmed sail at |AWA|."""
    if abs_awa < 60.0:
        return 1.2, 0.08
    if abs_awa < 120.0:
        return 1.0, 0.1
    return 0.5, 0.8


def expected_boat_speed(drive_force: float, hull: Optional[HullConfig] = None) -> float:
    """
    Equilibrium speed where drive balances quadratic hull drag.

    Drive = 0.5 * rho_water * V^2 * Cd * A
    => V = sqrt(2 * Drive / (rho_water * Cd * A))
    """
    hull = hull or HullConfig()
    return math.sqrt(2.0 * max(drive_force, 1.0) /
                     (hull.water_density * hull.drag_coefficient * hull.area))


def expected_forces(apparent_speed: float, apparent_angle_deg: float,
                    sail_area: float = SAIL_AREA,
                    air_density: float = AIR_DENSITY,
                    hull: Optional[HullConfig] = None) -> ExpectedForces:
    """
    Reference lift, drag, drive and speed for an apparent wind.

    Drive: F = L * sin(AWA) - D * cos(AWA)
    """
    abs_awa = abs(apparent_angle_deg)
    cl, cd = expected_coefficients(abs_awa)
    q = 0.5 * air_density * apparent_speed * apparent_speed
    lift = q * sail_area * cl
    drag = q * sail_area * cd

    awa_rad = math.radians(abs_awa)
    drive = lift * math.sin(awa_rad) - drag * math.cos(awa_rad)
    return ExpectedForces(
        lift=lift,
        drag=drag,
        drive=drive,
        boat_speed=expected_boat_speed(drive, hull),
    )


def check_lift_direction(state: SailingState, boat_forward: Sequence[float],
                         tolerance: float = 1e-6):
    """
    Raise if lift points backward while sailing upwind or reaching.

    Raises:
        ForceInvariantError: lift has a negative forward component with |AWA| < 120°
    """
    if abs(state.apparent_wind_angle) >= LIFT_INVARIANT_MAX_AWA:
        return
    forward = as_vector(boat_forward)
    lift_forward = float(np.dot(state.lift, forward))
    if lift_forward < -tolerance:
        raise ForceInvariantError(
            f"Lift points backward ({lift_forward:.1f} N along bow) "
            f"at AWA {state.apparent_wind_angle:.1f}°"
        )


def diagnose(state: SailingState, boat_forward: Sequence[float],
             sail_config: Optional[SailConfig] = None) -> List[str]:
    """
    Compare a state against reference behaviour.

    Args:
        state: Sailing state to check
        boat_forward: Board forward axis
        sail_config: Sail the state was computed with (default sail if None)

    Returns:
        Findings, empty when the physics looks reasonable
    """
    sail = sail_config or SailConfig()
    findings = []
    abs_awa = abs(state.apparent_wind_angle)
    forward = as_vector(boat_forward)

    if abs_awa < sail.in_irons_angle and state.apparent_wind_speed >= sail.min_wind_speed:
        findings.append(f"In irons: AWA < {sail.in_irons_angle:.0f}°, sail force zeroed")
        return findings

    if np.linalg.norm(state.sail_force) < 10.0 and state.apparent_wind_speed > 3.0:
        findings.append("Very low sail force")

    if state.drive_force < 0 and abs_awa < LIFT_INVARIANT_MAX_AWA:
        findings.append("Negative drive force when sailing upwind or reaching")

    expected_lift = 0.5 * sail.air_density * state.apparent_wind_speed ** 2 * sail.area * 1.0
    if np.linalg.norm(state.lift) < expected_lift * 0.3:
        findings.append(
            f"Lift much lower than expected: "
            f"~{expected_lift:.0f} N expected, got {np.linalg.norm(state.lift):.0f} N"
        )

    if abs(state.angle_of_attack) > sail.stall_angle and abs_awa < 90.0:
        findings.append(
            f"Sail is stalled (AoA > {sail.stall_angle:.0f}°), sheet in or point higher"
        )

    if float(np.dot(state.lift, forward)) < -50.0 and abs_awa < 90.0:
        findings.append("Lift is pushing backward")

    return findings
