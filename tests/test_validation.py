"""
Unit tests for physics validation reference values and diagnostics.
"""

import logging
import math
from dataclasses import replace

import pytest

from windsail.physics.validation import (
    ForceInvariantError, HullConfig, check_lift_direction, diagnose,
    expected_boat_speed, expected_coefficients, expected_forces,
)
from windsail.physics.sail_aero import SailConfig
from windsail.simulation.config import SimulationConfig
from windsail.simulation.sailing_simulator import BoatInput, SailingSimulator


class TestExpectedValues:
    """Tests for reference coefficients and forces."""

    def test_expected_coefficients(self):
        """Reference coefficients by |AWA|."""
        assert expected_coefficients(45.0) == (1.2, 0.08)
        assert expected_coefficients(90.0) == (1.0, 0.1)
        assert expected_coefficients(150.0) == (0.5, 0.8)

    def test_expected_forces_upwind(self):
        """AWS 10 m/s upwind gives the reference lift and drag."""
        expected = expected_forces(10.0, 45.0)
        assert expected.lift == pytest.approx(477.75)
        assert expected.drag == pytest.approx(31.85)
        rad = math.radians(45.0)
        assert expected.drive == pytest.approx(477.75 * math.sin(rad) - 31.85 * math.cos(rad))

    def test_expected_forces_sign_free(self):
        """Port and starboard give the same reference values."""
        assert expected_forces(8.0, -70.0) == expected_forces(8.0, 70.0)

    def test_expected_boat_speed(self):
        """Equilibrium speed balances drive against hull drag."""
        hull = HullConfig()
        drive = 0.5 * hull.water_density * hull.drag_coefficient * hull.area
        assert expected_boat_speed(drive, hull) == pytest.approx(1.0)

    def test_expected_boat_speed_floor(self):
        """Negative drive is floored at 1 N."""
        assert expected_boat_speed(-50.0) == expected_boat_speed(1.0)


class TestLiftInvariant:
    """Tests for the lift-direction check."""

    def test_healthy_state_passes(self, simulator, close_hauled_boat):
        """Correct lift does not raise."""
        state = simulator.evaluate(close_hauled_boat)
        check_lift_direction(state, close_hauled_boat.forward)

    def test_backward_lift_raises(self, simulator, close_hauled_boat):
        """Lift pointing backward while upwind raises."""
        state = simulator.evaluate(close_hauled_boat)
        broken = replace(state, lift=-state.lift)
        with pytest.raises(ForceInvariantError):
            check_lift_direction(broken, close_hauled_boat.forward)

    def test_downwind_not_checked(self, simulator):
        """|AWA| >= 120° is outside the invariant."""
        boat = BoatInput.from_heading(180.0, 0.0, sail_trim_angle=85.0)
        state = simulator.evaluate(boat)
        assert abs(state.apparent_wind_angle) >= 120.0
        check_lift_direction(replace(state, lift=-state.lift), boat.forward)

    def test_error_is_runtime_error(self):
        """ForceInvariantError is a RuntimeError."""
        assert issubclass(ForceInvariantError, RuntimeError)


class TestDiagnose:
    """Tests for diagnostic findings."""

    def test_healthy_state(self, simulator, close_hauled_boat):
        """Properly trimmed sail gives no findings."""
        state = simulator.evaluate(close_hauled_boat)
        assert diagnose(state, close_hauled_boat.forward) == []

    def test_in_irons(self, simulator):
        """Head to wind is reported as in irons."""
        boat = BoatInput.from_heading(10.0, 0.0)
        findings = diagnose(simulator.evaluate(boat), boat.forward)
        assert len(findings) == 1
        assert "In irons" in findings[0]

    def test_stalled_sail(self, simulator):
        """Over-sheeted sail on a reach is reported as stalled."""
        boat = BoatInput.from_heading(300.0, 0.0, sail_trim_angle=20.0)
        findings = diagnose(simulator.evaluate(boat), boat.forward)
        assert any("stalled" in f for f in findings)

    def test_backward_lift(self, simulator, close_hauled_boat):
        """Backward lift is reported."""
        state = simulator.evaluate(close_hauled_boat)
        broken = replace(state, lift=-state.lift)
        findings = diagnose(broken, close_hauled_boat.forward)
        assert "Lift is pushing backward" in findings

    def test_uses_given_sail_area(self, steady_wind_config, close_hauled_boat):
        """Expected lift should scale with the sail actually simulated."""
        small_sail = SailConfig(area=1.0)
        sim = SailingSimulator(SimulationConfig(wind=steady_wind_config, sail=small_sail))
        state = sim.evaluate(close_hauled_boat)
        assert any("Lift much lower" in f for f in diagnose(state, close_hauled_boat.forward))
        assert diagnose(state, close_hauled_boat.forward, small_sail) == []

    def test_uses_given_stall_angle(self, simulator, close_hauled_boat):
        """Stall threshold should come from the sail config."""
        state = simulator.evaluate(close_hauled_boat)
        findings = diagnose(state, close_hauled_boat.forward, SailConfig(stall_angle=15.0))
        assert any("stalled (AoA > 15°)" in f for f in findings)

    def test_simulator_diagnoses_with_its_sail(self, steady_wind_config,
                                               close_hauled_boat, caplog):
        """Debug findings logged by the simulator should use its own sail."""
        sim = SailingSimulator(
            SimulationConfig(wind=steady_wind_config, sail=SailConfig(area=1.0))
        )
        with caplog.at_level(logging.DEBUG, logger="windsail.simulation.sailing_simulator"):
            sim.evaluate(close_hauled_boat)
        assert "Lift much lower" not in caplog.text
