"""
Unit tests for the coherent noise source.
"""

import pytest
import numpy as np

from windsail.physics.noise import PerlinNoise


class TestPerlinNoise:
    """Tests for seeded gradient noise."""

    def test_values_in_unit_range(self):
        """Noise values should stay within [0, 1]."""
        noise = PerlinNoise(seed=5)
        for x in np.linspace(-20.0, 20.0, 41):
            for y in np.linspace(-20.0, 20.0, 41):
                value = noise.noise2(x + 0.37, y + 0.61)
                assert 0.0 <= value <= 1.0

    def test_lattice_points_are_neutral(self):
        """Gradient noise is zero on integer lattice points (0.5 mapped)."""
        noise = PerlinNoise(seed=9)
        for x in range(-3, 4):
            for y in range(-3, 4):
                assert noise.noise2(float(x), float(y)) == pytest.approx(0.5)

    def test_same_seed_is_deterministic(self):
        """Same seed should produce identical fields."""
        a = PerlinNoise(seed=11)
        b = PerlinNoise(seed=11)
        for x in np.linspace(0.0, 10.0, 23):
            assert a.noise2(x, x * 0.3 + 0.1) == b.noise2(x, x * 0.3 + 0.1)

    def test_different_seeds_differ(self):
        """Different seeds should produce different fields."""
        a = PerlinNoise(seed=1)
        b = PerlinNoise(seed=2)
        points = [(x + 0.5, 0.25) for x in range(20)]
        assert any(a.noise2(*p) != b.noise2(*p) for p in points)

    def test_noise1_neutral_on_integers(self):
        """1D noise should pass through 0.5 on integer inputs."""
        noise = PerlinNoise(seed=3)
        for x in range(-5, 6):
            assert noise.noise1(float(x)) == pytest.approx(0.5)

    def test_noise1_has_no_flat_cells(self):
        """Every unit cell of the 1D noise should move off the neutral value."""
        noise = PerlinNoise(seed=3)
        for i in range(256):
            assert noise.noise1(i + 0.5) != pytest.approx(0.5, abs=1e-9)

    def test_noise1_in_unit_range_and_smooth(self):
        """1D noise should stay in [0, 1] and change gradually."""
        noise = PerlinNoise(seed=8)
        xs = np.arange(0.0, 64.0, 0.01)
        values = np.array([noise.noise1(x) for x in xs])
        assert values.min() >= 0.0
        assert values.max() <= 1.0
        assert np.max(np.abs(np.diff(values))) < 0.05

    def test_smooth_over_small_steps(self):
        """Neighbouring samples should differ only slightly."""
        noise = PerlinNoise(seed=4)
        xs = np.arange(0.0, 10.0, 0.01)
        values = np.array([noise.noise2(x, 0.3) for x in xs])
        assert np.max(np.abs(np.diff(values))) < 0.05

    def test_field_is_not_flat(self):
        """Noise should actually vary away from the lattice."""
        noise = PerlinNoise(seed=6)
        values = [noise.noise2(x * 0.37, x * 0.21 + 0.5) for x in range(200)]
        assert np.std(values) > 0.01
