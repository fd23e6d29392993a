"""
Coherent Noise
==============

Seeded gradient (Perlin) noise used for smooth wind variation.

Values are mapped to [0, 1] with 0.5 as the neutral point, so callers
can treat ``noise - 0.5`` as a signed deviation.
"""

import math

import numpy as np

# Gradient directions for the 2D improved-noise hash
_GRADIENTS = (
    (1.0, 1.0), (-1.0, 1.0), (1.0, -1.0), (-1.0, -1.0),
    (1.0, 0.0), (-1.0, 0.0), (0.0, 1.0), (0.0, -1.0),
)


def _fade(t: float) -> float:
    """Quintic smoothstep 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


class PerlinNoise:
    """
    1D and 2D gradient noise with a seeded permutation table.

    The same seed always yields the same field, which keeps wind
    sampling reproducible for a given phase history.
    """

    def __init__(self, seed: int = 0):
        self.seed = seed
        rng = np.random.default_rng(seed)
        perm = rng.permutation(256)
        self._perm = [int(p) for p in np.concatenate([perm, perm])]

    def _grad(self, h: int, x: float, y: float) -> float:
        gx, gy = _GRADIENTS[h & 7]
        return gx * x + gy * y

    def signed(self, x: float, y: float) -> float:
        """Raw noise value in roughly [-1, 1]; zero on lattice points."""
        xi = math.floor(x)
        yi = math.floor(y)
        xf = x - xi
        yf = y - yi
        X = int(xi) & 255
        Y = int(yi) & 255

        u = _fade(xf)
        v = _fade(yf)

        p = self._perm
        aa = p[p[X] + Y]
        ab = p[p[X] + Y + 1]
        ba = p[p[X + 1] + Y]
        bb = p[p[X + 1] + Y + 1]

        x1 = _lerp(self._grad(aa, xf, yf), self._grad(ba, xf - 1.0, yf), u)
        x2 = _lerp(self._grad(ab, xf, yf - 1.0), self._grad(bb, xf - 1.0, yf - 1.0), u)
        return _lerp(x1, x2, v)

    def noise2(self, x: float, y: float) -> float:
        """Noise at (x, y) mapped to [0, 1]."""
        value = 0.5 * (self.signed(x, y) + 1.0)
        return min(1.0, max(0.0, value))

    def _gradient1(self, i: int) -> float:
        """Slope at lattice point i, in [-1, 1] and never zero."""
        return self._perm[i & 255] / 127.5 - 1.0

    def signed1(self, x: float) -> float:
        """Raw 1D noise value in [-1, 1]; zero on integer points."""
        xi = math.floor(x)
        xf = x - xi
        g0 = self._gradient1(int(xi))
        g1 = self._gradient1(int(xi) + 1)
        # Cell amplitude is at most 1/2
        return 2.0 * _lerp(g0 * xf, g1 * (xf - 1.0), _fade(xf))

    def noise1(self, x: float) -> float:
        """One-dimensional noise mapped to [0, 1]."""
        value = 0.5 * (self.signed1(x) + 1.0)
        return min(1.0, max(0.0, value))
