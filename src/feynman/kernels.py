"""
Triangle kernels with the y-integral done analytically.

The Feynman parameters are x (intermediate particle attached to the decay
vertex), y (the other intermediate particle) and z = 1 - x - y (exchange).
With z eliminated the combined denominator is a quadratic a y^2 + b y + c and
the y-integral over [0, 1 - x] is given by the rational-integral kernels; only
the x-integral is done numerically.
"""

from __future__ import annotations

import numpy as np

from model import IEPS
from quadrature import GaussLegendreCache

from .rational_integrals import ri_log1, ri_poly1, ri_poly2


class FeynmanKernels:
    """Kernel functions for the triangle convolution of a decay mDec -> pi pi pi."""

    def __init__(self, m_dec, m_pi, quadrature=None):
        self.mDec2 = m_dec**2
        self.mPi2 = m_pi**2
        self.quadrature = quadrature if quadrature is not None else GaussLegendreCache()

    def _coefficients(self, s, t, x):
        a = self.mPi2 * np.ones_like(x)
        b = self.mPi2 + (x - 1.0) * self.mPi2 + x * self.mDec2 - x * s - t
        c = (1.0 - x) * t + x * self.mPi2 + x * (x - 1.0) * self.mDec2
        return a, b, c

    def _nodes(self, t):
        self.quadrature.ensure_ready()
        t = np.asarray(t, dtype=np.float64)[..., None]
        return t, self.quadrature.abscissas, self.quadrature.weights

    # -----------------------------------------------------------------------
    # No powers of k^2 in the numerator

    def mT0(self, s, t):
        t, x, w = self._nodes(t)
        a, b, c = self._coefficients(s, t, x)

        y_integral = ri_poly1(1.0 - x, a, b, c) - ri_poly1(0.0, a, b, c)
        return np.sum(w * y_integral, axis=-1) / np.pi

    # -----------------------------------------------------------------------
    # k^2 in the numerator, subtracted at s = 0

    def mT1(self, s, t):
        t, x, w = self._nodes(t)

        sum1 = np.sum(w * (self._yintegral1(s, t, x) - self._yintegral1(0.0, t, x)), axis=-1)
        sum2 = np.sum(w * (self._yintegral2(s, t, x) - self._yintegral2(0.0, t, x)), axis=-1)

        return (sum1 - 2.0 * sum2) / np.pi

    def _yintegral1(self, s, t, x):
        a, b, c = self._coefficients(s, t, x)
        c = c - IEPS

        # numerator polynomial
        e = self.mPi2 * np.ones_like(x)
        f = x * (self.mDec2 + self.mPi2 - s)
        g = x * x * self.mDec2

        return ri_poly2(1.0 - x, a, b, c, e, f, g) - ri_poly2(0.0, a, b, c, e, f, g)

    def _yintegral2(self, s, t, x):
        a, b, c = self._coefficients(s, t, x)
        c = c - IEPS

        return ri_log1(1.0 - x, a, b, c) - ri_log1(0.0, a, b, c)


__all__ = ["FeynmanKernels"]
