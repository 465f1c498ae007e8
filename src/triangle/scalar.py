"""
Scalar triangle with general masses.

Both representations compute the same object, the triangle function
convolved with the discontinuity of the exchanged particle:

    Feynman:     1/pi int dt' disc(t') int_0^1 dx K(s, t', x)
    dispersive:  1/pi int ds' sqrt(Kallen(s')) proj(s') / (s' (s' - s))
"""

from __future__ import annotations

import numpy as np

from dispersive import kinematics
from model import IEPS

from .base import TriangleBase


class ScalarTriangle(TriangleBase):
    """
    Triangle amplitude of a decay p1 -> p2 + (m1 m2), rescattering in s
    through the exchange of a particle in t.

        tri = ScalarTriangle()
        tri.set_exchange_mass(0.770, 0.145)
        tri.set_internal_masses(M_PI, M_PI)
        tri.set_external_masses(0.780, M_PI)
        tri.eval_feynman(0.1), tri.eval_dispersive(0.1)
    """

    # -----------------------------------------------------------------------
    # Feynman kernel: y-integral analytic, x-integral numerical

    def triangle_kernel(self, s, t):
        self.quadrature.ensure_ready()
        x, w = self.quadrature.abscissas, self.quadrature.weights

        t = np.asarray(t, dtype=np.float64)[..., None]
        return np.sum(w * self.kernel_integrand(s, t, x), axis=-1)

    def kernel_integrand(self, s, t, x):
        """y-integrated triangle kernel at Feynman parameter x."""
        masses = self.masses
        p1sq = masses.p1**2 + IEPS
        p2sq = masses.p2**2

        a = p2sq * np.ones_like(np.asarray(x, dtype=np.complex128))
        b = masses.m2**2 + (x - 1.0) * p2sq + x * p1sq - x * s - t
        c = (1.0 - x) * t + x * masses.m1**2 + x * (x - 1.0) * p1sq

        root = np.sqrt(b * b - 4.0 * a * c)
        y_plus = (-b + root) / (2.0 * a)
        y_minus = (-b - root) / (2.0 * a)

        result = np.log(y_plus + x - 1.0) - np.log(y_minus + x - 1.0)
        result = result - (np.log(y_plus) - np.log(y_minus))
        return result / root

    # -----------------------------------------------------------------------
    # Dispersive kernel

    def projection(self, s, t):
        """S-wave projection of the exchange propagator 1 / (t' - t)."""
        result = np.log(t - self.t_minus(s))
        result = result - np.log(t - self.t_plus(s))
        return result / self.kacser(s)

    def _mass_tuple(self):
        masses = self.masses
        return masses.p1, masses.p2, masses.m1, masses.m2

    def kacser(self, s):
        return kinematics.kacser(s, *self._mass_tuple())

    def t_minus(self, s):
        return kinematics.t_minus(s, *self._mass_tuple())

    def t_plus(self, s):
        return kinematics.t_plus(s, *self._mass_tuple())


__all__ = ["ScalarTriangle"]
