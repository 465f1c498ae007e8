"""
Partial-wave projected triangle for a decay mDec -> pi pi pi.

The s-channel pair and the spectator all carry the pion mass. The spin
structure of the exchange enters through the projection function on the
dispersive side and through the Feynman-parameter integrand on the Feynman
side; both are subtracted `qns.n` times at s = 0.
"""

from __future__ import annotations

import numpy as np

from dispersive import ProjectionFunction
from feynman import FeynmanIntegrand

from .base import DEFAULT_EXCLUSION, DEFAULT_ORDER, TriangleBase


class PartialWaveTriangle(TriangleBase):
    def __init__(self, qns, order=DEFAULT_ORDER, exclusion=DEFAULT_EXCLUSION, quadrature=None):
        super().__init__(order=order, exclusion=exclusion, quadrature=quadrature)
        self.qns = qns
        self.subtractions = qns.n

    def _decay_masses(self):
        masses = self.masses
        if not np.allclose([masses.m1, masses.m2], masses.p2):
            raise ValueError(
                "PartialWaveTriangle needs equal internal and spectator masses, got "
                f"m1={masses.m1}, m2={masses.m2}, p2={masses.p2}"
            )
        return masses.p1, masses.p2

    # -----------------------------------------------------------------------
    # Dispersive kernel

    @property
    def projection_function(self):
        return ProjectionFunction(self.qns, *self._decay_masses())

    def projection(self, s, t):
        return self.projection_function.eval(s, t)

    # -----------------------------------------------------------------------
    # Feynman kernel

    def triangle_kernel(self, s, t):
        """dF3 integrand, y-integral in closed form and x-integral by quadrature."""
        integrand = FeynmanIntegrand(self.qns, *self._decay_masses())

        self.quadrature.ensure_ready()
        x, w = self.quadrature.abscissas, self.quadrature.weights

        t = np.asarray(t, dtype=np.float64)[..., None]
        return np.sum(w * integrand.y_integral(x, s, t), axis=-1)


__all__ = ["PartialWaveTriangle"]
