"""
Gauss-Legendre nodes and weights, and the owned cache that holds one table of
them for the whole lifetime of an evaluator.

Roots of P_n are found by Newton iteration on the three-term Legendre
recursion; the hot loop is compiled with Numba.
"""

from __future__ import annotations

import logging

import numpy as np
from numba import njit

from model import QuadratureCacheError

from .mappings import affine_map, tangent_map

logger = logging.getLogger(__name__)

# Newton tolerance on the roots of P_n in [-1, 1].
_ROOT_TOL = 3e-14
_MAX_NEWTON = 100


@njit(cache=True)
def gauleg(x1, x2, n):
    """Return `n` Gauss-Legendre abscissas and weights on [x1, x2]."""
    x = np.empty(n, dtype=np.float64)
    w = np.empty(n, dtype=np.float64)

    m = (n + 1) // 2
    xm = 0.5 * (x2 + x1)
    xl = 0.5 * (x2 - x1)

    for i in range(m):
        z = np.cos(np.pi * (i + 0.75) / (n + 0.5))
        pp = 1.0
        for _ in range(_MAX_NEWTON):
            p1 = 1.0
            p2 = 0.0
            for j in range(n):
                p3 = p2
                p2 = p1
                p1 = ((2.0 * j + 1.0) * z * p2 - j * p3) / (j + 1.0)
            pp = n * (z * p1 - p2) / (z * z - 1.0)
            z1 = z
            z = z1 - p1 / pp
            if abs(z - z1) <= _ROOT_TOL:
                break

        x[i] = xm - xl * z
        x[n - 1 - i] = xm + xl * z
        w[i] = 2.0 * xl / ((1.0 - z * z) * pp * pp)
        w[n - 1 - i] = w[i]

    return x, w


class GaussLegendreCache:
    """
    One Gauss-Legendre table on [0, 1], generated lazily and at most once.

    The cache is either not ready (no table) or ready (table of exactly
    `order` nodes). `ensure_ready()` moves it to ready and is a no-op
    afterwards; reading nodes while not ready raises.
    """

    def __init__(self, order=100):
        if int(order) < 1:
            raise ValueError(f"Quadrature order must be a positive integer, got {order}")
        self.order = int(order)
        self._abscissas = None
        self._weights = None

    @property
    def ready(self):
        return self._abscissas is not None

    def ensure_ready(self):
        if self.ready:
            return

        abscissas, weights = gauleg(0.0, 1.0, self.order)
        if abscissas.shape != (self.order,) or weights.shape != (self.order,):
            raise QuadratureCacheError(
                f"Wrong number of weights generated: expected {self.order}, "
                f"got {abscissas.size} abscissas and {weights.size} weights."
            )

        abscissas.setflags(write=False)
        weights.setflags(write=False)
        self._abscissas, self._weights = abscissas, weights
        logger.debug("Generated %d Gauss-Legendre nodes on [0, 1]", self.order)

    def invalidate(self):
        self._abscissas = None
        self._weights = None
        logger.debug("Invalidated Gauss-Legendre table of order %d", self.order)

    def reconfigure(self, order):
        if int(order) < 1:
            raise ValueError(f"Quadrature order must be a positive integer, got {order}")
        self.order = int(order)
        self.invalidate()

    @property
    def abscissas(self):
        self._check()
        return self._abscissas

    @property
    def weights(self):
        self._check()
        return self._weights

    def _check(self):
        if not self.ready:
            raise QuadratureCacheError(
                "Gauss-Legendre table requested before ensure_ready() was called."
            )

    def finite(self, low, high):
        """Nodes and weights for [low, high], mapped from the cached table."""
        return affine_map(self.abscissas, self.weights, low, high)

    def semi_infinite(self, low):
        """Nodes and Jacobian-weighted weights for [low, inf)."""
        points, jacobian = tangent_map(self.abscissas, low)
        return points, self.weights * jacobian


__all__ = ["gauleg", "GaussLegendreCache"]
