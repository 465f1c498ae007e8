"""
Defaults for the omega -> 3 pi rescattering scan.

Keeping these in one place lets the driver and the tests share the same
kinematics and scan grid.
"""

from __future__ import annotations

import numpy as np

from model import M_PI

from .base import DEFAULT_EXCLUSION, DEFAULT_ORDER
from .scalar import ScalarTriangle

# rho exchange in omega -> 3 pi
RHO_MASS = 0.770
RHO_WIDTH = 0.145
OMEGA_MASS = 0.780

SCAN_LOW = 1e-3
SCAN_HIGH = 81.0 * M_PI**2
SCAN_POINTS = 25


def omega_triangle(order=DEFAULT_ORDER, exclusion=DEFAULT_EXCLUSION):
    """ScalarTriangle configured for rho exchange in omega -> 3 pi."""
    tri = ScalarTriangle(order=order, exclusion=exclusion)
    tri.set_exchange_mass(RHO_MASS, RHO_WIDTH)
    tri.set_internal_masses(M_PI, M_PI)
    tri.set_external_masses(OMEGA_MASS, M_PI)
    return tri


def scan_points(low=SCAN_LOW, high=SCAN_HIGH, n_points=SCAN_POINTS):
    """Equally spaced s values starting at `low`, `high` excluded."""
    return low + np.arange(n_points) * (high - low) / n_points


__all__ = [
    "RHO_MASS",
    "RHO_WIDTH",
    "OMEGA_MASS",
    "SCAN_LOW",
    "SCAN_HIGH",
    "SCAN_POINTS",
    "omega_triangle",
    "scan_points",
]
