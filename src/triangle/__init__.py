"""
Public entrypoint for the triangle evaluators.

This package lives inside `src/`, which is added to `sys.path` by `main.py`
and tests. It is therefore importable as a top-level module:

    from triangle import ScalarTriangle, PartialWaveTriangle, omega_triangle
"""

from __future__ import annotations

from .base import DEFAULT_EXCLUSION, DEFAULT_ORDER, TriangleBase
from .defaults import (
    OMEGA_MASS,
    RHO_MASS,
    RHO_WIDTH,
    SCAN_HIGH,
    SCAN_LOW,
    SCAN_POINTS,
    omega_triangle,
    scan_points,
)
from .discontinuity import BreitWigner
from .partial_wave import PartialWaveTriangle
from .scalar import ScalarTriangle

__all__ = [
    # evaluators
    "TriangleBase",
    "ScalarTriangle",
    "PartialWaveTriangle",
    "BreitWigner",
    # numerical defaults
    "DEFAULT_ORDER",
    "DEFAULT_EXCLUSION",
    # omega -> 3 pi scan
    "RHO_MASS",
    "RHO_WIDTH",
    "OMEGA_MASS",
    "SCAN_LOW",
    "SCAN_HIGH",
    "SCAN_POINTS",
    "omega_triangle",
    "scan_points",
]
