"""
Feynman-parameter representation of the triangle kernels.

    from feynman import FeynmanIntegrand, FeynmanKernels, ri_poly1
"""

from __future__ import annotations

from .integrand import FeynmanIntegrand
from .kernels import FeynmanKernels
from .rational_integrals import (
    c_atan,
    quadratic_roots,
    ri_log1,
    ri_log_poly,
    ri_poly1,
    ri_poly2,
    ri_rational,
)

__all__ = [
    "FeynmanIntegrand",
    "FeynmanKernels",
    "c_atan",
    "ri_poly1",
    "ri_poly2",
    "ri_log1",
    "quadratic_roots",
    "ri_rational",
    "ri_log_poly",
]
