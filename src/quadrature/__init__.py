"""
Fixed-order Gauss-Legendre quadrature used by every integral of the triangle.

Importable as a top-level module because `src/` is added to `sys.path`:

    from quadrature import GaussLegendreCache, gauleg
"""

from __future__ import annotations

from .gauss_legendre import GaussLegendreCache, gauleg
from .mappings import affine_map, tangent_map

__all__ = [
    "GaussLegendreCache",
    "gauleg",
    "affine_map",
    "tangent_map",
]
