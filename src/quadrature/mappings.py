"""Maps from the canonical [0, 1] quadrature domain onto integration ranges."""

from __future__ import annotations

import numpy as np


def affine_map(u, weights, low, high):
    """Linear map [0, 1] -> [low, high]; returns the points and scaled weights."""
    u = np.asarray(u, dtype=np.float64)
    width = high - low
    return low + width * u, np.asarray(weights, dtype=np.float64) * width


def tangent_map(u, low):
    """
    Map [0, 1) -> [low, inf) with t(u) = low + tan(pi u / 2).

    Returns the points and the Jacobian (pi/2) / cos^2(pi u / 2) at each node.
    The end point u = 1 is never a Gauss-Legendre node.
    """
    u = np.asarray(u, dtype=np.float64)
    angle = 0.5 * np.pi * u
    points = low + np.tan(angle)
    jacobian = (np.pi / 2.0) / np.cos(angle) ** 2
    return points, jacobian


__all__ = ["affine_map", "tangent_map"]
