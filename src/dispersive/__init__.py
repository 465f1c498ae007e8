"""
Dispersive (KT) representation building blocks.

    from dispersive import ProjectionFunction, kacser
"""

from __future__ import annotations

from .kinematics import barrier_ratio, kacser, t_minus, t_plus
from .projection import ProjectionFunction

__all__ = [
    "ProjectionFunction",
    "kacser",
    "barrier_ratio",
    "t_minus",
    "t_plus",
]
