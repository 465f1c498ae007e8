"""
Kinematic functions of the dispersive representation.

p1 >= p2 are the external decay and spectator masses, m1 and m2 the two
intermediate masses rescattering in s. All square roots take the -i*eps
prescription on the external mass, which fixes the sheet of the breakup
momenta below and between the pseudo-threshold and the threshold.
"""

from __future__ import annotations

import numpy as np

from model import IEPS, Kallen


def _breakup_roots(s, p1, p2):
    root_s = np.sqrt(np.asarray(s, dtype=np.float64))
    minus = np.sqrt((root_s - p2) ** 2 - p1 * p1 - IEPS)
    plus = np.sqrt((root_s + p2) ** 2 - p1 * p1 - IEPS)
    return minus, plus


def kacser(s, p1, p2, m1, m2):
    """
    Kacser function, the product of breakup momenta p(s) q(s) with the
    correct analytic structure:

        K(s) = sqrt((sqrt(s) + p2)^2 - p1^2) sqrt((sqrt(s) - p2)^2 - p1^2)
               sqrt(Kallen(s, m1^2, m2^2)) / s
    """
    minus, plus = _breakup_roots(s, p1, p2)
    result = minus * plus
    result = result * np.sqrt(Kallen(s, m1 * m1, m2 * m2))
    return result / s


def barrier_ratio(ell, s, p1, p2, m1, m2):
    """Ratio of angular momentum barrier factors removed by the projection."""
    if ell == 0:
        return np.ones_like(np.asarray(s, dtype=np.complex128))

    minus, plus = _breakup_roots(s, p1, p2)
    result = np.sqrt(Kallen(s, m1 * m1, m2 * m2))
    result = result / plus
    result = result / minus
    return result**ell


def t_minus(s, p1, p2, m1, m2):
    """Lower end of the complex t-range swept by the projection angle."""
    return _t_center(s, p1, p2, m1, m2) - kacser(s, p1, p2, m1, m2) / 2.0


def t_plus(s, p1, p2, m1, m2):
    """Upper end of the complex t-range swept by the projection angle."""
    return _t_center(s, p1, p2, m1, m2) + kacser(s, p1, p2, m1, m2) / 2.0


def _t_center(s, p1, p2, m1, m2):
    s = np.asarray(s, dtype=np.float64)
    return p1 * p1 + IEPS + m1 * m1 - (s - p2 * p2 + p1 * p1 + IEPS) * (s + m1 * m1 - m2 * m2) / (2.0 * s)


__all__ = ["kacser", "barrier_ratio", "t_minus", "t_plus"]
