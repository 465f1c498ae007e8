"""
Spin projection functions Q_{j j'}(s, t).

The cross-channel exchange of spin j' is projected onto total spin j of the
s-channel pair. Each projection is a fixed combination of the elementary
kernels

    Q_k(s, t) = 1/K(s) * int_{t_-}^{t_+} dt' t'^k / (t - t'),

with coefficients polynomial in s and the masses, divided by the Kacser
function to the power j and stripped of barrier factors and t^l. The end points
t_+- carry the + i eps of the decay mass, which selects the sheet; t stays real.
"""

from __future__ import annotations

import numpy as np

from model import UnsupportedWaveCombination, WaveCombination

from . import kinematics

# Highest power of t' in the numerator of the elementary kernels
_MAX_Q = 2

# Additional powers of t' each combination needs on top of l
_Q_ORDER = {
    WaveCombination.S_SCALAR: 0,
    WaveCombination.S_VECTOR: 1,
    WaveCombination.P_SCALAR: 1,
    WaveCombination.P_VECTOR: 2,
    WaveCombination.D_SCALAR: 2,
}


class ProjectionFunction:
    """Projected cross-channel exchange for a decay m_dec -> 3 m_pi."""

    def __init__(self, qns, m_dec, m_pi):
        if qns.combination not in _Q_ORDER:
            raise UnsupportedWaveCombination(
                f"projection_function: j = {qns.j} and j' = {qns.jp} "
                f"({qns.combination.name}) combination not available."
            )
        if qns.l + _Q_ORDER[qns.combination] > _MAX_Q:
            raise UnsupportedWaveCombination(
                f"projection_function: j = {qns.j}, j' = {qns.jp} with l = {qns.l} "
                f"needs Q_{qns.l + _Q_ORDER[qns.combination]}, only Q_0 .. Q_{_MAX_Q} exist."
            )

        self.qns = qns
        self.mDec = m_dec
        self.mPi = m_pi
        self.mDec2 = m_dec**2
        self.mPi2 = m_pi**2

    def _masses(self):
        return self.mDec, self.mPi, self.mPi, self.mPi

    def eval(self, s, t):
        qns = self.qns
        l = qns.l  # noqa: E741
        s = np.asarray(s, dtype=np.float64)
        mDec2, mPi2 = self.mDec2, self.mPi2

        combination = qns.combination
        if combination is WaveCombination.S_SCALAR:
            result = self.Q(l, s, t)

        elif combination is WaveCombination.S_VECTOR:
            result = self.Q(l + 1, s, t)
            result = result + (2.0 * s - mDec2 - 3.0 * mPi2) * self.Q(l, s, t)

        elif combination is WaveCombination.P_SCALAR:
            result = 2.0 * self.Q(l + 1, s, t)
            result = result + (s - mDec2 - 3.0 * mPi2) * self.Q(l, s, t)
            result = result / self.kacser(s)

        elif combination is WaveCombination.P_VECTOR:
            result = 2.0 * self.Q(l + 2, s, t)
            result = result + (5.0 * s - 3.0 * mDec2 - 9.0 * mPi2) * self.Q(l + 1, s, t)
            result = result + (
                2.0 * s * s
                - 3.0 * mDec2 * s
                - 9.0 * mPi2 * s
                + mDec2 * mDec2
                + 6.0 * mDec2 * mPi2
                + 9.0 * mPi2 * mPi2
            ) * self.Q(l, s, t)
            result = result / self.kacser(s)

        else:
            result = 12.0 * self.Q(l + 2, s, t)
            result = result + (12.0 * s - 12.0 * mDec2 - 36.0 * mPi2) * self.Q(l + 1, s, t)
            result = result + (
                3.0 * s * s
                - 6.0 * mDec2 * s
                + 3.0 * mDec2 * mDec2
                - 18.0 * mPi2 * s
                + 18.0 * mPi2 * mDec2
                + 27.0 * mPi2 * mPi2
                - self.kacser(s) ** 2
            ) * self.Q(l, s, t)
            result = result / 2.0
            result = result / self.kacser(s) ** 2

        result = result * self.barrier_ratio(qns.j, s)
        return result / np.asarray(t, dtype=np.float64) ** l

    # -----------------------------------------------------------------------
    # Angular projection Q kernel functions

    def Q_0(self, s, t):
        result = np.log(t - self.t_minus(s))
        result = result - np.log(t - self.t_plus(s))
        return result / self.kacser(s)

    def Q(self, k, s, t):
        t = np.asarray(t, dtype=np.float64)
        if k == 0:
            return self.Q_0(s, t)
        if k == 1:
            return t * self.Q_0(s, t) - 1.0
        if k == 2:
            bounds = 0.5 * (self.t_plus(s) ** 2 - self.t_minus(s) ** 2) / self.kacser(s)
            return t * t * self.Q_0(s, t) - t - bounds
        raise UnsupportedWaveCombination(f"Q_{k} is not available, only Q_0 .. Q_{_MAX_Q} exist.")

    # -----------------------------------------------------------------------
    # Kinematics for the equal-mass decay

    def kacser(self, s):
        return kinematics.kacser(s, *self._masses())

    def barrier_ratio(self, ell, s):
        return kinematics.barrier_ratio(ell, s, *self._masses())

    def t_minus(self, s):
        return kinematics.t_minus(s, *self._masses())

    def t_plus(self, s):
        return kinematics.t_plus(s, *self._masses())


__all__ = ["ProjectionFunction"]
