"""
Triangle kernels written in terms of the Feynman parameters.

Subtractions and spin combinations are applied to the integrand before any
integration, so one call of `eval` per Feynman-parameter point gives the
projected, subtracted kernel. All functions are pure in (x, y, z, s, t) and
broadcast over numpy arrays.
"""

from __future__ import annotations

import numpy as np

from model import IEPS, InvalidSubtractionOrder, UnsupportedWaveCombination, WaveCombination

from .rational_integrals import ri_log_poly, ri_rational


class FeynmanIntegrand:
    """
    dF3 integrand for a decay of mass m_dec into three particles of mass m_pi.

    x and y weight the two intermediate propagators meeting at the s-channel
    vertex (x attached to the decay vertex), z the exchanged propagator of
    squared mass t.
    """

    def __init__(self, qns, m_dec, m_pi):
        self.qns = qns
        self.mDec2 = m_dec**2
        self.mPi2 = m_pi**2

    def denominator(self, x, y, z, s, t):
        """Combined propagator denominator after the loop-momentum shift."""
        denom0 = (x + y) * self.mPi2 + z * t - x * z * self.mDec2 - y * z * self.mPi2
        return denom0 - x * y * s

    def delta(self, x, y, z, s):
        """Squared momentum of the exchanged line at zero loop momentum."""
        delta0 = (1.0 - z) * (x * self.mDec2 + y * self.mPi2)
        return delta0 - x * y * s

    def eval(self, x, y, z, s, t):
        """Integrand value with the number of subtractions in `qns.n` applied."""
        n = self.qns.n
        if n < 0:
            raise InvalidSubtractionOrder(
                f"Insufficient subtractions! j = {self.qns.j}, j' = {self.qns.jp}: "
                f"integral does not converge with n = {n} subtractions."
            )

        combination = self.qns.combination
        if n == 0:
            return self.mT(combination, s, x, y, z, t)
        if n == 1:
            return self.mT(combination, s, x, y, z, t) - self.mT(combination, 0.0, x, y, z, t)

        raise InvalidSubtractionOrder(f"n = {n} times subtracted integrands not yet implemented.")

    def mT(self, combination, s, x, y, z, t):
        denom = self.denominator(x, y, z, s, t)
        delta = self.delta(x, y, z, s)
        T0 = self.T(0, denom)

        if combination is WaveCombination.S_SCALAR:
            return T0

        if combination is WaveCombination.S_VECTOR:
            result = self.T(1, denom)
            return result + (delta + 2.0 * s - self.mDec2 - 3.0 * self.mPi2) * T0

        if combination is WaveCombination.P_SCALAR:
            return z * T0

        if combination is WaveCombination.P_VECTOR:
            result = (3.0 * z - 1.0) * self.T(1, denom) / 2.0
            return result + z * (delta + 2.0 * s - self.mDec2 - 3.0 * self.mPi2) * T0

        if combination is WaveCombination.D_SCALAR:
            return z * z * T0

        if combination is WaveCombination.COMPOSITE:
            result = (s + self.mDec2 - self.mPi2) * (self.T(1, denom) + delta * T0)
            return result + (s - self.mDec2 - self.mPi2) * (self.mDec2 - self.mPi2) * T0

        if combination is WaveCombination.OMEGA:
            return -2.0 * self.T(1, denom)

        raise self._unsupported()

    def _unsupported(self):
        return UnsupportedWaveCombination(
            f"j = {self.qns.j} and j' = {self.qns.jp} (code {self.qns.id()}) "
            "combination not available."
        )

    @staticmethod
    def T(ell, denom):
        """Dimensionally regularized integral of divergence order `ell`."""
        if ell == 0:
            result = 1.0 / (denom - IEPS)
        elif ell == 1:
            result = 2.0 * np.log(denom - IEPS)
        else:
            raise ValueError(f"Feynman integrand T of divergence order l = {ell} not implemented.")
        return result / (2.0 * np.pi)

    # -----------------------------------------------------------------------
    # y-integrated kernels

    def y_coefficients(self, x, s, t):
        """
        Denominator on the line z = 1 - x - y as a y^2 + b y + c. The decay mass
        carries + i eps and the whole denominator - i eps, so its imaginary part
        is negative on the entire simplex.
        """
        mDec2 = self.mDec2 + IEPS
        shape = np.broadcast(x, s, t).shape

        a = np.full(shape, self.mPi2, dtype=np.complex128)
        b = x * self.mPi2 + x * mDec2 - x * s - t
        c = x * self.mPi2 + (1.0 - x) * t - x * (1.0 - x) * mDec2 - IEPS
        return a, b + 0j * a, c + 0j * a

    def y_integral(self, x, s, t):
        """int_0^(1-x) dy of `eval`, with the same subtractions."""
        n = self.qns.n
        combination = self.qns.combination
        if n == 0:
            return self.mT_y(combination, s, x, t)
        if n == 1:
            return self.mT_y(combination, s, x, t) - self.mT_y(combination, 0.0, x, t)

        raise InvalidSubtractionOrder(f"n = {n} times subtracted integrands not yet implemented.")

    def mT_y(self, combination, s, x, t):
        x = np.asarray(x, dtype=np.float64)
        upper = 1.0 - x
        a, b, c = self.y_coefficients(x, s, t)

        def T0(*p):
            return ri_rational(upper, p, a, b, c)

        def T1(*p):
            return 2.0 * ri_log_poly(upper, p, a, b, c)

        # delta = d0 + d1 y + d2 y^2
        d0 = x * x * self.mDec2
        d1 = x * (self.mPi2 + self.mDec2 - s)
        d2 = self.mPi2
        shift = 2.0 * s - self.mDec2 - 3.0 * self.mPi2

        if combination is WaveCombination.S_SCALAR:
            result = T0(1.0)

        elif combination is WaveCombination.S_VECTOR:
            result = T1(1.0) + T0(d0 + shift, d1, d2)

        elif combination is WaveCombination.P_SCALAR:
            result = T0(upper, -1.0)

        elif combination is WaveCombination.P_VECTOR:
            # z (delta + shift) with z = upper - y
            e0 = d0 + shift
            result = T1((3.0 * upper - 1.0) / 2.0, -1.5)
            result = result + T0(upper * e0, upper * d1 - e0, upper * d2 - d1, -d2)

        elif combination is WaveCombination.D_SCALAR:
            result = T0(upper * upper, -2.0 * upper, 1.0)

        elif combination is WaveCombination.COMPOSITE:
            result = (s + self.mDec2 - self.mPi2) * (T1(1.0) + T0(d0, d1, d2))
            result = result + (s - self.mDec2 - self.mPi2) * (self.mDec2 - self.mPi2) * T0(1.0)

        elif combination is WaveCombination.OMEGA:
            result = -2.0 * T1(1.0)

        else:
            raise self._unsupported()

        return result / (2.0 * np.pi)


__all__ = ["FeynmanIntegrand"]
