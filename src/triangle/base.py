"""
Shared machinery of the triangle evaluators: mass configuration, the
left-hand-cut convolution and the nested (t then s) dispersion integral with
its analytic pole subtraction.
"""

from __future__ import annotations

import logging
import warnings

import numpy as np

from model import EPS, IEPS, Kallen, TriangleMasses, UnconfiguredTriangleError
from quadrature import GaussLegendreCache

from .discontinuity import BreitWigner

logger = logging.getLogger(__name__)

DEFAULT_ORDER = 100

# Half-width of the interval excluded around the pseudo-threshold (GeV^2).
DEFAULT_EXCLUSION = 1e-3


def clog_below(x):
    """log(x - i0) for real x: the cut of the logarithm is approached from below."""
    return np.log(complex(x, -0.0))


class TriangleBase:
    """
    Evaluator skeleton. Subclasses provide `projection(s, t)` for the
    dispersive path and `triangle_kernel(s, t)` for the Feynman path.

    The evaluator is unconfigured until exchange, internal and external masses
    are all set; it can be reconfigured at any time. The quadrature table does
    not depend on the masses and survives reconfiguration.
    """

    subtractions = 0

    def __init__(self, order=DEFAULT_ORDER, exclusion=DEFAULT_EXCLUSION, quadrature=None):
        self.quadrature = quadrature if quadrature is not None else GaussLegendreCache(order)
        self.exc = exclusion

        self._exchange = None
        self._internal = None
        self._external = None
        self._masses = None
        self._disc = None
        self._disc_vectorized = False
        self._custom_disc = False

    # -----------------------------------------------------------------------
    # Configuration

    def set_exchange_mass(self, mass, width=0.0):
        self._exchange = (mass, width)
        self._reconfigure()

    def set_internal_masses(self, m1, m2):
        self._internal = (m1, m2)
        self._reconfigure()

    def set_external_masses(self, p1, p2):
        if p1 < p2:
            raise ValueError(f"External masses must be ordered p1 >= p2, got p1={p1}, p2={p2}")
        self._external = (p1, p2)
        self._reconfigure()

    def set_discontinuity(self, disc, vectorized=None):
        """
        Replace the Breit-Wigner discontinuity by `disc(t)`. A callable that
        accepts numpy arrays is evaluated once per quadrature table; pass
        `vectorized=True` or give it a `vectorized` attribute.
        """
        if not callable(disc):
            raise TypeError("disc must be callable.")
        if vectorized is None:
            vectorized = getattr(disc, "vectorized", False)
        self._disc = disc
        self._disc_vectorized = bool(vectorized)
        self._custom_disc = True

    def _reconfigure(self):
        if self._exchange is not None and not self._custom_disc:
            mass, width = self._exchange
            self._disc = BreitWigner(mass, width) if width > 0 else None
            self._disc_vectorized = self._disc is not None

        if None in (self._exchange, self._internal, self._external):
            self._masses = None
            return

        self._masses = TriangleMasses(*self._exchange, *self._internal, *self._external)
        logger.debug(
            "%s configured: s_thresh=%.6g, t_thresh=%.6g, pseudo_threshold=%.6g",
            type(self).__name__,
            self._masses.s_thresh,
            self._masses.t_thresh,
            self._masses.pseudo_threshold,
        )

    @property
    def ready(self):
        return self._masses is not None and self._disc is not None

    @property
    def masses(self):
        if self._masses is None:
            missing = [
                name
                for name, value in (
                    ("set_exchange_mass", self._exchange),
                    ("set_internal_masses", self._internal),
                    ("set_external_masses", self._external),
                )
                if value is None
            ]
            raise UnconfiguredTriangleError(
                f"{type(self).__name__} is not configured, call {', '.join(missing)} first."
            )
        return self._masses

    def _require_ready(self):
        masses = self.masses
        if self._disc is None:
            raise UnconfiguredTriangleError(
                f"{type(self).__name__} has no discontinuity: the exchange width is zero, "
                "call set_discontinuity first."
            )
        self.quadrature.ensure_ready()
        return masses

    def discontinuity(self, t):
        t = np.asarray(t, dtype=np.float64)
        if self._disc_vectorized:
            return np.broadcast_to(np.asarray(self._disc(t), dtype=np.complex128), t.shape)

        values = [complex(self._disc(float(tt))) for tt in t.ravel()]
        return np.asarray(values, dtype=np.complex128).reshape(t.shape)

    # -----------------------------------------------------------------------
    # Feynman representation

    def eval_feynman(self, s):
        """Convolution of the left-hand-cut discontinuity with the triangle kernel."""
        masses = self._require_ready()

        tp, w = self.quadrature.semi_infinite(masses.t_thresh)
        integrand = self.discontinuity(tp) * self.triangle_kernel(s, tp)

        return complex(np.sum(w * integrand) / np.pi)

    def triangle_kernel(self, s, t):
        raise NotImplementedError

    # -----------------------------------------------------------------------
    # Dispersive representation

    def eval_dispersive(self, s):
        masses = self._require_ready()
        n = self.subtractions

        if s == 0:
            if n > 0:
                return 0j
            raise ValueError("eval_dispersive(0) without subtractions divides by s in the pole term.")

        p_thresh, s_thresh = masses.pseudo_threshold, masses.s_thresh

        # if the pseudo threshold is in the bounds of integration, exclude a
        # small interval around it
        if p_thresh < s_thresh:
            return self.s_dispersion_inf(s, s_thresh + EPS)

        if abs(s - p_thresh) < self.exc:
            warnings.warn(
                f"s = {s} lies inside the interval of half-width {self.exc} excluded around "
                f"the pseudo-threshold {p_thresh}; the dispersive result is not reliable.",
                RuntimeWarning,
            )

        result = self.s_dispersion(s, s_thresh + EPS, p_thresh - self.exc)
        result += self.s_dispersion_inf(s, p_thresh + self.exc)
        return result

    def s_dispersion(self, s, low, high):
        """Dispersion integral over s' on [low, high] with the pole at s' = s subtracted."""
        self._require_ready()

        sp, w = self.quadrature.finite(low, high)
        return self._subtracted_dispersion(s, sp, w, low, high)

    def s_dispersion_inf(self, s, low):
        """Dispersion integral over s' on [low, inf) with the pole at s' = s subtracted."""
        self._require_ready()

        sp, w = self.quadrature.semi_infinite(low)
        return self._subtracted_dispersion(s, sp, w, low, None)

    def _subtracted_dispersion(self, s, sp, w, low, high):
        n = self.subtractions

        sub_point = self.t_dispersion(s)
        integrand = (self.t_dispersion(sp) - sub_point) / (sp ** (1 + n) * (sp - s - IEPS))

        total = np.sum(w * integrand) + sub_point * self._pole_integral(s, low, high)
        return complex(s**n * total / np.pi)

    def _pole_integral(self, s, low, high):
        """Closed form of int ds' / (s'^(1+n) (s' - s - i eps)) over [low, high]."""
        n = self.subtractions

        def antiderivative(sp):
            if sp is None:
                return 0j
            log_term = clog_below(sp - s) - np.log(sp)
            if n == 0:
                return log_term / s
            return log_term / s**2 + 1.0 / (s * sp)

        return antiderivative(high) - antiderivative(low)

    def t_dispersion(self, s):
        """Projected left-hand cut, times the two-body phase-space factor sqrt(Kallen)."""
        masses = self._require_ready()

        tp, w = self.quadrature.semi_infinite(masses.t_thresh + EPS)
        disc = self.discontinuity(tp)

        s = np.asarray(s, dtype=np.float64)
        integrand = disc * self.projection(s[..., None], tp)
        result = np.sum(w * integrand, axis=-1) / np.pi

        return np.sqrt(Kallen(s, masses.m1**2, masses.m2**2)) * result

    def projection(self, s, t):
        raise NotImplementedError


__all__ = ["TriangleBase", "DEFAULT_ORDER", "DEFAULT_EXCLUSION", "clog_below"]
