"""
Physical constants, kinematic primitives and configuration types shared by the
Feynman and dispersive representations of the triangle amplitude.

Everything is in GeV unless explicitly stated otherwise.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

import numpy as np

# Small positive number used for threshold offsets and the -i*eps prescription.
EPS = 1e-6
IEPS = 1j * EPS

# Masses
M_PI = 0.13957061
M_K = 0.496
M_ETA = 0.54753

M_RHO = 0.77545
M_F2 = 1.2754

# Thresholds for pi, K and eta pairs
STH_PI = 4.0 * M_PI**2
STH_K = 4.0 * M_K**2
STH_ETA = 4.0 * M_ETA**2


class TriangleError(Exception):
    """Base class for configuration errors of the triangle kernels."""


class UnsupportedWaveCombination(TriangleError, ValueError):
    """No closed-form kernel exists for the requested (j, j') combination."""


class InvalidSubtractionOrder(TriangleError, ValueError):
    """The number of subtractions is not implemented or the integral diverges."""


class QuadratureCacheError(TriangleError, RuntimeError):
    """The Gauss-Legendre table is missing or inconsistent with its order."""


class UnconfiguredTriangleError(TriangleError, RuntimeError):
    """An evaluation was requested before all masses were set."""


def Kallen(x, y, z):
    """Usual Kallen triangle function, evaluated in complex arithmetic."""
    x = np.asarray(x, dtype=np.complex128)
    y = np.asarray(y, dtype=np.complex128)
    z = np.asarray(z, dtype=np.complex128)
    return x * x + y * y + z * z - 2.0 * (x * z + y * z + x * y)


@dataclass(frozen=True)
class TriangleMasses:
    """
    Mass configuration of a triangle diagram.

    m1, m2 are the two intermediate particles rescattering in the s-channel,
    p1 >= p2 the external decaying and spectator particles. The exchanged
    particle carries mass and width; its squared mass gets a negative
    imaginary part -i*M*Gamma.
    """

    exchange_mass: float
    exchange_width: float
    m1: float
    m2: float
    p1: float
    p2: float

    def __post_init__(self):
        for name in ("exchange_mass", "m1", "m2", "p1", "p2"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.exchange_width < 0:
            raise ValueError(f"exchange_width must be non-negative, got {self.exchange_width}")
        if self.p1 < self.p2:
            raise ValueError(
                f"External masses must be ordered p1 >= p2, got p1={self.p1}, p2={self.p2}"
            )

    @property
    def s_thresh(self):
        return (self.m1 + self.m2) ** 2

    @property
    def t_thresh(self):
        # Start of the exchanged line's cut: the spectator plus the second
        # intermediate particle on shell.
        return (self.p2 + self.m2) ** 2

    @property
    def pseudo_threshold(self):
        return (self.p1 - self.p2) ** 2


class WaveCombination(enum.Enum):
    """Closed set of (j, j') kernel branches, valued by their integer code."""

    S_SCALAR = 0
    S_VECTOR = 1
    P_SCALAR = 10
    P_VECTOR = 11
    D_SCALAR = 20

    # Composite kernels available in Feynman-parameter space only.
    COMPOSITE = 10000
    OMEGA = -11111

    @classmethod
    def from_spins(cls, j, jp):
        combination = None
        if jp in (0, 1) and j >= 0:
            code = 10 * j + jp
            combination = next((member for member in cls if member.value == code), None)
        if combination is None or combination.is_composite:
            raise UnsupportedWaveCombination(
                f"j = {j} and j' = {jp} combination not available."
            )
        return combination

    @property
    def is_composite(self):
        return self in (WaveCombination.COMPOSITE, WaveCombination.OMEGA)


@dataclass(frozen=True)
class QuantumNumbers:
    """
    Quantum numbers selecting a kernel branch.

    j    : total spin of the final pair
    jp   : spin of the exchanged particle
    l    : power of t removed from the exchange propagator
    n    : number of dispersive subtractions
    """

    j: int
    jp: int
    l: int = 0  # noqa: E741
    n: int = 0
    combination: WaveCombination = field(default=None)

    def __post_init__(self):
        if self.n not in (0, 1):
            raise InvalidSubtractionOrder(
                f"j = {self.j}, j' = {self.jp}: n = {self.n} subtractions not implemented "
                "(the integral does not converge for n < 0)."
            )
        if self.l < 0:
            raise ValueError(f"l must be non-negative, got {self.l}")
        if self.combination is None:
            object.__setattr__(self, "combination", WaveCombination.from_spins(self.j, self.jp))
        elif not isinstance(self.combination, WaveCombination):
            raise TypeError(f"combination must be a WaveCombination, got {self.combination!r}")

    def id(self):
        return self.combination.value


__all__ = [
    "EPS",
    "IEPS",
    "M_PI",
    "M_K",
    "M_ETA",
    "M_RHO",
    "M_F2",
    "STH_PI",
    "STH_K",
    "STH_ETA",
    "TriangleError",
    "UnsupportedWaveCombination",
    "InvalidSubtractionOrder",
    "QuadratureCacheError",
    "UnconfiguredTriangleError",
    "Kallen",
    "TriangleMasses",
    "WaveCombination",
    "QuantumNumbers",
]
