"""Left-hand-cut discontinuities of the exchanged particle."""

from __future__ import annotations

import numpy as np


class BreitWigner:
    """
    Discontinuity of a Breit-Wigner propagator 1 / (M^2 - i M Gamma - t).

    Callable interface: disc(t) -> complex value, scalar or array.
    """

    vectorized = True

    def __init__(self, mass, width):
        if mass <= 0:
            raise ValueError(f"mass must be positive, got {mass}")
        if width <= 0:
            raise ValueError(
                f"width must be positive for a Breit-Wigner discontinuity, got {width}"
            )
        self.mass = mass
        self.width = width

    @property
    def mass2(self):
        return self.mass**2 - 1j * self.mass * self.width

    def __call__(self, t):
        return self.disc(t)

    def disc(self, t):
        propagator = 1.0 / (self.mass2 - np.asarray(t, dtype=np.float64))
        return (propagator - np.conj(propagator)) / 2j

    def __repr__(self):
        return f"BreitWigner(mass={self.mass}, width={self.width})"


__all__ = ["BreitWigner"]
