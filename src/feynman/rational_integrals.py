"""
Analytic forms of integrals over rational functions which show up in Feynman
integrals.

The ri_poly/ri_log1 functions return the antiderivative at a single end
point and callers take the difference between the two bounds; ri_rational
and ri_log_poly integrate over [0, upper] directly. The coefficients are complex and must
carry their -i*eps offsets already: the branch of every logarithm below is
selected by the sign of those offsets.
"""

from __future__ import annotations

import numpy as np


def c_atan(z):
    """Arctangent written through a logarithm to pin down its branch cut."""
    z = np.asarray(z, dtype=np.complex128)
    return np.log((z + 1j) / (z - 1j)) / (-2j)


def ri_poly1(y, a, b, c):
    """Antiderivative of 1 / (a y^2 + b y + c)."""
    y = np.asarray(y, dtype=np.float64)
    a, b, c = (np.asarray(v, dtype=np.complex128) for v in (a, b, c))

    d = 4.0 * a * c - b * b
    root_d = np.sqrt(d)

    result = c_atan((2.0 * a * y + b) / root_d)
    return result * 2.0 / root_d


def ri_poly2(y, a, b, c, e, f, g):
    """Antiderivative of (e y^2 + f y + g) / (a y^2 + b y + c)."""
    y = np.asarray(y, dtype=np.float64)
    a, b, c, e, f, g = (np.asarray(v, dtype=np.complex128) for v in (a, b, c, e, f, g))

    d = b * b - 4.0 * a * c
    root_md = np.sqrt(-d)

    term1 = c_atan((2.0 * a * y + b) / root_md)
    term1 = term1 * (b * b * e - a * f * b + 2.0 * a * (a * g - c * e))
    term1 = term1 / (a * a * root_md)

    term2 = np.log(a * y * y + b * y + c)
    term2 = term2 * (a * f - b * e) / (2.0 * a * a)

    term3 = e * y / a

    return term1 + term2 + term3


def ri_log1(y, a, b, c):
    """Antiderivative of log(1 / (a y^2 + b y + c))."""
    y = np.asarray(y, dtype=np.float64)
    a, b, c = (np.asarray(v, dtype=np.complex128) for v in (a, b, c))

    d = b * b - 4.0 * a * c
    root_md = np.sqrt(-d)

    term1 = -c_atan((2.0 * a * y + b) / root_md)
    term1 = term1 * root_md / a

    term2 = y * np.log(1.0 / (a * y * y + b * y + c))

    term3 = np.log(a * y * y + b * y + c)
    term3 = term3 * (-b / (2.0 * a))

    term4 = 2.0 * y

    return term1 + term2 + term3 + term4


# ---------------------------------------------------------------------------
# Definite integrals over y in [0, upper]
#
# The quadratic q(y) = a y^2 + b y + c must have an imaginary part of fixed
# sign along the real path. Its roots are then off the real axis, and
# log(r - upper) - log(r) is the continuous branch of int dy / (y - r).


def quadratic_roots(a, b, c):
    """Roots of a y^2 + b y + c, the small one taken as c / q to avoid cancellation."""
    a, b, c = (np.asarray(v, dtype=np.complex128) for v in (a, b, c))

    root = np.sqrt(b * b - 4.0 * a * c)
    root = np.where((np.conj(b) * root).real >= 0.0, root, -root)
    q = -0.5 * (b + root)
    return q / a, c / q


def _inverse_linear(r, upper):
    return np.log(r - upper) - np.log(r)


def ri_rational(upper, p, a, b, c):
    """
    int_0^upper (p0 + p1 y + p2 y^2 + p3 y^3) / (a y^2 + b y + c) dy, where
    `p` lists the numerator coefficients from the constant term up.
    """
    p0, p1, p2, p3 = (np.asarray(v, dtype=np.complex128) for v in (list(p) + [0.0] * 4)[:4])
    a, b, c = (np.asarray(v, dtype=np.complex128) for v in (a, b, c))

    # polynomial part q1 y + q0 and linear remainder r1 y + r0
    q1 = p3 / a
    q0 = (p2 - q1 * b) / a
    r1 = p1 - q1 * c - q0 * b
    r0 = p0 - q0 * c

    y1, y2 = quadratic_roots(a, b, c)
    fractions = (r1 * y1 + r0) * _inverse_linear(y1, upper)
    fractions = fractions - (r1 * y2 + r0) * _inverse_linear(y2, upper)
    fractions = fractions / (a * (y1 - y2))

    return q1 * upper**2 / 2.0 + q0 * upper + fractions


def ri_log_poly(upper, p, a, b, c):
    """
    int_0^upper (p0 + p1 y) log(a y^2 + b y + c) dy, integrated by parts into
    a boundary term and a rational integral.
    """
    p0, p1 = (np.asarray(v, dtype=np.complex128) for v in (list(p) + [0.0] * 2)[:2])
    a, b, c = (np.asarray(v, dtype=np.complex128) for v in (a, b, c))

    # P(y) = P1 y + P2 y^2 is the antiderivative of p with P(0) = 0
    P1, P2 = p0, p1 / 2.0
    boundary = (P1 * upper + P2 * upper**2) * np.log(a * upper**2 + b * upper + c)

    # P(y) q'(y) with q'(y) = 2 a y + b
    numerator = (0.0, P1 * b, P2 * b + 2.0 * a * P1, 2.0 * a * P2)
    return boundary - ri_rational(upper, numerator, a, b, c)


__all__ = [
    "c_atan",
    "ri_poly1",
    "ri_poly2",
    "ri_log1",
    "quadratic_roots",
    "ri_rational",
    "ri_log_poly",
]
