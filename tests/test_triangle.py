"""
Triangle evaluators: configuration state machine, discontinuity, kernels and
the closed-form pole subtraction.
"""

import math
import warnings

import numpy as np
import pytest
from scipy.integrate import quad

from model import M_PI, STH_PI, QuantumNumbers, UnconfiguredTriangleError, UnsupportedWaveCombination
from model import WaveCombination
from dispersive import ProjectionFunction
from dispersive import kinematics
from feynman import FeynmanIntegrand, FeynmanKernels
from triangle import BreitWigner, PartialWaveTriangle, ScalarTriangle, omega_triangle


def configure(tri, p1=0.780):
    tri.set_exchange_mass(0.770, 0.145)
    tri.set_internal_masses(M_PI, M_PI)
    tri.set_external_masses(p1, M_PI)
    return tri


# ---------------------------------------------------------------------------
# State machine


def test_unconfigured_evaluator_raises():
    tri = ScalarTriangle()
    tri.set_exchange_mass(0.770, 0.145)
    assert not tri.ready

    with pytest.raises(UnconfiguredTriangleError) as excinfo:
        tri.eval_feynman(0.1)
    assert "set_internal_masses" in str(excinfo.value)
    assert "set_external_masses" in str(excinfo.value)

    with pytest.raises(UnconfiguredTriangleError):
        tri.eval_dispersive(0.1)


def test_reconfiguration_recomputes_thresholds():
    tri = configure(ScalarTriangle(order=20))
    assert tri.ready
    assert np.isclose(tri.masses.s_thresh, STH_PI)

    tri.eval_feynman(0.05)
    nodes = tri.quadrature.abscissas

    tri.set_internal_masses(0.2, 0.3)
    assert np.isclose(tri.masses.s_thresh, 0.25)
    assert np.isclose(tri.masses.t_thresh, (M_PI + 0.3) ** 2)
    assert tri.quadrature.abscissas is nodes, "quadrature table should survive reconfiguration"


def test_external_mass_ordering():
    tri = ScalarTriangle()
    with pytest.raises(ValueError):
        tri.set_external_masses(0.1, 0.5)


def test_zero_width_needs_explicit_discontinuity():
    tri = ScalarTriangle(order=20)
    tri.set_exchange_mass(0.770, 0.0)
    tri.set_internal_masses(M_PI, M_PI)
    tri.set_external_masses(0.780, M_PI)
    assert not tri.ready

    with pytest.raises(UnconfiguredTriangleError):
        tri.eval_feynman(0.1)

    tri.set_discontinuity(BreitWigner(0.770, 0.145))
    assert tri.ready
    assert np.isfinite(tri.eval_feynman(0.1))


def test_custom_discontinuity_survives_mass_changes():
    tri = ScalarTriangle(order=20)
    tri.set_discontinuity(lambda t: 1.0 / t**2)
    configure(tri)

    assert np.allclose(tri.discontinuity(np.array([1.0, 2.0])), [1.0, 0.25])

    with pytest.raises(TypeError):
        tri.set_discontinuity(1.0)


# ---------------------------------------------------------------------------
# Discontinuity


def test_breit_wigner_discontinuity():
    bw = BreitWigner(0.770, 0.145)
    t = np.array([0.1, 0.59, 1.0])

    expected = (1.0 / (0.770**2 - 1j * 0.770 * 0.145 - t)).imag
    values = bw(t)

    assert np.allclose(values.real, expected)
    assert np.allclose(values.imag, 0.0)
    assert np.all(values.real > 0)

    with pytest.raises(ValueError):
        BreitWigner(0.770, 0.0)


def test_breit_wigner_evaluated_on_the_whole_table(omega):
    assert BreitWigner.vectorized
    t, _ = omega.quadrature.semi_infinite(omega.masses.t_thresh)

    assert np.allclose(omega.discontinuity(t), BreitWigner(0.770, 0.145)(t))


def test_vectorized_discontinuity_is_called_once():
    calls = []

    def disc(t):
        calls.append(np.shape(t))
        return 1.0 / np.asarray(t) ** 2

    tri = configure(ScalarTriangle(order=20))
    tri.set_discontinuity(disc, vectorized=True)
    t = np.array([[1.0, 2.0], [4.0, 5.0]])

    assert np.allclose(tri.discontinuity(t), 1.0 / t**2)
    assert calls == [(2, 2)]


def test_scalar_discontinuity_is_called_per_node():
    tri = configure(ScalarTriangle(order=20))
    tri.set_discontinuity(lambda t: math.exp(-t))
    t = np.array([0.5, 1.0, 2.0])

    assert np.allclose(tri.discontinuity(t), np.exp(-t))


# ---------------------------------------------------------------------------
# Kernels


def test_scalar_kernel_matches_semi_analytic_kernel(omega):
    t = np.array([0.8, 1.5])
    s = 0.02

    kernel = omega.triangle_kernel(s, t)
    reference = np.pi * FeynmanKernels(0.780, M_PI, quadrature=omega.quadrature).mT0(s, t)

    assert np.allclose(kernel, reference, rtol=1e-4), f"{kernel} vs {reference}"


def test_scalar_projection_matches_s_wave_projection(omega):
    proj = ProjectionFunction(QuantumNumbers(0, 0), 0.780, M_PI)
    t = np.array([1.0, 2.0, 5.0])

    assert np.allclose(omega.projection(0.2, t), proj.eval(0.2, t), rtol=1e-4)


PARTIAL_WAVES = [(0, 0), (0, 1), (1, 0), (1, 1), (2, 0)]


def simplex_kernel(tri, s, t):
    """dF3 integrand summed over a product Gauss rule on the simplex."""
    integrand = FeynmanIntegrand(tri.qns, 0.780, M_PI)
    u, wu = tri.quadrature.abscissas, tri.quadrature.weights

    x = u[:, None]
    y = (1.0 - u)[:, None] * u[None, :]
    weights = (wu * (1.0 - u))[:, None] * wu[None, :]

    t = np.asarray(t, dtype=np.float64)[..., None, None]
    return np.sum(weights * integrand.eval(x, y, 1.0 - x - y, s, t), axis=(-2, -1))


@pytest.mark.parametrize("j, jp", PARTIAL_WAVES)
def test_partial_wave_kernel_matches_simplex_rule(j, jp):
    tri = configure(PartialWaveTriangle(QuantumNumbers(j, jp)))
    tri.quadrature.ensure_ready()
    # the denominator has no zero on the simplex for these exchange masses
    t = np.array([0.8, 1.5])

    kernel = tri.triangle_kernel(0.02, t)
    simplex = simplex_kernel(tri, 0.02, t)

    assert np.allclose(kernel, simplex, rtol=1e-4), f"{kernel} vs {simplex}"


def test_partial_wave_s_wave_kernel_matches_scalar(omega):
    tri = configure(PartialWaveTriangle(QuantumNumbers(0, 0)))
    # includes exchange masses below (M - m)^2 where the denominator vanishes inside
    t = np.array([0.1, 0.3, 0.8, 5.0])

    for s in (0.05, 0.3, 0.6):
        kernel = tri.triangle_kernel(s, t)
        scalar = omega.triangle_kernel(s, t) / (2.0 * np.pi)
        assert np.allclose(kernel, scalar, rtol=1e-4), f"s={s}: {kernel} vs {scalar}"


def test_partial_wave_needs_equal_masses():
    tri = PartialWaveTriangle(QuantumNumbers(1, 0))
    tri.set_exchange_mass(0.770, 0.145)
    tri.set_internal_masses(0.2, 0.2)
    tri.set_external_masses(0.780, M_PI)

    with pytest.raises(ValueError):
        tri.eval_feynman(0.1)


def test_partial_wave_composite_is_feynman_only():
    qns = QuantumNumbers(1, 1, combination=WaveCombination.OMEGA)
    tri = configure(PartialWaveTriangle(qns, order=20))

    assert np.isfinite(tri.eval_feynman(0.1))
    with pytest.raises(UnsupportedWaveCombination):
        tri.eval_dispersive(0.1)


def test_partial_wave_s_wave_left_hand_cut_matches_scalar(omega):
    tri = configure(PartialWaveTriangle(QuantumNumbers(0, 0)))

    # below threshold the projection is off the real axis in t
    s = np.array([0.02, 0.05])
    pw = tri.t_dispersion(s)
    scalar = omega.t_dispersion(s)

    assert pw.shape == (2,)
    assert np.allclose(pw, scalar, rtol=1e-4), f"{pw} vs {scalar}"


# ---------------------------------------------------------------------------
# Subtractions and the pole term


def test_subtracted_evaluators_vanish_at_zero():
    tri = configure(PartialWaveTriangle(QuantumNumbers(1, 0, n=1), order=20))

    assert tri.eval_dispersive(0.0) == 0
    assert tri.eval_feynman(0.0) == 0


def test_unsubtracted_dispersive_rejects_zero(omega):
    with pytest.raises(ValueError):
        omega.eval_dispersive(0.0)


@pytest.mark.parametrize("n", [0, 1])
@pytest.mark.parametrize("high", [2.0, None])
def test_pole_integral_below_range(n, high):
    tri = PartialWaveTriangle(QuantumNumbers(0, 0, n=n))
    s, low = 0.05, 0.1

    upper = np.inf if high is None else high
    expected, _ = quad(lambda sp: 1.0 / (sp ** (1 + n) * (sp - s)), low, upper, epsabs=1e-12)

    value = tri._pole_integral(s, low, high)
    assert np.isclose(value, expected, rtol=1e-8), f"{value} vs {expected}"


@pytest.mark.parametrize("n", [0, 1])
def test_pole_integral_across_pole(n):
    tri = PartialWaveTriangle(QuantumNumbers(0, 0, n=n))
    s, low, high = 0.5, 0.1, 2.0

    principal, _ = quad(lambda sp: 1.0 / sp ** (1 + n), low, high, weight="cauchy", wvar=s)

    value = tri._pole_integral(s, low, high)
    assert np.isclose(value.real, principal, rtol=1e-8)
    assert np.isclose(value.imag, np.pi / s ** (1 + n), rtol=1e-8)


def test_warns_inside_excluded_window(omega):
    pseudo = omega.masses.pseudo_threshold

    with pytest.warns(RuntimeWarning, match="pseudo-threshold"):
        omega.eval_dispersive(pseudo + 0.5 * omega.exc)


def test_no_split_when_pseudo_threshold_below_threshold():
    tri = ScalarTriangle()
    tri.set_exchange_mass(0.770, 0.145)
    tri.set_internal_masses(M_PI, M_PI)
    tri.set_external_masses(0.3, 0.2)
    assert tri.masses.pseudo_threshold < tri.masses.s_thresh

    with warnings.catch_warnings(record=True) as record:
        warnings.simplefilter("always")
        value = tri.eval_dispersive(tri.masses.pseudo_threshold)

    assert not any("pseudo-threshold" in str(w.message) for w in record)
    assert np.isfinite(value)


def test_omega_defaults():
    tri = omega_triangle(order=20)
    assert tri.ready
    assert np.isclose(tri.masses.exchange_mass, 0.770)
    assert np.isclose(tri.masses.pseudo_threshold, (0.780 - M_PI) ** 2)


def test_scalar_kinematics_follow_configuration():
    tri = configure(ScalarTriangle(order=20))
    s = 0.2

    assert np.isclose(tri.kacser(s), kinematics.kacser(s, 0.780, M_PI, M_PI, M_PI))
    assert np.isclose(tri.t_plus(s) - tri.t_minus(s), tri.kacser(s))

    tri.set_internal_masses(0.2, 0.3)
    assert np.isclose(tri.kacser(0.5), kinematics.kacser(0.5, 0.780, M_PI, 0.2, 0.3))
    assert np.isclose(tri.t_minus(0.5), kinematics.t_minus(0.5, 0.780, M_PI, 0.2, 0.3))
    assert np.isfinite(tri.eval_dispersive(0.1))
