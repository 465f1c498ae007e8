"""
Quantum-number descriptor, mass configuration and the error taxonomy.
"""

import numpy as np
import pytest

from model import (
    M_PI,
    STH_PI,
    InvalidSubtractionOrder,
    Kallen,
    QuantumNumbers,
    TriangleError,
    TriangleMasses,
    UnsupportedWaveCombination,
    WaveCombination,
)


@pytest.mark.parametrize(
    "j, jp, expected",
    [
        (0, 0, WaveCombination.S_SCALAR),
        (0, 1, WaveCombination.S_VECTOR),
        (1, 0, WaveCombination.P_SCALAR),
        (1, 1, WaveCombination.P_VECTOR),
        (2, 0, WaveCombination.D_SCALAR),
    ],
)
def test_supported_combinations(j, jp, expected):
    qns = QuantumNumbers(j, jp)
    assert qns.combination is expected
    assert qns.id() == 10 * j + jp


@pytest.mark.parametrize("j, jp", [(3, 0), (2, 1), (0, 2), (-1, 0)])
def test_unsupported_combinations(j, jp):
    with pytest.raises(UnsupportedWaveCombination) as excinfo:
        QuantumNumbers(j, jp)

    message = str(excinfo.value)
    assert f"j = {j}" in message, message
    assert f"j' = {jp}" in message, message


def test_unsupported_combination_is_a_value_error():
    with pytest.raises(ValueError):
        QuantumNumbers(3, 0)
    with pytest.raises(TriangleError):
        QuantumNumbers(3, 0)


@pytest.mark.parametrize("n", [-1, 2])
def test_invalid_subtraction_order(n):
    with pytest.raises(InvalidSubtractionOrder):
        QuantumNumbers(0, 0, n=n)


def test_explicit_composite_combination():
    qns = QuantumNumbers(1, 1, combination=WaveCombination.OMEGA)
    assert qns.combination.is_composite
    assert qns.id() == -11111

    with pytest.raises(TypeError):
        QuantumNumbers(1, 1, combination=11)


def test_negative_l():
    with pytest.raises(ValueError):
        QuantumNumbers(0, 0, l=-1)


def test_kallen():
    assert np.isclose(Kallen(STH_PI, M_PI**2, M_PI**2), 0.0, atol=1e-15)
    assert np.isclose(Kallen(1.0, 0.0, 0.0), 1.0)
    assert np.isclose(Kallen(0.5, M_PI**2, M_PI**2), 0.5 * (0.5 - STH_PI))


def test_triangle_masses_thresholds():
    masses = TriangleMasses(0.770, 0.145, M_PI, M_PI, 0.780, M_PI)

    assert np.isclose(masses.s_thresh, STH_PI)
    assert np.isclose(masses.t_thresh, STH_PI)
    assert np.isclose(masses.pseudo_threshold, (0.780 - M_PI) ** 2)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(p1=0.1, p2=0.5),
        dict(m1=-0.1),
        dict(exchange_width=-0.1),
    ],
)
def test_triangle_masses_validation(kwargs):
    args = dict(exchange_mass=0.770, exchange_width=0.145, m1=M_PI, m2=M_PI, p1=0.780, p2=M_PI)
    args.update(kwargs)
    with pytest.raises(ValueError):
        TriangleMasses(**args)
