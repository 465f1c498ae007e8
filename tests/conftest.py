"""
Pytest configuration.

This codebase treats `src/` as a top-level module directory (it is added to
`sys.path` by `main.py` when running scripts). For `pytest`, we add it here so
tests can import `model`, `quadrature`, `feynman`, `dispersive` and `triangle`
without each test needing to manage sys.path.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).resolve().parent.parent / "src"
sys.path.insert(0, str(SRC_DIR))


@pytest.fixture
def quadrature():
    from quadrature import GaussLegendreCache

    cache = GaussLegendreCache(100)
    cache.ensure_ready()
    return cache


@pytest.fixture(scope="module")
def omega():
    from triangle import omega_triangle

    return omega_triangle()
