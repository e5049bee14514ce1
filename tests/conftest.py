"""
Root conftest — sys.path setup + shared matrix helpers and fixtures.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# ── Add project root to sys.path so `from algebra.x import ...` works ─────
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from algebra.matrix import Matrix, Vector  # noqa: E402


# ── Matrix helpers (plain functions, not fixtures) ──────────────────────────

def random_matrices(n: int = 50, seed: int = 7, scale: float = 3.0) -> list[Matrix]:
    """Deterministic batch of random matrices with entries in [-scale, scale]."""
    rng = np.random.default_rng(seed)
    return [Matrix(*map(float, row)) for row in rng.uniform(-scale, scale, size=(n, 4))]


def random_vectors(n: int = 20, seed: int = 11) -> list[Vector]:
    rng = np.random.default_rng(seed)
    return [Vector(float(x), float(y)) for x, y in rng.uniform(-5, 5, size=(n, 2))]


def assert_vec_close(v: Vector, expected: tuple[float, float], tol: float = 1e-9) -> None:
    assert v.x == pytest.approx(expected[0], abs=tol)
    assert v.y == pytest.approx(expected[1], abs=tol)


# ── Shared fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def rotate90() -> Matrix:
    return Matrix(0.0, -1.0, 1.0, 0.0)


@pytest.fixture
def shear_x() -> Matrix:
    return Matrix(1.0, 1.0, 0.0, 1.0)


@pytest.fixture
def scale2() -> Matrix:
    return Matrix(2.0, 0.0, 0.0, 2.0)


@pytest.fixture
def singular() -> Matrix:
    """Projection onto the X axis."""
    return Matrix(1.0, 0.0, 0.0, 0.0)
