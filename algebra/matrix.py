"""
2×2 matrix and 2D vector algebra.

Row-major convention: Matrix(a, b, c, d) is [[a, b], [c, d]] and maps
  x' = a·x + b·y
  y' = c·x + d·y

Both types are immutable; every operation returns a new instance.
Singular matrices are an expected input, so `invert` returns None instead
of raising.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# |det| below this has no inverse; also used for eigenvector component tests
SINGULAR_EPS: float = 1e-6


@dataclass(frozen=True)
class Vector:
    """A 2D point or direction."""
    x: float
    y: float

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)

    @property
    def length(self) -> float:
        return math.hypot(self.x, self.y)

    @property
    def is_zero(self) -> bool:
        return self.length < SINGULAR_EPS

    def normalized(self) -> Vector:
        """Unit vector in the same direction; a near-zero vector becomes (0, 0)."""
        length = self.length
        if length < SINGULAR_EPS:
            return Vector(0.0, 0.0)
        return Vector(self.x / length, self.y / length)

    def to_list(self) -> list[float]:
        return [self.x, self.y]


@dataclass(frozen=True)
class Matrix:
    """Real 2×2 linear map [[a, b], [c, d]]."""
    a: float
    b: float
    c: float
    d: float

    @classmethod
    def from_rows(cls, rows) -> Matrix:
        (a, b), (c, d) = rows
        return cls(float(a), float(b), float(c), float(d))

    @classmethod
    def from_columns(cls, col_i: Vector, col_j: Vector) -> Matrix:
        return cls(col_i.x, col_j.x, col_i.y, col_j.y)

    @classmethod
    def diagonal(cls, d1: float, d2: float) -> Matrix:
        return cls(d1, 0.0, 0.0, d2)

    def to_rows(self) -> list[list[float]]:
        return [[self.a, self.b], [self.c, self.d]]

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    @property
    def trace(self) -> float:
        return self.a + self.d

    @property
    def column_i(self) -> Vector:
        """Image of the basis vector (1, 0)."""
        return Vector(self.a, self.c)

    @property
    def column_j(self) -> Vector:
        """Image of the basis vector (0, 1)."""
        return Vector(self.b, self.d)


IDENTITY = Matrix(1.0, 0.0, 0.0, 1.0)


# ── Operations ────────────────────────────────────────────────────────────────

def transform(m: Matrix, v: Vector) -> Vector:
    """Matrix-vector product m·v."""
    return Vector(
        m.a * v.x + m.b * v.y,
        m.c * v.x + m.d * v.y,
    )


def multiply(m1: Matrix, m2: Matrix) -> Matrix:
    """
    Matrix product m1·m2.

    Order matters: "apply A, then B" is multiply(B, A).
    """
    return Matrix(
        a=m1.a * m2.a + m1.b * m2.c,
        b=m1.a * m2.b + m1.b * m2.d,
        c=m1.c * m2.a + m1.d * m2.c,
        d=m1.c * m2.b + m1.d * m2.d,
    )


def compose(first: Matrix, then: Matrix) -> Matrix:
    """Composite C = then·first (apply `first`, then `then`)."""
    return multiply(then, first)


def invert(m: Matrix) -> Matrix | None:
    """Exact algebraic inverse, or None when |det| < SINGULAR_EPS."""
    det = m.determinant
    if abs(det) < SINGULAR_EPS:
        return None
    inv_det = 1.0 / det
    return Matrix(
        a=m.d * inv_det,
        b=-m.b * inv_det,
        c=-m.c * inv_det,
        d=m.a * inv_det,
    )


def is_close(m1: Matrix, m2: Matrix, tol: float = 1e-4) -> bool:
    """Element-wise comparison within an absolute tolerance."""
    return (
        abs(m1.a - m2.a) < tol
        and abs(m1.b - m2.b) < tol
        and abs(m1.c - m2.c) < tol
        and abs(m1.d - m2.d) < tol
    )
