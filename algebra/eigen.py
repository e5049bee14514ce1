"""
Closed-form eigendecomposition for real 2×2 matrices.

  t = a + d,  det = a·d − b·c,  Δ = t² − 4·det
  λ1 = (t + √Δ) / 2 ≥ λ2 = (t − √Δ) / 2

Δ below DISCRIMINANT_FLOOR means a complex pair, which is not visualizable:
eigen() returns None. The floor sits slightly below zero so a repeated root
perturbed by float noise still counts as real.

Repeated roots of a non-diagonal matrix (e.g. a shear) yield two parallel
eigenvector estimates. No generalized eigenvector is computed for that case.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from algebra.matrix import SINGULAR_EPS, Matrix, Vector

log = logging.getLogger(__name__)

DISCRIMINANT_FLOOR: float = -1e-4


@dataclass(frozen=True)
class EigenResult:
    """Real eigenpairs; vectors[i] belongs to values[i], values[0] >= values[1]."""
    values:       tuple[float, float]
    vectors:      tuple[Vector, Vector]
    discriminant: float = 0.0

    @property
    def is_repeated(self) -> bool:
        return abs(self.values[0] - self.values[1]) < SINGULAR_EPS

    def drawable(self, index: int) -> bool:
        """False for a degenerate (zero) eigenvector."""
        return not self.vectors[index].is_zero

    def to_dict(self) -> dict:
        return {
            "values":       list(self.values),
            "vectors":      [v.to_list() for v in self.vectors],
            "drawable":     [self.drawable(0), self.drawable(1)],
            "discriminant": self.discriminant,
            "repeated":     self.is_repeated,
        }


def _is_diagonal(m: Matrix) -> bool:
    return abs(m.b) < SINGULAR_EPS and abs(m.c) < SINGULAR_EPS


def eigenvector(m: Matrix, lam: float) -> Vector:
    """
    Un-normalized direction solving (m − λI)·v = 0.

    Diagonal matrices return a basis axis. Otherwise the first usable row of
    (m − λI) gives the direction; with nothing usable the zero vector is
    returned and left for the caller to treat as "do not draw".
    """
    if _is_diagonal(m):
        if abs(lam - m.a) < SINGULAR_EPS:
            return Vector(1.0, 0.0)
        return Vector(0.0, 1.0)

    if abs(m.b) > SINGULAR_EPS:
        return Vector(m.b, lam - m.a)
    if abs(m.c) > SINGULAR_EPS:
        return Vector(lam - m.d, m.c)

    return Vector(0.0, 0.0)


def eigen(m: Matrix) -> EigenResult | None:
    """Eigenvalues and unit eigenvectors of `m`, or None for a complex spectrum."""
    trace = m.trace
    det   = m.determinant
    disc  = trace * trace - 4 * det

    if disc < DISCRIMINANT_FLOOR:
        log.debug("Complex eigenvalues for %s (Δ=%.6g)", m, disc)
        return None

    root = math.sqrt(max(0.0, disc))
    l1 = (trace + root) / 2
    l2 = (trace - root) / 2

    v1 = eigenvector(m, l1)
    v2 = eigenvector(m, l2)

    # Diagonal with a repeated root: every vector is an eigenvector, keep the axes
    if _is_diagonal(m) and abs(l1 - l2) < SINGULAR_EPS:
        v1 = Vector(1.0, 0.0)
        v2 = Vector(0.0, 1.0)

    return EigenResult(
        values=(l1, l2),
        vectors=(v1.normalized(), v2.normalized()),
        discriminant=disc,
    )
