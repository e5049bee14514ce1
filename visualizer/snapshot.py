"""
Snapshot — every derived quantity the rendering layer needs, in one record.

compute_snapshot(A, B, phase) is a pure function of its inputs and is
recomputed on each change; nothing is cached.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from algebra.classifier import Classification, classify
from algebra.curve import CurvePair, sample_curves
from algebra.diagonalize import Diagonalization, diagonalize
from algebra.eigen import EigenResult, eigen
from algebra.matrix import IDENTITY, Matrix, Vector, compose, transform
from visualizer.phase import Phase

# |det(A)| below this and the "apply inverse" action is not offered
INVERSE_ACTION_EPS: float = 1e-4

# Parallelogram fill by orientation (det >= 0 / det < 0)
FILL_PRESERVED = "#3b82f6"
FILL_FLIPPED   = "#ef4444"


@dataclass(frozen=True)
class Snapshot:
    matrix_a:          Matrix
    matrix_b:          Matrix
    matrix_c:          Matrix
    phase:             Phase
    current:           Matrix
    basis_i:           Vector
    basis_j:           Vector
    determinant:       float
    classification:    Classification
    eigen:             EigenResult | None
    diagonalization:   Diagonalization | None
    curves:            CurvePair
    inverse_available: bool

    @property
    def basis_sum(self) -> Vector:
        """Fourth vertex of the transformed unit square."""
        return self.basis_i + self.basis_j

    @property
    def area(self) -> float:
        return abs(self.determinant)

    @property
    def orientation(self) -> str:
        return "preserved" if self.determinant >= 0 else "flipped"

    @property
    def area_fill(self) -> str:
        return FILL_PRESERVED if self.determinant >= 0 else FILL_FLIPPED

    @property
    def is_finite(self) -> bool:
        """False when any derived number overflowed to inf or nan."""
        return _all_finite(self.to_dict())

    def to_dict(self) -> dict:
        return {
            "matrix_a":          self.matrix_a.to_rows(),
            "matrix_b":          self.matrix_b.to_rows(),
            "matrix_c":          self.matrix_c.to_rows(),
            "phase":             self.phase.value,
            "current":           self.current.to_rows(),
            "basis_i":           self.basis_i.to_list(),
            "basis_j":           self.basis_j.to_list(),
            "basis_sum":         self.basis_sum.to_list(),
            "determinant":       self.determinant,
            "area":              self.area,
            "orientation":       self.orientation,
            "area_fill":         self.area_fill,
            "classification":    self.classification.to_dict(),
            "eigen":             self.eigen.to_dict() if self.eigen else None,
            "diagonalization":   self.diagonalization.to_dict() if self.diagonalization else None,
            "curves":            self.curves.to_dict(),
            "inverse_available": self.inverse_available,
        }


def select_matrix(phase: Phase, a: Matrix, c: Matrix) -> Matrix:
    """The matrix shown in `phase`: identity, A, or the composite C."""
    if phase is Phase.IDLE:
        return IDENTITY
    if phase is Phase.STEP_A:
        return a
    return c


def compute_snapshot(
    a: Matrix,
    b: Matrix,
    phase: Phase = Phase.COMPOSITE,
    language: str = "en",
) -> Snapshot:
    c       = compose(a, b)
    current = select_matrix(phase, a, c)
    result  = eigen(current)

    return Snapshot(
        matrix_a=a,
        matrix_b=b,
        matrix_c=c,
        phase=phase,
        current=current,
        basis_i=transform(current, Vector(1.0, 0.0)),
        basis_j=transform(current, Vector(0.0, 1.0)),
        determinant=current.determinant,
        classification=classify(current, language),
        eigen=result,
        diagonalization=diagonalize(result) if result is not None else None,
        curves=sample_curves(current),
        inverse_available=abs(a.determinant) >= INVERSE_ACTION_EPS,
    )


def _all_finite(value) -> bool:
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, dict):
        return all(_all_finite(v) for v in value.values())
    if isinstance(value, (list, tuple)):
        return all(_all_finite(v) for v in value)
    return True


def is_representable(a: Matrix, b: Matrix) -> bool:
    """
    True when every phase of (A, B) yields finite outputs.

    Finite but huge entries (e.g. 1e200) overflow in the determinant or the
    composite and cannot be serialized as JSON numbers.
    """
    return all(
        compute_snapshot(a, b, phase).is_finite
        for phase in (Phase.STEP_A, Phase.COMPOSITE)
    )
