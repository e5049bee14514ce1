"""
Diagonalization M = P·D·P⁻¹ built from eigensolver output.

P holds the eigenvectors as columns, D the eigenvalues in the same order.
When the eigenvectors are parallel or degenerate P is singular, P⁻¹ is None
and the decomposition is not available for display.

This is an eigendecomposition, not an SVD: for a non-symmetric M, P is not
orthogonal and P⁻¹ differs from Pᵀ.
"""

from __future__ import annotations

from dataclasses import dataclass

from algebra.eigen import EigenResult, eigen
from algebra.matrix import Matrix, invert, multiply


@dataclass(frozen=True)
class Diagonalization:
    p:     Matrix
    d:     Matrix
    p_inv: Matrix | None

    @property
    def available(self) -> bool:
        return self.p_inv is not None

    def reconstruct(self) -> Matrix | None:
        """P·D·P⁻¹, or None when P is singular."""
        if self.p_inv is None:
            return None
        return multiply(multiply(self.p, self.d), self.p_inv)

    def to_dict(self) -> dict:
        return {
            "p":         self.p.to_rows(),
            "d":         self.d.to_rows(),
            "p_inv":     self.p_inv.to_rows() if self.p_inv is not None else None,
            "available": self.available,
        }


def diagonalize(result: EigenResult) -> Diagonalization:
    l1, l2 = result.values
    v1, v2 = result.vectors
    p = Matrix.from_columns(v1, v2)
    return Diagonalization(p=p, d=Matrix.diagonal(l1, l2), p_inv=invert(p))


def diagonalize_matrix(m: Matrix) -> Diagonalization | None:
    """eigen() + diagonalize(); None when the spectrum is complex."""
    result = eigen(m)
    if result is None:
        return None
    return diagonalize(result)
