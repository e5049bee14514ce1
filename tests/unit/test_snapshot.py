"""
Unit tests for visualizer/snapshot.py
"""

import json

import pytest

from algebra.classifier import TransformKind
from algebra.matrix import IDENTITY, Matrix, Vector, multiply
from visualizer.phase import Phase
from visualizer.snapshot import (
    FILL_FLIPPED,
    FILL_PRESERVED,
    INVERSE_ACTION_EPS,
    compute_snapshot,
    is_representable,
    select_matrix,
)


class TestSelectMatrix:

    def test_idle_is_identity(self):
        assert select_matrix(Phase.IDLE, Matrix(2, 0, 0, 2), Matrix(3, 0, 0, 3)) == IDENTITY

    def test_step_a_is_a(self):
        assert select_matrix(Phase.STEP_A, Matrix(2, 0, 0, 2), Matrix(3, 0, 0, 3)) == Matrix(2, 0, 0, 2)

    def test_composite_is_c(self):
        assert select_matrix(Phase.COMPOSITE, Matrix(2, 0, 0, 2), Matrix(3, 0, 0, 3)) == Matrix(3, 0, 0, 3)


class TestComputeSnapshot:

    def test_composite_is_b_times_a(self, rotate90, shear_x):
        snap = compute_snapshot(rotate90, shear_x)
        assert snap.matrix_c == multiply(shear_x, rotate90)
        assert snap.current == snap.matrix_c

    def test_basis_vectors_are_columns(self):
        snap = compute_snapshot(Matrix(1, 2, 3, 4), IDENTITY)
        assert snap.basis_i == Vector(1, 3)
        assert snap.basis_j == Vector(2, 4)
        assert snap.basis_sum == Vector(3, 7)

    def test_determinant_and_area(self):
        snap = compute_snapshot(Matrix(1, 2, 3, 4), IDENTITY)
        assert snap.determinant == pytest.approx(-2.0)
        assert snap.area == pytest.approx(2.0)

    def test_positive_det_fill(self, scale2):
        snap = compute_snapshot(scale2, IDENTITY)
        assert snap.orientation == "preserved"
        assert snap.area_fill == FILL_PRESERVED

    def test_negative_det_fill(self):
        snap = compute_snapshot(Matrix(1, 0, 0, -1), IDENTITY)
        assert snap.orientation == "flipped"
        assert snap.area_fill == FILL_FLIPPED

    def test_zero_det_counts_as_preserved(self, singular):
        assert compute_snapshot(singular, IDENTITY).area_fill == FILL_PRESERVED

    def test_idle_phase_shows_identity(self, rotate90):
        snap = compute_snapshot(rotate90, IDENTITY, Phase.IDLE)
        assert snap.current == IDENTITY
        assert snap.classification.kind is TransformKind.IDENTITY

    def test_step_a_phase_ignores_b(self, rotate90, scale2):
        snap = compute_snapshot(rotate90, scale2, Phase.STEP_A)
        assert snap.current == rotate90
        assert snap.classification.kind is TransformKind.ROTATION

    def test_complex_spectrum_has_no_eigen_or_diagonalization(self, rotate90):
        snap = compute_snapshot(rotate90, IDENTITY)
        assert snap.eigen is None
        assert snap.diagonalization is None

    def test_shear_diagonalization_unavailable(self, shear_x):
        snap = compute_snapshot(shear_x, IDENTITY)
        assert snap.eigen is not None
        assert snap.diagonalization is not None
        assert not snap.diagonalization.available

    def test_inverse_available_depends_on_a_only(self, singular):
        # Composite can be singular while A is not, and vice versa
        assert compute_snapshot(IDENTITY, singular).inverse_available is True
        assert compute_snapshot(singular, IDENTITY).inverse_available is False

    def test_inverse_threshold(self):
        assert INVERSE_ACTION_EPS == 1e-4

    def test_language_passes_through(self, shear_x):
        assert compute_snapshot(shear_x, IDENTITY, language="ja").classification.title == "剪断 (Shear X)"

    def test_curves_use_current_matrix(self, scale2):
        snap = compute_snapshot(scale2, IDENTITY)
        assert snap.curves.image[0] == Vector(2.0, 0.0)


class TestToDict:

    def test_json_serializable(self, shear_x):
        data = compute_snapshot(shear_x, Matrix(0, -1, 1, 0)).to_dict()
        json.dumps(data)

    def test_absent_results_are_null(self, rotate90):
        data = compute_snapshot(rotate90, IDENTITY).to_dict()
        assert data["eigen"] is None
        assert data["diagonalization"] is None

    def test_fields(self):
        data = compute_snapshot(Matrix(2, 0, 0, 3), IDENTITY).to_dict()
        assert data["phase"] == "composite"
        assert data["matrix_c"] == [[2.0, 0.0], [0.0, 3.0]]
        assert data["basis_i"] == [2.0, 0.0]
        assert data["basis_j"] == [0.0, 3.0]
        assert data["determinant"] == 6.0
        assert data["area_fill"] == FILL_PRESERVED
        assert data["classification"]["kind"] == "non_uniform_scaling"
        assert data["eigen"]["values"] == [3.0, 2.0]
        assert data["diagonalization"]["available"] is True
        assert len(data["curves"]["image"]) == 91
        assert data["inverse_available"] is True


# ── Range ────────────────────────────────────────────────────────────────────

class TestRepresentable:

    def test_ordinary_matrices(self, shear_x, rotate90):
        assert compute_snapshot(shear_x, rotate90).is_finite
        assert is_representable(shear_x, rotate90)

    def test_huge_entry_overflows(self):
        snap = compute_snapshot(Matrix(1e200, 0, 0, 1e200), IDENTITY)
        assert not snap.is_finite
        assert not is_representable(Matrix(1e200, 0, 0, 1e200), IDENTITY)

    def test_overflow_only_in_composite(self):
        a, b = Matrix(1e100, 0, 0, 1), Matrix(1e250, 0, 0, 1)
        assert compute_snapshot(a, b, Phase.STEP_A).is_finite
        assert not is_representable(a, b)
