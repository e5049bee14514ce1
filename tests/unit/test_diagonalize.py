"""
Unit tests for algebra/diagonalize.py
"""

import pytest

from algebra.diagonalize import Diagonalization, diagonalize, diagonalize_matrix
from algebra.eigen import eigen
from algebra.matrix import IDENTITY, Matrix, is_close, multiply
from tests.conftest import random_matrices


class TestDiagonalize:

    def test_p_columns_are_eigenvectors(self):
        result = eigen(Matrix(2, 1, 1, 2))
        diag = diagonalize(result)
        assert diag.p.column_i == result.vectors[0]
        assert diag.p.column_j == result.vectors[1]

    def test_d_holds_eigenvalues_in_order(self):
        diag = diagonalize(eigen(Matrix(2, 0, 0, 3)))
        assert diag.d == Matrix(3.0, 0.0, 0.0, 2.0)

    def test_p_inv_is_inverse_of_p(self):
        diag = diagonalize(eigen(Matrix(2, 1, 1, 2)))
        assert diag.available
        assert is_close(multiply(diag.p_inv, diag.p), IDENTITY)

    def test_reconstructs_original(self):
        m = Matrix(4, 1, 2, 3)
        diag = diagonalize_matrix(m)
        assert is_close(diag.reconstruct(), m)

    def test_reconstructs_random_well_separated(self):
        checked = 0
        for m in random_matrices(100, seed=9):
            result = eigen(m)
            if result is None or result.discriminant < 0.1:
                continue
            diag = diagonalize(result)
            assert diag.available
            assert is_close(diag.reconstruct(), m, tol=1e-6)
            checked += 1
        assert checked > 0

    def test_non_symmetric_p_inv_differs_from_transpose(self):
        diag = diagonalize_matrix(Matrix(1, 2, 0, 3))
        p_t = Matrix(diag.p.a, diag.p.c, diag.p.b, diag.p.d)
        assert not is_close(diag.p_inv, p_t)


class TestUnavailable:

    def test_shear_has_singular_p(self, shear_x):
        diag = diagonalize_matrix(shear_x)
        assert diag is not None
        assert diag.p_inv is None
        assert not diag.available
        assert diag.reconstruct() is None

    def test_complex_spectrum_returns_none(self, rotate90):
        assert diagonalize_matrix(rotate90) is None

    def test_to_dict_with_missing_inverse(self, shear_x):
        data = diagonalize_matrix(shear_x).to_dict()
        assert data["p_inv"] is None
        assert data["available"] is False
        assert data["p"] == [[1.0, 1.0], [0.0, 0.0]]

    def test_to_dict_available(self):
        data = diagonalize_matrix(Matrix(2, 0, 0, 3)).to_dict()
        assert data["available"] is True
        assert data["d"] == [[3.0, 0.0], [0.0, 2.0]]
        # P swaps the axes, so it is its own inverse
        assert data["p_inv"] == [[0.0, 1.0], [1.0, 0.0]]


class TestDataclass:

    def test_frozen(self):
        diag = Diagonalization(p=IDENTITY, d=IDENTITY, p_inv=IDENTITY)
        with pytest.raises(AttributeError):
            diag.p_inv = None
