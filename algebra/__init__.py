"""
2×2 linear-algebra core.

Pure functions over immutable Matrix / Vector values. Absent results
(no inverse, complex spectrum, singular P) are returned as None.
"""

from __future__ import annotations

from algebra.classifier import CLASSIFY_EPS, Classification, TransformKind, classify
from algebra.curve import CIRCLE_SEGMENTS, CurvePair, image_curve, sample_curves, unit_circle
from algebra.diagonalize import Diagonalization, diagonalize, diagonalize_matrix
from algebra.eigen import DISCRIMINANT_FLOOR, EigenResult, eigen
from algebra.matrix import (
    IDENTITY,
    SINGULAR_EPS,
    Matrix,
    Vector,
    compose,
    invert,
    is_close,
    multiply,
    transform,
)

__all__ = [
    "CIRCLE_SEGMENTS",
    "CLASSIFY_EPS",
    "DISCRIMINANT_FLOOR",
    "IDENTITY",
    "SINGULAR_EPS",
    "Classification",
    "CurvePair",
    "Diagonalization",
    "EigenResult",
    "Matrix",
    "TransformKind",
    "Vector",
    "classify",
    "compose",
    "diagonalize",
    "diagonalize_matrix",
    "eigen",
    "image_curve",
    "invert",
    "is_close",
    "multiply",
    "sample_curves",
    "transform",
    "unit_circle",
]
