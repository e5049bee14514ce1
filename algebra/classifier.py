"""
Qualitative classification of a 2×2 transformation.

Rules are checked top-down and the first match wins:
  1. singular            |det| ≈ 0
  2. identity            a≈1, b≈0, c≈0, d≈1
  3. rotation            a≈d, b≈−c, b≉0   (may include uniform scaling)
  4. scaling             b≈0, c≈0         (uniform when a≈d)
  5. shear X             a≈1, c≈0, d≈1, b≉0
  6. shear Y             a≈1, b≈0, d≈1, c≉0
  7. general             fallback

A matrix can satisfy several loose patterns at once, so the order of
_RULES is part of the contract.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from algebra.matrix import Matrix

# All classifier comparisons use this tolerance (looser than SINGULAR_EPS)
CLASSIFY_EPS: float = 1e-3


class TransformKind(str, Enum):
    SINGULAR            = "singular"
    IDENTITY            = "identity"
    ROTATION            = "rotation"
    UNIFORM_SCALING     = "uniform_scaling"
    NON_UNIFORM_SCALING = "non_uniform_scaling"
    SHEAR_X             = "shear_x"
    SHEAR_Y             = "shear_y"
    GENERAL             = "general"


@dataclass(frozen=True)
class Classification:
    kind:        TransformKind
    title:       str
    description: str
    params:      dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "kind":        self.kind.value,
            "title":       self.title,
            "description": self.description,
            "params":      dict(self.params),
        }


def _close(v1: float, v2: float) -> bool:
    return abs(v1 - v2) < CLASSIFY_EPS


# ── Rules ─────────────────────────────────────────────────────────────────────

def _is_singular(m: Matrix) -> bool:
    return _close(m.determinant, 0)


def _is_identity(m: Matrix) -> bool:
    return _close(m.a, 1) and _close(m.b, 0) and _close(m.c, 0) and _close(m.d, 1)


def _is_rotation(m: Matrix) -> bool:
    return _close(m.a, m.d) and _close(m.b, -m.c) and not _close(m.b, 0)


def _is_uniform_scaling(m: Matrix) -> bool:
    return _close(m.b, 0) and _close(m.c, 0) and _close(m.a, m.d)


def _is_scaling(m: Matrix) -> bool:
    return _close(m.b, 0) and _close(m.c, 0)


def _is_shear_x(m: Matrix) -> bool:
    return _close(m.a, 1) and _close(m.c, 0) and _close(m.d, 1) and not _close(m.b, 0)


def _is_shear_y(m: Matrix) -> bool:
    return _close(m.a, 1) and _close(m.b, 0) and _close(m.d, 1) and not _close(m.c, 0)


_RULES: tuple[tuple[TransformKind, Callable[[Matrix], bool]], ...] = (
    (TransformKind.SINGULAR,            _is_singular),
    (TransformKind.IDENTITY,            _is_identity),
    (TransformKind.ROTATION,            _is_rotation),
    (TransformKind.UNIFORM_SCALING,     _is_uniform_scaling),
    (TransformKind.NON_UNIFORM_SCALING, _is_scaling),
    (TransformKind.SHEAR_X,             _is_shear_x),
    (TransformKind.SHEAR_Y,             _is_shear_y),
)


# ── Descriptions ──────────────────────────────────────────────────────────────

_TITLES: dict[str, dict[TransformKind, str]] = {
    "en": {
        TransformKind.SINGULAR:            "Singular",
        TransformKind.IDENTITY:            "Identity",
        TransformKind.ROTATION:            "Rotation",
        TransformKind.UNIFORM_SCALING:     "Uniform Scaling",
        TransformKind.NON_UNIFORM_SCALING: "Non-uniform Scaling",
        TransformKind.SHEAR_X:             "Shear X",
        TransformKind.SHEAR_Y:             "Shear Y",
        TransformKind.GENERAL:             "General Linear Transform",
    },
    "ja": {
        TransformKind.SINGULAR:            "特異行列 (Singular)",
        TransformKind.IDENTITY:            "単位行列 (Identity)",
        TransformKind.ROTATION:            "回転 (Rotation)",
        TransformKind.UNIFORM_SCALING:     "一様拡大・縮小 (Uniform Scaling)",
        TransformKind.NON_UNIFORM_SCALING: "非一様拡大・縮小 (Non-uniform Scaling)",
        TransformKind.SHEAR_X:             "剪断 (Shear X)",
        TransformKind.SHEAR_Y:             "剪断 (Shear Y)",
        TransformKind.GENERAL:             "一般的な線形変換",
    },
}

_DESCRIPTIONS: dict[str, dict[TransformKind, str]] = {
    "en": {
        TransformKind.SINGULAR: (
            "The determinant is 0. The plane collapses onto a line or a point, "
            "so the transformation cannot be undone."
        ),
        TransformKind.IDENTITY: "Leaves every vector unchanged.",
        TransformKind.ROTATION: (
            "Rotates about the origin by roughly {angle_deg:.0f} degrees "
            "(may also include uniform scaling)."
        ),
        TransformKind.UNIFORM_SCALING: "Scales everything by a factor of {factor:.2f}.",
        TransformKind.NON_UNIFORM_SCALING: (
            "Scales by {scale_x_text} along the X axis and {scale_y_text} along the Y axis."
        ),
        TransformKind.SHEAR_X: (
            "Slides points parallel to the X axis (x shifts in proportion to y)."
        ),
        TransformKind.SHEAR_Y: (
            "Slides points parallel to the Y axis (y shifts in proportion to x)."
        ),
        TransformKind.GENERAL: (
            "Determinant: {determinant:.2f}. The basis vectors i and j each "
            "move to a new position."
        ),
    },
    "ja": {
        TransformKind.SINGULAR: (
            "行列式が0です。空間が直線または点に潰れてしまい、逆変換ができません。"
        ),
        TransformKind.IDENTITY: "何も変化させない変換です。",
        TransformKind.ROTATION: (
            "原点を中心に約 {angle_deg:.0f}度 回転させる変換です（拡大縮小を含む場合があります）。"
        ),
        TransformKind.UNIFORM_SCALING: "全体を {factor:.2f}倍 に拡大・縮小します。",
        TransformKind.NON_UNIFORM_SCALING: "X軸方向に {scale_x_text}倍、Y軸方向に {scale_y_text}倍 します。",
        TransformKind.SHEAR_X: "X軸方向に平行にズラす変換です（Y座標に依存してXが変化）。",
        TransformKind.SHEAR_Y: "Y軸方向に平行にズラす変換です（X座標に依存してYが変化）。",
        TransformKind.GENERAL: (
            "行列式: {determinant:.2f}。基底ベクトル i, j がそれぞれ新しい位置に移ります。"
        ),
    },
}

SUPPORTED_LANGUAGES = tuple(_TITLES)


def _params(kind: TransformKind, m: Matrix) -> dict:
    if kind is TransformKind.ROTATION:
        # Whole degrees, halves rounded up
        angle = math.degrees(math.atan2(m.c, m.a))
        return {"angle_deg": float(math.floor(angle + 0.5))}
    if kind is TransformKind.UNIFORM_SCALING:
        return {"factor": m.a}
    if kind is TransformKind.NON_UNIFORM_SCALING:
        return {"scale_x": m.a, "scale_y": m.d}
    if kind is TransformKind.GENERAL:
        return {"determinant": m.determinant}
    return {}


def _plain(x: float) -> str:
    """Number as entered: 2.0 -> "2", 1.2345678 -> "1.2345678"."""
    x = float(x)
    if x.is_integer():
        return str(int(x))
    return repr(x)


def match_kind(m: Matrix) -> TransformKind:
    """Return the first rule that matches `m`, or GENERAL."""
    for kind, predicate in _RULES:
        if predicate(m):
            return kind
    return TransformKind.GENERAL


def classify(m: Matrix, language: str = "en") -> Classification:
    """
    Classify `m` and build a human-readable summary.

    Args:
        m:        Matrix to classify.
        language: 'en' or 'ja'; anything else falls back to English.
    """
    lang   = language if language in _TITLES else "en"
    kind   = match_kind(m)
    params = _params(kind, m)
    return Classification(
        kind=kind,
        title=_TITLES[lang][kind],
        description=_DESCRIPTIONS[lang][kind].format(
            **params, **{f"{k}_text": _plain(v) for k, v in params.items()}
        ),
        params=params,
    )
