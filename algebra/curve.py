"""
Unit circle sampling and its image under a 2×2 map.

The circle is a closed polyline of CIRCLE_SEGMENTS segments (4° steps):
CIRCLE_SEGMENTS + 1 points, the last one equal to the first. Mapping each
point through the matrix gives the image ellipse, which degenerates to a
segment or a point for singular matrices.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from algebra.matrix import Matrix, Vector, transform

CIRCLE_SEGMENTS: int = 90


@dataclass(frozen=True)
class CurvePair:
    unit_circle: tuple[Vector, ...]
    image:       tuple[Vector, ...]

    def to_dict(self) -> dict:
        return {
            "unit_circle": [p.to_list() for p in self.unit_circle],
            "image":       [p.to_list() for p in self.image],
        }


def unit_circle() -> tuple[Vector, ...]:
    theta = np.linspace(0.0, 2.0 * np.pi, CIRCLE_SEGMENTS + 1)
    points = [Vector(float(x), float(y)) for x, y in zip(np.cos(theta), np.sin(theta))]
    # Close exactly; sin(2π) is only ≈ 0
    points[-1] = points[0]
    return tuple(points)


def image_curve(m: Matrix, points: tuple[Vector, ...] | None = None) -> tuple[Vector, ...]:
    if points is None:
        points = unit_circle()
    return tuple(transform(m, p) for p in points)


def sample_curves(m: Matrix) -> CurvePair:
    circle = unit_circle()
    return CurvePair(unit_circle=circle, image=image_curve(m, circle))
