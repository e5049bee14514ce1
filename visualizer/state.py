"""
VisualizerSession — the mutable edge around the pure algebra core.

Holds the two input matrices A and B, the phase clock, and any in-progress
field text. Every edit replaces a matrix with a new immutable value; derived
outputs are recomputed from scratch by snapshot().

Field editing rules:
  - a finite number commits to the matrix
  - "" or "-" is kept as draft text, the committed value is untouched
  - anything else is rejected and the previous value is kept, including
    numbers so large that the derived outputs overflow
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import replace
from enum import Enum

from algebra.matrix import IDENTITY, Matrix, compose, invert
from visualizer.phase import Phase, PhaseClock, PhaseSchedule
from visualizer.snapshot import (
    INVERSE_ACTION_EPS,
    Snapshot,
    compute_snapshot,
    is_representable,
    select_matrix,
)

log = logging.getLogger(__name__)

TARGETS = ("A", "B")
FIELD_KEYS = ("a", "b", "c", "d")

# Presets set A and reset B to identity
PRESETS: dict[str, Matrix] = {
    "identity": IDENTITY,
    "rotate90": Matrix(0.0, -1.0, 1.0, 0.0),
    "scale2":   Matrix(2.0, 0.0, 0.0, 2.0),
    "shear_x":  Matrix(1.0, 1.0, 0.0, 1.0),
}

_DRAFT_TEXT = {"", "-"}


class FieldEdit(str, Enum):
    COMMITTED = "committed"
    DRAFT     = "draft"
    REJECTED  = "rejected"


def parse_field(raw: str) -> float | None:
    """Parse matrix-cell text; None when it is not a finite number."""
    try:
        value = float(raw.strip())
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


class VisualizerSession:
    """One independent visualizer instance."""

    def __init__(
        self,
        matrix_a: Matrix = IDENTITY,
        matrix_b: Matrix = IDENTITY,
        language: str = "en",
    ):
        self.matrix_a = matrix_a
        self.matrix_b = matrix_b
        self.language = language
        self.clock = PhaseClock()
        self.drafts: dict[tuple[str, str], str] = {}
        self.created_at = time.time()

    # ── Inputs ─────────────────────────────────────────────────────────────

    def set_field(self, target: str, key: str, raw: str) -> FieldEdit:
        """
        Apply text typed into one matrix cell.

        Raises ValueError for an unknown target or key; bad *text* is never
        an error, it just leaves the committed value alone.
        """
        if target not in TARGETS:
            raise ValueError(f"Unknown matrix target {target!r}; expected one of {TARGETS}")
        if key not in FIELD_KEYS:
            raise ValueError(f"Unknown matrix field {key!r}; expected one of {FIELD_KEYS}")

        value = parse_field(raw)
        if value is None:
            if raw.strip() in _DRAFT_TEXT:
                self.drafts[(target, key)] = raw.strip()
                return FieldEdit.DRAFT
            log.debug("Rejected non-numeric input %r for %s.%s", raw, target, key)
            return FieldEdit.REJECTED

        if target == "A":
            matrix_a, matrix_b = replace(self.matrix_a, **{key: value}), self.matrix_b
        else:
            matrix_a, matrix_b = self.matrix_a, replace(self.matrix_b, **{key: value})
        if not is_representable(matrix_a, matrix_b):
            log.debug("Rejected out-of-range input %r for %s.%s", raw, target, key)
            return FieldEdit.REJECTED

        self.matrix_a, self.matrix_b = matrix_a, matrix_b
        self.drafts.pop((target, key), None)
        # Editing always shows the final result
        self.clock = self.clock.settle()
        return FieldEdit.COMMITTED

    def apply_preset(self, name: str) -> None:
        """Set A to a named preset and reset B to identity. Unknown name → KeyError."""
        self.matrix_a = PRESETS[name]
        self.matrix_b = IDENTITY
        self.drafts.clear()
        self.clock = self.clock.settle()

    @property
    def inverse_available(self) -> bool:
        return abs(self.matrix_a.determinant) >= INVERSE_ACTION_EPS

    def apply_inverse(self) -> bool:
        """Set B = A⁻¹ so the composite becomes identity; no-op when A is singular."""
        if not self.inverse_available:
            return False
        inverse = invert(self.matrix_a)
        if inverse is None or not is_representable(self.matrix_a, inverse):
            return False
        self.matrix_b = inverse
        self.drafts = {k: v for k, v in self.drafts.items() if k[0] != "B"}
        self.clock = self.clock.settle()
        return True

    # ── Phases ─────────────────────────────────────────────────────────────

    @property
    def phase(self) -> Phase:
        return self.clock.phase

    def restart_phases(self, now: float) -> int:
        self.clock = self.clock.restart(now)
        return self.clock.generation

    def advance_phase(self, phase: Phase, generation: int) -> bool:
        """Apply a scheduled transition; False when it was stale."""
        advanced = self.clock.advance(phase, generation)
        changed = advanced is not self.clock
        self.clock = advanced
        return changed

    def phase_at(self, now: float, schedule: PhaseSchedule) -> Phase:
        return self.clock.phase_at(now, schedule)

    # ── Outputs ────────────────────────────────────────────────────────────

    def current_matrix(self) -> Matrix:
        c = compose(self.matrix_a, self.matrix_b)
        return select_matrix(self.phase, self.matrix_a, c)

    def snapshot(self, phase: Phase | None = None) -> Snapshot:
        return compute_snapshot(
            self.matrix_a,
            self.matrix_b,
            phase if phase is not None else self.phase,
            self.language,
        )

    def to_dict(self) -> dict:
        return {
            "phase":      self.phase.value,
            "generation": self.clock.generation,
            "drafts":     {f"{t}.{k}": v for (t, k), v in self.drafts.items()},
            "snapshot":   self.snapshot().to_dict(),
        }
