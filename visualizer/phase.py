"""
Animation phases: identity → A → composite (B·A).

State is explicit: a PhaseClock value per visualizer session, never a
module-level global, so independent sessions cannot interfere.

Every new sequence (or input edit) bumps the clock's generation. A scheduled
transition carries the generation it was created for and is ignored when
  - the generation no longer matches (a newer sequence or an edit happened), or
  - the clock is already at or past the target phase.
Overlapping sequences therefore never reorder the visible phase, and nothing
has to be cancelled.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Protocol

log = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE      = "idle"       # identity shown
    STEP_A    = "step_a"     # A shown
    COMPOSITE = "composite"  # B·A shown

    @property
    def order(self) -> int:
        return _PHASE_ORDER[self]


_PHASE_ORDER = {Phase.IDLE: 0, Phase.STEP_A: 1, Phase.COMPOSITE: 2}


@dataclass(frozen=True)
class PhaseSchedule:
    """Delays (seconds from 'play') at which each later phase becomes current."""
    step_a_delay:    float = 0.8
    composite_delay: float = 2.0

    def __post_init__(self) -> None:
        if self.step_a_delay < 0 or self.composite_delay < self.step_a_delay:
            raise ValueError(
                f"Invalid phase schedule: step_a_delay={self.step_a_delay}, "
                f"composite_delay={self.composite_delay}"
            )

    def transitions(self) -> list[tuple[Phase, float]]:
        return [
            (Phase.STEP_A,    self.step_a_delay),
            (Phase.COMPOSITE, self.composite_delay),
        ]


@dataclass(frozen=True)
class PhaseClock:
    phase:      Phase = Phase.COMPOSITE
    generation: int = 0
    started_at: float | None = None

    def restart(self, now: float) -> PhaseClock:
        """Begin a new identity → A → composite sequence."""
        return PhaseClock(Phase.IDLE, self.generation + 1, now)

    def settle(self) -> PhaseClock:
        """Jump straight to the composite view, invalidating pending transitions."""
        return PhaseClock(Phase.COMPOSITE, self.generation + 1, None)

    def advance(self, phase: Phase, generation: int) -> PhaseClock:
        """Apply a scheduled transition, or return self unchanged if it is stale."""
        if generation != self.generation or phase.order <= self.phase.order:
            return self
        return replace(self, phase=phase)

    def phase_at(self, now: float, schedule: PhaseSchedule) -> Phase:
        """Phase derived purely from the start timestamp, for pull-based consumers."""
        if self.started_at is None:
            return self.phase
        elapsed = now - self.started_at
        derived = Phase.IDLE
        for phase, delay in schedule.transitions():
            if elapsed >= delay:
                derived = phase
        # Never report a phase earlier than one already applied
        return derived if derived.order >= self.phase.order else self.phase


class PhaseTarget(Protocol):
    def restart_phases(self, now: float) -> int: ...
    def advance_phase(self, phase: Phase, generation: int) -> bool: ...


class PhaseSequencer:
    """
    Drives PhaseClock transitions on the running asyncio loop.

    play() restarts the target's clock and schedules one task per transition.
    Tasks are never cancelled; stale ones are no-ops.
    """

    def __init__(
        self,
        schedule: PhaseSchedule,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.schedule = schedule
        self.clock = clock
        self._tasks: set[asyncio.Task] = set()

    def play(self, target: PhaseTarget) -> int:
        generation = target.restart_phases(self.clock())
        for phase, delay in self.schedule.transitions():
            task = asyncio.create_task(self._fire(target, phase, generation, delay))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
        log.debug("Phase sequence %d scheduled (%d transitions)",
                  generation, len(self.schedule.transitions()))
        return generation

    async def _fire(self, target: PhaseTarget, phase: Phase, generation: int, delay: float) -> None:
        await asyncio.sleep(delay)
        if target.advance_phase(phase, generation):
            log.debug("Phase → %s (generation %d)", phase.value, generation)
        else:
            log.debug("Stale transition to %s ignored (generation %d)", phase.value, generation)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every scheduled transition to fire."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks))
