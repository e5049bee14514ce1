"""
LinViz Engine — FastAPI backend for the 2D linear-transformation visualizer.

POST   /analyze                 Stateless: A, B, phase → full snapshot
POST   /sessions                Create a visualizer session
GET    /sessions/{id}           Current snapshot, phase and draft field text
PATCH  /sessions/{id}/field     Type into one matrix cell
POST   /sessions/{id}/preset    Load a preset into A (B resets to identity)
POST   /sessions/{id}/inverse   Set B = A⁻¹ (no-op when A is singular)
POST   /sessions/{id}/play      Start identity → A → B·A phase sequence
DELETE /sessions/{id}           Drop a session

Everything returned is plain numeric data; drawing it is the client's job.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Literal

import sys as _sys

_sys.path.insert(0, str(Path(__file__).resolve().parent))

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator, model_validator

from algebra.classifier import SUPPORTED_LANGUAGES
from algebra.matrix import Matrix
from config.settings import settings
from visualizer.phase import Phase, PhaseSequencer
from visualizer.snapshot import compute_snapshot, is_representable
from visualizer.state import PRESETS, VisualizerSession

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("linviz.api")

# ── Phase driver ─────────────────────────────────────────────────────────────
sequencer = PhaseSequencer(settings.phase_schedule)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    # Let in-flight phase transitions finish instead of leaving orphan tasks
    await sequencer.drain()


# ── App ──────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="LinViz Engine",
    description="2×2 matrix composition, inversion, eigendecomposition and ellipse mapping.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── In-memory session store ───────────────────────────────────────────────────
_sessions: dict[str, VisualizerSession] = {}
_sessions_lock = asyncio.Lock()


def _get_session(session_id: str) -> VisualizerSession:
    session = _sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found.")
    return session


def _evict_oldest() -> None:
    while len(_sessions) > settings.max_sessions:
        oldest = min(_sessions, key=lambda sid: _sessions[sid].created_at)
        del _sessions[oldest]
        log.info("Evicted session %s (limit %d)", oldest, settings.max_sessions)


# ── Request / Response models ─────────────────────────────────────────────────

def _check_2x2(rows: list[list[float]]) -> list[list[float]]:
    if len(rows) != 2 or any(len(row) != 2 for row in rows):
        raise ValueError("matrix must be 2×2: [[a, b], [c, d]]")
    return rows


def _check_range(a: list[list[float]], b: list[list[float]]) -> None:
    if not is_representable(Matrix.from_rows(a), Matrix.from_rows(b)):
        raise ValueError("matrix entries too large: derived values overflow")


class AnalyzeRequest(BaseModel):
    a:        list[list[float]] = Field(...,                    description="Matrix A as [[a, b], [c, d]] (applied first)")
    b:        list[list[float]] = Field([[1, 0], [0, 1]],       description="Matrix B (applied second)")
    phase:    Phase             = Field(Phase.COMPOSITE,        description="Which matrix is current: idle | step_a | composite")
    language: str               = Field(settings.default_language, description="Classification language: 'en' or 'ja'")

    @field_validator("a", "b")
    @classmethod
    def check_shape(cls, rows: list[list[float]]) -> list[list[float]]:
        return _check_2x2(rows)

    @model_validator(mode="after")
    def check_range(self):
        _check_range(self.a, self.b)
        return self


class CreateSessionRequest(BaseModel):
    a:        list[list[float]] = Field([[1, 0], [0, 1]])
    b:        list[list[float]] = Field([[1, 0], [0, 1]])
    language: str               = Field(settings.default_language)

    @field_validator("a", "b")
    @classmethod
    def check_shape(cls, rows: list[list[float]]) -> list[list[float]]:
        return _check_2x2(rows)

    @model_validator(mode="after")
    def check_range(self):
        _check_range(self.a, self.b)
        return self


class FieldRequest(BaseModel):
    target: Literal["A", "B"]
    key:    Literal["a", "b", "c", "d"]
    value:  str = Field(..., description="Raw text typed into the cell")


class PresetRequest(BaseModel):
    name: str = Field(..., description=f"One of: {', '.join(PRESETS)}")


class CreateSessionResponse(BaseModel):
    session_id: str
    snapshot:   dict


# ── Stateless endpoints ───────────────────────────────────────────────────────

@app.post("/analyze")
async def analyze(request: AnalyzeRequest):
    """Compute every derived output for A, B and a phase."""
    snap = compute_snapshot(
        Matrix.from_rows(request.a),
        Matrix.from_rows(request.b),
        request.phase,
        request.language,
    )
    return snap.to_dict()


@app.get("/presets")
async def list_presets():
    return {name: m.to_rows() for name, m in PRESETS.items()}


@app.get("/health")
async def health():
    return {
        "status":     "ok",
        "sessions":   len(_sessions),
        "languages":  list(SUPPORTED_LANGUAGES),
        "version":    "1.0.0",
    }


# ── Session endpoints ─────────────────────────────────────────────────────────

@app.post("/sessions", response_model=CreateSessionResponse, status_code=201)
async def create_session(request: CreateSessionRequest | None = None):
    """Create an independent visualizer session."""
    request = request or CreateSessionRequest()
    session = VisualizerSession(
        matrix_a=Matrix.from_rows(request.a),
        matrix_b=Matrix.from_rows(request.b),
        language=request.language,
    )
    session_id = uuid.uuid4().hex[:10]
    async with _sessions_lock:
        _sessions[session_id] = session
        _evict_oldest()

    log.info("[%s] Session created", session_id)
    return CreateSessionResponse(session_id=session_id, snapshot=session.snapshot().to_dict())


@app.get("/sessions/{session_id}")
async def get_session(session_id: str):
    async with _sessions_lock:
        session = _get_session(session_id)
        return session.to_dict()


@app.patch("/sessions/{session_id}/field")
async def set_field(session_id: str, request: FieldRequest):
    """Apply cell text; non-numeric text leaves the matrix unchanged."""
    async with _sessions_lock:
        session = _get_session(session_id)
        outcome = session.set_field(request.target, request.key, request.value)
        body = session.to_dict()

    log.debug("[%s] %s.%s=%r → %s", session_id, request.target, request.key,
              request.value, outcome.value)
    return {"outcome": outcome.value, **body}


@app.post("/sessions/{session_id}/preset")
async def apply_preset(session_id: str, request: PresetRequest):
    async with _sessions_lock:
        session = _get_session(session_id)
        try:
            session.apply_preset(request.name)
        except KeyError:
            raise HTTPException(
                status_code=404,
                detail=f"Unknown preset '{request.name}'. Available: {sorted(PRESETS)}",
            )
        return session.to_dict()


@app.post("/sessions/{session_id}/inverse")
async def apply_inverse(session_id: str):
    """Set B to A's inverse. Returns applied=false when A is singular."""
    async with _sessions_lock:
        session = _get_session(session_id)
        applied = session.apply_inverse()
        body = session.to_dict()

    if not applied:
        log.info("[%s] Inverse skipped: A is singular", session_id)
    return {"applied": applied, **body}


@app.post("/sessions/{session_id}/play", status_code=202)
async def play(session_id: str):
    """Restart the phase sequence; transitions are applied in the background."""
    async with _sessions_lock:
        session = _get_session(session_id)
        generation = sequencer.play(session)
        phase, current = session.phase, session.current_matrix()

    return {
        "session_id": session_id,
        "generation": generation,
        "phase":      phase.value,
        "current":    current.to_rows(),
        "schedule":   {p.value: delay for p, delay in sequencer.schedule.transitions()},
    }


@app.delete("/sessions/{session_id}", status_code=204)
async def delete_session(session_id: str):
    async with _sessions_lock:
        _get_session(session_id)
        del _sessions[session_id]
    return Response(status_code=204)


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
