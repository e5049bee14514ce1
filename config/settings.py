"""
LinViz Engine — Configuration & Settings.

Loads settings from environment variables / .env file with sensible defaults.
Numeric tolerances and the curve resolution are fixed constants in algebra/,
not settings.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from visualizer.phase import PhaseSchedule

# Project root directory (one level up from config/)
PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from .env or environment variables."""

    # ── Animation phases ──────────────────────────────────────────
    step_a_delay: float = Field(
        default=0.8,
        description="Seconds after 'play' before the view switches from identity to A",
    )
    composite_delay: float = Field(
        default=2.0,
        description="Seconds after 'play' before the view switches to the composite B·A",
    )

    # ── Defaults ───────────────────────────────────────────────────
    default_language: str = Field(
        default="en",
        description="Classification text language: 'en' or 'ja'",
    )

    # ── Sessions ───────────────────────────────────────────────────
    max_sessions: int = Field(
        default=256,
        ge=1,
        description="Max live visualizer sessions; the oldest is evicted beyond this",
    )

    # ── FastAPI ────────────────────────────────────────────────────
    api_host: str = Field(default="0.0.0.0", description="FastAPI host")
    api_port: int = Field(default=8000, description="FastAPI port")
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")

    model_config = {
        "env_file": str(PROJECT_ROOT / ".env"),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    # ── Derived ────────────────────────────────────────────────────
    @property
    def phase_schedule(self) -> PhaseSchedule:
        return PhaseSchedule(
            step_a_delay=self.step_a_delay,
            composite_delay=self.composite_delay,
        )


# Singleton instance
settings = Settings()
