"""
Configuration settings for the learner progression engine.

Uses Pydantic Settings for environment variable management with .env file support.
All variables are read with the PROGRESSION_ prefix (e.g. PROGRESSION_DATABASE_URL).
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PROGRESSION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Storage
    # ========================================
    database_url: str = Field(
        default="sqlite:///progression.db",
        description="SQLAlchemy connection string for the progress store",
    )

    # ========================================
    # Lesson Catalog
    # ========================================
    catalog_path: str | None = Field(
        default=None,
        description="JSON lesson catalog file (None for the built-in catalog)",
    )

    # ========================================
    # Completion & XP Rules
    # ========================================
    pass_threshold: float = Field(
        default=70,
        description="Minimum overall score that marks an attempt as a completion",
    )
    first_completion_multiplier: float = Field(
        default=0.5,
        description="Share of the lesson XP reward granted on first completion",
    )
    perfect_score_threshold: float = Field(
        default=95,
        description="Score at or above which the perfect-score bonus applies",
    )
    perfect_score_multiplier: float = Field(
        default=0.2,
        description="Share of the lesson XP reward granted for a perfect score",
    )
    speed_ratio: float = Field(
        default=0.8,
        description="Fraction of the estimated duration under which the speed bonus applies",
    )
    speed_multiplier: float = Field(
        default=0.1,
        description="Share of the lesson XP reward granted for a fast attempt",
    )

    # ========================================
    # Streaks
    # ========================================
    streak_window_hours: float = Field(
        default=36,
        description="Hours allowed between practices before a streak breaks (timezone buffer)",
    )

    # ========================================
    # Statistics
    # ========================================
    mistake_example_limit: int = Field(
        default=3,
        description="Maximum observed-text examples kept per mistake category",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
