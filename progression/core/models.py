"""
Domain models for learner progression.

- LessonDefinition: immutable catalog entry
- AttemptResult / Mistake: one submission, scored upstream
- LessonProgressRecord: per learner x lesson history
- LearnerProgress: per learner root aggregate (level derived from XP)
- LessonStatistics / MistakeSummary: read-only aggregates over the attempt log
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from progression.core.levels import DifficultyTier, level_for_xp

PASS_THRESHOLD = 70
MASTERY_SCORE_THRESHOLD = 90

MasteryStatus = Literal["not_started", "learning", "practicing", "mastered"]


# ========================================
# Catalog
# ========================================


class LessonDefinition(BaseModel):
    """A lesson as published in the catalog."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique lesson identifier")
    title: str = Field("", description="Display title")
    difficulty: DifficultyTier = Field(..., description="Difficulty tier")
    xp_reward: int = Field(..., gt=0, description="XP granted for a 100% attempt")
    estimated_duration: int = Field(..., gt=0, description="Estimated duration in minutes")
    prerequisites: tuple[str, ...] = Field(
        default=(), description="Lesson ids that must be completed first"
    )


# ========================================
# Attempts
# ========================================


class Mistake(BaseModel):
    """A single mistake observed during an attempt."""

    type: str = Field(..., description="Category tag: pronunciation, grammar, vocabulary")
    original: str = Field("", description="What the learner said or typed")
    expected: str = Field("", description="What was expected")
    feedback: str = Field("", description="Free-text feedback")


class AttemptResult(BaseModel):
    """
    Performance data for one lesson attempt.

    Scores arrive already computed. Ranges are checked by the service entry
    points so malformed input surfaces as InvalidStateError.
    """

    lesson_id: str
    score: float
    pronunciation_score: float = 0
    grammar_score: float = 0
    vocabulary_score: float = 0
    duration: float = Field(0, description="Attempt duration in seconds")
    mistakes: list[Mistake] = Field(default_factory=list)


class AttemptLogEntry(BaseModel):
    """An attempt as persisted in the attempt log."""

    learner_id: str
    result: AttemptResult
    recorded_at: datetime


# ========================================
# Progress
# ========================================


class LessonProgressRecord(BaseModel):
    """Progress of one learner on one lesson. Score histories are append-only."""

    lesson_id: str
    completed: bool = False
    best_score: float = 0
    attempts: int = 0
    last_attempt_at: datetime
    pronunciation_scores: list[float] = Field(default_factory=list)
    grammar_scores: list[float] = Field(default_factory=list)
    vocabulary_scores: list[float] = Field(default_factory=list)

    @computed_field
    @property
    def mastery(self) -> MasteryStatus:
        """Coarse mastery bucket derived from completion and best score."""
        if self.attempts == 0:
            return "not_started"
        if not self.completed:
            return "learning"
        if self.best_score >= MASTERY_SCORE_THRESHOLD:
            return "mastered"
        return "practicing"


class LearnerProgress(BaseModel):
    """
    Root aggregate of a learner's progression.

    current_level is computed from total_xp on every access and is never
    stored as independent state; a persisted value is ignored on load.
    """

    model_config = ConfigDict(extra="ignore")

    learner_id: str
    total_xp: int = Field(0, ge=0)
    completed_lessons: set[str] = Field(default_factory=set)
    lesson_progress: dict[str, LessonProgressRecord] = Field(default_factory=dict)
    streak_days: int = Field(0, ge=0)
    best_streak: int = Field(0, ge=0)
    last_practice_at: datetime
    version: int = Field(0, ge=0, description="Snapshot version for optimistic concurrency")

    @computed_field
    @property
    def current_level(self) -> DifficultyTier:
        return level_for_xp(self.total_xp)

    @classmethod
    def new(cls, learner_id: str, now: datetime) -> LearnerProgress:
        """Fresh progress for a learner with no persisted record."""
        return cls(learner_id=learner_id, last_practice_at=now)


# ========================================
# Statistics
# ========================================


class MistakeSummary(BaseModel):
    """Occurrences of one mistake category with its first observed examples."""

    type: str
    count: int
    examples: list[str] = Field(default_factory=list)


class LessonStatistics(BaseModel):
    """Aggregated attempt history for one learner x lesson pair."""

    attempts: int = 0
    best_score: float = 0
    average_score: float = 0
    completion_time: float = 0
    common_mistakes: list[MistakeSummary] = Field(default_factory=list)
