"""
Learner progression engine for structured conversation lessons.

Tracks which lessons a learner can unlock, XP and levels earned from attempts,
daily practice streaks, and per-lesson attempt statistics.
"""

from progression.catalog import LessonCatalog, default_catalog, load_catalog
from progression.core import (
    AttemptResult,
    ConcurrentUpdateError,
    DifficultyTier,
    InvalidStateError,
    LearnerProgress,
    LessonDefinition,
    LessonNotFoundError,
    LessonStatistics,
    Mistake,
    ProgressionError,
    StorageFailureError,
    level_for_xp,
)
from progression.engine import CompletionOutcome, ProgressionService, StartedLesson
from progression.storage import InMemoryProgressStore, ProgressStore, SqlProgressStore

__version__ = "1.0.0"

__all__ = [
    "LessonCatalog",
    "default_catalog",
    "load_catalog",
    "AttemptResult",
    "DifficultyTier",
    "LearnerProgress",
    "LessonDefinition",
    "LessonStatistics",
    "Mistake",
    "level_for_xp",
    "ProgressionError",
    "LessonNotFoundError",
    "InvalidStateError",
    "StorageFailureError",
    "ConcurrentUpdateError",
    "ProgressionService",
    "StartedLesson",
    "CompletionOutcome",
    "ProgressStore",
    "InMemoryProgressStore",
    "SqlProgressStore",
]
