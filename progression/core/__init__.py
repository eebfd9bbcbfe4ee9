"""
Core domain types: levels, models and the error taxonomy.
"""

from progression.core.errors import (
    CatalogLoadError,
    ConcurrentUpdateError,
    InvalidStateError,
    LessonNotFoundError,
    ProgressionError,
    StorageFailureError,
)
from progression.core.levels import LEVELS, DifficultyTier, LevelInfo, level_for_xp, xp_to_next_level
from progression.core.models import (
    PASS_THRESHOLD,
    AttemptLogEntry,
    AttemptResult,
    LearnerProgress,
    LessonDefinition,
    LessonProgressRecord,
    LessonStatistics,
    Mistake,
    MistakeSummary,
)

__all__ = [
    # Errors
    "ProgressionError",
    "CatalogLoadError",
    "LessonNotFoundError",
    "InvalidStateError",
    "StorageFailureError",
    "ConcurrentUpdateError",
    # Levels
    "DifficultyTier",
    "LevelInfo",
    "LEVELS",
    "level_for_xp",
    "xp_to_next_level",
    # Models
    "PASS_THRESHOLD",
    "LessonDefinition",
    "Mistake",
    "AttemptResult",
    "AttemptLogEntry",
    "LessonProgressRecord",
    "LearnerProgress",
    "MistakeSummary",
    "LessonStatistics",
]
