"""
Learner Progression Engine.

- unlock: prerequisite-graph unlock resolver
- xp_calculator: XP earned per attempt
- streak: daily practice streaks
- statistics: attempt history aggregates
- service: orchestrating entry points
"""

from progression.engine.statistics import aggregate, mistake_histogram
from progression.engine.streak import StreakUpdate, effective_streak, update_streak
from progression.engine.unlock import available_lessons, locked_lessons, prerequisites_satisfied
from progression.engine.xp_calculator import XPCalculator, compute_earned_xp
from progression.engine.service import (
    CompletionOutcome,
    LevelSummary,
    ProgressionService,
    StartedLesson,
)

__all__ = [
    "available_lessons",
    "locked_lessons",
    "prerequisites_satisfied",
    "XPCalculator",
    "compute_earned_xp",
    "StreakUpdate",
    "update_streak",
    "effective_streak",
    "aggregate",
    "mistake_histogram",
    "ProgressionService",
    "StartedLesson",
    "CompletionOutcome",
    "LevelSummary",
]
