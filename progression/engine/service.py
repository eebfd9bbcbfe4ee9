"""
Progression Service: orchestrating entry points over the engine.

Provides:
- Available lessons for a learner (first-run learners get every BEGINNER lesson)
- Start lesson (lazily creates learner and lesson progress)
- Complete lesson attempt (XP, level, streak, completion bookkeeping)
- Lesson statistics over the persisted attempt log
- Level summary

The service is constructed explicitly with its collaborators. Completion is a
read-modify-write on the learner snapshot: the store's version check rejects
concurrent completions for the same learner, and this service never retries.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from loguru import logger

from progression.catalog import LessonCatalog, default_catalog, load_catalog
from progression.config import Settings, get_settings
from progression.core.errors import InvalidStateError
from progression.core.levels import DifficultyTier, xp_to_next_level
from progression.core.models import (
    AttemptResult,
    LearnerProgress,
    LessonDefinition,
    LessonProgressRecord,
    LessonStatistics,
)
from progression.engine import statistics, unlock
from progression.engine.streak import STREAK_WINDOW_HOURS, effective_streak, update_streak
from progression.engine.xp_calculator import XPCalculator
from progression.storage.base import ProgressStore

SCORE_FIELDS = ("score", "pronunciation_score", "grammar_score", "vocabulary_score")


@dataclass
class StartedLesson:
    """Result of starting a lesson."""

    lesson: LessonDefinition
    progress: LearnerProgress


@dataclass
class CompletionOutcome:
    """Result of a completed lesson attempt."""

    progress: LearnerProgress
    leveled_up: bool
    earned_xp: int
    first_completion: bool = False


@dataclass
class LevelSummary:
    """Level and streak overview for a learner."""

    learner_id: str
    level: DifficultyTier
    total_xp: int
    next_level: DifficultyTier | None
    xp_to_next_level: int
    streak_days: int
    best_streak: int


class ProgressionService:
    """
    High-level service for learner progression.

    Coordinates between the lesson catalog, progress store, XP calculator
    and streak updater.
    """

    def __init__(
        self,
        catalog: LessonCatalog,
        store: ProgressStore,
        calculator: XPCalculator | None = None,
        clock: Callable[[], datetime] | None = None,
        streak_window_hours: float = STREAK_WINDOW_HOURS,
        mistake_example_limit: int = statistics.MISTAKE_EXAMPLE_LIMIT,
    ):
        """
        Initialize progression service.

        Args:
            catalog: Lesson catalog (static for the service lifetime)
            store: Progress store collaborator
            calculator: XP rules (defaults to the standard rules)
            clock: Returns "now" in the caller's local time (defaults to datetime.now)
            streak_window_hours: Max gap between practices that keeps a streak
            mistake_example_limit: Examples kept per mistake category in statistics
        """
        self.catalog = catalog
        self.store = store
        self.calculator = calculator or XPCalculator()
        self.clock = clock or datetime.now
        self.streak_window_hours = streak_window_hours
        self.mistake_example_limit = mistake_example_limit

    @classmethod
    def from_settings(
        cls,
        store: ProgressStore | None = None,
        settings: Settings | None = None,
    ) -> ProgressionService:
        """Build a service from configuration (SQL store unless one is given)."""
        from progression.storage.sql import SqlProgressStore

        settings = settings or get_settings()
        catalog = load_catalog(settings.catalog_path) if settings.catalog_path else default_catalog()
        return cls(
            catalog=catalog,
            store=store or SqlProgressStore(settings.database_url),
            calculator=XPCalculator.from_settings(settings),
            streak_window_hours=settings.streak_window_hours,
            mistake_example_limit=settings.mistake_example_limit,
        )

    # ========================================
    # Queries
    # ========================================

    def available_lessons(self, learner_id: str) -> list[LessonDefinition]:
        """
        Lessons the learner can start now, in catalog order.

        A learner with no persisted progress gets every BEGINNER lesson
        regardless of prerequisites.
        """
        progress = self.store.load(learner_id)
        if progress is None:
            return self.catalog.by_difficulty(DifficultyTier.BEGINNER)
        return unlock.available_lessons(self.catalog, progress.completed_lessons)

    def lesson_statistics(self, learner_id: str, lesson_id: str) -> LessonStatistics:
        """Aggregate the learner's logged attempts for one lesson."""
        self.catalog.require(lesson_id)
        attempts = self.store.attempts_for(learner_id, lesson_id)
        return statistics.aggregate(attempts, self.mistake_example_limit)

    def level_summary(self, learner_id: str) -> LevelSummary:
        """Current level, XP to the next level and the streak as of now."""
        now = self.clock()
        progress = self.store.load(learner_id) or LearnerProgress.new(learner_id, now)
        next_level, remaining = xp_to_next_level(progress.total_xp)
        return LevelSummary(
            learner_id=learner_id,
            level=progress.current_level,
            total_xp=progress.total_xp,
            next_level=next_level,
            xp_to_next_level=remaining,
            streak_days=effective_streak(
                progress.streak_days, progress.last_practice_at, now, self.streak_window_hours
            ),
            best_streak=progress.best_streak,
        )

    # ========================================
    # Mutations
    # ========================================

    def start_lesson(self, learner_id: str, lesson_id: str) -> StartedLesson:
        """
        Resolve or create the learner's progress record for a lesson.

        The snapshot is saved only when the learner or lesson record is new.

        Raises:
            LessonNotFoundError: If lesson_id is not in the catalog
            StorageFailureError: If the store fails
        """
        lesson = self.catalog.require(lesson_id)
        now = self.clock()

        progress = self.store.load(learner_id)
        created = False
        if progress is None:
            progress = LearnerProgress.new(learner_id, now)
            created = True
            logger.info(f"Created progress for learner {learner_id}")

        if lesson_id not in progress.lesson_progress:
            progress.lesson_progress[lesson_id] = LessonProgressRecord(
                lesson_id=lesson_id, last_attempt_at=now
            )
            created = True

        if created:
            progress = self.store.save(progress)

        return StartedLesson(lesson=lesson, progress=progress)

    def complete_lesson_attempt(self, learner_id: str, result: AttemptResult) -> CompletionOutcome:
        """
        Apply one attempt to the learner's progress and persist it.

        Steps:
            1. Validate lesson, attempt ranges and learner presence
            2. Append sub-scores, update completion and best score
            3. Add earned XP and re-derive the level
            4. Update the streak
            5. Save the snapshot and the attempt log entry together

        Nothing is persisted when validation fails.

        Raises:
            LessonNotFoundError: If the attempted lesson is not in the catalog
            InvalidStateError: If the learner has no progress or the attempt is malformed
            StorageFailureError: If the store fails (including stale snapshots)
        """
        lesson = self.catalog.require(result.lesson_id)
        self._validate_attempt(result)

        stored = self.store.load(learner_id)
        if stored is None:
            logger.warning(f"Completion submitted for unknown learner {learner_id}")
            raise InvalidStateError(f"No progress record for learner {learner_id}")

        now = self.clock()
        progress = stored.model_copy(deep=True)

        record = progress.lesson_progress.get(lesson.id) or LessonProgressRecord(
            lesson_id=lesson.id, last_attempt_at=now
        )
        record.attempts += 1
        record.last_attempt_at = now
        record.pronunciation_scores.append(result.pronunciation_score)
        record.grammar_scores.append(result.grammar_score)
        record.vocabulary_scores.append(result.vocabulary_score)

        passed = self.calculator.is_passing(result.score)
        already_completed = record.completed or lesson.id in progress.completed_lessons
        first_completion = self.calculator.is_first_completion(result.score, already_completed)

        if passed:
            record.completed = True
            record.best_score = max(record.best_score, result.score)
            progress.completed_lessons.add(lesson.id)
        progress.lesson_progress[lesson.id] = record

        earned_xp = self.calculator.compute_earned_xp(lesson, result, first_completion)
        old_level = stored.current_level
        progress.total_xp += earned_xp

        progress.streak_days = update_streak(
            progress.last_practice_at, now, progress.streak_days, self.streak_window_hours
        ).streak_days
        progress.best_streak = max(progress.best_streak, progress.streak_days)
        progress.last_practice_at = now

        saved = self.store.save_with_attempt(progress, result, now)

        leveled_up = saved.current_level != old_level
        logger.info(
            f"Learner {learner_id} completed attempt on {lesson.id}: "
            f"score={result.score}, +{earned_xp} XP, total={saved.total_xp}"
        )
        if first_completion:
            logger.info(f"Learner {learner_id} completed {lesson.id} for the first time")
        if leveled_up:
            logger.info(f"Learner {learner_id} leveled up: {old_level.value} -> {saved.current_level.value}")

        return CompletionOutcome(
            progress=saved,
            leveled_up=leveled_up,
            earned_xp=earned_xp,
            first_completion=first_completion,
        )

    # ========================================
    # Helpers
    # ========================================

    @staticmethod
    def _validate_attempt(result: AttemptResult) -> None:
        for field_name in SCORE_FIELDS:
            value = getattr(result, field_name)
            if not 0 <= value <= 100:
                logger.warning(f"Rejected attempt on {result.lesson_id}: {field_name}={value}")
                raise InvalidStateError(f"{field_name} must be between 0 and 100, got {value}")
        if not result.duration >= 0:
            logger.warning(f"Rejected attempt on {result.lesson_id}: duration={result.duration}")
            raise InvalidStateError(f"duration must be non-negative, got {result.duration}")
