"""
XP Calculator for lesson attempts.

Earned XP is the sum of four independently rounded terms:
- base: xp_reward x score / 100
- first completion: 50% of xp_reward
- perfect score (>= 95): 20% of xp_reward
- speed (duration < 80% of the estimate): 10% of xp_reward

Rounding is half-up on exact decimal values, so 2.5 -> 3 regardless of
binary float representation.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from progression.config import Settings
from progression.core.models import PASS_THRESHOLD, AttemptResult, LessonDefinition


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer with ties going up."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _dec(value: float | int) -> Decimal:
    return Decimal(str(value))


class XPCalculator:
    """
    Computes XP earned for a single attempt.

    Thresholds and multipliers are configurable; defaults match the
    published progression rules.
    """

    def __init__(
        self,
        pass_threshold: float = PASS_THRESHOLD,
        first_completion_multiplier: float = 0.5,
        perfect_score_threshold: float = 95,
        perfect_score_multiplier: float = 0.2,
        speed_ratio: float = 0.8,
        speed_multiplier: float = 0.1,
    ):
        """
        Initialize calculator with configurable rules.

        Args:
            pass_threshold: Min score that completes a lesson (default 70)
            first_completion_multiplier: Bonus share on first completion (default 50%)
            perfect_score_threshold: Min score for the perfect bonus (default 95)
            perfect_score_multiplier: Perfect bonus share (default 20%)
            speed_ratio: Fraction of the estimated duration to beat (default 80%)
            speed_multiplier: Speed bonus share (default 10%)
        """
        self.pass_threshold = pass_threshold
        self.first_completion_multiplier = first_completion_multiplier
        self.perfect_score_threshold = perfect_score_threshold
        self.perfect_score_multiplier = perfect_score_multiplier
        self.speed_ratio = speed_ratio
        self.speed_multiplier = speed_multiplier

    @classmethod
    def from_settings(cls, settings: Settings) -> XPCalculator:
        return cls(
            pass_threshold=settings.pass_threshold,
            first_completion_multiplier=settings.first_completion_multiplier,
            perfect_score_threshold=settings.perfect_score_threshold,
            perfect_score_multiplier=settings.perfect_score_multiplier,
            speed_ratio=settings.speed_ratio,
            speed_multiplier=settings.speed_multiplier,
        )

    def is_passing(self, score: float) -> bool:
        return score >= self.pass_threshold

    def is_first_completion(self, score: float, already_completed: bool) -> bool:
        """True when this attempt passes and the lesson was not completed before."""
        return self.is_passing(score) and not already_completed

    def base_xp(self, lesson: LessonDefinition, score: float) -> int:
        return round_half_up(_dec(lesson.xp_reward) * _dec(score) / 100)

    def first_completion_bonus(self, lesson: LessonDefinition, is_first_completion: bool) -> int:
        if not is_first_completion:
            return 0
        return round_half_up(_dec(lesson.xp_reward) * _dec(self.first_completion_multiplier))

    def perfect_score_bonus(self, lesson: LessonDefinition, score: float) -> int:
        if score < self.perfect_score_threshold:
            return 0
        return round_half_up(_dec(lesson.xp_reward) * _dec(self.perfect_score_multiplier))

    def speed_bonus(self, lesson: LessonDefinition, duration_seconds: float) -> int:
        expected_seconds = _dec(lesson.estimated_duration) * 60
        if _dec(duration_seconds) >= expected_seconds * _dec(self.speed_ratio):
            return 0
        return round_half_up(_dec(lesson.xp_reward) * _dec(self.speed_multiplier))

    def compute_earned_xp(
        self,
        lesson: LessonDefinition,
        result: AttemptResult,
        is_first_completion: bool,
    ) -> int:
        """
        Total XP earned for one attempt.

        Args:
            lesson: Catalog definition of the attempted lesson
            result: Attempt result (pre-validated)
            is_first_completion: Whether this attempt is the lesson's first completion

        Returns:
            Non-negative XP total
        """
        return (
            self.base_xp(lesson, result.score)
            + self.first_completion_bonus(lesson, is_first_completion)
            + self.perfect_score_bonus(lesson, result.score)
            + self.speed_bonus(lesson, result.duration)
        )


def compute_earned_xp(
    lesson: LessonDefinition,
    result: AttemptResult,
    is_first_completion: bool,
) -> int:
    """compute_earned_xp with the default rules."""
    return XPCalculator().compute_earned_xp(lesson, result, is_first_completion)
