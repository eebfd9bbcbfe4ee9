"""
Unit tests for XPCalculator.

Tests:
- Each bonus term and its threshold
- Independent half-up rounding of every term
- First-completion detection
"""

from decimal import Decimal

import pytest

from progression.config import Settings
from progression.core.levels import DifficultyTier
from progression.core.models import AttemptResult, LessonDefinition
from progression.engine.xp_calculator import XPCalculator, compute_earned_xp, round_half_up


def _lesson(xp_reward: int = 100, estimated_duration: int = 10) -> LessonDefinition:
    return LessonDefinition(
        id="lesson",
        difficulty=DifficultyTier.BEGINNER,
        xp_reward=xp_reward,
        estimated_duration=estimated_duration,
    )


def _result(score: float, duration: float = 600) -> AttemptResult:
    return AttemptResult(lesson_id="lesson", score=score, duration=duration)


@pytest.fixture
def calculator():
    return XPCalculator()


class TestComputeEarnedXP:
    """Tests for the full XP formula."""

    def test_all_bonuses(self):
        """100 base + 50 first + 20 perfect + 10 speed."""
        xp = compute_earned_xp(_lesson(), _result(100, duration=60), is_first_completion=True)
        assert xp == 180

    def test_base_only(self):
        """Score 70 at the estimated duration, not a first completion."""
        xp = compute_earned_xp(_lesson(), _result(70, duration=600), is_first_completion=False)
        assert xp == 70

    def test_failing_attempt_still_earns_base(self):
        xp = compute_earned_xp(_lesson(), _result(40), is_first_completion=False)
        assert xp == 40

    def test_zero_score(self):
        assert compute_earned_xp(_lesson(), _result(0), is_first_completion=False) == 0

    def test_terms_rounded_independently(self, calculator):
        """xp_reward 15: base 15*0.5=7.5->8, first 7.5->8, perfect 3, speed 1.5->2."""
        lesson = _lesson(xp_reward=15)
        assert calculator.base_xp(lesson, 50) == 8
        assert calculator.first_completion_bonus(lesson, True) == 8
        assert calculator.perfect_score_bonus(lesson, 100) == 3
        assert calculator.speed_bonus(lesson, 0) == 2
        xp = calculator.compute_earned_xp(lesson, _result(100, duration=0), True)
        # base 15 + 8 + 3 + 2
        assert xp == 28


class TestRounding:
    def test_tie_rounds_up(self, calculator):
        """5 * 50 / 100 = 2.5 rounds to 3, not banker's 2."""
        assert calculator.base_xp(_lesson(xp_reward=5), 50) == 3

    def test_exact_decimal_tie(self, calculator):
        """150 * 73 / 100 is exactly 109.5 and rounds up to 110."""
        assert calculator.base_xp(_lesson(xp_reward=150), 73) == 110

    def test_below_half_rounds_down(self, calculator):
        assert calculator.base_xp(_lesson(xp_reward=100), 72.4) == 72

    def test_round_half_up_helper(self):
        assert round_half_up(Decimal("0.5")) == 1
        assert round_half_up(Decimal("1.49")) == 1
        assert round_half_up(Decimal("2.5")) == 3


class TestBonusThresholds:
    def test_perfect_bonus_at_95(self, calculator):
        assert calculator.perfect_score_bonus(_lesson(), 95) == 20

    def test_no_perfect_bonus_below_95(self, calculator):
        assert calculator.perfect_score_bonus(_lesson(), 94.9) == 0

    def test_speed_bonus_strictly_below_80_percent(self, calculator):
        """Estimate 10 min -> bonus only under 480 seconds."""
        assert calculator.speed_bonus(_lesson(), 479.9) == 10
        assert calculator.speed_bonus(_lesson(), 480) == 0

    def test_no_first_completion_bonus(self, calculator):
        assert calculator.first_completion_bonus(_lesson(), False) == 0


class TestFirstCompletion:
    def test_passing_and_new(self, calculator):
        assert calculator.is_first_completion(70, already_completed=False) is True

    def test_below_threshold(self, calculator):
        assert calculator.is_first_completion(69.9, already_completed=False) is False

    def test_already_completed(self, calculator):
        assert calculator.is_first_completion(100, already_completed=True) is False


class TestConfiguredCalculator:
    def test_from_settings(self):
        settings = Settings(pass_threshold=60, first_completion_multiplier=1.0)
        calculator = XPCalculator.from_settings(settings)

        assert calculator.is_passing(60) is True
        assert calculator.first_completion_bonus(_lesson(), True) == 100
