"""
Unit tests for the progression domain models.
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from progression.core.levels import DifficultyTier
from progression.core.models import LearnerProgress, LessonDefinition, LessonProgressRecord

NOW = datetime(2026, 3, 10, 9, 0)


class TestLearnerProgress:
    def test_new_learner_defaults(self):
        progress = LearnerProgress.new("learner-1", NOW)

        assert progress.total_xp == 0
        assert progress.current_level == DifficultyTier.BEGINNER
        assert progress.completed_lessons == set()
        assert progress.lesson_progress == {}
        assert progress.streak_days == 0
        assert progress.last_practice_at == NOW
        assert progress.version == 0

    def test_level_follows_total_xp(self):
        progress = LearnerProgress.new("learner-1", NOW)
        progress.total_xp = 3200
        assert progress.current_level == DifficultyTier.INTERMEDIATE

    def test_persisted_level_is_ignored(self):
        """A stored current_level that disagrees with total_xp never wins."""
        progress = LearnerProgress.model_validate(
            {
                "learner_id": "learner-1",
                "total_xp": 1500,
                "current_level": "ADVANCED",
                "last_practice_at": NOW.isoformat(),
            }
        )
        assert progress.current_level == DifficultyTier.ELEMENTARY

    def test_dump_includes_derived_level(self):
        progress = LearnerProgress(learner_id="learner-1", total_xp=6000, last_practice_at=NOW)
        data = progress.model_dump(mode="json")
        assert data["current_level"] == "ADVANCED"

    def test_negative_xp_rejected(self):
        with pytest.raises(ValidationError):
            LearnerProgress(learner_id="learner-1", total_xp=-1, last_practice_at=NOW)


class TestLessonProgressRecord:
    def test_mastery_buckets(self):
        record = LessonProgressRecord(lesson_id="A", last_attempt_at=NOW)
        assert record.mastery == "not_started"

        record.attempts = 1
        assert record.mastery == "learning"

        record.completed = True
        record.best_score = 75
        assert record.mastery == "practicing"

        record.best_score = 90
        assert record.mastery == "mastered"


class TestLessonDefinition:
    def test_frozen(self, lesson_a):
        with pytest.raises(ValidationError):
            lesson_a.xp_reward = 500

    def test_xp_reward_must_be_positive(self):
        with pytest.raises(ValidationError):
            LessonDefinition(
                id="bad", difficulty=DifficultyTier.BEGINNER, xp_reward=0, estimated_duration=10
            )

    def test_prerequisites_from_list(self):
        lesson = LessonDefinition.model_validate(
            {
                "id": "B",
                "difficulty": "BEGINNER",
                "xp_reward": 120,
                "estimated_duration": 12,
                "prerequisites": ["A"],
            }
        )
        assert lesson.prerequisites == ("A",)
        assert lesson.difficulty is DifficultyTier.BEGINNER
