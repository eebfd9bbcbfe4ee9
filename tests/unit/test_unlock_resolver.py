"""
Unit tests for the Unlock Resolver.

Tests:
- Prerequisite gating and catalog order
- Completed lessons are never offered again
- Unknown prerequisites and cycles keep lessons locked
- Missing-prerequisite report
"""

from progression.catalog import LessonCatalog
from progression.core.levels import DifficultyTier
from progression.core.models import LessonDefinition
from progression.engine.unlock import available_lessons, locked_lessons, prerequisites_satisfied


def _lesson(lesson_id: str, *prereqs: str) -> LessonDefinition:
    return LessonDefinition(
        id=lesson_id,
        difficulty=DifficultyTier.BEGINNER,
        xp_reward=100,
        estimated_duration=10,
        prerequisites=prereqs,
    )


class TestAvailableLessons:
    """Tests for available_lessons."""

    def test_only_direct_successor_unlocked(self, sample_catalog):
        """A completed: B unlocks, C still needs B, A is not offered again."""
        available = available_lessons(sample_catalog, {"A"})
        assert [lesson.id for lesson in available] == ["B"]

    def test_no_progress_offers_root_lessons(self, sample_catalog):
        available = available_lessons(sample_catalog, set())
        assert [lesson.id for lesson in available] == ["A"]

    def test_all_prerequisites_met(self, sample_catalog):
        available = available_lessons(sample_catalog, {"A", "B"})
        assert [lesson.id for lesson in available] == ["C"]

    def test_everything_completed(self, sample_catalog):
        assert available_lessons(sample_catalog, {"A", "B", "C"}) == []

    def test_catalog_order_preserved(self):
        catalog = LessonCatalog([_lesson("z"), _lesson("m"), _lesson("a")])
        assert [lesson.id for lesson in available_lessons(catalog, set())] == ["z", "m", "a"]

    def test_unknown_prerequisite_blocks_forever(self):
        """A prerequisite missing from the catalog can never be satisfied."""
        catalog = LessonCatalog([_lesson("A"), _lesson("B", "A", "ghost")])
        available = available_lessons(catalog, {"A"})
        assert available == []

    def test_cycle_never_unlocks(self):
        catalog = LessonCatalog([_lesson("X", "Y"), _lesson("Y", "X"), _lesson("Z")])
        available = available_lessons(catalog, set())
        assert [lesson.id for lesson in available] == ["Z"]

    def test_accepts_plain_iterable(self, lesson_a, lesson_b):
        available = available_lessons([lesson_a, lesson_b], frozenset({"A"}))
        assert available == [lesson_b]


class TestPrerequisitesSatisfied:
    def test_no_prerequisites(self, lesson_a):
        assert prerequisites_satisfied(lesson_a, set()) is True

    def test_partial_prerequisites(self, lesson_c):
        assert prerequisites_satisfied(lesson_c, {"A"}) is False

    def test_full_prerequisites(self, lesson_c):
        assert prerequisites_satisfied(lesson_c, {"A", "B"}) is True


class TestLockedLessons:
    def test_reports_missing_prerequisites(self, sample_catalog):
        locked = locked_lessons(sample_catalog, {"A"})
        assert locked == {"C": ["B"]}

    def test_completed_and_available_lessons_not_reported(self, sample_catalog):
        assert locked_lessons(sample_catalog, {"A", "B", "C"}) == {}
        assert "A" not in locked_lessons(sample_catalog, set())

    def test_unknown_prerequisite_reported(self):
        catalog = LessonCatalog([_lesson("B", "ghost")])
        assert locked_lessons(catalog, set()) == {"B": ["ghost"]}
