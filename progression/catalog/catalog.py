"""Ordered, read-only lesson catalog."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from progression.core.errors import LessonNotFoundError
from progression.core.levels import DifficultyTier
from progression.core.models import LessonDefinition


class LessonCatalog:
    """
    Ordered collection of lesson definitions with lookup by id.

    The catalog is loaded once and treated as static for the engine's lifetime.
    Iteration yields lessons in catalog order.
    """

    def __init__(self, lessons: Iterable[LessonDefinition]):
        self._lessons: tuple[LessonDefinition, ...] = tuple(lessons)
        self._by_id: dict[str, LessonDefinition] = {}
        for lesson in self._lessons:
            if lesson.id in self._by_id:
                raise ValueError(f"Duplicate lesson id in catalog: {lesson.id}")
            self._by_id[lesson.id] = lesson

    def __iter__(self) -> Iterator[LessonDefinition]:
        return iter(self._lessons)

    def __len__(self) -> int:
        return len(self._lessons)

    def __contains__(self, lesson_id: object) -> bool:
        return lesson_id in self._by_id

    @property
    def lessons(self) -> tuple[LessonDefinition, ...]:
        return self._lessons

    def get(self, lesson_id: str) -> LessonDefinition | None:
        return self._by_id.get(lesson_id)

    def require(self, lesson_id: str) -> LessonDefinition:
        """Lesson by id, raising LessonNotFoundError when absent."""
        lesson = self._by_id.get(lesson_id)
        if lesson is None:
            raise LessonNotFoundError(lesson_id)
        return lesson

    def by_difficulty(self, tier: DifficultyTier) -> list[LessonDefinition]:
        return [lesson for lesson in self._lessons if lesson.difficulty == tier]

    def unknown_prerequisites(self) -> list[tuple[str, str]]:
        """(lesson id, prerequisite id) pairs whose prerequisite is not in the catalog."""
        return [
            (lesson.id, prereq)
            for lesson in self._lessons
            for prereq in lesson.prerequisites
            if prereq not in self._by_id
        ]
