"""
Unlock Resolver: which catalog lessons a learner may start.

A lesson is available when it is not completed and every prerequisite is
completed. Prerequisite ids missing from the catalog can never be satisfied,
so the dependent lesson stays locked. Cycles are not detected.
"""

from __future__ import annotations

from collections.abc import Iterable, Set

from progression.core.models import LessonDefinition


def prerequisites_satisfied(lesson: LessonDefinition, completed: Set[str]) -> bool:
    """True if every prerequisite of the lesson is in the completed set."""
    return all(prereq in completed for prereq in lesson.prerequisites)


def available_lessons(
    catalog: Iterable[LessonDefinition],
    completed: Set[str],
) -> list[LessonDefinition]:
    """
    Lessons currently eligible to start, in catalog order.

    Args:
        catalog: Ordered lesson definitions
        completed: Ids of lessons the learner has completed

    Returns:
        Lessons not yet completed whose prerequisites are all completed
    """
    return [
        lesson
        for lesson in catalog
        if lesson.id not in completed and prerequisites_satisfied(lesson, completed)
    ]


def locked_lessons(
    catalog: Iterable[LessonDefinition],
    completed: Set[str],
) -> dict[str, list[str]]:
    """
    Missing prerequisites for every lesson that is neither completed nor available.

    Returns:
        Mapping lesson id -> prerequisite ids still missing, in catalog order
    """
    locked: dict[str, list[str]] = {}
    for lesson in catalog:
        if lesson.id in completed:
            continue
        missing = [prereq for prereq in lesson.prerequisites if prereq not in completed]
        if missing:
            locked[lesson.id] = missing
    return locked
