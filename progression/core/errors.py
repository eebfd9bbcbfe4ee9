"""
Error taxonomy for the progression engine.

- LessonNotFoundError: referenced lesson id is absent from the catalog
- InvalidStateError: missing learner progress or a malformed attempt
- StorageFailureError: the progress store reported a failure (never retried here)
- CatalogLoadError: a catalog file could not be read or parsed
"""

from __future__ import annotations


class ProgressionError(Exception):
    """Base class for all progression engine errors."""
    pass


class LessonNotFoundError(ProgressionError):
    """Raised when a lesson id does not exist in the catalog."""

    def __init__(self, lesson_id: str):
        self.lesson_id = lesson_id
        super().__init__(f"Lesson not found: {lesson_id}")


class InvalidStateError(ProgressionError):
    """Raised when an operation is submitted against an invalid snapshot or input."""
    pass


class CatalogLoadError(ProgressionError):
    """Raised when a catalog file cannot be parsed into lesson definitions."""
    pass


class StorageFailureError(ProgressionError):
    """Raised when the progress store fails to load or persist data."""
    pass


class ConcurrentUpdateError(StorageFailureError):
    """Raised when a save carries a stale snapshot version."""

    def __init__(self, learner_id: str, expected_version: int, actual_version: int):
        self.learner_id = learner_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Stale progress snapshot for learner {learner_id}: "
            f"saved from version {expected_version}, store is at {actual_version}"
        )
