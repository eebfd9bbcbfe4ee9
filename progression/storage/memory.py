"""In-process progress store for tests and single-process embedding."""

from __future__ import annotations

import threading
from datetime import datetime

from progression.core.errors import ConcurrentUpdateError
from progression.core.models import AttemptLogEntry, AttemptResult, LearnerProgress


class InMemoryProgressStore:
    """
    Dictionary-backed ProgressStore.

    Snapshots are deep-copied on the way in and out so callers never share
    mutable state with the store.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._progress: dict[str, LearnerProgress] = {}
        self._attempt_log: list[AttemptLogEntry] = []

    def load(self, learner_id: str) -> LearnerProgress | None:
        with self._lock:
            progress = self._progress.get(learner_id)
            return progress.model_copy(deep=True) if progress else None

    def save(self, progress: LearnerProgress) -> LearnerProgress:
        with self._lock:
            saved = self._checked_snapshot(progress)
            self._progress[progress.learner_id] = saved
            return saved.model_copy(deep=True)

    def append_attempt_log(
        self, learner_id: str, result: AttemptResult, recorded_at: datetime
    ) -> None:
        entry = self._log_entry(learner_id, result, recorded_at)
        with self._lock:
            self._attempt_log.append(entry)

    def save_with_attempt(
        self, progress: LearnerProgress, result: AttemptResult, recorded_at: datetime
    ) -> LearnerProgress:
        with self._lock:
            saved = self._checked_snapshot(progress)
            entry = self._log_entry(progress.learner_id, result, recorded_at)
            # Nothing is written until both pieces are built
            self._progress[progress.learner_id] = saved
            self._attempt_log.append(entry)
            return saved.model_copy(deep=True)

    def attempts_for(self, learner_id: str, lesson_id: str) -> list[AttemptResult]:
        with self._lock:
            return [
                entry.result.model_copy(deep=True)
                for entry in self._attempt_log
                if entry.learner_id == learner_id and entry.result.lesson_id == lesson_id
            ]

    def _checked_snapshot(self, progress: LearnerProgress) -> LearnerProgress:
        """Copy of progress at the next version; caller holds the lock."""
        stored = self._progress.get(progress.learner_id)
        current_version = stored.version if stored else 0
        if progress.version != current_version:
            raise ConcurrentUpdateError(progress.learner_id, progress.version, current_version)
        return progress.model_copy(deep=True, update={"version": current_version + 1})

    @staticmethod
    def _log_entry(learner_id: str, result: AttemptResult, recorded_at: datetime) -> AttemptLogEntry:
        return AttemptLogEntry(
            learner_id=learner_id,
            result=result.model_copy(deep=True),
            recorded_at=recorded_at,
        )
