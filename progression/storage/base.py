"""
Progress Store protocol consumed by the progression service.

Stores own durability and concurrency control. Every save carries the snapshot
version it was loaded at; a store must reject stale versions with
ConcurrentUpdateError so two completions racing on the same learner cannot
silently drop an update. A completed attempt is persisted with save_with_attempt,
which writes the snapshot and its attempt log entry together or not at all.
Failures surface as StorageFailureError.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from progression.core.models import AttemptResult, LearnerProgress


@runtime_checkable
class ProgressStore(Protocol):
    """Durable per-learner progress snapshots and attempt log."""

    def load(self, learner_id: str) -> LearnerProgress | None:
        """Latest snapshot for the learner, or None if never saved."""
        ...

    def save(self, progress: LearnerProgress) -> LearnerProgress:
        """Replace the snapshot; returns it with the version the store assigned."""
        ...

    def append_attempt_log(
        self, learner_id: str, result: AttemptResult, recorded_at: datetime
    ) -> None:
        """Append one attempt to the learner's log."""
        ...

    def save_with_attempt(
        self, progress: LearnerProgress, result: AttemptResult, recorded_at: datetime
    ) -> LearnerProgress:
        """Replace the snapshot and append the attempt; both land or neither does."""
        ...

    def attempts_for(self, learner_id: str, lesson_id: str) -> list[AttemptResult]:
        """Logged attempts for one learner x lesson pair, in recorded order."""
        ...
