"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from progression.catalog import LessonCatalog  # noqa: E402
from progression.core.levels import DifficultyTier  # noqa: E402
from progression.core.models import AttemptResult, LessonDefinition, Mistake  # noqa: E402
from progression.storage import InMemoryProgressStore  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (SQLite-backed store, full service flow)")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


class FakeClock:
    """Deterministic clock for the progression service."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def clock():
    """Clock starting at 09:00 local time on a fixed date."""
    return FakeClock(datetime(2026, 3, 10, 9, 0, 0))


@pytest.fixture
def lesson_a():
    return LessonDefinition(
        id="A", title="Greetings", difficulty=DifficultyTier.BEGINNER,
        xp_reward=100, estimated_duration=10,
    )


@pytest.fixture
def lesson_b():
    return LessonDefinition(
        id="B", title="Directions", difficulty=DifficultyTier.BEGINNER,
        xp_reward=120, estimated_duration=12, prerequisites=("A",),
    )


@pytest.fixture
def lesson_c():
    return LessonDefinition(
        id="C", title="Restaurant", difficulty=DifficultyTier.ELEMENTARY,
        xp_reward=150, estimated_duration=15, prerequisites=("A", "B"),
    )


@pytest.fixture
def sample_catalog(lesson_a, lesson_b, lesson_c):
    """Catalog A -> B -> C where C needs both A and B."""
    return LessonCatalog([lesson_a, lesson_b, lesson_c])


@pytest.fixture
def memory_store():
    return InMemoryProgressStore()


@pytest.fixture
def make_attempt():
    """Factory for attempt results with sensible defaults."""

    def _make(
        lesson_id: str = "A",
        score: float = 80,
        duration: float = 600,
        mistakes: list[tuple[str, str]] | None = None,
        **sub_scores,
    ) -> AttemptResult:
        return AttemptResult(
            lesson_id=lesson_id,
            score=score,
            pronunciation_score=sub_scores.get("pronunciation_score", score),
            grammar_score=sub_scores.get("grammar_score", score),
            vocabulary_score=sub_scores.get("vocabulary_score", score),
            duration=duration,
            mistakes=[
                Mistake(type=kind, original=text, expected=f"expected {text}", feedback="")
                for kind, text in (mistakes or [])
            ],
        )

    return _make
