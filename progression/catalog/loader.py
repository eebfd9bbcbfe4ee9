"""
Lesson catalog loading.

Catalog files are JSON: either a list of lesson objects or {"lessons": [...]},
each lesson using the LessonDefinition field names. Dialogue scripts and
vocabulary are not part of the catalog the engine consumes.
"""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from progression.catalog.catalog import LessonCatalog
from progression.config import get_settings
from progression.core.errors import CatalogLoadError
from progression.core.levels import DifficultyTier
from progression.core.models import LessonDefinition

# Definitions of the built-in Spanish conversation track
BUILTIN_LESSONS: tuple[LessonDefinition, ...] = (
    LessonDefinition(
        id="coffee-shop-beginner",
        title="Ordering Your First Coffee",
        difficulty=DifficultyTier.BEGINNER,
        xp_reward=100,
        estimated_duration=10,
        prerequisites=(),
    ),
    LessonDefinition(
        id="directions-beginner",
        title="Finding Your Way",
        difficulty=DifficultyTier.BEGINNER,
        xp_reward=120,
        estimated_duration=12,
        prerequisites=("coffee-shop-beginner",),
    ),
    LessonDefinition(
        id="restaurant-elementary",
        title="Restaurant Experience",
        difficulty=DifficultyTier.ELEMENTARY,
        xp_reward=150,
        estimated_duration=15,
        prerequisites=("directions-beginner",),
    ),
)


def default_catalog() -> LessonCatalog:
    """The built-in catalog."""
    return LessonCatalog(BUILTIN_LESSONS)


def load_catalog(path: Path | str | None = None) -> LessonCatalog:
    """
    Load a lesson catalog from JSON.

    Args:
        path: Catalog file (defaults to settings.catalog_path, then the built-in catalog)

    Returns:
        LessonCatalog in file order

    Raises:
        CatalogLoadError: If the file is unreadable or a lesson is malformed
    """
    if path is None:
        path = get_settings().catalog_path
    if path is None:
        return default_catalog()

    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogLoadError(f"Cannot read catalog {path}: {e}") from e

    entries = data.get("lessons", []) if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise CatalogLoadError(f"Catalog {path} must contain a list of lessons")

    try:
        lessons = [LessonDefinition.model_validate(entry) for entry in entries]
        catalog = LessonCatalog(lessons)
    except (ValidationError, ValueError) as e:
        raise CatalogLoadError(f"Invalid catalog {path}: {e}") from e

    # Unknown prerequisites permanently lock the dependent lesson
    for lesson_id, prereq in catalog.unknown_prerequisites():
        logger.warning(f"Lesson {lesson_id} requires unknown lesson {prereq}; it can never unlock")

    logger.info(f"Loaded {len(catalog)} lessons from {path.name}")
    return catalog
