"""
Lesson Catalog: read-only lesson definitions and their prerequisite graph.
"""

from progression.catalog.catalog import LessonCatalog
from progression.catalog.loader import BUILTIN_LESSONS, CatalogLoadError, default_catalog, load_catalog

__all__ = [
    "LessonCatalog",
    "BUILTIN_LESSONS",
    "CatalogLoadError",
    "default_catalog",
    "load_catalog",
]
