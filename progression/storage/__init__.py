"""
Progress Store implementations.
"""

from progression.storage.base import ProgressStore
from progression.storage.memory import InMemoryProgressStore
from progression.storage.sql import SqlProgressStore

__all__ = [
    "ProgressStore",
    "InMemoryProgressStore",
    "SqlProgressStore",
]
