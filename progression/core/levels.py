"""
Difficulty tiers and the XP threshold table that maps total XP to a learner level.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DifficultyTier(str, Enum):
    """Lesson difficulty and learner level, ordered from easiest to hardest."""

    BEGINNER = "BEGINNER"
    ELEMENTARY = "ELEMENTARY"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"

    @property
    def rank(self) -> int:
        return _TIER_ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DifficultyTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, DifficultyTier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, DifficultyTier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, DifficultyTier):
            return NotImplemented
        return self.rank >= other.rank


_TIER_ORDER = list(DifficultyTier)


@dataclass(frozen=True)
class LevelInfo:
    """Display metadata and XP requirement for one level."""

    tier: DifficultyTier
    name: str
    required_xp: int
    description: str


LEVELS: dict[DifficultyTier, LevelInfo] = {
    DifficultyTier.BEGINNER: LevelInfo(
        DifficultyTier.BEGINNER, "Beginner", 0, "Basic phrases and simple conversations"
    ),
    DifficultyTier.ELEMENTARY: LevelInfo(
        DifficultyTier.ELEMENTARY, "Elementary", 1000, "Simple daily conversations"
    ),
    DifficultyTier.INTERMEDIATE: LevelInfo(
        DifficultyTier.INTERMEDIATE, "Intermediate", 3000, "Complex conversations and opinions"
    ),
    DifficultyTier.ADVANCED: LevelInfo(
        DifficultyTier.ADVANCED, "Advanced", 6000, "Fluent conversations on various topics"
    ),
}


def level_for_xp(total_xp: int) -> DifficultyTier:
    """
    Return the highest tier whose XP threshold is <= total_xp.

    Pure and idempotent: the level is always re-derivable from total XP alone.
    """
    level = DifficultyTier.BEGINNER
    for tier in _TIER_ORDER:
        if LEVELS[tier].required_xp <= total_xp:
            level = tier
    return level


def xp_to_next_level(total_xp: int) -> tuple[DifficultyTier | None, int]:
    """
    XP still needed to reach the next level.

    Returns:
        (next_tier, remaining_xp), or (None, 0) once the top level is reached
    """
    current = level_for_xp(total_xp)
    if current.rank + 1 >= len(_TIER_ORDER):
        return None, 0
    next_tier = _TIER_ORDER[current.rank + 1]
    return next_tier, LEVELS[next_tier].required_xp - total_xp
