"""
Streak Updater for daily practice.

A practice within the window (36h by default) extends the streak if it falls
on a different calendar date than the previous one; same-date practice leaves
it unchanged. A longer gap restarts the streak at 1.

Calendar dates are the caller's local dates: both timestamps are compared in
the timezone they carry, so pass both naive or both aware in the same zone.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

STREAK_WINDOW_HOURS = 36.0


@dataclass(frozen=True)
class StreakUpdate:
    """Result of a streak update."""

    streak_days: int
    practiced_at: datetime


def hours_between(previous: datetime, now: datetime) -> float:
    return (now - previous).total_seconds() / 3600


def update_streak(
    previous: datetime,
    now: datetime,
    current_streak: int,
    window_hours: float = STREAK_WINDOW_HOURS,
) -> StreakUpdate:
    """
    Compute the streak after a practice at `now`.

    Args:
        previous: Timestamp of the previous practice
        now: Timestamp of this practice
        current_streak: Streak length before this practice
        window_hours: Max gap that keeps the streak alive

    Returns:
        StreakUpdate with the new streak length and practiced_at=now
    """
    if hours_between(previous, now) <= window_hours:
        if now.date() != previous.date():
            streak = current_streak + 1
        else:
            streak = current_streak
    else:
        streak = 1

    return StreakUpdate(streak_days=streak, practiced_at=now)


def effective_streak(
    streak_days: int,
    last_practice_at: datetime,
    now: datetime,
    window_hours: float = STREAK_WINDOW_HOURS,
) -> int:
    """Streak as it should be displayed at `now`: 0 once the window has lapsed."""
    if hours_between(last_practice_at, now) > window_hours:
        return 0
    return streak_days
