"""
Statistics Aggregator over a learner's attempt history for one lesson.
"""

from __future__ import annotations

from collections.abc import Sequence

from progression.core.models import AttemptResult, LessonStatistics, MistakeSummary

MISTAKE_EXAMPLE_LIMIT = 3


def mistake_histogram(
    attempts: Sequence[AttemptResult],
    example_limit: int = MISTAKE_EXAMPLE_LIMIT,
) -> list[MistakeSummary]:
    """
    Group every mistake by category.

    Examples are the observed text of the first `example_limit` mistakes of each
    category in encounter order. Output is sorted by count descending; ties
    keep first-encountered category order.
    """
    summaries: dict[str, MistakeSummary] = {}
    for attempt in attempts:
        for mistake in attempt.mistakes:
            summary = summaries.get(mistake.type)
            if summary is None:
                summary = summaries[mistake.type] = MistakeSummary(type=mistake.type, count=0)
            summary.count += 1
            if len(summary.examples) < example_limit:
                summary.examples.append(mistake.original)

    # sorted() is stable and dicts keep insertion order
    return sorted(summaries.values(), key=lambda s: s.count, reverse=True)


def aggregate(
    attempts: Sequence[AttemptResult],
    example_limit: int = MISTAKE_EXAMPLE_LIMIT,
) -> LessonStatistics:
    """
    Summarize an attempt history.

    Args:
        attempts: Attempts for one learner x lesson pair, in recorded order
        example_limit: Max examples per mistake category

    Returns:
        LessonStatistics; all zeros with no mistakes when `attempts` is empty
    """
    if not attempts:
        return LessonStatistics()

    scores = [attempt.score for attempt in attempts]
    durations = [attempt.duration for attempt in attempts]

    return LessonStatistics(
        attempts=len(attempts),
        best_score=max(scores),
        average_score=sum(scores) / len(scores),
        completion_time=sum(durations) / len(durations),
        common_mistakes=mistake_histogram(attempts, example_limit),
    )
