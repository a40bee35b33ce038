"""Pure aggregation of interview sessions and graded answers into dashboard statistics.

Every function in this module is a deterministic computation over its
arguments: inputs are never mutated and no state is kept between calls.
Answers with a missing or unparseable rating are excluded from every score.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo

from app.domain import GradedAnswer, InterviewSession, domain_parse_rating, domain_parse_timestamp

from .formatting import (
    analytics_format_day_label,
    analytics_format_fixed,
    analytics_format_signed_percent,
)
from .interfaces import (
    InterviewDayCount,
    InterviewScore,
    MetricSummary,
    PerformancePoint,
    PerformanceSummary,
    PerformanceTimeSeries,
    ProfileStats,
    Trend,
)

IMPROVEMENT_WINDOW_SIZE = 3
EXPERIENCED_INTERVIEW_THRESHOLD = 10
TOP_PERFORMER_SCORE_THRESHOLD = 80


@dataclass
class _RatingGroup:
    """Mutable accumulator for one interview's valid ratings."""

    ratings: list[int] = field(default_factory=list)
    latest_answer_at: datetime | None = None


def analytics_round_half_up(value: float) -> int:
    """Round to the nearest integer with ties toward positive infinity.

    Args:
        value: Number to round.

    Returns:
        int: Rounded integer.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return math.floor(value + 0.5)


def analytics_mean(values: Sequence[float]) -> float:
    """Return the arithmetic mean, or 0 for an empty sequence."""

    if not values:
        return 0.0
    return sum(values) / len(values)


def analytics_group_interview_scores(
    answers: Sequence[GradedAnswer],
    require_timestamp: bool = False,
) -> list[InterviewScore]:
    """Group valid answer ratings by interview and score each interview.

    Groups are ordered most recent first by the latest answer timestamp in
    each group. Groups without any timestamp follow in first-seen order.

    Args:
        answers: Graded answers in any order.
        require_timestamp: Exclude answers that carry no timestamp.

    Returns:
        list[InterviewScore]: One entry per interview with at least one valid rating.

    Raises:
        RuntimeError: This function does not raise runtime errors.
    """

    groups: dict[str, _RatingGroup] = {}
    for answer in answers:
        rating = domain_parse_rating(answer.rating)
        if rating is None:
            continue
        answered_at = domain_parse_timestamp(answer.created_at)
        if require_timestamp and answered_at is None:
            continue

        group = groups.setdefault(answer.interview_ref, _RatingGroup())
        group.ratings.append(rating)
        if answered_at is not None and (group.latest_answer_at is None or answered_at > group.latest_answer_at):
            group.latest_answer_at = answered_at

    interview_scores = [
        InterviewScore(
            interview_ref=interview_ref,
            score=analytics_round_half_up(analytics_mean(group.ratings)),
            rating_count=len(group.ratings),
            latest_answer_at=group.latest_answer_at,
        )
        for interview_ref, group in groups.items()
    ]
    timestamped_scores = [score for score in interview_scores if score.latest_answer_at is not None]
    untimestamped_scores = [score for score in interview_scores if score.latest_answer_at is None]
    timestamped_scores.sort(key=lambda score: score.latest_answer_at, reverse=True)
    return timestamped_scores + untimestamped_scores


def analytics_compute_trend(current: float, previous: float) -> Trend:
    """Compare a metric against its previous-period baseline.

    Args:
        current: Current metric value.
        previous: Baseline value. Zero yields a flat upward trend.

    Returns:
        Trend: Direction and signed percentage change.

    Raises:
        RuntimeError: This function does not raise runtime errors.
    """

    if not previous:
        return Trend(direction="up", display_value="+0%")

    change = (current - previous) / previous * 100
    return Trend(
        direction="up" if change >= 0 else "down",
        display_value=analytics_format_signed_percent(change, 1),
    )


def analytics_compute_improvement(scores: Sequence[int]) -> float:
    """Compute percentage change between the latest scores and the ones before them.

    Args:
        scores: Per-interview scores, most recent first.

    Returns:
        float: Percentage change, or 0 when fewer than two full windows exist.

    Raises:
        RuntimeError: This function does not raise runtime errors.
    """

    if len(scores) < IMPROVEMENT_WINDOW_SIZE * 2:
        return 0.0

    recent = analytics_mean(scores[:IMPROVEMENT_WINDOW_SIZE])
    previous = analytics_mean(scores[IMPROVEMENT_WINDOW_SIZE : IMPROVEMENT_WINDOW_SIZE * 2])
    if previous <= 0:
        return 0.0
    return (recent - previous) / previous * 100


def analytics_compute_summary(
    interviews: Sequence[InterviewSession],
    answers: Sequence[GradedAnswer],
) -> PerformanceSummary:
    """Compute dashboard statistics from interview sessions and graded answers.

    `total_interviews` counts session records, while score statistics only see
    interviews that have at least one valid rating. The two may differ.

    Args:
        interviews: Interview sessions, most recent first.
        answers: Graded answers, most recent first.

    Returns:
        PerformanceSummary: Display-ready metrics with trends.

    Raises:
        RuntimeError: This function does not raise runtime errors.
    """

    scores = [interview_score.score for interview_score in analytics_group_interview_scores(answers)]

    total_interviews = len(interviews)
    average_score = analytics_mean(scores)
    best_performance = max(scores, default=0)
    improvement = analytics_compute_improvement(scores)

    previous_scores = scores[1:]
    previous_total_interviews = max(0, total_interviews - 1)
    previous_average_score = sum(previous_scores) / max(1, len(previous_scores))
    previous_best_performance = max(previous_scores, default=0)

    return PerformanceSummary(
        total_interviews=MetricSummary(
            value=str(total_interviews),
            trend=analytics_compute_trend(total_interviews, previous_total_interviews),
        ),
        average_score=MetricSummary(
            value=analytics_format_fixed(average_score, 1),
            trend=analytics_compute_trend(average_score, previous_average_score),
        ),
        best_performance=MetricSummary(
            value=f"{best_performance}%",
            trend=analytics_compute_trend(best_performance, previous_best_performance),
        ),
        improvement=MetricSummary(
            value=analytics_format_signed_percent(improvement, 0),
            trend=Trend(
                direction="up" if improvement >= 0 else "down",
                display_value=f"{analytics_format_fixed(abs(improvement), 1)}%",
            ),
        ),
    )


def analytics_compute_time_series(
    answers: Sequence[GradedAnswer],
    report_timezone: tzinfo = timezone.utc,
) -> PerformanceTimeSeries:
    """Build chart series of per-interview scores and interviews per day.

    Each interview becomes one point dated by its latest answer. Points on the
    same calendar day stay separate, while the day series counts them together.
    Answers without a timestamp are left out of both series.

    Args:
        answers: Graded answers in any order.
        report_timezone: Timezone that defines calendar-day boundaries.

    Returns:
        PerformanceTimeSeries: Points ascending by time and day buckets ascending by day.

    Raises:
        RuntimeError: This function does not raise runtime errors.
    """

    performance_points: list[PerformancePoint] = []
    for interview_score in analytics_group_interview_scores(answers, require_timestamp=True):
        answered_at = interview_score.latest_answer_at
        local_day = answered_at.astimezone(report_timezone).date()
        performance_points.append(
            PerformancePoint(
                interview_ref=interview_score.interview_ref,
                day=local_day,
                label=analytics_format_day_label(local_day),
                score=interview_score.score,
                answered_at=answered_at,
            )
        )
    performance_points.sort(key=lambda point: point.answered_at)

    day_counts: dict[date, int] = {}
    for point in performance_points:
        day_counts[point.day] = day_counts.get(point.day, 0) + 1

    interviews_by_date = tuple(
        InterviewDayCount(day=day, label=analytics_format_day_label(day), count=count)
        for day, count in sorted(day_counts.items())
    )
    return PerformanceTimeSeries(
        performance_by_date=tuple(performance_points),
        interviews_by_date=interviews_by_date,
    )


def analytics_compute_profile_stats(
    interviews: Sequence[InterviewSession],
    answers: Sequence[GradedAnswer],
    minutes_per_interview: int = 15,
) -> ProfileStats:
    """Compute profile headline statistics.

    Args:
        interviews: Interview sessions in any order.
        answers: Graded answers in any order.
        minutes_per_interview: Estimated practice minutes per session.

    Returns:
        ProfileStats: Totals, level and earned badges.

    Raises:
        ValueError: Raised when minutes_per_interview is negative.
    """

    if minutes_per_interview < 0:
        raise ValueError("minutes_per_interview must be non-negative")

    ratings = [rating for rating in (domain_parse_rating(answer.rating) for answer in answers) if rating is not None]
    total_interviews = len(interviews)
    average_score = analytics_round_half_up(analytics_mean(ratings))

    experienced = total_interviews >= EXPERIENCED_INTERVIEW_THRESHOLD
    badges = ["Professional"]
    if experienced:
        badges.append("Experienced")
    if average_score >= TOP_PERFORMER_SCORE_THRESHOLD:
        badges.append("Top Performer")

    return ProfileStats(
        total_interviews=total_interviews,
        average_score=average_score,
        total_minutes=total_interviews * minutes_per_interview,
        level="Advanced" if experienced else "Beginner",
        badges=tuple(badges),
    )


__all__ = [
    "IMPROVEMENT_WINDOW_SIZE",
    "analytics_compute_improvement",
    "analytics_compute_profile_stats",
    "analytics_compute_summary",
    "analytics_compute_time_series",
    "analytics_compute_trend",
    "analytics_group_interview_scores",
    "analytics_mean",
    "analytics_round_half_up",
]
