"""Typed interfaces for analytics-layer aggregations."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal, Protocol


TrendDirection = Literal["up", "down"]


class AnalyticsSourceUnavailableError(RuntimeError):
    """Raised when interview or answer records cannot be loaded for aggregation."""


@dataclass(frozen=True)
class Trend:
    """Directional comparison of a metric against its previous-period baseline.

    Attributes:
        direction: `up` when the metric did not decrease, else `down`.
        display_value: Formatted percentage change such as `+12.5%`.
    """

    direction: TrendDirection
    display_value: str


@dataclass(frozen=True)
class MetricSummary:
    """Display-ready value and trend for one dashboard metric.

    Attributes:
        value: Formatted metric value.
        trend: Trend against the previous-period baseline.
    """

    value: str
    trend: Trend


@dataclass(frozen=True)
class PerformanceSummary:
    """Dashboard statistics computed from interview sessions and graded answers.

    Attributes:
        total_interviews: Count of interview sessions.
        average_score: Mean of per-interview scores.
        best_performance: Highest per-interview score.
        improvement: Change between the three latest scores and the three before them.
    """

    total_interviews: MetricSummary
    average_score: MetricSummary
    best_performance: MetricSummary
    improvement: MetricSummary


@dataclass(frozen=True)
class InterviewScore:
    """Rounded score of one interview built from its valid answer ratings.

    Attributes:
        interview_ref: Interview identifier.
        score: Rounded mean of valid ratings.
        rating_count: Number of ratings that contributed.
        latest_answer_at: Most recent answer timestamp, or None when no answer carried one.
    """

    interview_ref: str
    score: int
    rating_count: int
    latest_answer_at: datetime | None


@dataclass(frozen=True)
class PerformancePoint:
    """One chart point for a single interview.

    Attributes:
        interview_ref: Interview identifier.
        day: Calendar day of the interview in the report timezone.
        label: Short display label for the day, such as `Jan 5`.
        score: Rounded mean of valid ratings.
        answered_at: Representative answer timestamp.
    """

    interview_ref: str
    day: date
    label: str
    score: int
    answered_at: datetime


@dataclass(frozen=True)
class InterviewDayCount:
    """Number of scored interviews that fall on one calendar day.

    Attributes:
        day: Calendar day in the report timezone.
        label: Short display label for the day.
        count: Number of interviews on that day.
    """

    day: date
    label: str
    count: int


@dataclass(frozen=True)
class PerformanceTimeSeries:
    """Chart series for performance over time and interviews per day.

    Attributes:
        performance_by_date: One point per interview, ascending by time.
        interviews_by_date: Day buckets ascending by day.
    """

    performance_by_date: tuple[PerformancePoint, ...]
    interviews_by_date: tuple[InterviewDayCount, ...]


@dataclass(frozen=True)
class ProfileStats:
    """Headline statistics shown on a user's profile.

    Attributes:
        total_interviews: Count of interview sessions.
        average_score: Rounded mean of all valid answer ratings.
        total_minutes: Estimated practice time in minutes.
        level: Experience level label.
        badges: Earned badge labels.
    """

    total_interviews: int
    average_score: int
    total_minutes: int
    level: str
    badges: tuple[str, ...]


class AnalyticsPort(Protocol):
    """Port definition for per-owner interview analytics services."""

    def analytics_summary_for_owner(self, owner_identity: str) -> PerformanceSummary:
        """Compute dashboard statistics for one owner.

        Args:
            owner_identity: Owner key such as an email address.

        Returns:
            PerformanceSummary: Display-ready dashboard statistics.

        Raises:
            ValueError: Raised when owner identity is blank.
            AnalyticsSourceUnavailableError: Raised when records cannot be loaded.
        """

    def analytics_time_series_for_owner(self, owner_identity: str) -> PerformanceTimeSeries:
        """Compute chart series for one owner.

        Args:
            owner_identity: Owner key such as an email address.

        Returns:
            PerformanceTimeSeries: Chart-ready series.

        Raises:
            ValueError: Raised when owner identity is blank.
            AnalyticsSourceUnavailableError: Raised when records cannot be loaded.
        """

    def analytics_profile_for_owner(self, owner_identity: str) -> ProfileStats:
        """Compute profile statistics for one owner.

        Args:
            owner_identity: Owner key such as an email address.

        Returns:
            ProfileStats: Profile headline statistics.

        Raises:
            ValueError: Raised when owner identity is blank.
            AnalyticsSourceUnavailableError: Raised when records cannot be loaded.
        """
