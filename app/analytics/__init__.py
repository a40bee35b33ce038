"""Analytics layer package for interview performance aggregation."""

from .aggregator import (
    analytics_compute_improvement,
    analytics_compute_profile_stats,
    analytics_compute_summary,
    analytics_compute_time_series,
    analytics_compute_trend,
    analytics_group_interview_scores,
)
from .interfaces import (
    AnalyticsPort,
    AnalyticsSourceUnavailableError,
    InterviewDayCount,
    InterviewScore,
    MetricSummary,
    PerformancePoint,
    PerformanceSummary,
    PerformanceTimeSeries,
    ProfileStats,
    Trend,
)
from .service import InterviewAnalyticsService

__all__ = [
    "AnalyticsPort",
    "AnalyticsSourceUnavailableError",
    "InterviewAnalyticsService",
    "InterviewDayCount",
    "InterviewScore",
    "MetricSummary",
    "PerformancePoint",
    "PerformanceSummary",
    "PerformanceTimeSeries",
    "ProfileStats",
    "Trend",
    "analytics_compute_improvement",
    "analytics_compute_profile_stats",
    "analytics_compute_summary",
    "analytics_compute_time_series",
    "analytics_compute_trend",
    "analytics_group_interview_scores",
]
