"""Per-owner analytics service backed by the interview record repository."""

from __future__ import annotations

import logging
from zoneinfo import ZoneInfo

from app.db import InterviewRecordRepositoryPort
from app.domain import GradedAnswer, InterviewSession

from .aggregator import analytics_compute_profile_stats, analytics_compute_summary, analytics_compute_time_series
from .interfaces import (
    AnalyticsPort,
    AnalyticsSourceUnavailableError,
    PerformanceSummary,
    PerformanceTimeSeries,
    ProfileStats,
)

logger = logging.getLogger(__name__)


class InterviewAnalyticsService(AnalyticsPort):
    """Fetch one owner's records and run the pure aggregations over them.

    Records are re-read on every call; nothing is cached between calls.
    """

    def __init__(
        self,
        repository: InterviewRecordRepositoryPort,
        report_timezone: str = "UTC",
        minutes_per_interview: int = 15,
    ):
        """Initialize analytics service dependencies.

        Args:
            repository: DB-layer interview and answer repository.
            report_timezone: IANA timezone for calendar-day chart buckets.
            minutes_per_interview: Estimated practice minutes per session.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when dependencies or options are invalid.
        """

        if repository is None:
            raise ValueError("repository must not be None")
        if minutes_per_interview < 1:
            raise ValueError("minutes_per_interview must be positive")
        self._repository = repository
        self._report_timezone = ZoneInfo(report_timezone)
        self._minutes_per_interview = minutes_per_interview

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

        normalized_owner_identity = self._analytics_validate_owner_identity(owner_identity)
        interviews = self._analytics_load_interviews(normalized_owner_identity)
        answers = self._analytics_load_answers(normalized_owner_identity)
        return analytics_compute_summary(interviews=interviews, answers=answers)

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

        normalized_owner_identity = self._analytics_validate_owner_identity(owner_identity)
        answers = self._analytics_load_answers(normalized_owner_identity)
        return analytics_compute_time_series(answers=answers, report_timezone=self._report_timezone)

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

        normalized_owner_identity = self._analytics_validate_owner_identity(owner_identity)
        interviews = self._analytics_load_interviews(normalized_owner_identity)
        answers = self._analytics_load_answers(normalized_owner_identity)
        return analytics_compute_profile_stats(
            interviews=interviews,
            answers=answers,
            minutes_per_interview=self._minutes_per_interview,
        )

    def _analytics_load_interviews(self, owner_identity: str) -> list[InterviewSession]:
        try:
            interviews = self._repository.db_interview_list_for_owner(owner_identity=owner_identity)
        except RuntimeError as error:
            raise AnalyticsSourceUnavailableError("interview records could not be loaded") from error
        logger.debug("loaded %d interview sessions", len(interviews))
        return interviews

    def _analytics_load_answers(self, owner_identity: str) -> list[GradedAnswer]:
        try:
            answers = self._repository.db_answer_list_for_owner(owner_identity=owner_identity)
        except RuntimeError as error:
            raise AnalyticsSourceUnavailableError("answer records could not be loaded") from error
        logger.debug("loaded %d graded answers", len(answers))
        return answers

    @staticmethod
    def _analytics_validate_owner_identity(owner_identity: str) -> str:
        if not isinstance(owner_identity, str) or not owner_identity.strip():
            raise ValueError("owner_identity must not be blank")
        return owner_identity.strip()
