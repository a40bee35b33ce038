"""Analytics API router composition for per-owner dashboard reads."""

from __future__ import annotations

import logging
from collections.abc import Callable

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.analytics import (
    AnalyticsPort,
    AnalyticsSourceUnavailableError,
    MetricSummary,
    PerformanceSummary,
    PerformanceTimeSeries,
    ProfileStats,
)

logger = logging.getLogger(__name__)


def api_create_analytics_router(analytics_service: AnalyticsPort) -> APIRouter:
    """Create analytics router exposing summary, chart and profile reads.

    Args:
        analytics_service: Analytics service computing per-owner statistics.

    Returns:
        APIRouter: Router exposing analytics endpoints.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if analytics_service is None:
        raise ValueError("analytics_service must not be None")

    router = APIRouter(prefix="/analytics", tags=["analytics"])

    @router.get("/{owner_identity}/summary")
    def api_analytics_summary(owner_identity: str) -> JSONResponse:
        """Return dashboard statistics for one owner.

        Args:
            owner_identity: Owner key such as an email address.

        Returns:
            JSONResponse: Summary payload or error envelope.
        """

        return _api_analytics_respond(
            owner_identity,
            lambda: api_serialize_performance_summary(analytics_service.analytics_summary_for_owner(owner_identity)),
        )

    @router.get("/{owner_identity}/time-series")
    def api_analytics_time_series(owner_identity: str) -> JSONResponse:
        """Return chart series for one owner.

        Args:
            owner_identity: Owner key such as an email address.

        Returns:
            JSONResponse: Time-series payload or error envelope.
        """

        return _api_analytics_respond(
            owner_identity,
            lambda: api_serialize_time_series(analytics_service.analytics_time_series_for_owner(owner_identity)),
        )

    @router.get("/{owner_identity}/profile")
    def api_analytics_profile(owner_identity: str) -> JSONResponse:
        """Return profile statistics for one owner.

        Args:
            owner_identity: Owner key such as an email address.

        Returns:
            JSONResponse: Profile payload or error envelope.
        """

        return _api_analytics_respond(
            owner_identity,
            lambda: api_serialize_profile_stats(analytics_service.analytics_profile_for_owner(owner_identity)),
        )

    return router


def _api_analytics_respond(owner_identity: str, build_payload: Callable[[], dict[str, object]]) -> JSONResponse:
    """Run one analytics read and map failures to the error envelope.

    Args:
        owner_identity: Owner key used for diagnostics.
        build_payload: Callable computing the serialized payload.

    Returns:
        JSONResponse: Success payload or error envelope.
    """

    if not owner_identity.strip():
        payload = {
            "status": "error",
            "code": "INVALID_OWNER_IDENTITY",
            "message": "owner_identity must not be blank",
        }
        return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)

    try:
        return JSONResponse(content=build_payload(), status_code=status.HTTP_200_OK)
    except ValueError as error:
        payload = {
            "status": "error",
            "code": "INVALID_OWNER_IDENTITY",
            "message": str(error),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)
    except AnalyticsSourceUnavailableError:
        logger.exception("analytics read failed for owner=%s", owner_identity)
        payload = {
            "status": "error",
            "code": "ANALYTICS_SOURCE_UNAVAILABLE",
            "message": "Failed to load analytics",
        }
        return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


def api_serialize_metric_summary(metric: MetricSummary) -> dict[str, object]:
    """Serialize one metric value and trend."""

    return {
        "value": metric.value,
        "trend": {
            "direction": metric.trend.direction,
            "display_value": metric.trend.display_value,
        },
    }


def api_serialize_performance_summary(summary: PerformanceSummary) -> dict[str, object]:
    """Serialize dashboard statistics to JSON payload.

    Args:
        summary: Computed dashboard statistics.

    Returns:
        dict[str, object]: JSON-serializable summary payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "total_interviews": api_serialize_metric_summary(summary.total_interviews),
        "average_score": api_serialize_metric_summary(summary.average_score),
        "best_performance": api_serialize_metric_summary(summary.best_performance),
        "improvement": api_serialize_metric_summary(summary.improvement),
    }


def api_serialize_time_series(time_series: PerformanceTimeSeries) -> dict[str, object]:
    """Serialize chart series to JSON payload.

    Args:
        time_series: Computed chart series.

    Returns:
        dict[str, object]: JSON-serializable chart payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "performance_by_date": [
            {
                "interview_ref": point.interview_ref,
                "date": point.day.isoformat(),
                "label": point.label,
                "score": point.score,
            }
            for point in time_series.performance_by_date
        ],
        "interviews_by_date": [
            {
                "date": bucket.day.isoformat(),
                "label": bucket.label,
                "count": bucket.count,
            }
            for bucket in time_series.interviews_by_date
        ],
    }


def api_serialize_profile_stats(profile_stats: ProfileStats) -> dict[str, object]:
    """Serialize profile statistics to JSON payload."""

    return {
        "total_interviews": profile_stats.total_interviews,
        "average_score": profile_stats.average_score,
        "total_minutes": profile_stats.total_minutes,
        "level": profile_stats.level,
        "badges": list(profile_stats.badges),
    }


__all__ = [
    "api_create_analytics_router",
    "api_serialize_performance_summary",
    "api_serialize_profile_stats",
    "api_serialize_time_series",
]
