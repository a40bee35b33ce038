"""FastAPI application factory for the interview analytics service."""

from fastapi import FastAPI

from app.analytics import AnalyticsPort
from app.config import AppSettings
from app.db import DatabaseHealthPort
from app.preferences import UserPreferencesService

from .routers import api_create_analytics_router, api_create_health_router, api_create_preferences_router


def create_api_application(
    settings: AppSettings,
    db_health_service: DatabaseHealthPort,
    analytics_service: AnalyticsPort,
    preferences_service: UserPreferencesService | None = None,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        db_health_service: Database health service used by health endpoints.
        analytics_service: Per-owner analytics service for dashboard reads.
        preferences_service: Optional preferences service; preferences routes are omitted when absent.

    Returns:
        FastAPI: Framework application instance.

    Raises:
        ValueError: Raised when required dependencies are invalid.
    """
    application = FastAPI(title="Interview Analytics")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal service identification response."""

        return {
            "service": "interview-analytics",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.include_router(api_create_health_router(db_health_service=db_health_service))
    application.include_router(api_create_analytics_router(analytics_service=analytics_service))
    if preferences_service is not None:
        application.include_router(api_create_preferences_router(preferences_service=preferences_service))

    return application
