"""Application bootstrap wiring for startup validation and dependency assembly."""

import logging

from fastapi import FastAPI

from app.analytics import InterviewAnalyticsService
from app.api import create_api_application
from app.config import AppSettings, config_load_settings
from app.db import (
    SQLAlchemyDatabaseHealthService,
    SQLAlchemyInterviewRecordService,
    SQLAlchemyUserPreferencesService,
    db_create_engine,
)
from app.domain import UserPreferences
from app.preferences import UserPreferencesService

logger = logging.getLogger(__name__)


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    engine = db_create_engine(database_url=resolved_settings.database_url)
    db_health_service = SQLAlchemyDatabaseHealthService(engine=engine)
    analytics_service = InterviewAnalyticsService(
        repository=SQLAlchemyInterviewRecordService(engine=engine),
        report_timezone=resolved_settings.analytics_report_timezone,
        minutes_per_interview=resolved_settings.analytics_minutes_per_interview,
    )
    preferences_service = UserPreferencesService(repository=SQLAlchemyUserPreferencesService(engine=engine))
    preferences_service.preferences_subscribe(bootstrap_log_preferences_change)

    logger.info("application assembled for environment=%s", resolved_settings.environment_name)
    return create_api_application(
        settings=resolved_settings,
        db_health_service=db_health_service,
        analytics_service=analytics_service,
        preferences_service=preferences_service,
    )


def bootstrap_create_analytics_service(settings: AppSettings | None = None) -> InterviewAnalyticsService:
    """Build analytics service for non-HTTP surfaces.

    Args:
        settings: Optional pre-loaded settings; loaded from environment when omitted.

    Returns:
        InterviewAnalyticsService: Fully wired analytics service.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    engine = db_create_engine(database_url=resolved_settings.database_url)
    return InterviewAnalyticsService(
        repository=SQLAlchemyInterviewRecordService(engine=engine),
        report_timezone=resolved_settings.analytics_report_timezone,
        minutes_per_interview=resolved_settings.analytics_minutes_per_interview,
    )


def bootstrap_log_preferences_change(preferences: UserPreferences) -> None:
    """Log one persisted preferences change."""

    logger.info(
        "preferences saved owner=%s dark_mode=%s sound=%s volume=%d",
        preferences.owner_identity,
        preferences.dark_mode,
        preferences.sound,
        preferences.volume,
    )
