"""Preferences API router composition for per-user settings reads and updates."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from app.domain import UserPreferences
from app.preferences import PreferencesSourceUnavailableError, UserPreferencesService

logger = logging.getLogger(__name__)


class PreferencesUpdateRequest(BaseModel):
    """Partial preferences update body; omitted fields keep their stored values."""

    model_config = ConfigDict(extra="forbid")

    dark_mode: bool | None = None
    notifications: bool | None = None
    sound: bool | None = None
    voice_response: bool | None = None
    interview_duration_minutes: int | None = Field(default=None, ge=1)
    auto_save: bool | None = None
    privacy_mode: bool | None = None
    volume: int | None = Field(default=None, ge=0, le=100)


def api_create_preferences_router(preferences_service: UserPreferencesService) -> APIRouter:
    """Create preferences router exposing read and partial-update endpoints.

    Args:
        preferences_service: Single-writer preferences service.

    Returns:
        APIRouter: Router exposing preferences endpoints.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if preferences_service is None:
        raise ValueError("preferences_service must not be None")

    router = APIRouter(prefix="/preferences", tags=["preferences"])

    @router.get("/{owner_identity}")
    def api_preferences_get(owner_identity: str) -> JSONResponse:
        """Return stored preferences, creating defaults on first access.

        Args:
            owner_identity: Owner key such as an email address.

        Returns:
            JSONResponse: Preferences payload or error envelope.
        """

        try:
            preferences = preferences_service.preferences_get_or_create(owner_identity)
        except ValueError as error:
            return _api_preferences_error("INVALID_PREFERENCES", str(error), status.HTTP_400_BAD_REQUEST)
        except PreferencesSourceUnavailableError:
            logger.exception("preferences read failed for owner=%s", owner_identity)
            return _api_preferences_error(
                "PREFERENCES_SOURCE_UNAVAILABLE",
                "Failed to fetch settings",
                status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        return JSONResponse(content=api_serialize_user_preferences(preferences), status_code=status.HTTP_200_OK)

    @router.put("/{owner_identity}")
    def api_preferences_update(owner_identity: str, request: PreferencesUpdateRequest) -> JSONResponse:
        """Apply a partial preferences update.

        Args:
            owner_identity: Owner key such as an email address.
            request: Fields to change.

        Returns:
            JSONResponse: Updated preferences payload or error envelope.
        """

        try:
            preferences = preferences_service.preferences_update(
                owner_identity,
                request.model_dump(exclude_none=True),
            )
        except ValueError as error:
            return _api_preferences_error("INVALID_PREFERENCES", str(error), status.HTTP_400_BAD_REQUEST)
        except PreferencesSourceUnavailableError:
            logger.exception("preferences update failed for owner=%s", owner_identity)
            return _api_preferences_error(
                "PREFERENCES_SOURCE_UNAVAILABLE",
                "Failed to update settings",
                status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        return JSONResponse(content=api_serialize_user_preferences(preferences), status_code=status.HTTP_200_OK)

    return router


def _api_preferences_error(code: str, message: str, status_code: int) -> JSONResponse:
    payload = {
        "status": "error",
        "code": code,
        "message": message,
    }
    return JSONResponse(content=payload, status_code=status_code)


def api_serialize_user_preferences(preferences: UserPreferences) -> dict[str, object]:
    """Serialize one preferences record to JSON payload.

    Args:
        preferences: Preferences record.

    Returns:
        dict[str, object]: JSON-serializable preferences payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "owner_identity": preferences.owner_identity,
        "dark_mode": preferences.dark_mode,
        "notifications": preferences.notifications,
        "sound": preferences.sound,
        "voice_response": preferences.voice_response,
        "interview_duration_minutes": preferences.interview_duration_minutes,
        "auto_save": preferences.auto_save,
        "privacy_mode": preferences.privacy_mode,
        "volume": preferences.volume,
        "created_at_utc": None if preferences.created_at_utc is None else preferences.created_at_utc.isoformat(),
        "updated_at_utc": None if preferences.updated_at_utc is None else preferences.updated_at_utc.isoformat(),
    }


__all__ = ["PreferencesUpdateRequest", "api_create_preferences_router", "api_serialize_user_preferences"]
