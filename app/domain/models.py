"""Typed domain models shared across runtime layers.

This module provides the read-only record contracts exchanged between the db
layer, the analytics aggregator, and the preferences service.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by health-check surfaces.

    Attributes:
        status: Overall status text for service health.
        detail: Additional message suitable for operational diagnostics.
    """

    status: str
    detail: str


@dataclass(frozen=True)
class InterviewSession:
    """One mock-interview attempt owned by a user.

    Attributes:
        interview_id: Opaque interview identifier referenced by answers.
        owner_identity: Owner key such as an email address.
        created_at: Optional session creation timestamp.
    """

    interview_id: str
    owner_identity: str
    created_at: datetime | None


@dataclass(frozen=True)
class GradedAnswer:
    """One scored response to an interview question.

    Attributes:
        interview_ref: Identifier of the interview session the answer belongs to.
        rating: String-encoded integer score, or None when not graded.
        created_at: Optional answer creation timestamp.
    """

    interview_ref: str
    rating: str | None
    created_at: datetime | None


@dataclass(frozen=True)
class UserPreferences:
    """Per-user interview practice preferences.

    Attributes:
        owner_identity: Owner key such as an email address.
        dark_mode: Whether the dark theme is enabled.
        notifications: Whether notifications are enabled.
        sound: Whether interface sounds are enabled.
        voice_response: Whether questions are read aloud.
        interview_duration_minutes: Preferred interview length in minutes.
        auto_save: Whether answers are saved automatically.
        privacy_mode: Whether privacy mode is enabled.
        volume: Playback volume in the 0-100 range.
        created_at_utc: Optional row creation timestamp.
        updated_at_utc: Optional last update timestamp.
    """

    owner_identity: str
    dark_mode: bool = False
    notifications: bool = True
    sound: bool = True
    voice_response: bool = False
    interview_duration_minutes: int = 15
    auto_save: bool = True
    privacy_mode: bool = False
    volume: int = 80
    created_at_utc: datetime | None = None
    updated_at_utc: datetime | None = None
