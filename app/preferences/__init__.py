"""Preferences layer package for per-user settings ownership."""

from .service import (
    PREFERENCES_EDITABLE_FIELDS,
    PreferencesListener,
    PreferencesSourceUnavailableError,
    UserPreferencesService,
)

__all__ = [
    "PREFERENCES_EDITABLE_FIELDS",
    "PreferencesListener",
    "PreferencesSourceUnavailableError",
    "UserPreferencesService",
]
