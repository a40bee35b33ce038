"""Single-writer service for per-user preferences with change subscriptions."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from threading import Lock

from app.db import UserPreferencesRepositoryPort
from app.domain import UserPreferences

logger = logging.getLogger(__name__)

PreferencesListener = Callable[[UserPreferences], None]

PREFERENCES_EDITABLE_FIELDS = frozenset(
    {
        "dark_mode",
        "notifications",
        "sound",
        "voice_response",
        "interview_duration_minutes",
        "auto_save",
        "privacy_mode",
        "volume",
    }
)

_PREFERENCES_BOOLEAN_FIELDS = PREFERENCES_EDITABLE_FIELDS - {"interview_duration_minutes", "volume"}


class PreferencesSourceUnavailableError(RuntimeError):
    """Raised when preferences cannot be read from or written to storage."""


class UserPreferencesService:
    """Own all preference writes and notify subscribers of each persisted change."""

    def __init__(self, repository: UserPreferencesRepositoryPort):
        """Initialize preferences service dependencies.

        Args:
            repository: DB-layer preferences repository.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when repository is invalid.
        """

        if repository is None:
            raise ValueError("repository must not be None")
        self._repository = repository
        self._listeners: list[PreferencesListener] = []
        self._listeners_lock = Lock()

    def preferences_subscribe(self, listener: PreferencesListener) -> Callable[[], None]:
        """Register a listener called with every persisted preferences record.

        Args:
            listener: Callable receiving the persisted record.

        Returns:
            Callable[[], None]: Function that removes the listener.

        Raises:
            ValueError: Raised when listener is not callable.
        """

        if not callable(listener):
            raise ValueError("listener must be callable")

        with self._listeners_lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._listeners_lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def preferences_get_or_create(self, owner_identity: str) -> UserPreferences:
        """Return stored preferences, creating defaults on first access.

        Default creation never overwrites a row written concurrently by another
        request; in that case the stored row is returned instead. Subscribers are
        notified only when a row was actually created.

        Args:
            owner_identity: Owner key such as an email address.

        Returns:
            UserPreferences: Stored or newly created preferences.

        Raises:
            ValueError: Raised when owner identity is blank.
            PreferencesSourceUnavailableError: Raised when storage access fails.
        """

        normalized_owner_identity = self._preferences_validate_owner_identity(owner_identity)
        try:
            stored_preferences = self._repository.db_user_preferences_get(owner_identity=normalized_owner_identity)
            if stored_preferences is not None:
                return stored_preferences
            created_preferences = self._repository.db_user_preferences_insert_default(
                owner_identity=normalized_owner_identity
            )
            if created_preferences is None:
                stored_preferences = self._repository.db_user_preferences_get(owner_identity=normalized_owner_identity)
        except RuntimeError as error:
            raise PreferencesSourceUnavailableError("user preferences could not be loaded") from error

        if created_preferences is None:
            if stored_preferences is None:
                raise PreferencesSourceUnavailableError("user preferences could not be loaded")
            return stored_preferences

        self._preferences_notify(created_preferences)
        return created_preferences

    def preferences_update(self, owner_identity: str, changes: Mapping[str, object]) -> UserPreferences:
        """Apply a partial update to one owner's preferences.

        Only the named fields are written, so concurrent updates of other fields
        survive. An empty change set behaves like a read.

        Args:
            owner_identity: Owner key such as an email address.
            changes: Field names mapped to new values.

        Returns:
            UserPreferences: Persisted preferences after the update.

        Raises:
            ValueError: Raised when owner identity, field names, or values are invalid.
            PreferencesSourceUnavailableError: Raised when storage access fails.
        """

        normalized_owner_identity = self._preferences_validate_owner_identity(owner_identity)
        validated_changes = self._preferences_validate_changes(changes)
        if not validated_changes:
            return self.preferences_get_or_create(normalized_owner_identity)

        try:
            updated_preferences = self._repository.db_user_preferences_apply_changes(
                owner_identity=normalized_owner_identity,
                changes=validated_changes,
            )
        except RuntimeError as error:
            raise PreferencesSourceUnavailableError("user preferences could not be saved") from error

        self._preferences_notify(updated_preferences)
        return updated_preferences

    def _preferences_notify(self, preferences: UserPreferences) -> None:
        """Deliver one persisted record to every listener.

        The write has already committed, so a failing listener is logged and
        does not affect the caller or the remaining listeners.
        """

        with self._listeners_lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(preferences)
            except Exception:  # pylint: disable=broad-exception-caught
                logger.exception("preferences listener failed for owner=%s", preferences.owner_identity)

    @staticmethod
    def _preferences_validate_owner_identity(owner_identity: str) -> str:
        if not isinstance(owner_identity, str) or not owner_identity.strip():
            raise ValueError("owner_identity must not be blank")
        return owner_identity.strip()

    @staticmethod
    def _preferences_validate_changes(changes: Mapping[str, object]) -> dict[str, object]:
        if changes is None:
            raise ValueError("changes must not be None")

        unknown_fields = sorted(set(changes) - PREFERENCES_EDITABLE_FIELDS)
        if unknown_fields:
            raise ValueError(f"unsupported preference fields: {', '.join(unknown_fields)}")

        for field_name, value in changes.items():
            if field_name in _PREFERENCES_BOOLEAN_FIELDS and not isinstance(value, bool):
                raise ValueError(f"{field_name} must be a boolean")
            if field_name in {"interview_duration_minutes", "volume"} and (
                isinstance(value, bool) or not isinstance(value, int)
            ):
                raise ValueError(f"{field_name} must be an integer")

        volume = changes.get("volume")
        if volume is not None and not 0 <= volume <= 100:
            raise ValueError("volume must be between 0 and 100")
        duration = changes.get("interview_duration_minutes")
        if duration is not None and duration < 1:
            raise ValueError("interview_duration_minutes must be at least 1")
        return dict(changes)
