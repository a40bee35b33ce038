"""Database service for per-user preferences persistence."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from app.domain import UserPreferences, domain_parse_timestamp

from .interfaces import UserPreferencesRepositoryPort


class SQLAlchemyUserPreferencesService(UserPreferencesRepositoryPort):
    """SQLAlchemy implementation for user preferences reads and column-scoped writes.

    Writes never carry columns the caller did not name, so concurrent updates
    of different fields for the same owner do not overwrite each other.
    """

    _PREFERENCES_COLUMNS = (
        "owner_identity, dark_mode, notifications, sound, voice_response, interview_duration_minutes, "
        "auto_save, privacy_mode, volume, created_at_utc, updated_at_utc"
    )

    # Column identifiers interpolated into SQL must come from this tuple.
    _PREFERENCES_WRITABLE_COLUMNS = (
        "dark_mode",
        "notifications",
        "sound",
        "voice_response",
        "interview_duration_minutes",
        "auto_save",
        "privacy_mode",
        "volume",
    )

    def __init__(self, engine: Engine):
        """Initialize preferences database service.

        Args:
            engine: SQLAlchemy engine used for persistence and reads.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when engine is invalid.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_user_preferences_get(self, owner_identity: str) -> UserPreferences | None:
        """Fetch stored preferences for one owner.

        Args:
            owner_identity: Owner key such as an email address.

        Returns:
            UserPreferences | None: Stored preferences, or None when absent.

        Raises:
            ValueError: Raised when owner identity is blank.
            RuntimeError: Raised when database read fails.
        """

        normalized_owner_identity = self._db_validate_owner_identity(owner_identity)

        try:
            with self._engine.connect() as connection:
                row = connection.execute(
                    text(
                        f"SELECT {self._PREFERENCES_COLUMNS} "
                        "FROM user_preferences "
                        "WHERE owner_identity = :owner_identity"
                    ),
                    {"owner_identity": normalized_owner_identity},
                ).mappings().first()
        except SQLAlchemyError as error:
            raise RuntimeError("user preferences read failed") from error

        if row is None:
            return None
        return self._db_map_preferences_row(row)

    def db_user_preferences_insert_default(self, owner_identity: str) -> UserPreferences | None:
        """Insert a default preferences row unless one already exists.

        Column defaults come from the table definition. An existing row is left
        untouched.

        Args:
            owner_identity: Owner key such as an email address.

        Returns:
            UserPreferences | None: Created row, or None when the owner already had one.

        Raises:
            ValueError: Raised when owner identity is blank.
            RuntimeError: Raised when persistence fails.
        """

        normalized_owner_identity = self._db_validate_owner_identity(owner_identity)

        try:
            with self._engine.begin() as connection:
                row = connection.execute(
                    text(
                        "INSERT INTO user_preferences (owner_identity) "
                        "VALUES (:owner_identity) "
                        "ON CONFLICT (owner_identity) DO NOTHING "
                        f"RETURNING {self._PREFERENCES_COLUMNS}"
                    ),
                    {"owner_identity": normalized_owner_identity},
                ).mappings().first()
        except SQLAlchemyError as error:
            raise RuntimeError("user preferences insert failed") from error

        if row is None:
            return None
        return self._db_map_preferences_row(row)

    def db_user_preferences_apply_changes(
        self,
        owner_identity: str,
        changes: Mapping[str, object],
    ) -> UserPreferences:
        """Write only the given columns, creating the row with defaults when absent.

        Args:
            owner_identity: Owner key such as an email address.
            changes: Editable column names mapped to new values.

        Returns:
            UserPreferences: Persisted row including timestamps.

        Raises:
            ValueError: Raised when owner identity is blank, changes are empty, or a column is not editable.
            RuntimeError: Raised when persistence fails.
        """

        normalized_owner_identity = self._db_validate_owner_identity(owner_identity)
        if not changes:
            raise ValueError("changes must not be empty")
        unknown_columns = sorted(set(changes) - set(self._PREFERENCES_WRITABLE_COLUMNS))
        if unknown_columns:
            raise ValueError(f"unsupported preference columns: {', '.join(unknown_columns)}")

        changed_columns = [column for column in self._PREFERENCES_WRITABLE_COLUMNS if column in changes]
        insert_columns = ", ".join(["owner_identity", *changed_columns])
        insert_values = ", ".join(f":{column}" for column in ["owner_identity", *changed_columns])
        update_assignments = ", ".join(f"{column} = EXCLUDED.{column}" for column in changed_columns)
        parameters: dict[str, object] = {"owner_identity": normalized_owner_identity}
        parameters.update({column: changes[column] for column in changed_columns})

        try:
            with self._engine.begin() as connection:
                row = connection.execute(
                    text(
                        f"INSERT INTO user_preferences ({insert_columns}) "
                        f"VALUES ({insert_values}) "
                        "ON CONFLICT (owner_identity) DO UPDATE SET "
                        f"{update_assignments}, updated_at_utc = now() "
                        f"RETURNING {self._PREFERENCES_COLUMNS}"
                    ),
                    parameters,
                ).mappings().one()
        except SQLAlchemyError as error:
            raise RuntimeError("user preferences update failed") from error

        return self._db_map_preferences_row(row)

    @staticmethod
    def _db_validate_owner_identity(owner_identity: str) -> str:
        if not isinstance(owner_identity, str) or not owner_identity.strip():
            raise ValueError("owner_identity must not be blank")
        return owner_identity.strip()

    @staticmethod
    def _db_map_preferences_row(row: Any) -> UserPreferences:
        return UserPreferences(
            owner_identity=row["owner_identity"],
            dark_mode=bool(row["dark_mode"]),
            notifications=bool(row["notifications"]),
            sound=bool(row["sound"]),
            voice_response=bool(row["voice_response"]),
            interview_duration_minutes=int(row["interview_duration_minutes"]),
            auto_save=bool(row["auto_save"]),
            privacy_mode=bool(row["privacy_mode"]),
            volume=int(row["volume"]),
            created_at_utc=domain_parse_timestamp(row["created_at_utc"]),
            updated_at_utc=domain_parse_timestamp(row["updated_at_utc"]),
        )
