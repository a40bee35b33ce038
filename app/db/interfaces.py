"""Typed interfaces for database-layer services.

All SQL access must remain in the db package and its submodules.
"""

from collections.abc import Mapping
from typing import Protocol

from app.domain import GradedAnswer, HealthStatus, InterviewSession, UserPreferences


class DatabaseHealthPort(Protocol):
    """Port definition for database connectivity verification."""

    def db_connection_label(self) -> str:
        """Return a stable label for the active database connection target.

        Returns:
            str: Database target label for diagnostics.

        Raises:
            RuntimeError: Raised when connection metadata is unavailable.
        """

    def db_check_health(self) -> HealthStatus:
        """Check database connectivity and return deterministic health payload.

        Returns:
            HealthStatus: Database health status payload.

        Raises:
            ConnectionError: Raised when database cannot be reached.
        """


class InterviewRecordRepositoryPort(Protocol):
    """Port definition for reading one owner's interview sessions and graded answers."""

    def db_interview_list_for_owner(self, owner_identity: str) -> list[InterviewSession]:
        """List interview sessions created by one owner, most recent first.

        Args:
            owner_identity: Owner key such as an email address.

        Returns:
            list[InterviewSession]: Sessions ordered by creation time descending.

        Raises:
            ValueError: Raised when owner identity is blank.
            RuntimeError: Raised when database read fails.
        """

    def db_answer_list_for_owner(self, owner_identity: str) -> list[GradedAnswer]:
        """List graded answers given by one owner, most recent first.

        Args:
            owner_identity: Owner key such as an email address.

        Returns:
            list[GradedAnswer]: Answers ordered by creation time descending.

        Raises:
            ValueError: Raised when owner identity is blank.
            RuntimeError: Raised when database read fails.
        """


class UserPreferencesRepositoryPort(Protocol):
    """Port definition for per-user preferences persistence."""

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

    def db_user_preferences_insert_default(self, owner_identity: str) -> UserPreferences | None:
        """Insert a default preferences row unless one already exists.

        Args:
            owner_identity: Owner key such as an email address.

        Returns:
            UserPreferences | None: Created row, or None when the owner already had one.

        Raises:
            ValueError: Raised when owner identity is blank.
            RuntimeError: Raised when persistence fails.
        """

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
            ValueError: Raised when owner identity is blank or a column is not editable.
            RuntimeError: Raised when persistence fails.
        """
