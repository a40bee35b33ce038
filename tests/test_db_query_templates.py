"""Regression tests for fixed SQL template selection in db-layer query paths."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from app.db.health import SQLAlchemyDatabaseHealthService
from app.db.interview_records import SQLAlchemyInterviewRecordService
from app.db.user_preferences import SQLAlchemyUserPreferencesService
from app.domain import GradedAnswer, InterviewSession


class _MappingResultStub:
    """Stub mapping result wrapper for SQLAlchemy-like query responses."""

    def __init__(self, rows: list[dict]):
        """Initialize mapping result rows.

        Args:
            rows: Row mappings returned by a query.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: This stub does not raise value errors.
        """

        self._rows = rows

    def mappings(self) -> _MappingResultStub:
        """Return self to emulate SQLAlchemy mappings chain.

        Returns:
            _MappingResultStub: This object.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        return self

    def all(self) -> list[dict]:
        """Return all row mappings.

        Returns:
            list[dict]: Query rows.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        return self._rows

    def first(self) -> dict | None:
        """Return the first row mapping, if any.

        Returns:
            dict | None: First query row.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        return self._rows[0] if self._rows else None

    def one(self) -> dict:
        """Return exactly one row mapping.

        Returns:
            dict: Single query row.

        Raises:
            AssertionError: Raised when the stub holds no rows.
        """

        assert self._rows, "expected one row"
        return self._rows[0]


class _ConnectionStub:
    """Connection stub capturing executed SQL and parameters."""

    def __init__(self, rows: list[dict], failure: Exception | None = None):
        """Initialize connection capture state.

        Args:
            rows: Query rows returned by execute().
            failure: Optional exception raised by execute().

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: This stub does not raise value errors.
        """

        self._rows = rows
        self._failure = failure
        self.executed_queries: list[str] = []
        self.executed_parameters: list[dict | None] = []

    def __enter__(self) -> _ConnectionStub:
        """Enter context manager.

        Returns:
            _ConnectionStub: This object.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        return self

    def __exit__(self, exc_type, exc, traceback) -> bool:
        """Exit context manager.

        Args:
            exc_type: Exception type.
            exc: Exception value.
            traceback: Exception traceback.

        Returns:
            bool: False to propagate exceptions.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        _ = (exc_type, exc, traceback)
        return False

    def execute(self, statement, parameters: dict | None = None):
        """Capture execute input and return deterministic row result.

        Args:
            statement: SQLAlchemy text clause or raw string.
            parameters: Bound query parameters.

        Returns:
            _MappingResultStub: Query result stub.

        Raises:
            Exception: Raised when a failure was configured.
        """

        statement_text = getattr(statement, "text", str(statement))
        self.executed_queries.append(statement_text)
        self.executed_parameters.append(parameters)
        if self._failure is not None:
            raise self._failure
        return _MappingResultStub(rows=self._rows)


class _EngineStub:
    """Engine stub that returns a predefined connection object."""

    def __init__(self, connection: _ConnectionStub):
        """Initialize engine with a deterministic connection stub.

        Args:
            connection: Connection stub instance.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: This stub does not raise value errors.
        """

        self._connection = connection

    def connect(self) -> _ConnectionStub:
        """Return connection stub.

        Returns:
            _ConnectionStub: Deterministic connection object.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        return self._connection

    def begin(self) -> _ConnectionStub:
        """Return connection stub for begin-context compatibility.

        Returns:
            _ConnectionStub: Deterministic connection object.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        return self._connection


def _build_operational_error() -> OperationalError:
    """Build a deterministic SQLAlchemy driver error.

    Returns:
        OperationalError: Error instance raised by connection stubs.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return OperationalError("SELECT 1", {}, Exception("connection refused"))


def _build_preferences_row() -> dict:
    """Build one user-preferences row mapping.

    Returns:
        dict: Mapping row with required columns.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    now_utc = datetime(2026, 6, 1, 8, 0, tzinfo=timezone.utc)
    return {
        "owner_identity": "candidate@example.com",
        "dark_mode": True,
        "notifications": True,
        "sound": False,
        "voice_response": False,
        "interview_duration_minutes": 30,
        "auto_save": True,
        "privacy_mode": False,
        "volume": 55,
        "created_at_utc": now_utc,
        "updated_at_utc": now_utc,
    }


def test_db_interview_list_uses_owner_scoped_recency_template() -> None:
    """Select interview sessions with fixed owner filter and recency order.

    Returns:
        None: Assertions validate SQL template selection and row mapping.

    Raises:
        AssertionError: Raised when selected SQL diverges from policy.
    """

    created_at = datetime(2026, 3, 1, 10, 0)
    connection = _ConnectionStub(
        rows=[{"mock_id": "mock-1", "owner_identity": "candidate@example.com", "created_at_utc": created_at}]
    )
    service = SQLAlchemyInterviewRecordService(engine=_EngineStub(connection=connection))

    interviews = service.db_interview_list_for_owner(owner_identity="  candidate@example.com ")

    executed_query = connection.executed_queries[0]
    assert "FROM mock_interview" in executed_query
    assert "WHERE owner_identity = :owner_identity" in executed_query
    assert "ORDER BY created_at_utc DESC NULLS LAST, mock_interview_id DESC" in executed_query
    assert connection.executed_parameters[0] == {"owner_identity": "candidate@example.com"}
    assert interviews == [
        InterviewSession(
            interview_id="mock-1",
            owner_identity="candidate@example.com",
            created_at=created_at.replace(tzinfo=timezone.utc),
        )
    ]


def test_db_answer_list_maps_text_ratings_and_missing_timestamps() -> None:
    """Select graded answers with fixed template and keep ratings as raw text.

    Returns:
        None: Assertions validate SQL template selection and row mapping.

    Raises:
        AssertionError: Raised when selected SQL or mapping diverges.
    """

    connection = _ConnectionStub(
        rows=[
            {"mock_id_ref": "mock-1", "rating": "8/10", "created_at_utc": "2026-03-01T10:00:00Z"},
            {"mock_id_ref": "mock-1", "rating": None, "created_at_utc": None},
        ]
    )
    service = SQLAlchemyInterviewRecordService(engine=_EngineStub(connection=connection))

    answers = service.db_answer_list_for_owner(owner_identity="candidate@example.com")

    executed_query = connection.executed_queries[0]
    assert "FROM user_answer" in executed_query
    assert "ORDER BY created_at_utc DESC NULLS LAST, user_answer_id DESC" in executed_query
    assert answers == [
        GradedAnswer(
            interview_ref="mock-1",
            rating="8/10",
            created_at=datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc),
        ),
        GradedAnswer(interview_ref="mock-1", rating=None, created_at=None),
    ]


def test_db_interview_list_rejects_blank_owner_before_query() -> None:
    """Reject blank owner identity before query execution.

    Returns:
        None: Assertions validate deterministic contract enforcement.

    Raises:
        AssertionError: Raised when validation behavior diverges.
    """

    connection = _ConnectionStub(rows=[])
    service = SQLAlchemyInterviewRecordService(engine=_EngineStub(connection=connection))

    with pytest.raises(ValueError, match="owner_identity must not be blank"):
        service.db_interview_list_for_owner(owner_identity="   ")
    assert len(connection.executed_queries) == 0


def test_db_answer_list_wraps_driver_errors() -> None:
    """Wrap SQLAlchemy driver errors in a runtime error.

    Returns:
        None: Assertions validate error translation.

    Raises:
        AssertionError: Raised when driver errors leak unwrapped.
    """

    connection = _ConnectionStub(rows=[], failure=_build_operational_error())
    service = SQLAlchemyInterviewRecordService(engine=_EngineStub(connection=connection))

    with pytest.raises(RuntimeError, match="graded answer read failed"):
        service.db_answer_list_for_owner(owner_identity="candidate@example.com")


def test_db_user_preferences_get_returns_none_for_unknown_owner() -> None:
    """Return no preferences when the owner has no stored row.

    Returns:
        None: Assertions validate empty lookups.

    Raises:
        AssertionError: Raised when a missing row is mapped.
    """

    connection = _ConnectionStub(rows=[])
    service = SQLAlchemyUserPreferencesService(engine=_EngineStub(connection=connection))

    assert service.db_user_preferences_get(owner_identity="candidate@example.com") is None
    assert "WHERE owner_identity = :owner_identity" in connection.executed_queries[0]


def test_db_user_preferences_apply_changes_writes_only_changed_columns() -> None:
    """Upsert only the named columns so other fields keep their stored values.

    Returns:
        None: Assertions validate SQL template construction and row mapping.

    Raises:
        AssertionError: Raised when unchanged columns are written.
    """

    connection = _ConnectionStub(rows=[_build_preferences_row()])
    service = SQLAlchemyUserPreferencesService(engine=_EngineStub(connection=connection))

    persisted_preferences = service.db_user_preferences_apply_changes(
        owner_identity="candidate@example.com",
        changes={"volume": 55, "dark_mode": True},
    )

    executed_query = connection.executed_queries[0]
    assert "INSERT INTO user_preferences (owner_identity, dark_mode, volume)" in executed_query
    assert "ON CONFLICT (owner_identity) DO UPDATE SET" in executed_query
    assert "dark_mode = EXCLUDED.dark_mode, volume = EXCLUDED.volume, updated_at_utc = now()" in executed_query
    assert "sound = EXCLUDED.sound" not in executed_query
    assert connection.executed_parameters[0] == {
        "owner_identity": "candidate@example.com",
        "dark_mode": True,
        "volume": 55,
    }
    assert persisted_preferences.volume == 55
    assert persisted_preferences.updated_at_utc == datetime(2026, 6, 1, 8, 0, tzinfo=timezone.utc)


def test_db_user_preferences_apply_changes_rejects_unknown_columns() -> None:
    """Reject non-editable columns before any SQL is built.

    Returns:
        None: Assertions validate column allow-listing.

    Raises:
        AssertionError: Raised when arbitrary identifiers reach SQL.
    """

    connection = _ConnectionStub(rows=[])
    service = SQLAlchemyUserPreferencesService(engine=_EngineStub(connection=connection))

    with pytest.raises(ValueError, match="unsupported preference columns: owner_identity"):
        service.db_user_preferences_apply_changes(
            owner_identity="candidate@example.com",
            changes={"owner_identity": "other@example.com"},
        )
    assert len(connection.executed_queries) == 0


def test_db_user_preferences_insert_default_leaves_existing_row_untouched() -> None:
    """Insert defaults with a do-nothing conflict clause and report existing rows as None.

    Returns:
        None: Assertions validate create-if-absent template.

    Raises:
        AssertionError: Raised when existing rows could be overwritten.
    """

    connection = _ConnectionStub(rows=[])
    service = SQLAlchemyUserPreferencesService(engine=_EngineStub(connection=connection))

    created_preferences = service.db_user_preferences_insert_default(owner_identity=" candidate@example.com ")

    executed_query = connection.executed_queries[0]
    assert "ON CONFLICT (owner_identity) DO NOTHING" in executed_query
    assert "DO UPDATE" not in executed_query
    assert connection.executed_parameters[0] == {"owner_identity": "candidate@example.com"}
    assert created_preferences is None


def test_db_user_preferences_apply_changes_wraps_driver_errors() -> None:
    """Wrap SQLAlchemy driver errors raised during a preferences write.

    Returns:
        None: Assertions validate error translation.

    Raises:
        AssertionError: Raised when driver errors leak unwrapped.
    """

    connection = _ConnectionStub(rows=[], failure=_build_operational_error())
    service = SQLAlchemyUserPreferencesService(engine=_EngineStub(connection=connection))

    with pytest.raises(RuntimeError, match="user preferences update failed"):
        service.db_user_preferences_apply_changes(owner_identity="candidate@example.com", changes={"sound": False})


def test_db_health_reports_pending_migrations() -> None:
    """Report a reachable database whose schema has not been migrated yet.

    Returns:
        None: Assertions validate health detail selection.

    Raises:
        AssertionError: Raised when schema readiness is misreported.
    """

    connection = _ConnectionStub(rows=[{"schema_ready": False}])
    service = SQLAlchemyDatabaseHealthService(engine=_EngineStub(connection=connection))

    health_status = service.db_check_health()

    assert health_status.status == "ok"
    assert health_status.detail == "database reachable, migrations not applied"
    assert "to_regclass('public.user_answer')" in connection.executed_queries[1]


def test_db_health_raises_connection_error_on_driver_failure() -> None:
    """Translate driver failures into connection errors for the health route.

    Returns:
        None: Assertions validate error translation.

    Raises:
        AssertionError: Raised when driver errors leak unwrapped.
    """

    connection = _ConnectionStub(rows=[], failure=_build_operational_error())
    service = SQLAlchemyDatabaseHealthService(engine=_EngineStub(connection=connection))

    with pytest.raises(ConnectionError, match="database connectivity check failed"):
        service.db_check_health()
