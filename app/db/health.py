"""Database health service implementations for connectivity checks."""

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from app.domain import HealthStatus

from .interfaces import DatabaseHealthPort
from .session import db_engine_target_label


class SQLAlchemyDatabaseHealthService(DatabaseHealthPort):
    """Database health service backed by SQLAlchemy engine connectivity checks."""

    def __init__(self, engine: Engine):
        """Initialize database health service.

        Args:
            engine: SQLAlchemy engine used for connectivity checks.

        Raises:
            ValueError: Raised when engine is None.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_connection_label(self) -> str:
        """Return the masked target database URL for diagnostics."""

        return db_engine_target_label(self._engine)

    def db_check_health(self) -> HealthStatus:
        """Verify database connectivity and presence of the interview schema.

        Returns:
            HealthStatus: Health payload with status and diagnostic detail.

        Raises:
            ConnectionError: Raised when connectivity check fails.
        """

        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                schema_row = connection.execute(
                    text("SELECT to_regclass('public.user_answer') IS NOT NULL AS schema_ready")
                ).mappings().one()
        except SQLAlchemyError as error:
            raise ConnectionError("database connectivity check failed") from error

        if not bool(schema_row["schema_ready"]):
            return HealthStatus(status="ok", detail="database reachable, migrations not applied")
        return HealthStatus(status="ok", detail="database connectivity verified")
