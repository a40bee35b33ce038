"""Database engine utilities.

This module centralizes database connectivity primitives to enforce the db-layer
boundary for all SQLAlchemy usage.
"""

from sqlalchemy import Engine, create_engine


def db_create_engine(database_url: str, echo_sql: bool = False) -> Engine:
    """Create the SQLAlchemy engine for application database access.

    Args:
        database_url: SQLAlchemy database URL.
        echo_sql: Whether SQLAlchemy logs every emitted statement.

    Returns:
        Engine: Configured SQLAlchemy engine.

    Raises:
        ValueError: Raised when the database URL is blank.
    """

    if not database_url.strip():
        raise ValueError("database_url must not be blank")

    return create_engine(database_url, pool_pre_ping=True, echo=echo_sql)


def db_engine_target_label(engine: Engine) -> str:
    """Render the engine URL without credentials for diagnostics.

    Args:
        engine: SQLAlchemy engine instance.

    Returns:
        str: Password-masked database URL.

    Raises:
        ValueError: Raised when engine is invalid.
    """

    if engine is None:
        raise ValueError("engine must not be None")

    return engine.url.render_as_string(hide_password=True)
