"""Alembic environment for the interview, answer and preferences schema."""
# pylint: disable=no-member,invalid-name,wrong-import-order

import logging
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from app.config import config_load_database_url
from app.db import db_engine_target_label

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")

# Schema is maintained by hand-written revisions; autogenerate is not used.
target_metadata = None


def migration_run_offline(database_url: str) -> None:
    """Emit migration SQL to stdout without a live connection.

    Args:
        database_url: SQLAlchemy URL used to select the dialect.

    Returns:
        None: SQL is written by Alembic as a side effect.
    """

    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        transaction_per_migration=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def migration_run_online(database_url: str) -> None:
    """Apply migrations against the configured database.

    Args:
        database_url: SQLAlchemy URL of the target database.

    Returns:
        None: Schema changes are applied as a side effect.

    Raises:
        SQLAlchemyError: Raised when the database cannot be reached or a revision fails.
    """

    engine = create_engine(database_url, poolclass=pool.NullPool)
    logger.info("applying migrations to %s", db_engine_target_label(engine))
    try:
        with engine.connect() as connection:
            context.configure(
                connection=connection,
                target_metadata=target_metadata,
                transaction_per_migration=True,
            )
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    migration_run_offline(config_load_database_url())
else:
    migration_run_online(config_load_database_url())
