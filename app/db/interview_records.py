"""Database service for reading interview sessions and graded answers."""

from __future__ import annotations

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from app.domain import GradedAnswer, InterviewSession, domain_parse_timestamp

from .interfaces import InterviewRecordRepositoryPort


class SQLAlchemyInterviewRecordService(InterviewRecordRepositoryPort):
    """SQLAlchemy implementation of owner-scoped interview and answer reads."""

    _INTERVIEW_LIST_QUERY = (
        "SELECT mock_id, owner_identity, created_at_utc "
        "FROM mock_interview "
        "WHERE owner_identity = :owner_identity "
        "ORDER BY created_at_utc DESC NULLS LAST, mock_interview_id DESC"
    )

    _ANSWER_LIST_QUERY = (
        "SELECT mock_id_ref, rating, created_at_utc "
        "FROM user_answer "
        "WHERE owner_identity = :owner_identity "
        "ORDER BY created_at_utc DESC NULLS LAST, user_answer_id DESC"
    )

    def __init__(self, engine: Engine):
        """Initialize interview record database service.

        Args:
            engine: SQLAlchemy engine used for reads.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when engine is invalid.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

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

        normalized_owner_identity = self._db_validate_owner_identity(owner_identity)

        try:
            with self._engine.connect() as connection:
                rows = connection.execute(
                    text(self._INTERVIEW_LIST_QUERY),
                    {"owner_identity": normalized_owner_identity},
                ).mappings().all()
        except SQLAlchemyError as error:
            raise RuntimeError("interview session read failed") from error

        return [
            InterviewSession(
                interview_id=str(row["mock_id"]),
                owner_identity=row["owner_identity"],
                created_at=domain_parse_timestamp(row["created_at_utc"]),
            )
            for row in rows
        ]

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

        normalized_owner_identity = self._db_validate_owner_identity(owner_identity)

        try:
            with self._engine.connect() as connection:
                rows = connection.execute(
                    text(self._ANSWER_LIST_QUERY),
                    {"owner_identity": normalized_owner_identity},
                ).mappings().all()
        except SQLAlchemyError as error:
            raise RuntimeError("graded answer read failed") from error

        return [
            GradedAnswer(
                interview_ref=str(row["mock_id_ref"]),
                rating=None if row["rating"] is None else str(row["rating"]),
                created_at=domain_parse_timestamp(row["created_at_utc"]),
            )
            for row in rows
        ]

    @staticmethod
    def _db_validate_owner_identity(owner_identity: str) -> str:
        if not isinstance(owner_identity, str) or not owner_identity.strip():
            raise ValueError("owner_identity must not be blank")
        return owner_identity.strip()
