"""Database layer package for all SQL and persistence boundaries."""

from .health import SQLAlchemyDatabaseHealthService
from .interfaces import DatabaseHealthPort, InterviewRecordRepositoryPort, UserPreferencesRepositoryPort
from .interview_records import SQLAlchemyInterviewRecordService
from .session import db_create_engine, db_engine_target_label
from .user_preferences import SQLAlchemyUserPreferencesService

__all__ = [
	"DatabaseHealthPort",
	"InterviewRecordRepositoryPort",
	"UserPreferencesRepositoryPort",
	"SQLAlchemyDatabaseHealthService",
	"SQLAlchemyInterviewRecordService",
	"SQLAlchemyUserPreferencesService",
	"db_create_engine",
	"db_engine_target_label",
]
