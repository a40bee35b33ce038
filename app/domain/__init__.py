"""Domain models used across application layer boundaries."""

from .models import GradedAnswer, HealthStatus, InterviewSession, UserPreferences
from .parsing import domain_normalize_optional_text, domain_parse_rating, domain_parse_timestamp

__all__ = [
    "GradedAnswer",
    "HealthStatus",
    "InterviewSession",
    "UserPreferences",
    "domain_normalize_optional_text",
    "domain_parse_rating",
    "domain_parse_timestamp",
]
