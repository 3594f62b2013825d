"""PostgreSQL repository implementations."""

from stackit.persistence.repository.answer import PostgresAnswerRepository
from stackit.persistence.repository.comment import PostgresCommentRepository
from stackit.persistence.repository.notification import (
    PostgresNotificationRepository,
)
from stackit.persistence.repository.question import PostgresQuestionRepository
from stackit.persistence.repository.tag import PostgresTagRepository
from stackit.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresQuestionRepository",
    "PostgresAnswerRepository",
    "PostgresCommentRepository",
    "PostgresTagRepository",
    "PostgresNotificationRepository",
]
