"""Domain value objects for StackIt."""

from stackit.domain.value.identifiers import (
    AnswerId,
    CommentId,
    NotificationId,
    QuestionId,
    TagId,
    UserId,
)
from stackit.domain.value.types import (
    NotificationType,
    QuestionStatus,
    TagName,
    UserRole,
    Username,
    VotableType,
    VoteTally,
    VoteType,
)

__all__ = [
    # Identifiers
    "UserId",
    "QuestionId",
    "AnswerId",
    "CommentId",
    "TagId",
    "NotificationId",
    # Types
    "TagName",
    "Username",
    "UserRole",
    "VoteType",
    "VotableType",
    "VoteTally",
    "QuestionStatus",
    "NotificationType",
]
