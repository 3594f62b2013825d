"""Domain services."""

from .answer_service import AnswerService
from .base import Service
from .comment_service import CommentService
from .jwt_service import JWTService
from .notification_service import NotificationService, NotificationSink
from .question_service import QuestionService
from .tag_service import TagService
from .user_service import PasswordHasher, UserService
from .vote_service import VoteResult, VoteService

__all__ = [
    "AnswerService",
    "CommentService",
    "JWTService",
    "NotificationService",
    "NotificationSink",
    "PasswordHasher",
    "QuestionService",
    "Service",
    "TagService",
    "UserService",
    "VoteResult",
    "VoteService",
]
