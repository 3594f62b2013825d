"""Repository interfaces for the StackIt domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from stackit.domain.repository.answer import AnswerRepository
from stackit.domain.repository.comment import CommentRepository
from stackit.domain.repository.notification import NotificationRepository
from stackit.domain.repository.question import QuestionRepository, QuestionSortOrder
from stackit.domain.repository.tag import TagOrder, TagRepository
from stackit.domain.repository.user import UserOrder, UserRepository

__all__ = [
    "UserRepository",
    "UserOrder",
    "QuestionRepository",
    "QuestionSortOrder",
    "AnswerRepository",
    "CommentRepository",
    "TagRepository",
    "TagOrder",
    "NotificationRepository",
]
