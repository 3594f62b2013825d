"""Comment domain service."""

import logfire
from datetime import datetime
from uuid import uuid4

from stackit.config import ReputationSettings
from stackit.domain.error import NotFoundError, ValidationError
from stackit.domain.model import Comment, User
from stackit.domain.repository import (
    AnswerRepository,
    CommentRepository,
    QuestionRepository,
)
from stackit.domain.value import AnswerId, CommentId, QuestionId

from .base import Service
from .notification_service import NotificationService
from .user_service import UserService


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        user_service: UserService,
        notification_service: NotificationService,
        reputation_settings: ReputationSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            question_repository: Question repository
            answer_repository: Answer repository
            user_service: User domain service, for reputation checks
            notification_service: Notification coordinator
            reputation_settings: Reputation thresholds
        """
        self.comment_repository = comment_repository
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.user_service = user_service
        self.notification_service = notification_service
        self.reputation_settings = reputation_settings

    @staticmethod
    def _check_target(
        question_id: QuestionId | None, answer_id: AnswerId | None
    ) -> None:
        if (question_id is None) == (answer_id is None):
            raise ValidationError(
                "A comment must target exactly one question or answer"
            )

    async def create_comment(
        self,
        author: User,
        content: str,
        question_id: QuestionId | None = None,
        answer_id: AnswerId | None = None,
    ) -> Comment:
        """Comment on a question or an answer.

        Args:
            author: Author of the comment
            content: Comment text
            question_id: Question commented on
            answer_id: Answer commented on

        Returns:
            Created comment

        Raises:
            ValidationError: If both or neither target is given
            ReputationError: If the author lacks the reputation to comment
            NotFoundError: If the target doesn't exist
        """
        with logfire.span(
            "comment_service.create_comment",
            author_id=str(author.id),
            question_id=str(question_id) if question_id else None,
            answer_id=str(answer_id) if answer_id else None,
        ):
            self._check_target(question_id, answer_id)
            self.user_service.require_reputation(
                author, self.reputation_settings.comment_threshold, "comment"
            )

            if answer_id is not None:
                if await self.answer_repository.find_by_id(answer_id) is None:
                    logfire.warn("Comment on missing answer", answer_id=str(answer_id))
                    raise NotFoundError("Answer", str(answer_id))
            elif await self.question_repository.find_by_id(question_id) is None:
                logfire.warn("Comment on missing question", question_id=str(question_id))
                raise NotFoundError("Question", str(question_id))

            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                author_id=author.id,
                content=content.strip(),
                question_id=question_id,
                answer_id=answer_id,
                created_at=now,
                updated_at=now,
            )
            saved = await self.comment_repository.save(comment)
            logfire.info("Comment created", comment_id=str(saved.id))

            await self.notification_service.notify_comment(
                saved.id, author.id, question_id=question_id, answer_id=answer_id
            )
            return saved

    async def list_comments(
        self,
        question_id: QuestionId | None = None,
        answer_id: AnswerId | None = None,
    ) -> list[Comment]:
        """List the comments on a question or an answer, oldest first.

        Raises:
            ValidationError: If both or neither target is given
        """
        with logfire.span(
            "comment_service.list_comments",
            question_id=str(question_id) if question_id else None,
            answer_id=str(answer_id) if answer_id else None,
        ):
            self._check_target(question_id, answer_id)
            if answer_id is not None:
                comments = await self.comment_repository.find_by_answer(answer_id)
            else:
                comments = await self.comment_repository.find_by_question(question_id)
            logfire.info("Comments retrieved", count=len(comments))
            return comments
