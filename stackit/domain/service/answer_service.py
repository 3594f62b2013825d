"""Answer domain service.

Owns the acceptance state machine and the approval gate. A question has at
most one accepted answer; accepting another one first clears the previous
acceptance in a single repository write.
"""

from datetime import datetime
from uuid import uuid4

import logfire

from stackit.domain.error import (
    AuthorizationError,
    NotFoundError,
    NotOwnerError,
    ValidationError,
)
from stackit.domain.model import Answer, Question, User
from stackit.domain.repository import (
    AnswerRepository,
    CommentRepository,
    QuestionRepository,
)
from stackit.domain.value import AnswerId, QuestionId, UserId

from .base import Service
from .notification_service import NotificationService


class AnswerService(Service):
    """Domain service for answer operations."""

    def __init__(
        self,
        answer_repository: AnswerRepository,
        question_repository: QuestionRepository,
        comment_repository: CommentRepository,
        notification_service: NotificationService,
    ) -> None:
        """Initialize answer service.

        Args:
            answer_repository: Answer repository
            question_repository: Question repository
            comment_repository: Comment repository, for cascading deletes
            notification_service: Notification coordinator
        """
        self.answer_repository = answer_repository
        self.question_repository = question_repository
        self.comment_repository = comment_repository
        self.notification_service = notification_service

    async def _load_question(self, question_id: QuestionId) -> Question:
        question = await self.question_repository.find_by_id(question_id)
        if question is None:
            logfire.warn("Question not found", question_id=str(question_id))
            raise NotFoundError("Question", str(question_id))
        return question

    async def get_answer(self, answer_id: AnswerId) -> Answer:
        """Get an answer by ID.

        Raises:
            NotFoundError: If the answer doesn't exist
        """
        answer = await self.answer_repository.find_by_id(answer_id)
        if answer is None:
            logfire.warn("Answer not found", answer_id=str(answer_id))
            raise NotFoundError("Answer", str(answer_id))
        return answer

    @staticmethod
    def _require_question_author(question: Question, user: User, action: str) -> None:
        if question.author_id != user.id:
            logfire.warn(
                "Only the question author may do this",
                action=action,
                question_id=str(question.id),
                user_id=str(user.id),
            )
            raise AuthorizationError(
                f"You can only {action} answers for your own questions"
            )

    @staticmethod
    def _require_answer_owner(answer: Answer, user: User) -> None:
        if answer.author_id != user.id and not user.is_admin:
            logfire.warn(
                "User not authorized to modify answer",
                answer_id=str(answer.id),
                user_id=str(user.id),
            )
            raise NotOwnerError("answer", str(answer.id), str(user.id))

    async def create_answer(
        self, author: User, question_id: QuestionId, content: str
    ) -> Answer:
        """Answer a question.

        New answers start unapproved. The question author and any
        @mentioned users are notified.

        Args:
            author: Author of the answer
            question_id: Question being answered
            content: Answer body

        Returns:
            Created answer

        Raises:
            NotFoundError: If the question doesn't exist
            ValidationError: If the question is closed
        """
        with logfire.span(
            "answer_service.create_answer",
            question_id=str(question_id),
            author_id=str(author.id),
        ):
            question = await self._load_question(question_id)
            if question.is_closed:
                logfire.warn("Answer on closed question", question_id=str(question_id))
                raise ValidationError("Cannot answer a closed question")

            now = datetime.now()
            answer = Answer(
                id=AnswerId(uuid4()),
                question_id=question_id,
                author_id=author.id,
                content=content.strip(),
                is_approved=False,
                created_at=now,
                updated_at=now,
            )
            saved = await self.answer_repository.save(answer)
            await self.question_repository.increment_answer_count(question_id)
            logfire.info(
                "Answer created", answer_id=str(saved.id), question_id=str(question_id)
            )

            await self.notification_service.notify_question_answered(
                question_id, saved.id, author.id
            )
            await self.notification_service.notify_mentions(
                saved.content,
                author.id,
                context=f'an answer to "{question.title}"',
                question_id=question_id,
                answer_id=saved.id,
            )
            return saved

    async def update_answer(
        self, answer_id: AnswerId, acting_user: User, content: str
    ) -> Answer:
        """Edit an answer's body.

        Raises:
            NotFoundError: If the answer doesn't exist
            NotOwnerError: If the user is neither author nor admin
        """
        with logfire.span(
            "answer_service.update_answer",
            answer_id=str(answer_id),
            user_id=str(acting_user.id),
        ):
            answer = await self.get_answer(answer_id)
            self._require_answer_owner(answer, acting_user)

            updated = Answer.model_validate(
                {
                    **answer.model_dump(exclude={"vote_count"}),
                    "content": content.strip(),
                    "is_edited": True,
                    "updated_at": datetime.now(),
                }
            )
            saved = await self.answer_repository.save(updated)
            logfire.info("Answer updated", answer_id=str(answer_id))
            return saved

    async def delete_answer(self, answer_id: AnswerId, acting_user: User) -> None:
        """Delete an answer that is not accepted.

        Raises:
            NotFoundError: If the answer doesn't exist
            NotOwnerError: If the user is neither author nor admin
            ValidationError: If the answer is currently accepted
        """
        with logfire.span(
            "answer_service.delete_answer",
            answer_id=str(answer_id),
            user_id=str(acting_user.id),
        ):
            answer = await self.get_answer(answer_id)
            self._require_answer_owner(answer, acting_user)
            if answer.is_accepted:
                logfire.warn("Attempt to delete accepted answer", answer_id=str(answer_id))
                raise ValidationError(
                    "Cannot delete an accepted answer; unaccept it first"
                )

            await self.comment_repository.delete_by_answer(answer_id)
            await self.answer_repository.delete(answer_id)
            await self.question_repository.decrement_answer_count(answer.question_id)
            logfire.info(
                "Answer deleted",
                answer_id=str(answer_id),
                question_id=str(answer.question_id),
            )

    async def accept(
        self, question_id: QuestionId, answer_id: AnswerId, acting_user: User
    ) -> Question:
        """Mark an answer as the accepted solution to its question.

        Any previously accepted answer is un-accepted. Accepting the answer
        that is already accepted changes nothing and sends no notification.

        Args:
            question_id: Question the answer should belong to
            answer_id: Answer to accept
            acting_user: Must be the question author

        Returns:
            The updated question

        Raises:
            NotFoundError: If the question or the answer doesn't exist
            AuthorizationError: If the user is not the question author
            ValidationError: If the answer belongs to another question
        """
        with logfire.span(
            "answer_service.accept",
            question_id=str(question_id),
            answer_id=str(answer_id),
            user_id=str(acting_user.id),
        ):
            question = await self._load_question(question_id)
            answer = await self.get_answer(answer_id)
            self._require_question_author(question, acting_user, "accept")
            if answer.question_id != question.id:
                logfire.warn(
                    "Answer does not belong to question",
                    question_id=str(question_id),
                    answer_id=str(answer_id),
                )
                raise ValidationError("Answer does not belong to this question")

            if question.accepted_answer_id == answer.id and answer.is_accepted:
                logfire.info("Answer already accepted", answer_id=str(answer_id))
                return question

            previous = await self.answer_repository.clear_accepted(question_id)
            now = datetime.now()
            await self.answer_repository.save(
                answer.model_copy(update={"is_accepted": True, "updated_at": now})
            )
            saved = await self.question_repository.save(
                question.model_copy(
                    update={
                        "accepted_answer_id": answer.id,
                        "updated_at": now,
                        "last_activity_at": now,
                    }
                )
            )
            logfire.info(
                "Answer accepted",
                question_id=str(question_id),
                answer_id=str(answer_id),
                previously_accepted=[str(a) for a in previous],
            )

            await self.notification_service.notify_answer_accepted(
                answer.id, acting_user.id
            )
            return saved

    async def accept_answer(self, answer_id: AnswerId, acting_user: User) -> Question:
        """Accept an answer, addressed by the answer alone."""
        answer = await self.get_answer(answer_id)
        return await self.accept(answer.question_id, answer_id, acting_user)

    async def unaccept(self, answer_id: AnswerId, acting_user: User) -> Answer:
        """Withdraw acceptance of an answer.

        The question's acceptance is cleared only if it points at this
        answer. No notification is sent.

        Raises:
            NotFoundError: If the answer or its question doesn't exist
            AuthorizationError: If the user is not the question author
        """
        with logfire.span(
            "answer_service.unaccept",
            answer_id=str(answer_id),
            user_id=str(acting_user.id),
        ):
            answer = await self.get_answer(answer_id)
            question = await self._load_question(answer.question_id)
            self._require_question_author(question, acting_user, "unaccept")

            now = datetime.now()
            if question.accepted_answer_id == answer.id:
                await self.question_repository.save(
                    question.model_copy(
                        update={"accepted_answer_id": None, "updated_at": now}
                    )
                )
            saved = await self.answer_repository.save(
                answer.model_copy(update={"is_accepted": False, "updated_at": now})
            )
            logfire.info("Answer unaccepted", answer_id=str(answer_id))
            return saved

    async def approve(self, answer_id: AnswerId, acting_user: User) -> Answer:
        """Make an answer visible to everyone.

        Approving an approved answer is a no-op.

        Raises:
            NotFoundError: If the answer or its question doesn't exist
            AuthorizationError: If the user is not the question author
        """
        with logfire.span(
            "answer_service.approve",
            answer_id=str(answer_id),
            user_id=str(acting_user.id),
        ):
            answer = await self.get_answer(answer_id)
            question = await self._load_question(answer.question_id)
            self._require_question_author(question, acting_user, "approve")

            if answer.is_approved:
                logfire.info("Answer already approved", answer_id=str(answer_id))
                return answer

            saved = await self.answer_repository.save(
                answer.model_copy(
                    update={"is_approved": True, "updated_at": datetime.now()}
                )
            )
            logfire.info("Answer approved", answer_id=str(answer_id))
            return saved

    async def list_for_question(
        self, question_id: QuestionId, viewer_id: UserId | None = None
    ) -> list[Answer]:
        """List the answers a viewer may see.

        The question author sees every answer. Other signed-in users see
        approved answers plus their own. Anonymous viewers see approved
        answers only.

        Returns:
            Answers, accepted first, then by votes, then newest

        Raises:
            NotFoundError: If the question doesn't exist
        """
        with logfire.span(
            "answer_service.list_for_question",
            question_id=str(question_id),
            viewer_id=str(viewer_id) if viewer_id else None,
        ):
            question = await self._load_question(question_id)
            answers = await self.answer_repository.find_by_question(question_id)
            visible = [a for a in answers if a.is_visible_to(viewer_id, question.author_id)]
            logfire.info(
                "Answers retrieved", total=len(answers), visible=len(visible)
            )
            return visible

    async def get_visible_answer(
        self, answer_id: AnswerId, viewer_id: UserId | None = None
    ) -> Answer:
        """Get a single answer, hiding unapproved answers from outsiders.

        Raises:
            NotFoundError: If the answer doesn't exist or isn't visible
        """
        answer = await self.get_answer(answer_id)
        question = await self._load_question(answer.question_id)
        if not answer.is_visible_to(viewer_id, question.author_id):
            raise NotFoundError("Answer", str(answer_id))
        return answer

    async def list_by_author(
        self, author_id: UserId, limit: int = 20, offset: int = 0
    ) -> list[Answer]:
        """List a user's approved answers, newest first."""
        with logfire.span("answer_service.list_by_author", author_id=str(author_id)):
            answers = await self.answer_repository.find_by_author(
                author_id, approved_only=True, limit=limit, offset=offset
            )
            logfire.info("Answers retrieved", count=len(answers))
            return answers
