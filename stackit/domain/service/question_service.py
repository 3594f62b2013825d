"""Question domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from stackit.domain.error import NotFoundError, NotOwnerError, ValidationError
from stackit.domain.model import Question, User
from stackit.domain.repository import (
    AnswerRepository,
    CommentRepository,
    QuestionRepository,
    QuestionSortOrder,
)
from stackit.domain.value import QuestionId, QuestionStatus, TagName

from .base import Service
from .tag_service import TagService, normalize_tags

MAX_TAGS = 5


class QuestionService(Service):
    """Domain service for question operations.

    Keeps tag usage counters in step with the tags questions reference.
    """

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        comment_repository: CommentRepository,
        tag_service: TagService,
    ) -> None:
        """Initialize question service.

        Args:
            question_repository: Question repository
            answer_repository: Answer repository, for cascading deletes
            comment_repository: Comment repository, for cascading deletes
            tag_service: Tag domain service
        """
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.comment_repository = comment_repository
        self.tag_service = tag_service

    @staticmethod
    def _check_tags(tag_names: list[TagName]) -> list[TagName]:
        tags = normalize_tags(tag_names)
        if not 1 <= len(tags) <= MAX_TAGS:
            raise ValidationError(f"Questions need between 1 and {MAX_TAGS} tags")
        return tags

    @staticmethod
    def _check_owner(question: Question, user: User) -> None:
        if question.author_id != user.id and not user.is_admin:
            logfire.warn(
                "User not authorized to modify question",
                question_id=str(question.id),
                user_id=str(user.id),
            )
            raise NotOwnerError("question", str(question.id), str(user.id))

    async def find_question(self, question_id: QuestionId) -> Question:
        """Load a question without counting a view.

        Raises:
            NotFoundError: If the question doesn't exist
        """
        question = await self.question_repository.find_by_id(question_id)
        if question is None:
            logfire.warn("Question not found", question_id=str(question_id))
            raise NotFoundError("Question", str(question_id))
        return question

    async def create_question(
        self, author: User, title: str, content: str, tag_names: list[TagName]
    ) -> Question:
        """Create a question and count its tags.

        Missing tags are created on the fly.

        Args:
            author: Author of the question
            title: Question title
            content: Question body
            tag_names: Tag names (deduplicated here)

        Returns:
            Created question

        Raises:
            ValidationError: If there are no tags or more than five
            pydantic.ValidationError: If the title or body is out of bounds
        """
        with logfire.span(
            "question_service.create_question",
            author_id=str(author.id),
            tags=[t.root for t in tag_names],
        ):
            tags = self._check_tags(tag_names)

            # Field validation runs before any tag is written
            now = datetime.now()
            question = Question(
                id=QuestionId(uuid4()),
                title=title.strip(),
                content=content.strip(),
                author_id=author.id,
                tags=tags,
                created_at=now,
                updated_at=now,
                last_activity_at=now,
            )
            await self.tag_service.ensure_tags(tags, created_by=author.id)
            saved = await self.question_repository.save(question)
            await self.tag_service.record_usage(tags)

            logfire.info(
                "Question created", question_id=str(saved.id), tag_count=len(tags)
            )
            return saved

    async def update_question(
        self,
        question_id: QuestionId,
        acting_user: User,
        title: str | None = None,
        content: str | None = None,
        tag_names: list[TagName] | None = None,
    ) -> Question:
        """Edit a question's title, body or tags.

        Only tags that were added or removed have their usage adjusted.

        Args:
            question_id: Question to edit
            acting_user: Author or admin
            title: New title, unchanged if None
            content: New body, unchanged if None
            tag_names: New tag list, unchanged if None

        Returns:
            Updated question

        Raises:
            NotFoundError: If the question doesn't exist
            NotOwnerError: If the user is neither author nor admin
            ValidationError: If the new tag list is empty or too long
        """
        with logfire.span(
            "question_service.update_question",
            question_id=str(question_id),
            user_id=str(acting_user.id),
        ):
            question = await self.find_question(question_id)
            self._check_owner(question, acting_user)

            now = datetime.now()
            update: dict = {"updated_at": now, "last_activity_at": now}
            if title is not None:
                update["title"] = title.strip()
            if content is not None:
                update["content"] = content.strip()

            added: list[TagName] = []
            removed: list[TagName] = []
            if tag_names is not None:
                tags = self._check_tags(tag_names)
                added = [t for t in tags if t not in question.tags]
                removed = [t for t in question.tags if t not in tags]
                update["tags"] = tags

            # Revalidate so field constraints apply to the edited values
            updated = Question.model_validate(
                {**question.model_dump(exclude={"vote_count", "is_answered"}), **update}
            )

            if added:
                await self.tag_service.ensure_tags(added, created_by=acting_user.id)
            saved = await self.question_repository.save(updated)
            await self.tag_service.record_usage(added)
            await self.tag_service.release_usage(removed)

            logfire.info(
                "Question updated",
                question_id=str(question_id),
                tags_added=[t.root for t in added],
                tags_removed=[t.root for t in removed],
            )
            return saved

    async def delete_question(self, question_id: QuestionId, acting_user: User) -> None:
        """Delete a question with its answers and comments.

        Usage of each of its tags drops by one.

        Raises:
            NotFoundError: If the question doesn't exist
            NotOwnerError: If the user is neither author nor admin
        """
        with logfire.span(
            "question_service.delete_question",
            question_id=str(question_id),
            user_id=str(acting_user.id),
        ):
            question = await self.find_question(question_id)
            self._check_owner(question, acting_user)

            for answer in await self.answer_repository.find_by_question(question_id):
                await self.comment_repository.delete_by_answer(answer.id)
            answers_deleted = await self.answer_repository.delete_by_question(question_id)
            await self.comment_repository.delete_by_question(question_id)
            await self.question_repository.delete(question_id)
            await self.tag_service.release_usage(question.tags)

            logfire.info(
                "Question deleted",
                question_id=str(question_id),
                answers_deleted=answers_deleted,
            )

    async def get_question(self, question_id: QuestionId) -> Question:
        """Get a question and count the view.

        Raises:
            NotFoundError: If the question doesn't exist
        """
        with logfire.span("question_service.get_question", question_id=str(question_id)):
            await self.find_question(question_id)
            await self.question_repository.increment_views(question_id)
            # Reload so the returned view count includes this view
            question = await self.find_question(question_id)
            logfire.info("Question viewed", question_id=str(question_id), views=question.views)
            return question

    async def list_questions(
        self,
        tag: TagName | None = None,
        unanswered_only: bool = False,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        limit: int = 20,
        offset: int = 0,
        query: str | None = None,
    ) -> tuple[list[Question], int]:
        """List questions with filters and pagination.

        A query keeps only questions whose title or body contains it,
        ignoring case.

        Returns:
            Tuple of (questions on this page, total matching)
        """
        with logfire.span(
            "question_service.list_questions",
            tag=tag.root if tag else None,
            unanswered_only=unanswered_only,
            sort=sort.value,
            limit=limit,
            offset=offset,
            query=query,
        ):
            questions = await self.question_repository.find_all(
                tag=tag,
                unanswered_only=unanswered_only,
                sort=sort,
                limit=limit,
                offset=offset,
                query=query,
            )
            total = await self.question_repository.count(
                tag=tag, unanswered_only=unanswered_only, query=query
            )
            logfire.info("Questions retrieved", count=len(questions), total=total)
            return questions, total

    async def set_status(
        self, question_id: QuestionId, acting_user: User, status: QuestionStatus
    ) -> Question:
        """Change a question's status (open, closed, duplicate, on-hold).

        Raises:
            NotFoundError: If the question doesn't exist
            NotOwnerError: If the user is neither author nor admin
        """
        with logfire.span(
            "question_service.set_status",
            question_id=str(question_id),
            status=status.value,
        ):
            question = await self.find_question(question_id)
            self._check_owner(question, acting_user)
            now = datetime.now()
            saved = await self.question_repository.save(
                question.model_copy(
                    update={"status": status, "updated_at": now, "last_activity_at": now}
                )
            )
            logfire.info("Question status changed", question_id=str(question_id))
            return saved
