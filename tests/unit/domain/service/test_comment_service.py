"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from stackit.domain.error import NotFoundError, ReputationError, ValidationError
from stackit.domain.repository import (
    AnswerRepository,
    NotificationRepository,
    QuestionRepository,
    UserRepository,
)
from stackit.domain.service import CommentService
from stackit.domain.value import AnswerId, NotificationType, QuestionId, UserRole
from tests.factories import make_answer, make_question, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateComment:
    """Tests for create_comment."""

    @pytest.mark.asyncio
    async def test_comment_on_question_notifies_author(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        user_repo = await unit_env.get(UserRepository)
        question_repo = await unit_env.get(QuestionRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        author = await user_repo.save(make_user("author"))
        commenter = await user_repo.save(make_user("commenter", reputation=5))
        question = await question_repo.save(make_question(author))

        comment = await comment_service.create_comment(
            commenter, "  Which Python version?  ", question_id=question.id
        )

        assert comment.content == "Which Python version?"
        assert comment.question_id == question.id
        notifications = await notification_repo.find_by_recipient(author.id)
        assert [n.type for n in notifications] == [NotificationType.QUESTION_COMMENT]
        assert notifications[0].comment_id == comment.id

    @pytest.mark.asyncio
    async def test_comment_on_answer_notifies_answer_author(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        user_repo = await unit_env.get(UserRepository)
        question_repo = await unit_env.get(QuestionRepository)
        answer_repo = await unit_env.get(AnswerRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        asker = await user_repo.save(make_user("asker"))
        answerer = await user_repo.save(make_user("answerer"))
        question = await question_repo.save(make_question(asker))
        answer = await answer_repo.save(make_answer(question, answerer))

        await comment_service.create_comment(asker, "Thanks, that works", answer_id=answer.id)

        notifications = await notification_repo.find_by_recipient(answerer.id)
        assert [n.type for n in notifications] == [NotificationType.ANSWER_COMMENT]
        assert await notification_repo.count_by_recipient(asker.id) == 0

    @pytest.mark.asyncio
    async def test_requires_reputation(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        question_repo = await unit_env.get(QuestionRepository)
        question = await question_repo.save(make_question(make_user("author")))

        with pytest.raises(ReputationError, match="5 reputation"):
            await comment_service.create_comment(
                make_user("newbie", reputation=4), "Hello there", question_id=question.id
            )

    @pytest.mark.asyncio
    async def test_admin_comments_without_reputation(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        question_repo = await unit_env.get(QuestionRepository)
        question = await question_repo.save(make_question(make_user("author")))

        comment = await comment_service.create_comment(
            make_user("root", reputation=0, role=UserRole.ADMIN),
            "Please add a code sample",
            question_id=question.id,
        )

        assert comment.question_id == question.id

    @pytest.mark.asyncio
    async def test_exactly_one_target(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError):
            await comment_service.create_comment(make_user(), "No target")
        with pytest.raises(ValidationError):
            await comment_service.create_comment(
                make_user(),
                "Two targets",
                question_id=QuestionId(uuid4()),
                answer_id=AnswerId(uuid4()),
            )

    @pytest.mark.asyncio
    async def test_missing_target(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError, match="Question not found"):
            await comment_service.create_comment(
                make_user(), "Hello", question_id=QuestionId(uuid4())
            )
        with pytest.raises(NotFoundError, match="Answer not found"):
            await comment_service.create_comment(
                make_user(), "Hello", answer_id=AnswerId(uuid4())
            )


class TestListComments:
    """Tests for list_comments."""

    @pytest.mark.asyncio
    async def test_oldest_first(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        question_repo = await unit_env.get(QuestionRepository)
        question = await question_repo.save(make_question(make_user("author")))
        commenter = make_user("commenter")

        first = await comment_service.create_comment(
            commenter, "First!", question_id=question.id
        )
        second = await comment_service.create_comment(
            commenter, "Second", question_id=question.id
        )

        comments = await comment_service.list_comments(question_id=question.id)

        assert [c.id for c in comments] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_requires_a_target(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        with pytest.raises(ValidationError):
            await comment_service.list_comments()
