"""Unit tests for AnswerService."""

import pytest

from stackit.adapter.notification import RecordingNotificationSink
from stackit.domain.error import (
    AuthorizationError,
    NotFoundError,
    NotOwnerError,
    ValidationError,
)
from stackit.domain.repository import (
    AnswerRepository,
    CommentRepository,
    NotificationRepository,
    QuestionRepository,
    UserRepository,
)
from stackit.domain.service import AnswerService, CommentService
from stackit.domain.value import NotificationType, QuestionStatus, UserRole
from tests.factories import make_question, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

ANSWER_TEXT = "Slicing with [::-1] returns a reversed copy of the list."


async def _seed(unit_env):
    """Store an asker, two answerers and an open question."""
    user_repo = await unit_env.get(UserRepository)
    question_repo = await unit_env.get(QuestionRepository)

    asker = await user_repo.save(make_user("asker"))
    first = await user_repo.save(make_user("first"))
    second = await user_repo.save(make_user("second"))
    question = await question_repo.save(make_question(asker))
    return asker, first, second, question


class TestCreateAnswer:
    """Tests for create_answer."""

    @pytest.mark.asyncio
    async def test_new_answer_is_unapproved_and_counted(self, unit_env):
        """Answers start hidden and bump the question's answer count."""
        answer_service = await unit_env.get(AnswerService)
        question_repo = await unit_env.get(QuestionRepository)
        _, first, _, question = await _seed(unit_env)

        answer = await answer_service.create_answer(first, question.id, ANSWER_TEXT)

        assert answer.is_approved is False
        assert answer.is_accepted is False
        stored = await question_repo.find_by_id(question.id)
        assert stored.answer_count == 1
        assert stored.last_activity_at >= question.last_activity_at

    @pytest.mark.asyncio
    async def test_question_author_is_notified(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        notification_repo = await unit_env.get(NotificationRepository)
        asker, first, _, question = await _seed(unit_env)

        answer = await answer_service.create_answer(first, question.id, ANSWER_TEXT)

        notifications = await notification_repo.find_by_recipient(asker.id)
        assert [n.type for n in notifications] == [NotificationType.QUESTION_ANSWER]
        assert notifications[0].answer_id == answer.id
        assert notifications[0].sender_id == first.id

    @pytest.mark.asyncio
    async def test_answering_own_question_sends_no_notification(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        notification_repo = await unit_env.get(NotificationRepository)
        asker, _, _, question = await _seed(unit_env)

        await answer_service.create_answer(asker, question.id, ANSWER_TEXT)

        assert await notification_repo.count_by_recipient(asker.id) == 0

    @pytest.mark.asyncio
    async def test_mentioned_users_are_notified(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        notification_repo = await unit_env.get(NotificationRepository)
        _, first, second, question = await _seed(unit_env)

        await answer_service.create_answer(
            first, question.id, f"{ANSWER_TEXT} See also @second and @nobody_here."
        )

        notifications = await notification_repo.find_by_recipient(second.id)
        assert [n.type for n in notifications] == [NotificationType.MENTION]

    @pytest.mark.asyncio
    async def test_closed_question_rejects_answers(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        question_repo = await unit_env.get(QuestionRepository)
        _, first, _, question = await _seed(unit_env)
        await question_repo.save(
            question.model_copy(update={"status": QuestionStatus.CLOSED})
        )

        with pytest.raises(ValidationError, match="closed"):
            await answer_service.create_answer(first, question.id, ANSWER_TEXT)


class TestAcceptAnswer:
    """Tests for the acceptance state machine."""

    @pytest.mark.asyncio
    async def test_accept_marks_answer_and_question(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        answer_repo = await unit_env.get(AnswerRepository)
        asker, first, _, question = await _seed(unit_env)
        answer = await answer_service.create_answer(first, question.id, ANSWER_TEXT)

        updated = await answer_service.accept(question.id, answer.id, asker)

        assert updated.accepted_answer_id == answer.id
        assert updated.is_answered is True
        assert (await answer_repo.find_by_id(answer.id)).is_accepted is True

    @pytest.mark.asyncio
    async def test_accepting_another_answer_unaccepts_previous(self, unit_env):
        """At most one answer per question is accepted."""
        answer_service = await unit_env.get(AnswerService)
        answer_repo = await unit_env.get(AnswerRepository)
        asker, first, second, question = await _seed(unit_env)
        a1 = await answer_service.create_answer(first, question.id, ANSWER_TEXT)
        a2 = await answer_service.create_answer(second, question.id, ANSWER_TEXT)

        await answer_service.accept(question.id, a1.id, asker)
        updated = await answer_service.accept(question.id, a2.id, asker)

        assert updated.accepted_answer_id == a2.id
        answers = await answer_repo.find_by_question(question.id)
        assert [a.id for a in answers if a.is_accepted] == [a2.id]

    @pytest.mark.asyncio
    async def test_switching_acceptance_notifies_only_new_author(self, unit_env):
        """Moving acceptance to another answer notifies that answer's author once."""
        answer_service = await unit_env.get(AnswerService)
        notification_repo = await unit_env.get(NotificationRepository)
        asker, first, second, question = await _seed(unit_env)
        a1 = await answer_service.create_answer(first, question.id, ANSWER_TEXT)
        a2 = await answer_service.create_answer(second, question.id, ANSWER_TEXT)

        await answer_service.accept(question.id, a1.id, asker)
        await answer_service.accept(question.id, a2.id, asker)

        async def accepted_for(user):
            return [
                n
                for n in await notification_repo.find_by_recipient(user.id)
                if n.type == NotificationType.ANSWER_ACCEPTED
            ]

        to_first = await accepted_for(first)
        to_second = await accepted_for(second)
        assert len(to_first) == 1
        assert len(to_second) == 1
        assert to_second[0].sender_id == asker.id

    @pytest.mark.asyncio
    async def test_accepting_own_answer_sends_nothing(self, unit_env):
        """An asker who answers and accepts their own question gets no notifications."""
        answer_service = await unit_env.get(AnswerService)
        notification_repo = await unit_env.get(NotificationRepository)
        sink = await unit_env.get(RecordingNotificationSink)
        asker, _, _, question = await _seed(unit_env)

        answer = await answer_service.create_answer(asker, question.id, ANSWER_TEXT)
        updated = await answer_service.accept(question.id, answer.id, asker)

        assert updated.accepted_answer_id == answer.id
        assert await notification_repo.find_by_recipient(asker.id) == []
        assert sink.events_for(asker.id) == []

    @pytest.mark.asyncio
    async def test_reaccepting_same_answer_is_noop(self, unit_env):
        """Accepting the accepted answer again sends no second notification."""
        answer_service = await unit_env.get(AnswerService)
        notification_repo = await unit_env.get(NotificationRepository)
        asker, first, _, question = await _seed(unit_env)
        answer = await answer_service.create_answer(first, question.id, ANSWER_TEXT)

        await answer_service.accept(question.id, answer.id, asker)
        updated = await answer_service.accept(question.id, answer.id, asker)

        assert updated.accepted_answer_id == answer.id
        accepted = [
            n
            for n in await notification_repo.find_by_recipient(first.id)
            if n.type == NotificationType.ANSWER_ACCEPTED
        ]
        assert len(accepted) == 1

    @pytest.mark.asyncio
    async def test_only_question_author_can_accept(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        _, first, second, question = await _seed(unit_env)
        answer = await answer_service.create_answer(first, question.id, ANSWER_TEXT)

        with pytest.raises(AuthorizationError):
            await answer_service.accept(question.id, answer.id, second)

    @pytest.mark.asyncio
    async def test_answer_must_belong_to_question(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        question_repo = await unit_env.get(QuestionRepository)
        asker, first, _, question = await _seed(unit_env)
        other = await question_repo.save(
            make_question(asker, title="How do I sort a dict by value?")
        )
        answer = await answer_service.create_answer(first, other.id, ANSWER_TEXT)

        with pytest.raises(ValidationError, match="does not belong"):
            await answer_service.accept(question.id, answer.id, asker)

    @pytest.mark.asyncio
    async def test_accept_by_answer_id(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        asker, first, _, question = await _seed(unit_env)
        answer = await answer_service.create_answer(first, question.id, ANSWER_TEXT)

        updated = await answer_service.accept_answer(answer.id, asker)

        assert updated.id == question.id
        assert updated.accepted_answer_id == answer.id

    @pytest.mark.asyncio
    async def test_unaccept_clears_question(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        question_repo = await unit_env.get(QuestionRepository)
        asker, first, _, question = await _seed(unit_env)
        answer = await answer_service.create_answer(first, question.id, ANSWER_TEXT)
        await answer_service.accept(question.id, answer.id, asker)

        unaccepted = await answer_service.unaccept(answer.id, asker)

        assert unaccepted.is_accepted is False
        stored = await question_repo.find_by_id(question.id)
        assert stored.accepted_answer_id is None
        assert stored.is_answered is False


class TestApproveAnswer:
    """Tests for the approval gate."""

    @pytest.mark.asyncio
    async def test_approve_makes_answer_public(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        asker, first, second, question = await _seed(unit_env)
        answer = await answer_service.create_answer(first, question.id, ANSWER_TEXT)
        assert await answer_service.list_for_question(question.id, second.id) == []

        approved = await answer_service.approve(answer.id, asker)

        assert approved.is_approved is True
        visible = await answer_service.list_for_question(question.id, None)
        assert [a.id for a in visible] == [answer.id]

    @pytest.mark.asyncio
    async def test_only_question_author_can_approve(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        _, first, _, question = await _seed(unit_env)
        answer = await answer_service.create_answer(first, question.id, ANSWER_TEXT)

        with pytest.raises(AuthorizationError):
            await answer_service.approve(answer.id, first)

    @pytest.mark.asyncio
    async def test_approving_twice_is_noop(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        answer_repo = await unit_env.get(AnswerRepository)
        asker, first, _, question = await _seed(unit_env)
        answer = await answer_service.create_answer(first, question.id, ANSWER_TEXT)

        approved = await answer_service.approve(answer.id, asker)
        again = await answer_service.approve(answer.id, asker)

        assert again.is_approved is True
        assert again.updated_at == approved.updated_at
        assert (await answer_repo.find_by_id(answer.id)).updated_at == approved.updated_at


class TestAnswerVisibility:
    """Tests for list_for_question and get_visible_answer."""

    @pytest.mark.asyncio
    async def test_each_viewer_sees_the_right_answers(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        user_repo = await unit_env.get(UserRepository)
        asker, first, second, question = await _seed(unit_env)
        stranger = await user_repo.save(make_user("stranger"))
        a1 = await answer_service.create_answer(first, question.id, ANSWER_TEXT)
        a2 = await answer_service.create_answer(second, question.id, ANSWER_TEXT)
        await answer_service.approve(a2.id, asker)

        def ids(answers):
            return {a.id for a in answers}

        assert ids(await answer_service.list_for_question(question.id, asker.id)) == {
            a1.id,
            a2.id,
        }
        assert ids(await answer_service.list_for_question(question.id, first.id)) == {
            a1.id,
            a2.id,
        }
        assert ids(await answer_service.list_for_question(question.id, stranger.id)) == {
            a2.id
        }
        assert ids(await answer_service.list_for_question(question.id, None)) == {a2.id}

    @pytest.mark.asyncio
    async def test_accepted_answer_listed_first(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        asker, first, second, question = await _seed(unit_env)
        a1 = await answer_service.create_answer(first, question.id, ANSWER_TEXT)
        a2 = await answer_service.create_answer(second, question.id, ANSWER_TEXT)
        await answer_service.accept(question.id, a1.id, asker)

        answers = await answer_service.list_for_question(question.id, asker.id)

        assert [a.id for a in answers] == [a1.id, a2.id]

    @pytest.mark.asyncio
    async def test_hidden_answer_is_not_found_for_outsiders(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        _, first, second, question = await _seed(unit_env)
        answer = await answer_service.create_answer(first, question.id, ANSWER_TEXT)

        with pytest.raises(NotFoundError):
            await answer_service.get_visible_answer(answer.id, second.id)
        assert (await answer_service.get_visible_answer(answer.id, first.id)).id == answer.id

    @pytest.mark.asyncio
    async def test_list_for_missing_question(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        with pytest.raises(NotFoundError):
            await answer_service.list_for_question(make_question(make_user()).id)


class TestUpdateAndDeleteAnswer:
    """Tests for editing and deleting answers."""

    @pytest.mark.asyncio
    async def test_update_marks_edited(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        _, first, _, question = await _seed(unit_env)
        answer = await answer_service.create_answer(first, question.id, ANSWER_TEXT)

        updated = await answer_service.update_answer(
            answer.id, first, "reversed() gives an iterator over the list backwards."
        )

        assert updated.is_edited is True
        assert updated.content.startswith("reversed()")

    @pytest.mark.asyncio
    async def test_only_author_or_admin_can_update(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        _, first, second, question = await _seed(unit_env)
        answer = await answer_service.create_answer(first, question.id, ANSWER_TEXT)

        with pytest.raises(NotOwnerError):
            await answer_service.update_answer(answer.id, second, ANSWER_TEXT)

        admin = make_user("admin", role=UserRole.ADMIN)
        updated = await answer_service.update_answer(answer.id, admin, ANSWER_TEXT)
        assert updated.is_edited is True

    @pytest.mark.asyncio
    async def test_delete_removes_answer_and_comments(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        comment_service = await unit_env.get(CommentService)
        answer_repo = await unit_env.get(AnswerRepository)
        comment_repo = await unit_env.get(CommentRepository)
        question_repo = await unit_env.get(QuestionRepository)
        _, first, second, question = await _seed(unit_env)
        answer = await answer_service.create_answer(first, question.id, ANSWER_TEXT)
        await comment_service.create_comment(second, "Nice one", answer_id=answer.id)

        await answer_service.delete_answer(answer.id, first)

        assert await answer_repo.find_by_id(answer.id) is None
        assert await comment_repo.find_by_answer(answer.id) == []
        assert (await question_repo.find_by_id(question.id)).answer_count == 0

    @pytest.mark.asyncio
    async def test_accepted_answer_cannot_be_deleted(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        answer_repo = await unit_env.get(AnswerRepository)
        asker, first, _, question = await _seed(unit_env)
        answer = await answer_service.create_answer(first, question.id, ANSWER_TEXT)
        await answer_service.accept(question.id, answer.id, asker)

        with pytest.raises(ValidationError, match="accepted"):
            await answer_service.delete_answer(answer.id, first)

        assert await answer_repo.find_by_id(answer.id) is not None

    @pytest.mark.asyncio
    async def test_unaccepted_answer_can_be_deleted(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        answer_repo = await unit_env.get(AnswerRepository)
        question_repo = await unit_env.get(QuestionRepository)
        asker, first, _, question = await _seed(unit_env)
        answer = await answer_service.create_answer(first, question.id, ANSWER_TEXT)
        await answer_service.accept(question.id, answer.id, asker)

        await answer_service.unaccept(answer.id, asker)
        await answer_service.delete_answer(answer.id, first)

        assert await answer_repo.find_by_id(answer.id) is None
        stored = await question_repo.find_by_id(question.id)
        assert stored.accepted_answer_id is None
        assert stored.answer_count == 0


class TestNotificationFailures:
    """Notification failures never undo the action that caused them."""

    @pytest.mark.asyncio
    async def test_answer_created_when_sink_fails(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        answer_repo = await unit_env.get(AnswerRepository)
        sink = await unit_env.get(RecordingNotificationSink)
        _, first, _, question = await _seed(unit_env)
        sink.fail = True

        answer = await answer_service.create_answer(first, question.id, ANSWER_TEXT)

        assert await answer_repo.find_by_id(answer.id) is not None
        assert sink.published == []
