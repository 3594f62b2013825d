"""Unit tests for domain entities and value objects."""

from uuid import uuid4

import pydantic
import pytest

from stackit.domain.model import Comment, Notification
from stackit.domain.value import (
    CommentId,
    NotificationId,
    NotificationType,
    QuestionId,
    TagName,
    UserId,
    UserRole,
    Username,
)
from tests.factories import make_answer, make_question, make_user


class TestTagName:
    """Tests for TagName normalization."""

    def test_trims_and_lowercases(self):
        assert TagName("  Python ").root == "python"

    @pytest.mark.parametrize("name", ["a", "has space", "under_score", "x" * 31])
    def test_rejects_invalid_names(self, name):
        with pytest.raises(pydantic.ValidationError):
            TagName(name)


class TestUsername:
    """Tests for Username validation."""

    def test_accepts_letters_digits_underscore(self):
        assert Username("Bob_42").root == "Bob_42"

    @pytest.mark.parametrize("name", ["ab", "has-dash", "x" * 31])
    def test_rejects_invalid_usernames(self, name):
        with pytest.raises(pydantic.ValidationError):
            Username(name)


class TestQuestion:
    """Tests for Question invariants."""

    def test_is_answered_follows_accepted_answer(self):
        """A question is answered exactly when it has an accepted answer."""
        question = make_question(make_user())
        assert question.is_answered is False

        accepted = question.model_copy(update={"accepted_answer_id": uuid4()})

        assert accepted.is_answered is True

    def test_rejects_short_title(self):
        with pytest.raises(pydantic.ValidationError):
            make_question(make_user(), title="Too short")

    def test_rejects_more_than_five_tags(self):
        with pytest.raises(pydantic.ValidationError):
            make_question(make_user(), tags=("a1", "b2", "c3", "d4", "e5", "f6"))

    def test_is_immutable(self):
        question = make_question(make_user())
        with pytest.raises(pydantic.ValidationError):
            question.title = "Something else entirely"


class TestAnswerVisibility:
    """Tests for Answer.is_visible_to."""

    def setup_method(self):
        self.asker = make_user("asker")
        self.answerer = make_user("answerer")
        self.stranger = make_user("stranger")
        self.question = make_question(self.asker)

    def test_approved_answer_is_visible_to_everyone(self):
        answer = make_answer(self.question, self.answerer, is_approved=True)

        assert answer.is_visible_to(None, self.asker.id)
        assert answer.is_visible_to(self.stranger.id, self.asker.id)

    def test_unapproved_answer_is_hidden_from_outsiders(self):
        answer = make_answer(self.question, self.answerer)

        assert not answer.is_visible_to(None, self.asker.id)
        assert not answer.is_visible_to(self.stranger.id, self.asker.id)

    def test_unapproved_answer_is_visible_to_both_authors(self):
        answer = make_answer(self.question, self.answerer)

        assert answer.is_visible_to(self.asker.id, self.asker.id)
        assert answer.is_visible_to(self.answerer.id, self.asker.id)


class TestComment:
    """Tests for the single-target rule of comments."""

    def test_requires_a_target(self):
        with pytest.raises(pydantic.ValidationError):
            Comment(id=CommentId(uuid4()), author_id=UserId(uuid4()), content="Nice")

    def test_rejects_two_targets(self):
        with pytest.raises(pydantic.ValidationError):
            Comment(
                id=CommentId(uuid4()),
                author_id=UserId(uuid4()),
                content="Nice",
                question_id=QuestionId(uuid4()),
                answer_id=uuid4(),
            )


class TestNotification:
    """Tests for Notification."""

    def test_rejects_self_addressed_notification(self):
        user_id = UserId(uuid4())
        with pytest.raises(pydantic.ValidationError):
            Notification(
                id=NotificationId(uuid4()),
                recipient_id=user_id,
                sender_id=user_id,
                type=NotificationType.QUESTION_ANSWER,
                title="New answer",
                message="Someone answered",
            )

    def test_reputation_change_may_be_self_addressed(self):
        user_id = UserId(uuid4())
        notification = Notification(
            id=NotificationId(uuid4()),
            recipient_id=user_id,
            sender_id=user_id,
            type=NotificationType.REPUTATION_CHANGE,
            title="Reputation changed",
            message="Your reputation increased by 10 points.",
        )
        assert notification.recipient_id == notification.sender_id

    def test_as_event_payload(self):
        question_id = QuestionId(uuid4())
        notification = Notification(
            id=NotificationId(uuid4()),
            recipient_id=UserId(uuid4()),
            sender_id=UserId(uuid4()),
            type=NotificationType.QUESTION_VOTE,
            title="Your question was upvoted",
            message="Someone upvoted your question",
            question_id=question_id,
        )

        event = notification.as_event()

        assert event["type"] == "new_notification"
        assert event["notification"]["id"] == str(notification.id)
        assert event["notification"]["type"] == "question_vote"
        assert event["notification"]["question_id"] == str(question_id)
        assert event["notification"]["answer_id"] is None
        assert event["notification"]["is_read"] is False


class TestUser:
    """Tests for reputation gating on User."""

    def test_has_reputation(self):
        assert make_user(reputation=15).has_reputation(15)
        assert not make_user(reputation=14).has_reputation(15)

    def test_admin_bypasses_threshold(self):
        admin = make_user("root", reputation=0, role=UserRole.ADMIN)
        assert admin.has_reputation(1000)
