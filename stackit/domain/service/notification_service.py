"""Notification domain service.

Turns vote, answer, acceptance, comment, mention and reputation events into
persisted notifications and hands each one to the real-time sink. Dispatch is
best-effort: the action that triggered a notification has already succeeded,
so dispatch failures are logged and dropped here instead of being raised.
"""

import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional
from uuid import uuid4

import logfire

from stackit.domain.error import NotFoundError, NotificationDispatchError
from stackit.domain.model import Answer, Notification, Question
from stackit.domain.repository import (
    AnswerRepository,
    NotificationRepository,
    QuestionRepository,
    UserRepository,
)
from stackit.domain.value import (
    AnswerId,
    CommentId,
    NotificationId,
    NotificationType,
    QuestionId,
    UserId,
    Username,
    VotableType,
    VoteType,
)

from .base import Service

MENTION_PATTERN = re.compile(r"(?<![A-Za-z0-9_])@([A-Za-z0-9_]{3,30})")


class NotificationSink(ABC):
    """Real-time delivery channel, keyed by recipient."""

    @abstractmethod
    async def publish(self, user_id: UserId, event: dict[str, Any]) -> None:
        """Publish an event to a user's channel.

        Args:
            user_id: Recipient whose channel receives the event
            event: JSON-serializable event payload
        """
        pass


def extract_mentions(text: str) -> list[Username]:
    """Return the distinct @usernames in a text, in order of appearance."""
    seen: list[str] = []
    for match in MENTION_PATTERN.finditer(text):
        if match.group(1) not in seen:
            seen.append(match.group(1))
    return [Username(name) for name in seen]


class NotificationService(Service):
    """Domain service for creating and reading notifications."""

    def __init__(
        self,
        notification_repository: NotificationRepository,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        user_repository: UserRepository,
        sink: NotificationSink,
    ) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Notification repository
            question_repository: Question repository, to resolve recipients
            answer_repository: Answer repository, to resolve recipients
            user_repository: User repository, to resolve mentions
            sink: Real-time delivery channel
        """
        self.notification_repository = notification_repository
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.user_repository = user_repository
        self.sink = sink

    async def _dispatch(
        self,
        event: str,
        build: Callable[[], Awaitable[Optional[Notification]]],
    ) -> Optional[Notification]:
        """Build, persist and publish a notification, never raising.

        Args:
            event: Event name used in logs
            build: Resolves the recipient and returns the notification, or
                None when there is nobody to notify

        Returns:
            The stored notification, None if skipped or failed
        """
        try:
            notification = await build()
            if notification is None:
                return None

            saved = await self.notification_repository.save(notification)
            await self.sink.publish(saved.recipient_id, saved.as_event())
            logfire.info(
                "Notification dispatched",
                notification_event=event,
                notification_id=str(saved.id),
                recipient_id=str(saved.recipient_id),
            )
            return saved
        except Exception as e:
            error = NotificationDispatchError(f"Failed to dispatch {event}: {e}")
            logfire.error(
                "Notification dispatch failed",
                notification_event=event,
                error=str(error),
                error_type=type(e).__name__,
            )
            return None

    def _suppressed(self, event: str, recipient_id: UserId, sender_id: UserId) -> bool:
        if recipient_id == sender_id:
            logfire.info(
                "Self notification suppressed",
                notification_event=event,
                user_id=str(sender_id),
            )
            return True
        return False

    async def notify_question_answered(
        self, question_id: QuestionId, answer_id: AnswerId, answer_author_id: UserId
    ) -> Optional[Notification]:
        """Tell a question's author that it received an answer.

        Args:
            question_id: Answered question
            answer_id: New answer
            answer_author_id: Author of the new answer

        Returns:
            The notification, None if skipped
        """

        async def build() -> Optional[Notification]:
            question = await self.question_repository.find_by_id(question_id)
            if question is None:
                logfire.warn("Answered question missing", question_id=str(question_id))
                return None
            if self._suppressed(
                "question_answer", question.author_id, answer_author_id
            ):
                return None
            return self._new(
                recipient_id=question.author_id,
                sender_id=answer_author_id,
                type=NotificationType.QUESTION_ANSWER,
                title="New answer to your question",
                message=f'Someone answered your question "{question.title}"',
                question_id=question_id,
                answer_id=answer_id,
            )

        with logfire.span(
            "notification_service.notify_question_answered",
            question_id=str(question_id),
            answer_id=str(answer_id),
        ):
            return await self._dispatch("question_answer", build)

    async def notify_answer_accepted(
        self, answer_id: AnswerId, accepted_by: UserId
    ) -> Optional[Notification]:
        """Tell an answer's author that it was accepted."""

        async def build() -> Optional[Notification]:
            answer = await self.answer_repository.find_by_id(answer_id)
            if answer is None:
                logfire.warn("Accepted answer missing", answer_id=str(answer_id))
                return None
            if self._suppressed("answer_accepted", answer.author_id, accepted_by):
                return None
            return self._new(
                recipient_id=answer.author_id,
                sender_id=accepted_by,
                type=NotificationType.ANSWER_ACCEPTED,
                title="Your answer was accepted!",
                message="Congratulations! Your answer was marked as accepted.",
                question_id=answer.question_id,
                answer_id=answer_id,
            )

        with logfire.span(
            "notification_service.notify_answer_accepted", answer_id=str(answer_id)
        ):
            return await self._dispatch("answer_accepted", build)

    async def notify_vote(
        self,
        votable_type: VotableType,
        votable_id: QuestionId | AnswerId,
        voter_id: UserId,
        vote_type: VoteType,
    ) -> Optional[Notification]:
        """Tell a question's or answer's author that it was voted on.

        Args:
            votable_type: Whether a question or an answer was voted on
            votable_id: ID of the question or answer
            voter_id: Voter
            vote_type: Direction of the registered vote

        Returns:
            The notification, None if skipped
        """

        async def build() -> Optional[Notification]:
            content: Question | Answer | None
            if votable_type == VotableType.QUESTION:
                content = await self.question_repository.find_by_id(
                    QuestionId(votable_id)
                )
            else:
                content = await self.answer_repository.find_by_id(AnswerId(votable_id))
            if content is None:
                logfire.warn(
                    "Voted content missing",
                    votable_type=votable_type.value,
                    votable_id=str(votable_id),
                )
                return None

            kind = votable_type.value
            if self._suppressed(f"{kind}_vote", content.author_id, voter_id):
                return None

            verb = "upvoted" if vote_type == VoteType.UPVOTE else "downvoted"
            if isinstance(content, Question):
                question_id, answer_id = content.id, None
                notification_type = NotificationType.QUESTION_VOTE
            else:
                question_id, answer_id = content.question_id, content.id
                notification_type = NotificationType.ANSWER_VOTE
            return self._new(
                recipient_id=content.author_id,
                sender_id=voter_id,
                type=notification_type,
                title=f"Your {kind} was {verb}",
                message=f"Someone {verb} your {kind}",
                question_id=question_id,
                answer_id=answer_id,
                metadata={"vote_type": vote_type.value},
            )

        with logfire.span(
            "notification_service.notify_vote",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            vote_type=vote_type.value,
        ):
            return await self._dispatch(f"{votable_type.value}_vote", build)

    async def notify_comment(
        self,
        comment_id: CommentId,
        comment_author_id: UserId,
        question_id: Optional[QuestionId] = None,
        answer_id: Optional[AnswerId] = None,
    ) -> Optional[Notification]:
        """Tell the author of a question or answer that it was commented on."""

        async def build() -> Optional[Notification]:
            content: Question | Answer | None
            if answer_id is not None:
                content = await self.answer_repository.find_by_id(answer_id)
                notification_type = NotificationType.ANSWER_COMMENT
                kind = "answer"
            else:
                content = await self.question_repository.find_by_id(
                    QuestionId(question_id)
                )
                notification_type = NotificationType.QUESTION_COMMENT
                kind = "question"
            if content is None:
                logfire.warn("Commented content missing", comment_id=str(comment_id))
                return None
            if self._suppressed(
                notification_type.value, content.author_id, comment_author_id
            ):
                return None
            return self._new(
                recipient_id=content.author_id,
                sender_id=comment_author_id,
                type=notification_type,
                title=f"New comment on your {kind}",
                message=f"Someone commented on your {kind}",
                question_id=question_id,
                answer_id=answer_id,
                comment_id=comment_id,
            )

        with logfire.span(
            "notification_service.notify_comment", comment_id=str(comment_id)
        ):
            return await self._dispatch("comment", build)

    async def notify_mention(
        self,
        mentioned: Username,
        mentioner_id: UserId,
        context: str,
        question_id: Optional[QuestionId] = None,
        answer_id: Optional[AnswerId] = None,
    ) -> Optional[Notification]:
        """Tell a user they were @mentioned.

        Args:
            mentioned: Username that was mentioned
            mentioner_id: User who wrote the mention
            context: Short description of where the mention happened
            question_id: Related question, if any
            answer_id: Related answer, if any

        Returns:
            The notification, None if skipped
        """

        async def build() -> Optional[Notification]:
            user = await self.user_repository.find_by_username(mentioned)
            if user is None:
                logfire.info("Mentioned user does not exist", username=mentioned.root)
                return None
            if self._suppressed("mention", user.id, mentioner_id):
                return None
            return self._new(
                recipient_id=user.id,
                sender_id=mentioner_id,
                type=NotificationType.MENTION,
                title="You were mentioned",
                message=f"@{user.username.root} was mentioned in {context}",
                question_id=question_id,
                answer_id=answer_id,
                metadata={"context": context},
            )

        with logfire.span(
            "notification_service.notify_mention", username=mentioned.root
        ):
            return await self._dispatch("mention", build)

    async def notify_mentions(
        self,
        text: str,
        mentioner_id: UserId,
        context: str,
        question_id: Optional[QuestionId] = None,
        answer_id: Optional[AnswerId] = None,
    ) -> list[Notification]:
        """Notify every user @mentioned in a text (each at most once)."""
        sent = []
        for username in extract_mentions(text):
            notification = await self.notify_mention(
                username,
                mentioner_id,
                context,
                question_id=question_id,
                answer_id=answer_id,
            )
            if notification is not None:
                sent.append(notification)
        return sent

    async def notify_reputation_change(
        self, user_id: UserId, points: int, reason: str
    ) -> Optional[Notification]:
        """Tell a user their reputation changed (self-addressed)."""

        async def build() -> Optional[Notification]:
            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                logfire.warn("Reputation change for missing user", user_id=str(user_id))
                return None
            direction = "increased" if points > 0 else "decreased"
            return self._new(
                recipient_id=user_id,
                sender_id=user_id,
                type=NotificationType.REPUTATION_CHANGE,
                title="Reputation changed",
                message=(
                    f"Your reputation {direction} by {abs(points)} points. {reason}"
                ),
                metadata={"points": points, "reason": reason},
            )

        with logfire.span(
            "notification_service.notify_reputation_change",
            user_id=str(user_id),
            points=points,
        ):
            return await self._dispatch("reputation_change", build)

    @staticmethod
    def _new(**fields: Any) -> Notification:
        return Notification(
            id=NotificationId(uuid4()),
            created_at=datetime.now(),
            **fields,
        )

    # Read model

    async def list_notifications(
        self,
        user_id: UserId,
        page: int = 1,
        limit: int = 20,
        unread_only: bool = False,
    ) -> tuple[list[Notification], int]:
        """List a user's notifications, newest first.

        Args:
            user_id: Recipient
            page: 1-based page number
            limit: Page size
            unread_only: Only unread notifications

        Returns:
            Tuple of (notifications on this page, total matching)
        """
        with logfire.span(
            "notification_service.list_notifications",
            user_id=str(user_id),
            page=page,
            limit=limit,
        ):
            offset = (max(page, 1) - 1) * limit
            items = await self.notification_repository.find_by_recipient(
                user_id, unread_only=unread_only, limit=limit, offset=offset
            )
            total = await self.notification_repository.count_by_recipient(
                user_id, unread_only=unread_only
            )
            logfire.info("Notifications retrieved", count=len(items), total=total)
            return items, total

    async def unread_count(self, user_id: UserId) -> int:
        """Count a user's unread notifications."""
        with logfire.span("notification_service.unread_count", user_id=str(user_id)):
            return await self.notification_repository.count_by_recipient(
                user_id, unread_only=True
            )

    async def _get_owned(
        self, notification_id: NotificationId, user_id: UserId
    ) -> Notification:
        notification = await self.notification_repository.find_by_id(notification_id)
        if notification is None or notification.recipient_id != user_id:
            logfire.warn(
                "Notification not found or not owned",
                notification_id=str(notification_id),
                user_id=str(user_id),
            )
            raise NotFoundError("Notification", str(notification_id))
        return notification

    async def _publish_quietly(self, user_id: UserId, event: dict[str, Any]) -> None:
        try:
            await self.sink.publish(user_id, event)
        except Exception as e:
            logfire.error(
                "Notification event publish failed",
                event_type=event.get("type"),
                error=str(e),
            )

    async def mark_read(
        self, notification_id: NotificationId, user_id: UserId
    ) -> Notification:
        """Mark one of the user's notifications as read.

        Raises:
            NotFoundError: If the notification doesn't exist or belongs to
                someone else
        """
        with logfire.span(
            "notification_service.mark_read",
            notification_id=str(notification_id),
            user_id=str(user_id),
        ):
            await self._get_owned(notification_id, user_id)
            updated = await self.notification_repository.mark_read(notification_id)
            if updated is None:
                raise NotFoundError("Notification", str(notification_id))
            await self._publish_quietly(
                user_id,
                {"type": "notification_read", "notification_id": str(notification_id)},
            )
            logfire.info("Notification marked read", notification_id=str(notification_id))
            return updated

    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark all of a user's notifications as read.

        Returns:
            Number of notifications that were unread
        """
        with logfire.span("notification_service.mark_all_read", user_id=str(user_id)):
            count = await self.notification_repository.mark_all_read(user_id)
            await self._publish_quietly(user_id, {"type": "all_notifications_read"})
            logfire.info("All notifications marked read", count=count)
            return count

    async def delete_notification(
        self, notification_id: NotificationId, user_id: UserId
    ) -> None:
        """Delete one of the user's notifications.

        Raises:
            NotFoundError: If the notification doesn't exist or belongs to
                someone else
        """
        with logfire.span(
            "notification_service.delete_notification",
            notification_id=str(notification_id),
        ):
            await self._get_owned(notification_id, user_id)
            await self.notification_repository.delete(notification_id)
            logfire.info("Notification deleted", notification_id=str(notification_id))

    async def delete_all(self, user_id: UserId) -> int:
        """Delete all of a user's notifications."""
        with logfire.span("notification_service.delete_all", user_id=str(user_id)):
            count = await self.notification_repository.delete_by_recipient(user_id)
            logfire.info("All notifications deleted", count=count)
            return count
