"""Shared backing store for the in-memory repositories."""

from dataclasses import dataclass, field
from typing import Optional

from stackit.domain.model import Answer, Comment, Notification, Question, Tag, User
from stackit.domain.value import (
    AnswerId,
    CommentId,
    NotificationId,
    QuestionId,
    TagId,
    UserId,
)


@dataclass
class InMemoryStore:
    """Entity tables kept in plain dicts.

    One store lives as long as its container, so repositories created for
    different requests see each other's writes. None of the repository
    methods await while they read and write the store, which makes each of
    them atomic under asyncio.
    """

    users: dict[UserId, User] = field(default_factory=dict)
    questions: dict[QuestionId, Question] = field(default_factory=dict)
    answers: dict[AnswerId, Answer] = field(default_factory=dict)
    tags: dict[TagId, Tag] = field(default_factory=dict)
    comments: dict[CommentId, Comment] = field(default_factory=dict)
    notifications: dict[NotificationId, Notification] = field(default_factory=dict)


def contains_text(text: str, *values: Optional[str]) -> bool:
    """Whether any value contains ``text``, ignoring case."""
    needle = text.lower()
    return any(needle in value.lower() for value in values if value)
