"""Domain value objects for StackIt.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum
from typing import Optional

from pydantic import field_validator

from stackit.domain.value.common import RootValueObject, ValueObject
from stackit.domain.value.identifiers import UserId


class VoteType(str, Enum):
    """Direction of a vote."""

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"

    @property
    def opposite(self) -> "VoteType":
        return VoteType.DOWNVOTE if self is VoteType.UPVOTE else VoteType.UPVOTE


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    QUESTION = "question"
    ANSWER = "answer"


class QuestionStatus(str, Enum):
    """Lifecycle status of a question."""

    OPEN = "open"
    CLOSED = "closed"
    DUPLICATE = "duplicate"
    ON_HOLD = "on-hold"


class UserRole(str, Enum):
    """Role of a user account."""

    USER = "user"
    ADMIN = "admin"


class NotificationType(str, Enum):
    """Kind of event a notification describes."""

    QUESTION_ANSWER = "question_answer"
    QUESTION_COMMENT = "question_comment"
    ANSWER_COMMENT = "answer_comment"
    ANSWER_ACCEPTED = "answer_accepted"
    QUESTION_VOTE = "question_vote"
    ANSWER_VOTE = "answer_vote"
    MENTION = "mention"
    REPUTATION_CHANGE = "reputation_change"

    @property
    def allows_self_notification(self) -> bool:
        """Whether sender and recipient may be the same user."""
        return self is NotificationType.REPUTATION_CHANGE


class TagName(RootValueObject[str]):
    """Tag name for categorizing questions.

    Input is trimmed and lower-cased; the result must be 2-30 characters of
    lowercase letters, digits and hyphens.
    Examples: 'python', 'asyncio', 'react-hooks'
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize(cls, v: str) -> str:
        """Trim and lower-case before validation."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("root")
    @classmethod
    def validate_tag_name(cls, v: str) -> str:
        """Validate tag name format."""
        if not re.match(r"^[a-z0-9-]{2,30}$", v):
            raise ValueError(
                "Tag name must be 2-30 characters, lowercase, alphanumeric with hyphens"
            )
        return v


class Username(RootValueObject[str]):
    """Public username: 3-30 letters, digits or underscores."""

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not re.match(r"^[A-Za-z0-9_]{3,30}$", v):
            raise ValueError(
                "Username must be 3-30 characters of letters, numbers and underscores"
            )
        return v


class VoteTally(ValueObject):
    """Who voted which way on a question or answer.

    A user is in at most one of the two sets. ``count`` is always derived
    from the sets, never stored independently.
    """

    upvoters: frozenset[UserId] = frozenset()
    downvoters: frozenset[UserId] = frozenset()

    @property
    def count(self) -> int:
        return len(self.upvoters) - len(self.downvoters)

    def vote_of(self, user_id: UserId) -> Optional[VoteType]:
        """Return the user's current vote, if any."""
        if user_id in self.upvoters:
            return VoteType.UPVOTE
        if user_id in self.downvoters:
            return VoteType.DOWNVOTE
        return None

    def resolve(self, user_id: UserId, vote_type: VoteType) -> Optional[VoteType]:
        """Resolve a vote request into the user's resulting vote.

        Casting the same vote twice retracts it; casting the opposite vote
        replaces the previous one.
        """
        if self.vote_of(user_id) == vote_type:
            return None
        return vote_type

    def with_vote(self, user_id: UserId, vote: Optional[VoteType]) -> "VoteTally":
        """Return a tally where the user's vote is exactly ``vote``."""
        upvoters = self.upvoters - {user_id}
        downvoters = self.downvoters - {user_id}
        if vote is VoteType.UPVOTE:
            upvoters = upvoters | {user_id}
        elif vote is VoteType.DOWNVOTE:
            downvoters = downvoters | {user_id}
        return VoteTally(upvoters=upvoters, downvoters=downvoters)

    def toggle(self, user_id: UserId, vote_type: VoteType) -> "VoteTally":
        """Apply a vote request with toggle semantics."""
        return self.with_vote(user_id, self.resolve(user_id, vote_type))
