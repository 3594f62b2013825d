"""Question aggregate root.

Questions own their vote tally, acceptance state and the answer/view
counters. Tags are stored by name, not by reference.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, computed_field

from stackit.domain.model.common import DomainModel
from stackit.domain.value import (
    AnswerId,
    QuestionId,
    QuestionStatus,
    TagName,
    UserId,
    VoteTally,
)


class Question(DomainModel):
    """Question aggregate root.

    Business rules:
    - vote_count is derived from the tally (upvoters minus downvoters)
    - is_answered holds exactly when an answer has been accepted
    - Closed questions accept no new answers
    """

    id: QuestionId
    title: str = Field(min_length=10, max_length=200)
    content: str = Field(min_length=20)
    author_id: UserId
    tags: list[TagName] = Field(min_length=1, max_length=5)
    votes: VoteTally = VoteTally()
    answer_count: int = Field(default=0, ge=0)
    views: int = Field(default=0, ge=0)
    accepted_answer_id: Optional[AnswerId] = None
    status: QuestionStatus = QuestionStatus.OPEN
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    last_activity_at: datetime = Field(default_factory=datetime.now)

    @computed_field
    @property
    def vote_count(self) -> int:
        return self.votes.count

    @computed_field
    @property
    def is_answered(self) -> bool:
        return self.accepted_answer_id is not None

    @property
    def is_closed(self) -> bool:
        return self.status == QuestionStatus.CLOSED

    @property
    def tag_names(self) -> list[str]:
        return [tag.root for tag in self.tags]
