"""Answer entity."""

from datetime import datetime

from pydantic import Field, computed_field

from stackit.domain.model.common import DomainModel
from stackit.domain.value import AnswerId, QuestionId, UserId, VoteTally


class Answer(DomainModel):
    """Answer to a question.

    Acceptance and approval are independent flags:
    - is_accepted: chosen solution, at most one per question, toggled only by
      the question author
    - is_approved: visibility gate, set by the question author; unapproved
      answers are hidden from everyone except the question and answer authors
    """

    id: AnswerId
    question_id: QuestionId
    author_id: UserId
    content: str = Field(min_length=20)
    votes: VoteTally = VoteTally()
    is_accepted: bool = False
    is_approved: bool = False
    is_edited: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @computed_field
    @property
    def vote_count(self) -> int:
        return self.votes.count

    def is_visible_to(self, viewer_id: UserId | None, question_author_id: UserId) -> bool:
        """Whether a viewer may see this answer in a question's answer list."""
        if self.is_approved:
            return True
        if viewer_id is None:
            return False
        return viewer_id == question_author_id or viewer_id == self.author_id
