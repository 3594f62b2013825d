"""Answer response models shared by the answer use cases."""

from datetime import datetime

from pydantic import BaseModel

from stackit.domain.model import Answer
from stackit.domain.value import UserId, VoteType


class AnswerDetail(BaseModel):
    """Answer as returned by the API."""

    answer_id: str
    question_id: str
    author_id: str
    content: str
    vote_count: int
    is_accepted: bool
    is_approved: bool
    is_edited: bool
    user_vote: VoteType | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_answer(
        cls, answer: Answer, viewer_id: UserId | None = None
    ) -> "AnswerDetail":
        return cls(
            answer_id=str(answer.id),
            question_id=str(answer.question_id),
            author_id=str(answer.author_id),
            content=answer.content,
            vote_count=answer.vote_count,
            is_accepted=answer.is_accepted,
            is_approved=answer.is_approved,
            is_edited=answer.is_edited,
            user_vote=answer.votes.vote_of(viewer_id) if viewer_id else None,
            created_at=answer.created_at,
            updated_at=answer.updated_at,
        )
