"""Question response models shared by the question use cases."""

from datetime import datetime

from pydantic import BaseModel

from stackit.domain.model import Question
from stackit.domain.value import QuestionStatus, UserId, VoteType


class QuestionDetail(BaseModel):
    """Question as returned by the API."""

    question_id: str
    title: str
    content: str
    author_id: str
    tags: list[str]
    vote_count: int
    answer_count: int
    views: int
    is_answered: bool
    accepted_answer_id: str | None
    status: QuestionStatus
    user_vote: VoteType | None  # Viewer's current vote, if authenticated
    created_at: datetime
    updated_at: datetime
    last_activity_at: datetime

    @classmethod
    def from_question(
        cls, question: Question, viewer_id: UserId | None = None
    ) -> "QuestionDetail":
        return cls(
            question_id=str(question.id),
            title=question.title,
            content=question.content,
            author_id=str(question.author_id),
            tags=question.tag_names,
            vote_count=question.vote_count,
            answer_count=question.answer_count,
            views=question.views,
            is_answered=question.is_answered,
            accepted_answer_id=(
                str(question.accepted_answer_id)
                if question.accepted_answer_id
                else None
            ),
            status=question.status,
            user_vote=question.votes.vote_of(viewer_id) if viewer_id else None,
            created_at=question.created_at,
            updated_at=question.updated_at,
            last_activity_at=question.last_activity_at,
        )
