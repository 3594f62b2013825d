"""Comment entity.

Comments are short remarks attached to either a question or an answer.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from stackit.domain.model.common import DomainModel
from stackit.domain.value import AnswerId, CommentId, QuestionId, UserId


class Comment(DomainModel):
    """Comment on a question or an answer (exactly one of the two)."""

    id: CommentId
    author_id: UserId
    content: str = Field(min_length=2, max_length=500)
    question_id: Optional[QuestionId] = None
    answer_id: Optional[AnswerId] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_single_target(self) -> "Comment":
        """A comment targets exactly one question or answer."""
        if (self.question_id is None) == (self.answer_id is None):
            raise ValueError("Comment must reference exactly one question or answer")
        return self
