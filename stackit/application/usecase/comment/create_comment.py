"""Create comment use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from stackit.domain.model import Comment
from stackit.domain.service import CommentService, UserService
from stackit.domain.value import AnswerId, QuestionId, UserId


class CommentItem(BaseModel):
    """Comment as returned by the API."""

    comment_id: str
    author_id: str
    content: str
    question_id: str | None
    answer_id: str | None
    created_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentItem":
        return cls(
            comment_id=str(comment.id),
            author_id=str(comment.author_id),
            content=comment.content,
            question_id=str(comment.question_id) if comment.question_id else None,
            answer_id=str(comment.answer_id) if comment.answer_id else None,
            created_at=comment.created_at,
        )


class CreateCommentRequest(BaseModel):
    """Create comment request. Exactly one of question_id/answer_id is set."""

    content: str = Field(min_length=2, max_length=500)
    author_id: str  # User ID from authenticated user
    question_id: str | None = None
    answer_id: str | None = None


class CreateCommentResponse(CommentItem):
    """Create comment response."""

    pass


class CreateCommentUseCase:
    """Use case for commenting on a question or answer."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            user_service: User domain service
        """
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Raises:
            NotFoundError: If the author or target doesn't exist
            ValidationError: If both or neither target is given
            ReputationError: If the author lacks the reputation to comment
        """
        author = await self.user_service.get_by_id(UserId(UUID(request.author_id)))
        comment = await self.comment_service.create_comment(
            author,
            request.content,
            question_id=(
                QuestionId(UUID(request.question_id)) if request.question_id else None
            ),
            answer_id=AnswerId(UUID(request.answer_id)) if request.answer_id else None,
        )
        return CreateCommentResponse(**CommentItem.from_comment(comment).model_dump())
