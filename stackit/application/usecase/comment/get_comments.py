"""Get comments use case."""

from uuid import UUID

from pydantic import BaseModel

from stackit.domain.service import CommentService
from stackit.domain.value import AnswerId, QuestionId

from .create_comment import CommentItem


class GetCommentsRequest(BaseModel):
    """Get comments request. Exactly one of question_id/answer_id is set."""

    question_id: str | None = None
    answer_id: str | None = None


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    comments: list[CommentItem]
    total: int


class GetCommentsUseCase:
    """Use case for listing the comments on a question or answer."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Returns:
            Comments, oldest first

        Raises:
            ValidationError: If both or neither target is given
        """
        comments = await self.comment_service.list_comments(
            question_id=(
                QuestionId(UUID(request.question_id)) if request.question_id else None
            ),
            answer_id=AnswerId(UUID(request.answer_id)) if request.answer_id else None,
        )
        return GetCommentsResponse(
            comments=[CommentItem.from_comment(c) for c in comments],
            total=len(comments),
        )
