"""Get question use case."""

from uuid import UUID

from pydantic import BaseModel

from stackit.domain.service import QuestionService
from stackit.domain.value import QuestionId, UserId

from .common import QuestionDetail


class GetQuestionRequest(BaseModel):
    """Get question request."""

    question_id: str
    viewer_id: str | None = None  # Current user ID (if authenticated)


class GetQuestionResponse(QuestionDetail):
    """Get question response."""

    pass


class GetQuestionUseCase:
    """Use case for viewing a question (counts a view)."""

    def __init__(self, question_service: QuestionService) -> None:
        """Initialize get question use case.

        Args:
            question_service: Question domain service
        """
        self.question_service = question_service

    async def execute(self, request: GetQuestionRequest) -> GetQuestionResponse:
        """Execute get question flow.

        Raises:
            NotFoundError: If the question doesn't exist
        """
        question = await self.question_service.get_question(
            QuestionId(UUID(request.question_id))
        )
        viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None
        return GetQuestionResponse(
            **QuestionDetail.from_question(question, viewer_id).model_dump()
        )
