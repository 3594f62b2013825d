"""List user questions use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from stackit.application.usecase.question.common import QuestionDetail
from stackit.domain.repository import QuestionRepository
from stackit.domain.service import UserService
from stackit.domain.value import UserId


class ListUserQuestionsRequest(BaseModel):
    """List user questions request."""

    user_id: str
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListUserQuestionsResponse(BaseModel):
    """List user questions response."""

    user_id: str
    questions: list[QuestionDetail]


class ListUserQuestionsUseCase:
    """Use case for listing the questions a user asked."""

    def __init__(
        self, question_repository: QuestionRepository, user_service: UserService
    ) -> None:
        """Initialize list user questions use case.

        Args:
            question_repository: Question repository
            user_service: User domain service
        """
        self.question_repository = question_repository
        self.user_service = user_service

    async def execute(
        self, request: ListUserQuestionsRequest
    ) -> ListUserQuestionsResponse:
        """Execute list user questions flow.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        questions = await self.question_repository.find_by_author(
            user.id, limit=request.limit, offset=request.offset
        )
        return ListUserQuestionsResponse(
            user_id=str(user.id),
            questions=[QuestionDetail.from_question(q) for q in questions],
        )
