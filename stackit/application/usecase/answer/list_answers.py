"""Answer read use cases."""

from uuid import UUID

from pydantic import BaseModel, Field

from stackit.domain.service import AnswerService, UserService
from stackit.domain.value import AnswerId, QuestionId, UserId

from .common import AnswerDetail


class ListAnswersRequest(BaseModel):
    """List answers request."""

    question_id: str
    viewer_id: str | None = None  # Current user ID (if authenticated)


class ListAnswersResponse(BaseModel):
    """List answers response."""

    question_id: str
    answers: list[AnswerDetail]
    total: int


class ListAnswersUseCase:
    """Use case for listing the answers to a question a viewer may see."""

    def __init__(self, answer_service: AnswerService) -> None:
        """Initialize list answers use case.

        Args:
            answer_service: Answer domain service
        """
        self.answer_service = answer_service

    async def execute(self, request: ListAnswersRequest) -> ListAnswersResponse:
        """Execute list answers flow.

        Raises:
            NotFoundError: If the question doesn't exist
        """
        viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None
        answers = await self.answer_service.list_for_question(
            QuestionId(UUID(request.question_id)), viewer_id
        )
        return ListAnswersResponse(
            question_id=request.question_id,
            answers=[AnswerDetail.from_answer(a, viewer_id) for a in answers],
            total=len(answers),
        )


class GetAnswerRequest(BaseModel):
    """Get answer request."""

    answer_id: str
    viewer_id: str | None = None


class GetAnswerUseCase:
    """Use case for reading a single answer."""

    def __init__(self, answer_service: AnswerService) -> None:
        self.answer_service = answer_service

    async def execute(self, request: GetAnswerRequest) -> AnswerDetail:
        """Execute get answer flow.

        Raises:
            NotFoundError: If the answer doesn't exist or is hidden from the
                viewer
        """
        viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None
        answer = await self.answer_service.get_visible_answer(
            AnswerId(UUID(request.answer_id)), viewer_id
        )
        return AnswerDetail.from_answer(answer, viewer_id)


class ListUserAnswersRequest(BaseModel):
    """List a user's answers request."""

    user_id: str
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListUserAnswersResponse(BaseModel):
    """List a user's answers response."""

    user_id: str
    answers: list[AnswerDetail]


class ListUserAnswersUseCase:
    """Use case for listing a user's approved answers."""

    def __init__(self, answer_service: AnswerService, user_service: UserService) -> None:
        self.answer_service = answer_service
        self.user_service = user_service

    async def execute(self, request: ListUserAnswersRequest) -> ListUserAnswersResponse:
        """Execute list user answers flow.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        answers = await self.answer_service.list_by_author(
            user.id, limit=request.limit, offset=request.offset
        )
        return ListUserAnswersResponse(
            user_id=str(user.id),
            answers=[AnswerDetail.from_answer(a) for a in answers],
        )
