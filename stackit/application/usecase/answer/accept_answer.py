"""Answer acceptance and approval use cases."""

from uuid import UUID

from pydantic import BaseModel

from stackit.domain.service import AnswerService, UserService
from stackit.domain.value import AnswerId, QuestionId, UserId

from .common import AnswerDetail


class AcceptAnswerRequest(BaseModel):
    """Accept answer request.

    question_id is optional; when given, the answer must belong to it.
    """

    answer_id: str
    user_id: str  # User ID from authenticated user
    question_id: str | None = None


class AcceptAnswerResponse(BaseModel):
    """Accept answer response."""

    question_id: str
    accepted_answer_id: str | None
    is_answered: bool


class AcceptAnswerUseCase:
    """Use case for accepting an answer as the solution."""

    def __init__(self, answer_service: AnswerService, user_service: UserService) -> None:
        """Initialize accept answer use case.

        Args:
            answer_service: Answer domain service
            user_service: User domain service
        """
        self.answer_service = answer_service
        self.user_service = user_service

    async def execute(self, request: AcceptAnswerRequest) -> AcceptAnswerResponse:
        """Execute accept answer flow.

        Raises:
            NotFoundError: If the question or answer doesn't exist
            AuthorizationError: If the user is not the question author
            ValidationError: If the answer belongs to another question
        """
        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        answer_id = AnswerId(UUID(request.answer_id))
        if request.question_id is not None:
            question = await self.answer_service.accept(
                QuestionId(UUID(request.question_id)), answer_id, user
            )
        else:
            question = await self.answer_service.accept_answer(answer_id, user)

        return AcceptAnswerResponse(
            question_id=str(question.id),
            accepted_answer_id=(
                str(question.accepted_answer_id)
                if question.accepted_answer_id
                else None
            ),
            is_answered=question.is_answered,
        )


class AnswerActionRequest(BaseModel):
    """Request addressing one answer on behalf of a user."""

    answer_id: str
    user_id: str


class UnacceptAnswerUseCase:
    """Use case for withdrawing acceptance of an answer."""

    def __init__(self, answer_service: AnswerService, user_service: UserService) -> None:
        self.answer_service = answer_service
        self.user_service = user_service

    async def execute(self, request: AnswerActionRequest) -> AnswerDetail:
        """Execute unaccept flow.

        Raises:
            NotFoundError: If the answer doesn't exist
            AuthorizationError: If the user is not the question author
        """
        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        answer = await self.answer_service.unaccept(AnswerId(UUID(request.answer_id)), user)
        return AnswerDetail.from_answer(answer, user.id)


class ApproveAnswerUseCase:
    """Use case for making an answer publicly visible."""

    def __init__(self, answer_service: AnswerService, user_service: UserService) -> None:
        self.answer_service = answer_service
        self.user_service = user_service

    async def execute(self, request: AnswerActionRequest) -> AnswerDetail:
        """Execute approve flow.

        Raises:
            NotFoundError: If the answer doesn't exist
            AuthorizationError: If the user is not the question author
        """
        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        answer = await self.answer_service.approve(AnswerId(UUID(request.answer_id)), user)
        return AnswerDetail.from_answer(answer, user.id)
