"""Update and delete answer use cases."""

from uuid import UUID

from pydantic import BaseModel

from stackit.domain.service import AnswerService, UserService
from stackit.domain.value import AnswerId, UserId

from .common import AnswerDetail


class UpdateAnswerRequest(BaseModel):
    """Update answer request."""

    answer_id: str
    user_id: str  # User ID from authenticated user
    content: str


class UpdateAnswerResponse(AnswerDetail):
    """Update answer response."""

    pass


class UpdateAnswerUseCase:
    """Use case for editing an answer (author or admin)."""

    def __init__(self, answer_service: AnswerService, user_service: UserService) -> None:
        """Initialize update answer use case.

        Args:
            answer_service: Answer domain service
            user_service: User domain service
        """
        self.answer_service = answer_service
        self.user_service = user_service

    async def execute(self, request: UpdateAnswerRequest) -> UpdateAnswerResponse:
        """Execute update answer flow.

        Raises:
            NotFoundError: If the answer or user doesn't exist
            NotOwnerError: If the user is neither author nor admin
        """
        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        answer = await self.answer_service.update_answer(
            AnswerId(UUID(request.answer_id)), user, request.content
        )
        return UpdateAnswerResponse(
            **AnswerDetail.from_answer(answer, user.id).model_dump()
        )


class DeleteAnswerRequest(BaseModel):
    """Delete answer request."""

    answer_id: str
    user_id: str


class DeleteAnswerResponse(BaseModel):
    """Delete answer response."""

    answer_id: str
    deleted: bool


class DeleteAnswerUseCase:
    """Use case for deleting an answer that isn't accepted."""

    def __init__(self, answer_service: AnswerService, user_service: UserService) -> None:
        self.answer_service = answer_service
        self.user_service = user_service

    async def execute(self, request: DeleteAnswerRequest) -> DeleteAnswerResponse:
        """Execute delete answer flow.

        Raises:
            NotFoundError: If the answer or user doesn't exist
            NotOwnerError: If the user is neither author nor admin
            ValidationError: If the answer is accepted
        """
        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        await self.answer_service.delete_answer(AnswerId(UUID(request.answer_id)), user)
        return DeleteAnswerResponse(answer_id=request.answer_id, deleted=True)
