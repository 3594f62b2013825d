"""Delete question use case."""

from uuid import UUID

from pydantic import BaseModel

from stackit.domain.service import QuestionService, UserService
from stackit.domain.value import QuestionId, UserId


class DeleteQuestionRequest(BaseModel):
    """Delete question request."""

    question_id: str
    user_id: str  # User ID from authenticated user


class DeleteQuestionResponse(BaseModel):
    """Delete question response."""

    question_id: str
    deleted: bool


class DeleteQuestionUseCase:
    """Use case for deleting a question with its answers and comments."""

    def __init__(
        self, question_service: QuestionService, user_service: UserService
    ) -> None:
        """Initialize delete question use case.

        Args:
            question_service: Question domain service
            user_service: User domain service
        """
        self.question_service = question_service
        self.user_service = user_service

    async def execute(self, request: DeleteQuestionRequest) -> DeleteQuestionResponse:
        """Execute delete question flow.

        Raises:
            NotFoundError: If the question or user doesn't exist
            NotOwnerError: If the user is neither author nor admin
        """
        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        await self.question_service.delete_question(
            QuestionId(UUID(request.question_id)), user
        )
        return DeleteQuestionResponse(question_id=request.question_id, deleted=True)
