"""Update question use case."""

from uuid import UUID

from pydantic import BaseModel

from stackit.domain.service import QuestionService, UserService
from stackit.domain.value import QuestionId, QuestionStatus, TagName, UserId

from .common import QuestionDetail


class UpdateQuestionRequest(BaseModel):
    """Update question request. Unset fields are left unchanged."""

    question_id: str
    user_id: str  # User ID from authenticated user
    title: str | None = None
    content: str | None = None
    tag_names: list[str] | None = None


class UpdateQuestionResponse(QuestionDetail):
    """Update question response."""

    pass


class UpdateQuestionUseCase:
    """Use case for editing a question (author or admin)."""

    def __init__(
        self, question_service: QuestionService, user_service: UserService
    ) -> None:
        """Initialize update question use case.

        Args:
            question_service: Question domain service
            user_service: User domain service
        """
        self.question_service = question_service
        self.user_service = user_service

    async def execute(self, request: UpdateQuestionRequest) -> UpdateQuestionResponse:
        """Execute update question flow.

        Raises:
            NotFoundError: If the question or user doesn't exist
            NotOwnerError: If the user is neither author nor admin
            ValidationError: If the new tag count is out of range
        """
        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        tag_names = (
            [TagName(name) for name in request.tag_names]
            if request.tag_names is not None
            else None
        )
        question = await self.question_service.update_question(
            QuestionId(UUID(request.question_id)),
            user,
            title=request.title,
            content=request.content,
            tag_names=tag_names,
        )
        return UpdateQuestionResponse(
            **QuestionDetail.from_question(question, user.id).model_dump()
        )


class SetQuestionStatusRequest(BaseModel):
    """Set question status request."""

    question_id: str
    user_id: str
    status: QuestionStatus


class SetQuestionStatusUseCase:
    """Use case for opening, closing or holding a question."""

    def __init__(
        self, question_service: QuestionService, user_service: UserService
    ) -> None:
        self.question_service = question_service
        self.user_service = user_service

    async def execute(self, request: SetQuestionStatusRequest) -> QuestionDetail:
        """Execute set status flow.

        Raises:
            NotFoundError: If the question or user doesn't exist
            NotOwnerError: If the user is neither author nor admin
        """
        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        question = await self.question_service.set_status(
            QuestionId(UUID(request.question_id)), user, request.status
        )
        return QuestionDetail.from_question(question, user.id)
