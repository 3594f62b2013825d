"""Create answer use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from stackit.domain.service import AnswerService, UserService
from stackit.domain.value import QuestionId, UserId

from .common import AnswerDetail


class CreateAnswerRequest(BaseModel):
    """Create answer request."""

    question_id: str
    content: str
    author_id: str  # User ID from authenticated user


class CreateAnswerResponse(AnswerDetail):
    """Create answer response."""

    pass


class CreateAnswerUseCase:
    """Use case for answering a question."""

    def __init__(self, answer_service: AnswerService, user_service: UserService) -> None:
        """Initialize create answer use case.

        Args:
            answer_service: Answer domain service
            user_service: User domain service
        """
        self.answer_service = answer_service
        self.user_service = user_service

    async def execute(self, request: CreateAnswerRequest) -> CreateAnswerResponse:
        """Execute create answer flow.

        The answer starts unapproved; the question author and any @mentioned
        users are notified by the answer service.

        Raises:
            NotFoundError: If the author or question doesn't exist
            ValidationError: If the question is closed
        """
        author = await self.user_service.get_by_id(UserId(UUID(request.author_id)))

        with logfire.span(
            "create_answer.execute",
            question_id=request.question_id,
            author=author.username.root,
        ):
            answer = await self.answer_service.create_answer(
                author, QuestionId(UUID(request.question_id)), request.content
            )
            return CreateAnswerResponse(
                **AnswerDetail.from_answer(answer, author.id).model_dump()
            )
