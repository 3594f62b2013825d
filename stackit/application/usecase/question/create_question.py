"""Create question use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from stackit.domain.service import QuestionService, UserService
from stackit.domain.value import TagName, UserId

from .common import QuestionDetail


class CreateQuestionRequest(BaseModel):
    """Create question request."""

    title: str
    content: str
    tag_names: list[str]  # 1-5 tags, created if missing
    author_id: str  # User ID from authenticated user


class CreateQuestionResponse(QuestionDetail):
    """Create question response."""

    pass


class CreateQuestionUseCase:
    """Use case for asking a question."""

    def __init__(
        self, question_service: QuestionService, user_service: UserService
    ) -> None:
        """Initialize create question use case.

        Args:
            question_service: Question domain service
            user_service: User domain service
        """
        self.question_service = question_service
        self.user_service = user_service

    async def execute(self, request: CreateQuestionRequest) -> CreateQuestionResponse:
        """Execute create question flow.

        Steps:
        1. Load the author
        2. Create the question; tags are normalized, created on demand and
           their usage counted by the question service

        Raises:
            NotFoundError: If the author doesn't exist
            ValidationError: If the tag count is out of range
        """
        author = await self.user_service.get_by_id(UserId(UUID(request.author_id)))

        with logfire.span(
            "create_question.execute",
            title=request.title,
            tags=request.tag_names,
            author=author.username.root,
        ):
            question = await self.question_service.create_question(
                author,
                request.title,
                request.content,
                [TagName(name) for name in request.tag_names],
            )
            return CreateQuestionResponse(
                **QuestionDetail.from_question(question, author.id).model_dump()
            )
