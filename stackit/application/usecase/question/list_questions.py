"""List questions use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from stackit.config import PaginationSettings
from stackit.domain.repository import QuestionSortOrder
from stackit.domain.service import QuestionService
from stackit.domain.value import TagName, UserId

from .common import QuestionDetail


class ListQuestionsRequest(BaseModel):
    """List questions request."""

    sort: QuestionSortOrder = QuestionSortOrder.NEWEST
    tag: str | None = None  # Filter by tag name
    unanswered_only: bool = False
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)  # Configured default if omitted
    viewer_id: str | None = None  # Current user ID (if authenticated)


class ListQuestionsResponse(BaseModel):
    """List questions response."""

    questions: list[QuestionDetail]
    total: int
    page: int
    limit: int
    pages: int


class ListQuestionsUseCase:
    """Use case for listing questions with filtering and pagination."""

    def __init__(
        self, question_service: QuestionService, pagination: PaginationSettings
    ) -> None:
        """Initialize list questions use case.

        Args:
            question_service: Question domain service
            pagination: Page size limits
        """
        self.question_service = question_service
        self.pagination = pagination

    async def execute(self, request: ListQuestionsRequest) -> ListQuestionsResponse:
        """Execute list questions flow.

        Args:
            request: Filters, sort order and page

        Returns:
            One page of questions plus pagination totals
        """
        limit = self.pagination.page_size(request.limit)
        offset = (request.page - 1) * limit
        questions, total = await self.question_service.list_questions(
            tag=TagName(request.tag) if request.tag else None,
            unanswered_only=request.unanswered_only,
            sort=request.sort,
            limit=limit,
            offset=offset,
        )
        viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None

        return ListQuestionsResponse(
            questions=[QuestionDetail.from_question(q, viewer_id) for q in questions],
            total=total,
            page=request.page,
            limit=limit,
            pages=(total + limit - 1) // limit,
        )
