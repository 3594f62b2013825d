"""Case-insensitive substring search over questions, users and tags.

Matches are plain substring matches; results are not ranked by relevance.
Questions come back newest first, users by reputation and tags by usage.
"""

from typing import Annotated
from uuid import UUID

import logfire
from pydantic import BaseModel, Field, StringConstraints

from stackit.application.usecase.question.common import QuestionDetail
from stackit.application.usecase.tag.list_tags import TagItem
from stackit.application.usecase.user.get_user_profile import GetUserProfileResponse
from stackit.config import PaginationSettings
from stackit.domain.service import QuestionService, TagService, UserService
from stackit.domain.value import UserId

SearchText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2)]


class SearchRequest(BaseModel):
    """Search request; the query must be at least two characters once trimmed."""

    q: SearchText
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)
    viewer_id: str | None = None  # Current user ID (if authenticated)


class SearchQuestionsResponse(BaseModel):
    questions: list[QuestionDetail]
    query: str
    total: int
    page: int
    limit: int
    pages: int


class SearchUsersResponse(BaseModel):
    users: list[GetUserProfileResponse]
    query: str
    total: int
    page: int
    limit: int
    pages: int


class SearchTagsResponse(BaseModel):
    tags: list[TagItem]
    query: str
    total: int
    page: int
    limit: int
    pages: int


def _pages(total: int, limit: int) -> int:
    return (total + limit - 1) // limit


class SearchQuestionsUseCase:
    """Find questions whose title or body contains the query."""

    def __init__(
        self, question_service: QuestionService, pagination: PaginationSettings
    ) -> None:
        self.question_service = question_service
        self.pagination = pagination

    async def execute(self, request: SearchRequest) -> SearchQuestionsResponse:
        limit = self.pagination.page_size(request.limit)
        with logfire.span("search_questions.execute", query=request.q):
            questions, total = await self.question_service.list_questions(
                query=request.q, limit=limit, offset=(request.page - 1) * limit
            )
        viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None
        return SearchQuestionsResponse(
            questions=[QuestionDetail.from_question(q, viewer_id) for q in questions],
            query=request.q,
            total=total,
            page=request.page,
            limit=limit,
            pages=_pages(total, limit),
        )


class SearchUsersUseCase:
    """Find users whose username or bio contains the query."""

    def __init__(self, user_service: UserService, pagination: PaginationSettings) -> None:
        self.user_service = user_service
        self.pagination = pagination

    async def execute(self, request: SearchRequest) -> SearchUsersResponse:
        limit = self.pagination.page_size(request.limit)
        with logfire.span("search_users.execute", query=request.q):
            users, total = await self.user_service.list_users(
                query=request.q, limit=limit, offset=(request.page - 1) * limit
            )
        return SearchUsersResponse(
            users=[GetUserProfileResponse.from_user(u) for u in users],
            query=request.q,
            total=total,
            page=request.page,
            limit=limit,
            pages=_pages(total, limit),
        )


class SearchTagsUseCase:
    """Find tags whose name or description contains the query."""

    def __init__(self, tag_service: TagService, pagination: PaginationSettings) -> None:
        self.tag_service = tag_service
        self.pagination = pagination

    async def execute(self, request: SearchRequest) -> SearchTagsResponse:
        limit = self.pagination.page_size(request.limit)
        tags, total = await self.tag_service.search_tags(
            request.q, limit=limit, offset=(request.page - 1) * limit
        )
        return SearchTagsResponse(
            tags=[TagItem.from_tag(t) for t in tags],
            query=request.q,
            total=total,
            page=request.page,
            limit=limit,
            pages=_pages(total, limit),
        )
