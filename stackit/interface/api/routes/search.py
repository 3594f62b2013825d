"""Search routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query
from fastapi.security import HTTPAuthorizationCredentials

from stackit.application.usecase.search import (
    SearchQuestionsResponse,
    SearchQuestionsUseCase,
    SearchRequest,
    SearchTagsResponse,
    SearchTagsUseCase,
    SearchUsersResponse,
    SearchUsersUseCase,
)
from stackit.domain.service import JWTService
from stackit.interface.api.auth import bearer_scheme, optional_user_id

router = APIRouter(prefix="/search", tags=["search"], route_class=DishkaRoute)


@router.get("/questions", response_model=SearchQuestionsResponse)
async def search_questions(
    search_questions_use_case: FromDishka[SearchQuestionsUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    q: str = "",
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> SearchQuestionsResponse:
    """Search question titles and bodies.

    Query Parameters:
        q: Text to look for, at least 2 characters
        page: 1-based page number
        limit: Page size, capped at the configured maximum
    """
    return await search_questions_use_case.execute(
        SearchRequest(
            q=q,
            page=page,
            limit=limit,
            viewer_id=optional_user_id(credentials, jwt_service),
        )
    )


@router.get("/users", response_model=SearchUsersResponse)
async def search_users(
    search_users_use_case: FromDishka[SearchUsersUseCase],
    q: str = "",
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> SearchUsersResponse:
    """Search usernames and bios."""
    return await search_users_use_case.execute(
        SearchRequest(q=q, page=page, limit=limit)
    )


@router.get("/tags", response_model=SearchTagsResponse)
async def search_tags(
    search_tags_use_case: FromDishka[SearchTagsUseCase],
    q: str = "",
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> SearchTagsResponse:
    """Search tag names and descriptions, most used first."""
    return await search_tags_use_case.execute(SearchRequest(q=q, page=page, limit=limit))
