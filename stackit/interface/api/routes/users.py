"""User routes."""

from typing import Literal
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel, Field

from stackit.application.usecase.answer import (
    ListUserAnswersRequest,
    ListUserAnswersResponse,
    ListUserAnswersUseCase,
)
from stackit.application.usecase.auth import GetCurrentUserUseCase
from stackit.application.usecase.user import (
    AdjustReputationRequest,
    AdjustReputationResponse,
    AdjustReputationUseCase,
    GetUserProfileRequest,
    GetUserProfileResponse,
    GetUserProfileUseCase,
    LeaderboardRequest,
    LeaderboardResponse,
    LeaderboardUseCase,
    ListUserQuestionsRequest,
    ListUserQuestionsResponse,
    ListUserQuestionsUseCase,
    ListUsersRequest,
    ListUsersResponse,
    ListUsersUseCase,
    SetRoleRequest,
    SetRoleResponse,
    SetRoleUseCase,
)
from stackit.domain.repository import UserOrder
from stackit.domain.value import UserRole
from stackit.interface.api.auth import bearer_scheme, require_user

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class AdjustReputationAPIRequest(BaseModel):
    """API request for changing a user's reputation."""

    points: int
    reason: str = Field(default="", max_length=200)


class SetRoleAPIRequest(BaseModel):
    role: UserRole


@router.get("", response_model=ListUsersResponse)
async def list_users(
    list_users_use_case: FromDishka[ListUsersUseCase],
    q: str | None = None,
    min_reputation: int | None = None,
    role: UserRole | None = None,
    sort: UserOrder = UserOrder.REPUTATION,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> ListUsersResponse:
    """List users.

    Query Parameters:
        q: Only users whose username or bio contains this text
        min_reputation: Only users with at least this much reputation
        role: user or admin
        sort: reputation, username, newest or oldest
        page: 1-based page number
        limit: Page size, capped at the configured maximum
    """
    return await list_users_use_case.execute(
        ListUsersRequest(
            q=q,
            min_reputation=min_reputation,
            role=role,
            sort=sort,
            page=page,
            limit=limit,
        )
    )


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def leaderboard(
    leaderboard_use_case: FromDishka[LeaderboardUseCase],
    period: Literal["all", "week", "month"] = "all",
    limit: int = Query(default=10, ge=1, le=100),
) -> LeaderboardResponse:
    """Top users by reputation; week and month only rank recent sign-ups."""
    return await leaderboard_use_case.execute(
        LeaderboardRequest(period=period, limit=limit)
    )


@router.get("/{username}", response_model=GetUserProfileResponse)
async def get_user_profile(
    username: str,
    get_user_profile_use_case: FromDishka[GetUserProfileUseCase],
) -> GetUserProfileResponse:
    """Get a user's public profile by username."""
    return await get_user_profile_use_case.execute(
        GetUserProfileRequest(username=username)
    )


@router.get("/{user_id}/questions", response_model=ListUserQuestionsResponse)
async def list_user_questions(
    user_id: UUID,
    list_user_questions_use_case: FromDishka[ListUserQuestionsUseCase],
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ListUserQuestionsResponse:
    """List the questions a user asked, newest first."""
    return await list_user_questions_use_case.execute(
        ListUserQuestionsRequest(user_id=str(user_id), limit=limit, offset=offset)
    )


@router.get("/{user_id}/answers", response_model=ListUserAnswersResponse)
async def list_user_answers(
    user_id: UUID,
    list_user_answers_use_case: FromDishka[ListUserAnswersUseCase],
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ListUserAnswersResponse:
    """List a user's approved answers, newest first."""
    return await list_user_answers_use_case.execute(
        ListUserAnswersRequest(user_id=str(user_id), limit=limit, offset=offset)
    )


@router.put("/{user_id}/reputation", response_model=AdjustReputationResponse)
async def adjust_reputation(
    user_id: UUID,
    request: AdjustReputationAPIRequest,
    adjust_reputation_use_case: FromDishka[AdjustReputationUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AdjustReputationResponse:
    """Grant or remove reputation points (admins only)."""
    admin = await require_user(credentials, get_current_user_use_case)
    return await adjust_reputation_use_case.execute(
        AdjustReputationRequest(
            user_id=str(user_id),
            admin_id=admin.user_id,
            points=request.points,
            reason=request.reason,
        )
    )


@router.put("/{user_id}/role", response_model=SetRoleResponse)
async def set_role(
    user_id: UUID,
    request: SetRoleAPIRequest,
    set_role_use_case: FromDishka[SetRoleUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> SetRoleResponse:
    """Promote or demote an account (admins only)."""
    admin = await require_user(credentials, get_current_user_use_case)
    return await set_role_use_case.execute(
        SetRoleRequest(user_id=str(user_id), admin_id=admin.user_id, role=request.role)
    )
