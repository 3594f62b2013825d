"""User directory and leaderboard use cases."""

from typing import Literal

from pydantic import BaseModel, Field

from stackit.config import PaginationSettings
from stackit.domain.repository import UserOrder
from stackit.domain.service import UserService
from stackit.domain.value import UserRole

from .get_user_profile import GetUserProfileResponse


class ListUsersRequest(BaseModel):
    """List users request."""

    q: str | None = Field(default=None, min_length=2)  # Username or bio contains
    min_reputation: int | None = None
    role: UserRole | None = None
    sort: UserOrder = UserOrder.REPUTATION
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)


class ListUsersResponse(BaseModel):
    users: list[GetUserProfileResponse]
    total: int
    page: int
    limit: int
    pages: int


class ListUsersUseCase:
    """Browse and search the user directory, highest reputation first by default."""

    def __init__(self, user_service: UserService, pagination: PaginationSettings) -> None:
        self.user_service = user_service
        self.pagination = pagination

    async def execute(self, request: ListUsersRequest) -> ListUsersResponse:
        limit = self.pagination.page_size(request.limit)
        users, total = await self.user_service.list_users(
            query=request.q.strip() if request.q else None,
            min_reputation=request.min_reputation,
            role=request.role,
            order=request.sort,
            limit=limit,
            offset=(request.page - 1) * limit,
        )
        return ListUsersResponse(
            users=[GetUserProfileResponse.from_user(u) for u in users],
            total=total,
            page=request.page,
            limit=limit,
            pages=(total + limit - 1) // limit,
        )


class LeaderboardRequest(BaseModel):
    period: Literal["all", "week", "month"] = "all"
    limit: int = Field(default=10, ge=1, le=100)


class LeaderboardResponse(BaseModel):
    users: list[GetUserProfileResponse]
    period: str


class LeaderboardUseCase:
    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: LeaderboardRequest) -> LeaderboardResponse:
        """Rank users by reputation; 'week' and 'month' only count recent sign-ups."""
        users = await self.user_service.leaderboard(request.period, request.limit)
        return LeaderboardResponse(
            users=[GetUserProfileResponse.from_user(u) for u in users],
            period=request.period,
        )
