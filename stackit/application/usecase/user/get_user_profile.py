"""Public profile use case."""

from datetime import datetime

from pydantic import BaseModel

from stackit.domain.error import NotFoundError
from stackit.domain.model import User
from stackit.domain.service import UserService
from stackit.domain.value import Username


class GetUserProfileRequest(BaseModel):
    username: str


class GetUserProfileResponse(BaseModel):
    """What anyone may see about an account; email and role stay private."""

    user_id: str
    username: str
    reputation: int
    bio: str | None
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "GetUserProfileResponse":
        return cls(
            user_id=str(user.id),
            username=user.username.root,
            reputation=user.reputation,
            bio=user.bio,
            created_at=user.created_at,
        )


class GetUserProfileUseCase:
    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: GetUserProfileRequest) -> GetUserProfileResponse:
        """Look up a profile by username.

        Raises:
            NotFoundError: No account has this username
        """
        username = Username(request.username)
        user = await self.user_service.get_user_by_username(username)
        if user is None:
            raise NotFoundError("User", username.root)
        return GetUserProfileResponse.from_user(user)
