"""Resolve the caller behind a bearer token."""

from uuid import UUID

from pydantic import BaseModel

from stackit.domain.service import JWTService, UserService
from stackit.domain.value import UserId

from .register import AuthUserInfo


class GetCurrentUserRequest(BaseModel):
    token: str


class GetCurrentUserResponse(AuthUserInfo):
    pass


class GetCurrentUserUseCase:
    """Turn a token into the account as it is now.

    Role and reputation are read from storage rather than trusted from the
    token, so a promotion or a downvote takes effect on the next request.
    """

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """
        Raises:
            JWTError: If the token is invalid or expired
            NotFoundError: If the account was removed after the token was issued
        """
        payload = self.jwt_service.verify_token(request.token)
        user = await self.user_service.get_by_id(UserId(UUID(payload.user_id)))
        return GetCurrentUserResponse.from_user(user)
