"""Register use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from stackit.domain.model import User
from stackit.domain.service import JWTService, UserService
from stackit.domain.value import Username


class AuthUserInfo(BaseModel):
    """Authenticated user information."""

    user_id: str
    username: str
    email: str
    role: str
    reputation: int
    bio: str | None
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "AuthUserInfo":
        return cls(
            user_id=str(user.id),
            username=user.username.root,
            email=user.email,
            role=user.role.value,
            reputation=user.reputation,
            bio=user.bio,
            created_at=user.created_at,
        )


class RegisterRequest(BaseModel):
    """Register request."""

    username: str
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=6, max_length=128)


class RegisterResponse(BaseModel):
    """Register response."""

    token: str
    user: AuthUserInfo


class RegisterUseCase:
    """Use case for creating an account."""

    def __init__(self, user_service: UserService, jwt_service: JWTService) -> None:
        """Initialize register use case.

        Args:
            user_service: User domain service
            jwt_service: JWT token domain service
        """
        self.user_service = user_service
        self.jwt_service = jwt_service

    async def execute(self, request: RegisterRequest) -> RegisterResponse:
        """Execute register flow.

        Steps:
        1. Create the user (password hashed by the user service)
        2. Issue a JWT for the new account

        Raises:
            ConflictError: If the username or email is taken
        """
        user = await self.user_service.register(
            Username(request.username), request.email, request.password
        )
        token = self.jwt_service.create_token(user)
        return RegisterResponse(token=token, user=AuthUserInfo.from_user(user))
