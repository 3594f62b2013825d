"""Login use case."""

import logfire
from pydantic import BaseModel

from stackit.domain.error import AuthenticationError
from stackit.domain.service import JWTService, UserService

from .register import AuthUserInfo


class LoginRequest(BaseModel):
    """Login request."""

    email: str
    password: str


class LoginResponse(BaseModel):
    """Login response."""

    token: str
    user: AuthUserInfo


class LoginUseCase:
    """Use case for exchanging credentials for a JWT."""

    def __init__(self, user_service: UserService, jwt_service: JWTService) -> None:
        """Initialize login use case.

        Args:
            user_service: User domain service
            jwt_service: JWT token domain service
        """
        self.user_service = user_service
        self.jwt_service = jwt_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute login flow.

        Raises:
            AuthenticationError: If the email/password pair doesn't match
        """
        with logfire.span("login.execute", email=request.email):
            user = await self.user_service.authenticate(request.email, request.password)
            if user is None:
                raise AuthenticationError("Invalid email or password")

            token = self.jwt_service.create_token(user)
            logfire.info("User logged in", user_id=str(user.id))
            return LoginResponse(token=token, user=AuthUserInfo.from_user(user))
