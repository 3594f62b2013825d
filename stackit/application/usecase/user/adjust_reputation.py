"""Adjust reputation use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from stackit.domain.service import UserService
from stackit.domain.value import UserId


class AdjustReputationRequest(BaseModel):
    """Adjust reputation request."""

    user_id: str  # User whose reputation changes
    admin_id: str  # User ID from authenticated user
    points: int  # Negative to remove points
    reason: str = Field(default="", max_length=200)


class AdjustReputationResponse(BaseModel):
    """Adjust reputation response."""

    user_id: str
    reputation: int


class AdjustReputationUseCase:
    """Use case for an admin granting or removing reputation."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize adjust reputation use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: AdjustReputationRequest) -> AdjustReputationResponse:
        """Execute adjust reputation flow.

        Raises:
            NotFoundError: If either user doesn't exist
            AuthorizationError: If the acting user is not an admin
        """
        admin = await self.user_service.get_by_id(UserId(UUID(request.admin_id)))
        with logfire.span(
            "adjust_reputation.execute",
            user_id=request.user_id,
            points=request.points,
        ):
            user = await self.user_service.adjust_reputation(
                UserId(UUID(request.user_id)), request.points, request.reason, admin
            )
            return AdjustReputationResponse(
                user_id=str(user.id), reputation=user.reputation
            )
