"""Change role use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from stackit.domain.service import UserService
from stackit.domain.value import UserId, UserRole


class SetRoleRequest(BaseModel):
    """Set role request."""

    user_id: str  # User whose role changes
    admin_id: str  # User ID from authenticated user
    role: UserRole


class SetRoleResponse(BaseModel):
    user_id: str
    username: str
    role: UserRole


class SetRoleUseCase:
    """Use case for an admin promoting or demoting an account."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize set role use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: SetRoleRequest) -> SetRoleResponse:
        """Execute set role flow.

        Raises:
            NotFoundError: If either user doesn't exist
            AuthorizationError: If the acting user is not an admin
        """
        admin = await self.user_service.get_by_id(UserId(UUID(request.admin_id)))
        with logfire.span(
            "set_role.execute", user_id=request.user_id, role=request.role.value
        ):
            user = await self.user_service.set_role(
                UserId(UUID(request.user_id)), request.role, admin
            )
            return SetRoleResponse(
                user_id=str(user.id), username=user.username.root, role=user.role
            )
