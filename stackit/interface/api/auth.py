"""Bearer token authentication helpers for routes."""

from fastapi import HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from stackit.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
)
from stackit.domain.error import NotFoundError
from stackit.domain.service import JWTService
from stackit.util.error import JWTError

bearer_scheme = HTTPBearer(auto_error=False)


async def require_user(
    credentials: HTTPAuthorizationCredentials | None,
    get_current_user_use_case: GetCurrentUserUseCase,
) -> GetCurrentUserResponse:
    """Resolve the authenticated user or fail with 401.

    Args:
        credentials: Parsed `Authorization: Bearer` header, if any
        get_current_user_use_case: Get current user use case from DI

    Raises:
        HTTPException: 401 if the token is missing, invalid, expired, or
            belongs to a user that no longer exists
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=credentials.credentials)
        )
    except (JWTError, NotFoundError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e) if isinstance(e, JWTError) else "Invalid authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )


def optional_user_id(
    credentials: HTTPAuthorizationCredentials | None, jwt_service: JWTService
) -> str | None:
    """User ID from the bearer token, None for anonymous or invalid tokens."""
    if credentials is None:
        return None
    return jwt_service.get_user_id_from_token(credentials.credentials)
