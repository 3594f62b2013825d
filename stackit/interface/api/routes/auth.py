"""Authentication routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials

from stackit.application.usecase.auth import (
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
    LoginRequest,
    LoginResponse,
    LoginUseCase,
    RegisterRequest,
    RegisterResponse,
    RegisterUseCase,
)
from stackit.interface.api.auth import bearer_scheme, require_user

router = APIRouter(prefix="/auth", tags=["auth"], route_class=DishkaRoute)


@router.post(
    "/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    request: RegisterRequest,
    register_use_case: FromDishka[RegisterUseCase],
) -> RegisterResponse:
    """Create an account and return a JWT.

    Raises:
        409: If the username or email is taken
    """
    result = await register_use_case.execute(request)
    logfire.info("Registration completed", user_id=result.user.user_id)
    return result


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    login_use_case: FromDishka[LoginUseCase],
) -> LoginResponse:
    """Exchange email and password for a JWT.

    Raises:
        401: If the credentials don't match
    """
    return await login_use_case.execute(request)


@router.get("/me", response_model=GetCurrentUserResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> GetCurrentUserResponse:
    """Return the authenticated user.

    Headers:
        Authorization: Bearer <token>
    """
    return await require_user(credentials, get_current_user_use_case)
