"""Tests for the register, login and current-user use cases."""

import pytest

from stackit.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    LoginRequest,
    LoginUseCase,
    RegisterRequest,
    RegisterUseCase,
)
from stackit.domain.error import AuthenticationError, ConflictError
from stackit.util.error import JWTError
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _register(unit_env, username="alice", email="alice@example.com"):
    register = await unit_env.get(RegisterUseCase)
    return await register.execute(
        RegisterRequest(username=username, email=email, password="secret123")
    )


@pytest.mark.asyncio
async def test_register_returns_token_and_profile(unit_env):
    response = await _register(unit_env)

    assert response.token
    assert response.user.username == "alice"
    assert response.user.role == "user"
    assert response.user.reputation == 0


@pytest.mark.asyncio
async def test_register_conflict(unit_env):
    await _register(unit_env)
    with pytest.raises(ConflictError):
        await _register(unit_env, username="alice2")


@pytest.mark.asyncio
async def test_login_then_current_user(unit_env):
    registered = await _register(unit_env)
    login = await unit_env.get(LoginUseCase)
    current = await unit_env.get(GetCurrentUserUseCase)

    logged_in = await login.execute(
        LoginRequest(email="alice@example.com", password="secret123")
    )
    me = await current.execute(GetCurrentUserRequest(token=logged_in.token))

    assert logged_in.user.user_id == registered.user.user_id
    assert me.user_id == registered.user.user_id
    assert me.email == "alice@example.com"


@pytest.mark.asyncio
async def test_login_with_wrong_password(unit_env):
    await _register(unit_env)
    login = await unit_env.get(LoginUseCase)

    with pytest.raises(AuthenticationError):
        await login.execute(LoginRequest(email="alice@example.com", password="nope!!"))


@pytest.mark.asyncio
async def test_current_user_with_bad_token(unit_env):
    current = await unit_env.get(GetCurrentUserUseCase)
    with pytest.raises(JWTError):
        await current.execute(GetCurrentUserRequest(token="garbage"))
