"""Fixtures for end-to-end API tests.

Each test gets a fresh application backed by the mocked container, so the
in-memory store and notification sink start empty.
"""

import pytest
from dishka import AsyncContainer
from fastapi.testclient import TestClient

from stackit.domain.service import UserService
from stackit.domain.value import UserRole, Username
from stackit.interface.api.app import create_app
from tests.di import build_test_container
from tests.factories import auth_header

PASSWORD = "secret123"


@pytest.fixture
def container():
    """Mocked container wired for FastAPI."""
    return build_test_container(with_fastapi=True)


@pytest.fixture
def client(container):
    """Create test client with test container."""
    with TestClient(create_app(container)) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register a user through the API and return the auth response JSON."""

    def _register(username: str) -> dict:
        response = client.post(
            "/auth/register",
            json={
                "username": username,
                "email": f"{username}@example.com",
                "password": PASSWORD,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


async def _create_admin(container: AsyncContainer) -> None:
    async with container() as request_container:
        user_service = await request_container.get(UserService)
        await user_service.register(
            Username("moderator"), "moderator@example.com", PASSWORD, role=UserRole.ADMIN
        )


@pytest.fixture
def admin(client, container):
    """Seed an admin account (there is no API for creating one) and log in."""
    client.portal.call(_create_admin, container)
    response = client.post(
        "/auth/login", json={"email": "moderator@example.com", "password": PASSWORD}
    )
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def grant(client, admin):
    """Give a user reputation through the admin endpoint."""

    def _grant(user_id: str, points: int) -> dict:
        response = client.put(
            f"/users/{user_id}/reputation",
            json={"points": points, "reason": "Test grant"},
            headers=auth_header(admin["token"]),
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _grant
