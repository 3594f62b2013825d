"""Unit tests for JWTService."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from stackit.config import AuthSettings
from stackit.domain.service import JWTService
from stackit.domain.value import UserRole
from stackit.util.error import JWTError
from stackit.util.jwt import create_token
from tests.factories import make_user

SETTINGS = AuthSettings(jwt_secret="unit-test-secret", jwt_expiry_days=1)


def test_token_round_trip():
    service = JWTService(SETTINGS)
    user = make_user("alice", role=UserRole.ADMIN)

    payload = service.verify_token(service.create_token(user))

    assert payload.user_id == str(user.id)
    assert payload.username == "alice"
    assert payload.role == "admin"


def test_wrong_secret_rejected():
    token = JWTService(SETTINGS).create_token(make_user())
    other = JWTService(AuthSettings(jwt_secret="another-secret"))

    with pytest.raises(JWTError, match="Invalid token"):
        other.verify_token(token)


def test_expired_token_rejected():
    issued = datetime.now(timezone.utc) - timedelta(days=2)
    expired = create_token("x", "alice", "user", SETTINGS, now=issued)

    with pytest.raises(JWTError, match="expired"):
        JWTService(SETTINGS).verify_token(expired)


def test_get_user_id_from_token_is_lenient():
    service = JWTService(SETTINGS)
    user = make_user()

    assert service.get_user_id_from_token(service.create_token(user)) == str(user.id)
    assert service.get_user_id_from_token(None) is None
    assert service.get_user_id_from_token("not-a-jwt") is None


def test_token_without_subject_rejected():
    claims = {"username": "alice", "role": "user", "iat": datetime.now(timezone.utc)}
    claims["exp"] = claims["iat"] + timedelta(hours=1)
    token = jwt.encode(claims, SETTINGS.jwt_secret, algorithm=SETTINGS.jwt_algorithm)

    with pytest.raises(JWTError, match="Invalid token"):
        JWTService(SETTINGS).verify_token(token)
