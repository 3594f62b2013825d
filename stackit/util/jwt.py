"""Signed bearer tokens (PyJWT)."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from stackit.config import AuthSettings
from stackit.util.error import JWTError

REQUIRED_CLAIMS = ["sub", "exp", "iat"]


class TokenPayload(BaseModel):
    """Claims carried by a StackIt access token.

    The subject is the user ID. Username and role are copies taken at issue
    time, good for display only; authorization re-reads the user.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user_id: str = Field(alias="sub")
    username: str
    role: str
    issued_at: datetime = Field(alias="iat")
    expires_at: datetime = Field(alias="exp")

    @field_validator("user_id")
    @classmethod
    def subject_is_uuid(cls, value: str) -> str:
        return str(UUID(value))


def create_token(
    user_id: str,
    username: str,
    role: str,
    settings: AuthSettings,
    now: datetime | None = None,
) -> str:
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "username": username,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check signature and expiry, then parse the claims.

    Raises:
        JWTError: Expired, tampered, malformed, or missing a claim
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
        return TokenPayload.model_validate(claims)
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except (jwt.InvalidTokenError, ValidationError) as e:
        raise JWTError("Invalid token") from e
