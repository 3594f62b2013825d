"""Access token service."""

import logfire

from stackit.config import AuthSettings
from stackit.domain.model import User
from stackit.util.error import JWTError
from stackit.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Issues and checks the bearer tokens returned by register and login."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(self, user: User) -> str:
        token = create_token(
            str(user.id), user.username.root, user.role.value, self.auth_settings
        )
        logfire.info(
            "Access token issued",
            user_id=str(user.id),
            expiry_days=self.auth_settings.jwt_expiry_days,
        )
        return token

    def verify_token(self, token: str) -> TokenPayload:
        """Decode a token presented by a client.

        Raises:
            JWTError: If the token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("Access token rejected", reason=str(e))
                raise

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """User ID for routes where signing in is optional.

        A missing, expired or forged token all mean "anonymous" here.
        """
        if not token:
            return None
        try:
            return verify_token(token, self.auth_settings).user_id
        except JWTError:
            return None
