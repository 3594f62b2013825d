"""Adapter DI providers."""

from dishka import Scope, provide

from stackit.adapter.password import BcryptPasswordHasher
from stackit.config import AuthSettings
from stackit.domain.service import PasswordHasher
from stackit.util.di.base import ProviderBase


class ProdAdapterProvider(ProviderBase):
    """Adapters without a test double; created once per application."""

    scope = Scope.APP

    @provide
    def get_password_hasher(self, auth_settings: AuthSettings) -> PasswordHasher:
        """Provide bcrypt password hasher."""
        return BcryptPasswordHasher(rounds=auth_settings.bcrypt_rounds)
