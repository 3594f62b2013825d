"""Settings and per-request state providers.

`Settings` is read once per container; each nested section is provided on
its own so consumers depend only on what they read.
"""

from dishka import Scope, provide

from stackit.config import (
    AuthSettings,
    DatabaseSettings,
    PaginationSettings,
    ReputationSettings,
    Settings,
)
from stackit.persistence.database import TransactionOutcome
from stackit.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_database_settings(self, settings: Settings) -> DatabaseSettings:
        return settings.database

    @provide
    def provide_reputation_settings(self, settings: Settings) -> ReputationSettings:
        return settings.reputation

    @provide
    def provide_pagination_settings(self, settings: Settings) -> PaginationSettings:
        return settings.pagination

    @provide(scope=Scope.REQUEST)
    def provide_transaction_outcome(self) -> TransactionOutcome:
        return TransactionOutcome()
