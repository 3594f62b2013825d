"""Persistence component: PostgreSQL in production, in-memory under test."""

from collections.abc import AsyncGenerator, AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from stackit.config import DatabaseSettings
from stackit.domain.repository import (
    AnswerRepository,
    CommentRepository,
    NotificationRepository,
    QuestionRepository,
    TagRepository,
    UserRepository,
)
from stackit.persistence.database import (
    TransactionOutcome,
    create_engine,
    create_session_factory,
)
from stackit.persistence.repository import (
    PostgresAnswerRepository,
    PostgresCommentRepository,
    PostgresNotificationRepository,
    PostgresQuestionRepository,
    PostgresTagRepository,
    PostgresUserRepository,
)
from stackit.util.di.base import ProviderBase
from stackit.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Provides the six repositories, one set per request."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    __is_mock__ = False

    users = provide(PostgresUserRepository, provides=UserRepository, scope=Scope.REQUEST)
    questions = provide(
        PostgresQuestionRepository, provides=QuestionRepository, scope=Scope.REQUEST
    )
    answers = provide(
        PostgresAnswerRepository, provides=AnswerRepository, scope=Scope.REQUEST
    )
    comments = provide(
        PostgresCommentRepository, provides=CommentRepository, scope=Scope.REQUEST
    )
    tags = provide(PostgresTagRepository, provides=TagRepository, scope=Scope.REQUEST)
    notifications = provide(
        PostgresNotificationRepository,
        provides=NotificationRepository,
        scope=Scope.REQUEST,
    )

    @provide(scope=Scope.APP)
    async def get_engine(self, database: DatabaseSettings) -> AsyncIterator[AsyncEngine]:
        engine = create_engine(database)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        outcome: TransactionOutcome,
    ) -> AsyncGenerator[AsyncSession, BaseException | None]:
        """One transaction per request: commit on success, roll back on failure.

        The container finishes this generator by sending in the exception the
        request scope closed with (None on a clean exit).
        """
        async with session_factory() as session:
            error = yield session
            if error is not None or outcome.failed:
                logfire.warn(
                    "Request failed, rolling back",
                    error=str(error) if error is not None else outcome.reason,
                )
                await session.rollback()
            else:
                await session.commit()
