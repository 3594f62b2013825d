"""Async engine and session factory for PostgreSQL."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from stackit.config import DatabaseSettings


def create_engine(database: DatabaseSettings) -> AsyncEngine:
    """Build the pooled engine; connections are pinged before reuse."""
    return create_async_engine(
        database.url,
        echo=database.echo,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Repositories flush explicitly and rows outlive the commit as domain models
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


class TransactionOutcome:
    """Whether the current request's transaction may commit.

    One instance lives in each request container. An error handler that turns
    a failure into a response marks it failed, so the session rolls back even
    though no exception reaches the container.
    """

    def __init__(self) -> None:
        self.failed = False
        self.reason: str | None = None

    def mark_failed(self, reason: str) -> None:
        self.failed = True
        self.reason = reason
