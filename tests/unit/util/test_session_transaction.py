"""Tests for the per-request transaction around the database session."""

import pytest
from dishka import Provider, Scope, make_async_container, provide
from fastapi import HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from stackit.domain.error import NotFoundError
from stackit.interface.error import handle_application_error, handle_http_exception
from stackit.persistence.database import TransactionOutcome
from stackit.util.di.core import ProdConfigProvider
from stackit.util.di.infrastructure.persistence import ProdPersistenceProvider
from tests.di import build_test_container


class FakeSession:
    """Records how the transaction ended."""

    def __init__(self, log: list[str]) -> None:
        self.log = log

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None

    async def commit(self) -> None:
        self.log.append("commit")

    async def rollback(self) -> None:
        self.log.append("rollback")


class FakeSessionProvider(Provider):
    """Replaces the engine-backed session factory."""

    def __init__(self, log: list[str]) -> None:
        super().__init__()
        self.log = log

    @provide(scope=Scope.APP)
    def get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        return lambda: FakeSession(self.log)  # type: ignore[return-value]


def _container(log: list[str]):
    return make_async_container(
        ProdConfigProvider(), ProdPersistenceProvider(), FakeSessionProvider(log)
    )


class TestRequestTransaction:
    @pytest.mark.asyncio
    async def test_clean_request_commits(self):
        log: list[str] = []
        container = _container(log)

        async with container() as request_container:
            await request_container.get(AsyncSession)

        await container.close()
        assert log == ["commit"]

    @pytest.mark.asyncio
    async def test_raised_error_rolls_back(self):
        log: list[str] = []
        container = _container(log)

        with pytest.raises(RuntimeError):
            async with container() as request_container:
                await request_container.get(AsyncSession)
                raise RuntimeError("boom")

        await container.close()
        assert log == ["rollback"]

    @pytest.mark.asyncio
    async def test_handled_failure_rolls_back(self):
        log: list[str] = []
        container = _container(log)

        async with container() as request_container:
            await request_container.get(AsyncSession)
            outcome = await request_container.get(TransactionOutcome)
            outcome.mark_failed("NotFoundError")

        await container.close()
        assert log == ["rollback"]


def _request(request_container) -> Request:
    return Request(
        {
            "type": "http",
            "method": "POST",
            "path": "/questions",
            "headers": [],
            "query_string": b"",
            "scheme": "http",
            "server": ("testserver", 80),
            "state": {"dishka_container": request_container},
        }
    )


class TestErrorHandlerMarksFailure:
    @pytest.mark.asyncio
    async def test_domain_error_response_fails_the_transaction(self):
        container = build_test_container()

        async with container() as request_container:
            response = await handle_application_error(
                _request(request_container), NotFoundError("Question", "q1")
            )
            outcome = await request_container.get(TransactionOutcome)

        await container.close()
        assert response.status_code == 404
        assert outcome.failed is True
        assert outcome.reason == "NotFoundError"

    @pytest.mark.asyncio
    async def test_http_error_response_fails_the_transaction(self):
        container = build_test_container()

        async with container() as request_container:
            response = await handle_http_exception(
                _request(request_container),
                HTTPException(status_code=401, detail="Authentication required"),
            )
            outcome = await request_container.get(TransactionOutcome)

        await container.close()
        assert response.status_code == 401
        assert outcome.failed is True
        assert outcome.reason == "HTTP 401"
