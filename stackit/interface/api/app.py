"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stackit.config import Settings
from stackit.interface.api.routes import (
    answers,
    auth,
    comments,
    health,
    notifications,
    questions,
    search,
    tags,
    users,
)
from stackit.interface.error import register_error_handlers
from stackit.util.di.container import create_container
from stackit.util.observability import instrument_fastapi

ROUTERS = (
    health.router,
    auth.router,
    questions.router,
    answers.router,
    comments.router,
    tags.router,
    search.router,
    notifications.router,
    users.router,
)


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Assemble the API.

    Logfire must already be configured (start_app.py does it) so that the
    FastAPI instrumentation has somewhere to report.

    Args:
        container: DI container; tests pass one with in-memory persistence.
            The container is closed when the app shuts down.
    """
    settings = Settings()
    container = container or create_container()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await container.close()

    app_instance = FastAPI(
        title="StackIt API",
        description="Community question and answer forum",
        version="0.1.0",
        lifespan=lifespan,
    )
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
        max_age=600,
    )

    setup_dishka(container, app_instance)
    register_error_handlers(app_instance)

    for router in ROUTERS:
        app_instance.include_router(router)

    return app_instance


app = create_app()
