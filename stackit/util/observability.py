"""Logfire setup for the API process and the migration script.

Application code reports through logfire directly:

    logfire.info("Answer accepted", question_id=str(q.id), answer_id=str(a.id))

    with logfire.span("vote_service.vote", votable_id=str(votable_id)):
        ...

Spans are named `<service>.<method>` so a request trace reads as the chain
of domain operations it went through.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from stackit.config import Settings

# Probes and docs would drown out real traffic in the trace view
UNTRACED_URLS = ("/health", "/docs", "/openapi.json")


def should_send_to_logfire(settings: Settings) -> bool:
    """Decide whether telemetry leaves the process.

    An explicit OBSERVABILITY__SEND_TO_LOGFIRE wins; otherwise telemetry is
    sent exactly when a token is configured. Tests never send.
    """
    if settings.environment == "test":
        return False
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return settings.observability.logfire_token is not None


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for this process.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    send_to_logfire = should_send_to_logfire(settings)

    logfire.configure(
        service_name=observability.service_name,
        service_version=settings.git_sha,
        environment=settings.environment,
        token=observability.logfire_token,
        send_to_logfire=send_to_logfire,
        scrubbing=logfire.ScrubbingOptions(
            extra_patterns=observability.scrub_patterns
        ),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        service_name=observability.service_name,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request except health checks and API docs.

    Args:
        app: FastAPI application instance
    """
    logfire.instrument_fastapi(
        app, capture_headers=False, excluded_urls=",".join(UNTRACED_URLS)
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements issued by the repositories.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.info("SQLAlchemy instrumented", dialect=engine.dialect.name)
