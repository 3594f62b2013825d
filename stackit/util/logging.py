"""Route third-party stdlib logging into Logfire."""

import logging

import logfire

from stackit.config import Settings

# Libraries that log through the stdlib and how chatty each may be
THIRD_PARTY_LEVELS = {
    "uvicorn.error": logging.INFO,
    "uvicorn.access": logging.WARNING,  # requests are already FastAPI spans
    "sqlalchemy.engine": logging.WARNING,  # statements are already SQL spans
    "alembic": logging.INFO,
}


def resolve_log_level(settings: Settings) -> int:
    """Level for the root logger.

    OBSERVABILITY__LOG_LEVEL wins; otherwise debug mode logs everything,
    tests log warnings and above, and other environments log info.
    """
    if settings.observability.log_level is not None:
        return logging.getLevelName(settings.observability.log_level)
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "test":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Send stdlib log records to Logfire.

    StackIt code logs through logfire directly. uvicorn, SQLAlchemy and
    Alembic use the stdlib, so their records are forwarded to the same
    sink and show up next to the application spans. Call this after
    `configure_logfire`.

    Args:
        settings: Application settings
    """
    level = resolve_log_level(settings)
    logging.basicConfig(
        level=level, handlers=[logfire.LogfireLoggingHandler()], force=True
    )

    for name, library_level in THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(max(level, library_level))

    logfire.info(
        "Logging configured",
        environment=settings.environment,
        level=logging.getLevelName(level),
    )
