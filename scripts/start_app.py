#!/usr/bin/env python3
"""Serve the StackIt API under uvicorn, reporting startup failures to Logfire."""

import sys
import logfire
import uvicorn

from stackit.config import Settings
from stackit.util.logging import setup_logging
from stackit.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    # Configure before the app module is imported so import errors are captured
    configure_logfire(settings)
    setup_logging(settings)

    with logfire.span(
        "Serving StackIt API",
        environment=settings.environment,
        port=settings.api.port,
        git_sha=settings.git_sha,
    ):
        try:
            uvicorn.run(
                "stackit.interface.api.app:app",
                host="0.0.0.0",
                port=settings.api.port,
                log_level="debug" if settings.debug else "info",
            )
        except Exception as e:
            logfire.error(
                "StackIt API failed to start",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
