#!/usr/bin/env python3
"""Upgrade the StackIt schema to the latest Alembic revision."""

import sys
import logfire
from alembic import command
from alembic.config import Config

from stackit.config import Settings
from stackit.util.logging import setup_logging
from stackit.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    """Apply migrations up to `revision`, logging failures to Logfire.

    The container must not start against a half-migrated schema, so a
    failure is re-raised after it is recorded.
    """
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    alembic_cfg = Config("alembic.ini")

    with logfire.span("Applying migrations", revision=revision):
        try:
            command.upgrade(alembic_cfg, revision)
        except Exception as e:
            logfire.error(
                "Migration failed",
                revision=revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise

    logfire.info("Schema is up to date", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
