"""Test configuration and fixtures."""

import os

import logfire

# Settings are read from the environment when containers are built
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTH__JWT_SECRET", "test-secret-do-not-use")

# Keep telemetry local and quiet
logfire.configure(send_to_logfire=False, console=False)
