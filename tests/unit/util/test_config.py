"""Tests for settings defaults and the observability switches built on them."""

import logging

import pytest

from stackit.config import (
    DEFAULT_JWT_SECRET,
    APISettings,
    AuthSettings,
    ObservabilitySettings,
    PaginationSettings,
    Settings,
)
from stackit.util.error import ConfigurationError
from stackit.util.logging import resolve_log_level
from stackit.util.observability import should_send_to_logfire


class TestSettings:
    """Tests for environment-dependent settings."""

    def test_deployed_requires_real_jwt_secret(self):
        with pytest.raises(ConfigurationError):
            Settings(
                environment="production", auth=AuthSettings(jwt_secret=DEFAULT_JWT_SECRET)
            )

    def test_deployed_defaults_to_https(self):
        settings = Settings(
            environment="staging",
            auth=AuthSettings(jwt_secret="a-real-secret"),
            api=APISettings(host="api.stackit.dev"),
        )

        assert settings.api.base_url == "https://api.stackit.dev"
        assert settings.api.cors_origins == []

    def test_local_cors_includes_dev_servers(self):
        api = APISettings(frontend_origins=["http://localhost:5173", "https://stackit.dev"])

        assert api.base_url == "http://localhost:8000"
        assert api.cors_origins == [
            "http://localhost:5173",
            "https://stackit.dev",
            "http://localhost:3000",
        ]

    def test_version_file(self, tmp_path):
        version_file = tmp_path / "version.txt"
        version_file.write_text("abc123\n")

        assert Settings(version_file=version_file).git_sha == "abc123"
        assert Settings(version_file=tmp_path / "missing.txt").git_sha == "unknown"


@pytest.mark.parametrize(
    ("requested", "expected"), [(None, 20), (5, 5), (500, 100), (0, 1)]
)
def test_page_size(requested, expected):
    assert PaginationSettings().page_size(requested) == expected


class TestObservabilitySwitches:
    """Tests for when telemetry is sent and how loud logging is."""

    def _settings(self, environment="development", **observability):
        return Settings(
            environment=environment,
            auth=AuthSettings(jwt_secret="a-real-secret"),
            observability=ObservabilitySettings(**observability),
        )

    def test_token_enables_sending(self):
        assert should_send_to_logfire(self._settings(logfire_token="tok")) is True
        assert should_send_to_logfire(self._settings()) is False

    def test_explicit_flag_wins(self):
        settings = self._settings(logfire_token="tok", send_to_logfire=False)
        assert should_send_to_logfire(settings) is False

    def test_never_sends_from_tests(self):
        settings = self._settings("test", logfire_token="tok", send_to_logfire=True)
        assert should_send_to_logfire(settings) is False

    def test_log_level(self):
        assert resolve_log_level(self._settings("production")) == logging.INFO
        assert resolve_log_level(self._settings("test")) == logging.WARNING
        assert resolve_log_level(self._settings(log_level="ERROR")) == logging.ERROR
