"""
Tests for settings loading.

Run with: pytest tests/test_config.py -v
"""

import os

import pytest

from clipbot.config import (
    DEFAULT_ANNOUNCE_DELAY_SECONDS,
    DEFAULT_PORT,
    REQUIRED_ENV_VARS,
    load_settings,
)
from clipbot.core.errors import ConfigurationError

FULL_ENV = {
    "APP_CLIENT_ID": "client-id",
    "APP_CLIENT_SECRET": "client-secret",
    "APP_REFRESH_TOKEN": "refresh-token",
    "DISCORD_WEBHOOK_ID": "hook-id",
    "DISCORD_WEBHOOK_TOKEN": "hook-token",
    "CHANNEL_BROADCAST_ID": "12345",
}


class TestLoadSettings:
    """Tests for load_settings."""

    def test_reads_required_values(self):
        settings = load_settings(FULL_ENV)

        assert settings.client_id == "client-id"
        assert settings.client_secret == "client-secret"
        assert settings.refresh_token == "refresh-token"
        assert settings.webhook_id == "hook-id"
        assert settings.webhook_token == "hook-token"
        assert settings.broadcaster_id == "12345"

    def test_defaults(self):
        settings = load_settings(FULL_ENV)

        assert settings.announce_delay_seconds == DEFAULT_ANNOUNCE_DELAY_SECONDS
        assert settings.port == DEFAULT_PORT == 3000
        assert settings.host == "0.0.0.0"

    def test_optional_overrides(self):
        settings = load_settings({
            **FULL_ENV,
            "CLIP_ANNOUNCE_DELAY_SECONDS": "6.5",
            "HTTP_TIMEOUT_SECONDS": "10",
            "PORT": "8080",
            "HOST": "127.0.0.1",
        })

        assert settings.announce_delay_seconds == 6.5
        assert settings.http_timeout_seconds == 10.0
        assert settings.port == 8080
        assert settings.host == "127.0.0.1"

    def test_settings_are_immutable(self):
        settings = load_settings(FULL_ENV)

        with pytest.raises(AttributeError):
            settings.client_id = "other"

    def test_missing_values_are_all_reported(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings({"APP_CLIENT_ID": "client-id", "APP_CLIENT_SECRET": "  "})

        assert exc_info.value.missing == [
            name for name in REQUIRED_ENV_VARS if name != "APP_CLIENT_ID"
        ]

    @pytest.mark.parametrize("name,value", [
        ("CLIP_ANNOUNCE_DELAY_SECONDS", "soon"),
        ("CLIP_ANNOUNCE_DELAY_SECONDS", "-1"),
        ("HTTP_TIMEOUT_SECONDS", "x"),
        ("PORT", "http"),
    ])
    def test_malformed_optional_values(self, name, value):
        with pytest.raises(ConfigurationError):
            load_settings({**FULL_ENV, name: value})


class TestDotenv:
    """Tests for reading .env from the working directory."""

    @pytest.fixture
    def project_dir(self, tmp_path, monkeypatch):
        for name in REQUIRED_ENV_VARS:
            monkeypatch.delenv(name, raising=False)
        (tmp_path / ".env").write_text(
            "".join(f"{name}={value}\n" for name, value in FULL_ENV.items())
        )
        monkeypatch.chdir(tmp_path)
        return tmp_path

    def test_reads_env_file_in_working_directory(self, project_dir):
        settings = load_settings()

        assert settings.client_id == "client-id"
        assert settings.broadcaster_id == "12345"
        assert settings.webhook_token == "hook-token"

    def test_finds_env_file_from_subdirectory(self, project_dir, monkeypatch):
        nested = project_dir / "deploy"
        nested.mkdir()
        monkeypatch.chdir(nested)

        assert load_settings().refresh_token == "refresh-token"

    def test_process_environment_wins(self, project_dir, monkeypatch):
        monkeypatch.setenv("CHANNEL_BROADCAST_ID", "99999")

        assert load_settings().broadcaster_id == "99999"

    def test_env_file_does_not_leak_into_process_environment(self, project_dir):
        load_settings()

        assert "APP_CLIENT_ID" not in os.environ
