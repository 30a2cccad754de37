"""
Tests for server configuration (pydantic-settings).
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from termfolio.config import (
    ServerSettings,
    configure_settings,
    get_settings,
    reset_settings,
)


class TestServerSettings:
    """Tests for ServerSettings pydantic-settings model."""

    def test_default_values(self):
        """Test default configuration values."""
        settings = ServerSettings()

        # Listener defaults
        assert settings.host == "0.0.0.0"
        assert settings.port == 22
        assert settings.host_key_path == ".ssh/host_ed25519"
        assert settings.channel_timeout == 20.0

        # Auth defaults
        assert settings.allow_password_auth is True

        # Rendering defaults
        assert settings.theme == "tokyo-night"
        assert settings.color_system == "256"
        assert settings.tick_interval == 0.05
        assert settings.snake_length == 14
        assert settings.max_box_width == 70

        # Logging defaults
        assert settings.log_level == "INFO"
        assert settings.log_json is False

    def test_environment_variable_override(self, monkeypatch):
        """Test TERMFOLIO_ environment variables override defaults."""
        monkeypatch.setenv("TERMFOLIO_PORT", "2222")
        monkeypatch.setenv("TERMFOLIO_ALLOW_PASSWORD_AUTH", "false")
        monkeypatch.setenv("TERMFOLIO_THEME", "kanagawa")

        settings = ServerSettings()
        assert settings.port == 2222
        assert settings.allow_password_auth is False
        assert settings.theme == "kanagawa"

    def test_unrelated_environment_ignored(self, monkeypatch):
        """Unknown TERMFOLIO_ variables are ignored."""
        monkeypatch.setenv("TERMFOLIO_SOMETHING_ELSE", "1")
        ServerSettings()

    @pytest.mark.parametrize(
        "field,value",
        [
            ("port", 0),
            ("port", 70000),
            ("tick_interval", 0.0),
            ("snake_length", 0),
            ("max_box_width", 5),
            ("channel_timeout", 500),
            ("color_system", "16"),
            ("log_level", "TRACE"),
        ],
    )
    def test_validation(self, field, value):
        """Out-of-range values are rejected."""
        with pytest.raises(ValidationError):
            ServerSettings(**{field: value})


class TestSettingsSingleton:
    """Tests for get_settings/configure_settings/reset_settings."""

    def test_get_settings_cached(self):
        """get_settings returns the same instance until reset."""
        first = get_settings()
        assert get_settings() is first

        reset_settings()
        assert get_settings() is not first

    def test_configure_settings(self):
        """configure_settings replaces the process-wide settings."""
        settings = configure_settings(port=2222, theme="kanagawa")
        assert settings.port == 2222
        assert get_settings() is settings

    def test_configure_overrides_environment(self, monkeypatch):
        """Explicit overrides win over the environment."""
        monkeypatch.setenv("TERMFOLIO_PORT", "2222")
        assert configure_settings(port=3333).port == 3333
