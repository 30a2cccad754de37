"""
Server configuration (pydantic-settings).

Every field can be overridden with a ``TERMFOLIO_`` environment variable,
e.g. ``TERMFOLIO_PORT=2222`` or ``TERMFOLIO_ALLOW_PASSWORD_AUTH=false``.

Usage:
    >>> from termfolio.config import get_settings
    >>> settings = get_settings()
    >>> settings.port
    22
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ColorSystemName = Literal["standard", "256", "truecolor"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class ServerSettings(BaseSettings):
    """Settings for the SSH portfolio server."""

    model_config = SettingsConfigDict(
        env_prefix="TERMFOLIO_",
        extra="ignore",
    )

    # Listener
    host: str = "0.0.0.0"
    port: int = Field(default=22, ge=1, le=65535)
    host_key_path: str = ".ssh/host_ed25519"
    channel_timeout: float = Field(default=20.0, ge=1.0, le=120.0)

    # Auth
    allow_password_auth: bool = True

    # Rendering
    theme: str = "tokyo-night"
    color_system: ColorSystemName = "256"
    tick_interval: float = Field(default=0.05, ge=0.01, le=1.0)
    snake_length: int = Field(default=14, ge=1, le=64)
    max_box_width: int = Field(default=70, ge=20, le=200)

    # Logging
    log_level: LogLevel = "INFO"
    log_json: bool = False


_settings: ServerSettings | None = None


def get_settings() -> ServerSettings:
    """Get the process-wide settings, creating them on first use."""
    global _settings
    if _settings is None:
        _settings = ServerSettings()
    return _settings


def configure_settings(**overrides: object) -> ServerSettings:
    """
    Replace the process-wide settings.

    Args:
        **overrides: Field values that take precedence over the environment.

    Returns:
        The new settings instance.
    """
    global _settings
    _settings = ServerSettings(**overrides)  # type: ignore[arg-type]
    return _settings


def reset_settings() -> None:
    """Drop the cached settings (mostly for tests)."""
    global _settings
    _settings = None


__all__ = [
    "ServerSettings",
    "get_settings",
    "configure_settings",
    "reset_settings",
]
