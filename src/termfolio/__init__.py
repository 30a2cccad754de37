"""
termfolio: a terminal portfolio served over SSH.

Usage:
    >>> from termfolio import PortfolioServer, configure_settings
    >>> PortfolioServer(configure_settings(port=2222)).serve_forever()
"""

from termfolio.config import ServerSettings, configure_settings, get_settings
from termfolio.content import DEFAULT_PORTFOLIO
from termfolio.exceptions import (
    HostKeyError,
    ServerStartError,
    TermfolioError,
    UnknownThemeError,
)
from termfolio.models import ContactLink, Experience, Portfolio, Project
from termfolio.theme import THEMES, Theme, get_theme
from termfolio.tui import PortfolioServer, SessionState, render

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Config
    "ServerSettings",
    "get_settings",
    "configure_settings",
    # Content
    "Portfolio",
    "Project",
    "Experience",
    "ContactLink",
    "DEFAULT_PORTFOLIO",
    # Themes
    "Theme",
    "THEMES",
    "get_theme",
    # Server
    "PortfolioServer",
    "SessionState",
    "render",
    # Exceptions
    "TermfolioError",
    "HostKeyError",
    "ServerStartError",
    "UnknownThemeError",
]
