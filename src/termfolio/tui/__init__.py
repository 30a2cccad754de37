"""
TUI module for the portfolio.

Session state machine, rendering and the two ways of serving a session:
over SSH (paramiko) or in the local terminal.

Usage:
    >>> from termfolio.tui import PortfolioServer
    >>> PortfolioServer().serve_forever()

    >>> from termfolio.tui import SessionState, render
    >>> frame = render(SessionState(width=100, height=30))
"""

from termfolio.tui.app import PortfolioApp, Resize, run_local
from termfolio.tui.keys import KeyDecoder, decode_keys
from termfolio.tui.render import clickable_link, plain_text, render
from termfolio.tui.ssh import PortfolioServer, load_host_key, serve
from termfolio.tui.state import Action, Page, Session, SessionState

__all__ = [
    # State
    "Page",
    "Action",
    "SessionState",
    "Session",
    # Input
    "KeyDecoder",
    "decode_keys",
    # Rendering
    "render",
    "plain_text",
    "clickable_link",
    # App
    "PortfolioApp",
    "Resize",
    "run_local",
    # SSH
    "PortfolioServer",
    "load_host_key",
    "serve",
]
