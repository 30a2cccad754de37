"""
Pytest configuration and fixtures for termfolio tests.
"""

from __future__ import annotations

import logging
import os
import socket

import pytest

from termfolio.config import reset_settings
from termfolio.content import DEFAULT_PORTFOLIO
from termfolio.models.portfolio import Portfolio


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate every test from TERMFOLIO_* variables and global state."""
    for key in list(os.environ):
        if key.startswith("TERMFOLIO_"):
            monkeypatch.delenv(key, raising=False)
    reset_settings()
    yield
    reset_settings()
    logger = logging.getLogger("termfolio")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def portfolio() -> Portfolio:
    """Provide the default portfolio."""
    return DEFAULT_PORTFOLIO


# ============================================================================
# Channel Mocks (for session loop tests)
# ============================================================================


class FakeChannel:
    """
    Channel for testing without SSH.

    Input comes from one end of a socket pair (so select() works), output
    is collected in ``sent``.
    """

    def __init__(self) -> None:
        self._sock, self.peer = socket.socketpair()
        self.sent: list[bytes] = []
        self.closed = False

    def fileno(self) -> int:
        return self._sock.fileno()

    def recv(self, nbytes: int) -> bytes:
        return self._sock.recv(nbytes)

    def sendall(self, data: bytes) -> None:
        self.sent.append(data)

    def send_input(self, data: bytes) -> None:
        """Send input as the visitor would."""
        self.peer.sendall(data)

    def hang_up(self) -> None:
        """Close the visitor end (EOF on the next read)."""
        self.peer.close()

    @property
    def output(self) -> str:
        return b"".join(self.sent).decode("utf-8")

    def close(self) -> None:
        self.closed = True
        self._sock.close()
        try:
            self.peer.close()
        except OSError:
            pass


@pytest.fixture
def channel():
    """Provide a fake channel, closed after the test."""
    chan = FakeChannel()
    yield chan
    chan.close()
