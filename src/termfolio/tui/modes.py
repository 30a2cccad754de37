"""
Local terminal support for ``termfolio local``.

Puts the controlling terminal into raw mode, reports SIGWINCH resizes and
wraps stdin/stdout in ``LocalChannel`` so ``PortfolioApp`` can drive the
local terminal exactly like an SSH channel. Unix only (termios).

Usage:
    >>> with raw_mode() as entered, on_resize(print):
    ...     PortfolioApp(LocalChannel()).run()
"""

from __future__ import annotations

import os
import signal
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Generator

from termfolio.tui.state import DEFAULT_HEIGHT, DEFAULT_WIDTH


def is_tty() -> bool:
    """Check if stdin is a TTY."""
    return sys.stdin.isatty()


def get_terminal_size() -> tuple[int, int]:
    """
    Current terminal size as (columns, rows).

    Falls back to 80x24 when the size cannot be read.
    """
    try:
        size = os.get_terminal_size()
    except OSError:
        return DEFAULT_WIDTH, DEFAULT_HEIGHT
    return size.columns, size.lines


@dataclass
class TerminalMode:
    """
    termios state of one terminal descriptor.

    ``enter()`` saves the current attributes and switches to raw mode (no
    line buffering, no echo, ctrl+c delivered as a key); ``exit()`` puts
    the saved attributes back.
    """

    fd: int
    saved: Any | None = None

    @property
    def is_raw(self) -> bool:
        return self.saved is not None

    def enter(self) -> bool:
        """Switch to raw mode. False when the descriptor is not a terminal."""
        if self.is_raw:
            return True
        try:
            import termios
            import tty
        except ImportError:
            return False

        try:
            saved = termios.tcgetattr(self.fd)
            tty.setraw(self.fd)
        except (OSError, termios.error):
            return False
        self.saved = saved
        return True

    def exit(self) -> bool:
        """Restore the saved attributes. False when not in raw mode."""
        if not self.is_raw:
            return False
        import termios

        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.saved)
        except (OSError, termios.error):
            return False
        finally:
            self.saved = None
        return True


@contextmanager
def raw_mode() -> Generator[bool, None, None]:
    """
    Raw mode on stdin for the duration of the block.

    Yields:
        Whether raw mode was entered (False when stdin is not a TTY).
    """
    if not is_tty():
        yield False
        return

    mode = TerminalMode(sys.stdin.fileno())
    try:
        yield mode.enter()
    finally:
        mode.exit()


@contextmanager
def on_resize(callback: Callable[[int, int], None]) -> Generator[bool, None, None]:
    """
    Call ``callback(columns, rows)`` on every SIGWINCH inside the block.

    The previous handler is reinstated on exit.

    Yields:
        Whether a handler could be installed.
    """
    sigwinch = getattr(signal, "SIGWINCH", None)
    if sigwinch is None:
        yield False
        return

    def handler(signum: int, frame: Any) -> None:
        callback(*get_terminal_size())

    try:
        previous = signal.signal(sigwinch, handler)
    except ValueError:
        # Not on the main thread
        yield False
        return

    try:
        yield True
    finally:
        signal.signal(sigwinch, previous if previous is not None else signal.SIG_DFL)


class LocalChannel:
    """stdin/stdout with the part of the paramiko Channel API the app uses."""

    def __init__(self) -> None:
        self._stdin = sys.stdin
        self._stdout = sys.stdout
        self.closed = False

    def fileno(self) -> int:
        return self._stdin.fileno()

    def recv(self, nbytes: int) -> bytes:
        data = os.read(self.fileno(), nbytes)
        if not data:
            self.closed = True
        return data

    def sendall(self, data: bytes) -> None:
        self._stdout.buffer.write(data)
        self._stdout.buffer.flush()

    def close(self) -> None:
        self.closed = True


__all__ = [
    "TerminalMode",
    "is_tty",
    "get_terminal_size",
    "raw_mode",
    "on_resize",
    "LocalChannel",
]
