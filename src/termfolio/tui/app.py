"""
Portfolio session application.

Runs one session against a byte channel (a paramiko ``Channel`` or the
local terminal): switches to the alternate screen, reads key presses,
feeds them to the state machine, drives the logo animation and redraws
whenever the frame changes.

Event flow:
1. Keys arrive on the channel and are decoded by ``KeyDecoder``
2. Resize events arrive on ``events`` (filled by the SSH transport thread
   or the SIGWINCH handler) and are drained before every wait
3. While the menu animates, the wait times out every ``tick_interval``
   seconds and each timeout is one animation tick
4. Quit on the menu, EOF or a write failure ends the loop
"""

from __future__ import annotations

import queue
import select
from dataclasses import dataclass
from typing import Protocol

from termfolio.content import DEFAULT_PORTFOLIO
from termfolio.logging import get_logger
from termfolio.models.portfolio import Portfolio
from termfolio.theme import Theme, get_theme
from termfolio.tui.keys import KeyDecoder
from termfolio.tui.render import render
from termfolio.tui.state import Action, Session, SessionState

logger = get_logger(__name__)

ENTER_ALT_SCREEN = "\x1b[?1049h\x1b[?25l\x1b[2J"
EXIT_ALT_SCREEN = "\x1b[2J\x1b[?25h\x1b[?1049l"
CURSOR_HOME = "\x1b[H"
CLEAR_EOL = "\x1b[K"
CLEAR_EOS = "\x1b[J"

# Wait used while nothing animates, bounds how late a resize is noticed
POLL_INTERVAL = 0.1
READ_SIZE = 1024


class Channel(Protocol):
    """Byte channel the app talks to."""

    closed: bool

    def fileno(self) -> int: ...

    def recv(self, nbytes: int) -> bytes: ...

    def sendall(self, data: bytes) -> None: ...


@dataclass(frozen=True)
class Resize:
    """Terminal size report."""

    width: int
    height: int


class PortfolioApp:
    """
    One portfolio session bound to a channel.

    Example:
        >>> app = PortfolioApp(channel, theme=get_theme("kanagawa"))
        >>> app.run()
        0
    """

    def __init__(
        self,
        channel: Channel,
        *,
        portfolio: Portfolio = DEFAULT_PORTFOLIO,
        theme: Theme | None = None,
        events: queue.SimpleQueue[Resize] | None = None,
        color_system: str = "256",
        tick_interval: float = 0.05,
        snake_length: int = 14,
        max_box_width: int = 70,
        peer: str = "local",
    ) -> None:
        self.channel = channel
        self.portfolio = portfolio
        self.theme = theme or get_theme()
        self.events: queue.SimpleQueue[Resize] = (
            events if events is not None else queue.SimpleQueue()
        )
        self.color_system = color_system
        self.tick_interval = tick_interval
        self.snake_length = snake_length
        self.max_box_width = max_box_width
        self.peer = peer

        self.session = Session(portfolio, SessionState(), animated=self.theme.animated_logo)
        self._decoder = KeyDecoder()
        self._last_frame: str | None = None
        self._done = False

    @property
    def done(self) -> bool:
        """True once the session has ended."""
        return self._done

    # =========================================================================
    # Event Handling
    # =========================================================================

    def feed(self, data: bytes) -> None:
        """Apply raw input bytes to the session."""
        for key in self._decoder.feed(data):
            if self.session.handle_key(key) is Action.QUIT:
                logger.debug(f"{self.peer}: quit")
                self._done = True
                return

    def drain_events(self) -> None:
        """Apply every queued resize."""
        while True:
            try:
                event = self.events.get_nowait()
            except queue.Empty:
                return
            logger.debug(f"{self.peer}: resize {event.width}x{event.height}")
            self.session.resize(event.width, event.height)
            # Full redraw, old content may sit outside the new layout
            self._last_frame = None

    # =========================================================================
    # Output
    # =========================================================================

    def frame(self) -> str:
        """Render the current state."""
        return render(
            self.session.state,
            self.portfolio,
            self.theme,
            color_system=self.color_system,
            max_box_width=self.max_box_width,
            snake_length=self.snake_length,
        )

    def draw(self) -> None:
        """Write the current frame if it differs from the last one written."""
        frame = self.frame()
        if frame == self._last_frame:
            return
        self._last_frame = frame
        body = f"{CLEAR_EOL}\r\n".join(frame.split("\n"))
        self._write(f"{CURSOR_HOME}{body}{CLEAR_EOL}{CLEAR_EOS}")

    def _write(self, text: str) -> None:
        try:
            self.channel.sendall(text.encode("utf-8"))
        except (OSError, EOFError) as e:
            logger.debug(f"{self.peer}: write failed: {e}")
            self._done = True

    # =========================================================================
    # Main Loop
    # =========================================================================

    def _wait_readable(self, timeout: float) -> bool:
        try:
            readable, _, _ = select.select([self.channel], [], [], timeout)
        except (ValueError, OSError):
            self._done = True
            return False
        return bool(readable)

    def step(self) -> None:
        """Wait for input or the next tick, then redraw."""
        self.drain_events()
        timeout = self.tick_interval if self.session.animating else POLL_INTERVAL

        if self._wait_readable(timeout):
            try:
                data = self.channel.recv(READ_SIZE)
            except (OSError, EOFError):
                data = b""
            if not data:
                logger.debug(f"{self.peer}: end of input")
                self._done = True
                return
            self.feed(data)
        elif self.session.animating:
            self.session.tick()

        if not self._done:
            self.draw()

    def run(self) -> int:
        """
        Run the session until the visitor quits or disconnects.

        Returns:
            Exit status for the channel (always 0).
        """
        self._write(ENTER_ALT_SCREEN)
        try:
            self.drain_events()
            self.draw()
            while not self._done and not self.channel.closed:
                self.step()
        finally:
            self._write(EXIT_ALT_SCREEN)
        return 0


def run_local(
    *,
    theme: Theme | None = None,
    color_system: str = "256",
    tick_interval: float = 0.05,
    snake_length: int = 14,
    max_box_width: int = 70,
) -> int:
    """
    Run the portfolio in the current terminal.

    Returns:
        Exit code (1 when stdin is not a terminal).
    """
    from termfolio.tui.modes import (
        LocalChannel,
        get_terminal_size,
        is_tty,
        on_resize,
        raw_mode,
    )

    if not is_tty():
        return 1

    # Filled from the SIGWINCH handler, so no lock-taking Queue
    events: queue.SimpleQueue[Resize] = queue.SimpleQueue()
    events.put(Resize(*get_terminal_size()))

    app = PortfolioApp(
        LocalChannel(),
        theme=theme,
        events=events,
        color_system=color_system,
        tick_interval=tick_interval,
        snake_length=snake_length,
        max_box_width=max_box_width,
    )

    with raw_mode(), on_resize(lambda cols, rows: events.put(Resize(cols, rows))):
        return app.run()


__all__ = [
    "Channel",
    "Resize",
    "PortfolioApp",
    "run_local",
    "ENTER_ALT_SCREEN",
    "EXIT_ALT_SCREEN",
]
