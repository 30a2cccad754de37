"""
Menu/page state machine.

One ``Session`` per connection. Events come in one at a time (key press,
resize, animation tick) and mutate only that session's ``SessionState``.

Pages:
    MENU is the initial page and the only one reachable from every other
    page. Selecting menu entry 0..3 opens ABOUT, PROJECTS, EXPERIENCE or
    CONTACT. Back or quit on a page returns to MENU; quit on MENU ends the
    session.

Usage:
    >>> session = Session(DEFAULT_PORTFOLIO)
    >>> session.handle_key("down")
    <Action.NONE: 'none'>
    >>> session.handle_key("enter")
    <Action.NONE: 'none'>
    >>> session.state.page
    <Page.PROJECTS: 'projects'>
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from termfolio.content import DEFAULT_PORTFOLIO
from termfolio.models.portfolio import Portfolio

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24


class Page(str, Enum):
    """Views a session can display."""

    MENU = "menu"
    ABOUT = "about"
    PROJECTS = "projects"
    EXPERIENCE = "experience"
    CONTACT = "contact"


class Action(str, Enum):
    """What the caller should do after an event."""

    NONE = "none"
    QUIT = "quit"


# Menu entries in display order, with the page each one opens
MENU_ITEMS: tuple[tuple[str, Page], ...] = (
    ("About", Page.ABOUT),
    ("Projects", Page.PROJECTS),
    ("Experience", Page.EXPERIENCE),
    ("Contact", Page.CONTACT),
)

# Key bindings
QUIT_KEYS = frozenset({"q", "ctrl+c"})
BACK_KEYS = frozenset({"esc", "backspace"})
UP_KEYS = frozenset({"up", "k"})
DOWN_KEYS = frozenset({"down", "j"})
SELECT_KEYS = frozenset({"enter", "space"})


@dataclass
class SessionState:
    """
    Mutable per-connection state.

    Attributes:
        page: Current page.
        menu_cursor: Highlighted menu entry.
        project_cursor: Highlighted project.
        experience_cursor: Highlighted experience entry.
        width: Terminal columns.
        height: Terminal rows.
        logo_sweep: Animation step of the logo snake.
    """

    page: Page = Page.MENU
    menu_cursor: int = 0
    project_cursor: int = 0
    experience_cursor: int = 0
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    logo_sweep: int = 0


class Session:
    """
    State machine for one connection.

    Args:
        portfolio: Content whose list lengths bound the cursors.
        state: Starting state (a fresh one by default).
        animated: Whether the menu logo animation runs at all.
    """

    def __init__(
        self,
        portfolio: Portfolio = DEFAULT_PORTFOLIO,
        state: SessionState | None = None,
        *,
        animated: bool = True,
    ) -> None:
        self.portfolio = portfolio
        self.state = state if state is not None else SessionState()
        self.animated = animated

    @property
    def animating(self) -> bool:
        """True while the animation timer should be running."""
        return self.animated and self.state.page is Page.MENU

    # =========================================================================
    # Events
    # =========================================================================

    def handle_key(self, key: str) -> Action:
        """
        Apply a key press.

        Args:
            key: Key name as produced by ``KeyDecoder``.

        Returns:
            ``Action.QUIT`` when the session should end, else ``Action.NONE``.
        """
        state = self.state

        if key in QUIT_KEYS:
            if state.page is Page.MENU:
                return Action.QUIT
            state.page = Page.MENU
        elif key in BACK_KEYS:
            state.page = Page.MENU
        elif key in UP_KEYS:
            self._move_cursor(-1)
        elif key in DOWN_KEYS:
            self._move_cursor(1)
        elif key in SELECT_KEYS:
            if state.page is Page.MENU:
                state.page = MENU_ITEMS[state.menu_cursor][1]

        return Action.NONE

    def resize(self, width: int, height: int) -> None:
        """Record new terminal dimensions."""
        if width > 0:
            self.state.width = width
        if height > 0:
            self.state.height = height

    def tick(self) -> None:
        """Advance the logo animation (menu only)."""
        if self.animating:
            self.state.logo_sweep += 1

    # =========================================================================
    # Cursors
    # =========================================================================

    def _move_cursor(self, delta: int) -> None:
        state = self.state
        if state.page is Page.MENU:
            state.menu_cursor = _clamp(state.menu_cursor + delta, len(MENU_ITEMS))
        elif state.page is Page.PROJECTS:
            state.project_cursor = _clamp(
                state.project_cursor + delta, len(self.portfolio.projects)
            )
        elif state.page is Page.EXPERIENCE:
            state.experience_cursor = _clamp(
                state.experience_cursor + delta, len(self.portfolio.experiences)
            )


def _clamp(index: int, length: int) -> int:
    """Clamp ``index`` to ``[0, length - 1]`` (0 for an empty list)."""
    return max(0, min(index, length - 1))


__all__ = [
    "Page",
    "Action",
    "MENU_ITEMS",
    "QUIT_KEYS",
    "BACK_KEYS",
    "UP_KEYS",
    "DOWN_KEYS",
    "SELECT_KEYS",
    "SessionState",
    "Session",
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
]
