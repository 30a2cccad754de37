"""
Tests for page rendering.
"""

from __future__ import annotations

import pytest

from termfolio.theme import get_theme
from termfolio.tui.render import (
    HELP_LIST,
    HELP_MENU,
    HELP_PAGE,
    clickable_link,
    plain_text,
    render,
)
from termfolio.tui.state import Page, SessionState


def visible(state: SessionState, **kwargs) -> str:
    return plain_text(render(state, **kwargs))


class TestClickableLink:
    """Test clickable_link() function."""

    def test_osc8_format(self):
        """Label is wrapped in OSC-8 open and close sequences."""
        assert clickable_link("site", "https://x.dev") == (
            "\x1b]8;;https://x.dev\x1b\\site\x1b]8;;\x1b\\"
        )


class TestRenderPurity:
    """Test that render() depends only on its arguments."""

    def test_same_state_same_output(self):
        """Rendering twice gives identical text."""
        state = SessionState(page=Page.PROJECTS, project_cursor=1)
        assert render(state) == render(state)

    def test_state_not_modified(self):
        """render() does not touch the state."""
        state = SessionState(page=Page.EXPERIENCE, experience_cursor=2, logo_sweep=3)
        before = SessionState(**vars(state))
        render(state)
        assert state == before


class TestMenuPage:
    """Test the menu page."""

    def test_entries_and_help(self):
        """Menu lists every page and the key help."""
        text = visible(SessionState())
        for label in ("About", "Projects", "Experience", "Contact"):
            assert label in text
        assert HELP_MENU in text

    def test_cursor_marker(self):
        """The highlighted entry carries the cursor marker."""
        assert "→ About" in visible(SessionState())
        text = visible(SessionState(menu_cursor=2))
        assert "→ Experience" in text
        assert "→ About" not in text

    def test_snake_moves_with_sweep(self):
        """Animated theme draws a different frame per sweep."""
        assert render(SessionState(logo_sweep=0)) != render(SessionState(logo_sweep=5))

    def test_static_theme_ignores_sweep(self):
        """Static logo theme draws the same frame for every sweep."""
        theme = get_theme("kanagawa")
        first = render(SessionState(logo_sweep=0), theme=theme)
        later = render(SessionState(logo_sweep=5), theme=theme)
        assert first == later


class TestContentPages:
    """Test the content pages."""

    def test_about(self, portfolio):
        """About shows the title, text and help."""
        text = visible(SessionState(page=Page.ABOUT))
        assert "About Me" in text
        assert "software developer" in text
        assert HELP_PAGE in text

    def test_projects_selected_details(self, portfolio):
        """Only the selected project shows its details."""
        text = visible(SessionState(page=Page.PROJECTS))
        first, second = portfolio.projects[0], portfolio.projects[1]
        assert f"→ {first.name}" in text
        assert first.tech in text
        assert first.url in text
        assert second.name in text
        assert second.url not in text
        assert HELP_LIST in text

    def test_projects_link_is_clickable(self, portfolio):
        """Selected project URL is an OSC-8 hyperlink."""
        frame = render(SessionState(page=Page.PROJECTS))
        assert f"\x1b]8;;{portfolio.projects[0].url}\x1b\\" in frame

    def test_experience(self, portfolio):
        """Every role is listed, only the selected one with its description."""
        text = visible(SessionState(page=Page.EXPERIENCE))
        first, last = portfolio.experiences[0], portfolio.experiences[-1]
        assert f"→ {first.role} @ {first.company}" in text
        assert first.period in text
        assert first.description in text
        assert last.company in text
        assert last.description not in text
        assert HELP_LIST in text

    def test_contact_links(self, portfolio):
        """Contact lines show their text and link to their URL."""
        frame = render(SessionState(page=Page.CONTACT))
        text = plain_text(frame)
        assert portfolio.contact_intro in text
        for contact in portfolio.contacts:
            assert contact.label in text
            assert contact.text in text
            assert f"\x1b]8;;{contact.url}\x1b\\" in frame
        assert HELP_PAGE in text


class TestLayout:
    """Test sizing and placement."""

    def test_fits_height(self):
        """Frame never has more rows than the terminal."""
        for height in (1, 6, 12, 24):
            frame = render(SessionState(height=height))
            assert len(frame.split("\n")) <= height

    def test_fits_width(self):
        """Visible rows never exceed the terminal width."""
        for width in (30, 80, 200):
            text = visible(SessionState(page=Page.CONTACT, width=width))
            assert all(len(row) <= width for row in text.split("\n"))

    def test_vertical_centering(self):
        """Short pages on tall terminals start with blank rows."""
        rows = visible(SessionState(page=Page.ABOUT, height=60)).split("\n")
        assert rows[0].strip() == ""

    @pytest.mark.parametrize("width", [1, 5, 8, 13])
    def test_tiny_terminal(self, width):
        """Terminals narrower than the box still fit without wrapping."""
        frame = render(SessionState(width=width, height=3))
        rows = plain_text(frame).split("\n")
        assert len(rows) <= 3
        assert all(len(row) <= width for row in rows)

    def test_max_box_width(self):
        """Content box is centred and bounded by max_box_width."""
        text = visible(SessionState(page=Page.ABOUT, width=200), max_box_width=40)
        widest = max(len(row.rstrip()) for row in text.split("\n"))
        assert widest <= (200 - 40) // 2 + 40

    def test_boxed_theme_draws_border(self):
        """Themes with a border draw a rounded box."""
        text = visible(SessionState(), theme=get_theme("tokyo-night-boxed"))
        assert "╭" in text
        assert "╭" not in visible(SessionState())


class TestColorSystems:
    """Test colour output."""

    def test_256_colors(self):
        """256-colour output uses 8-bit SGR codes."""
        assert "38;5;" in render(SessionState())

    def test_truecolor(self):
        """Truecolor output uses 24-bit SGR codes."""
        assert "38;2;" in render(SessionState(), color_system="truecolor")

    def test_standard(self):
        """Standard output uses neither 8-bit nor 24-bit codes."""
        frame = render(SessionState(), color_system="standard")
        assert "38;5;" not in frame
        assert "38;2;" not in frame
        assert "\x1b[" in frame
