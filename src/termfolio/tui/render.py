"""
Page rendering.

``render()`` turns a session state into the text block written to the
terminal: page content laid out with rich inside a padded box, centred in
the terminal, coloured with ANSI SGR codes, links wrapped in OSC-8
hyperlink escapes.

The output depends only on the arguments. Rich gives every linked style a
random link id, so links are emitted here with ``clickable_link()`` instead
of rich's own hyperlink rendering.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from rich import box
from rich.align import Align
from rich.color import ColorSystem
from rich.console import Console, Group, RenderableType
from rich.constrain import Constrain
from rich.padding import Padding
from rich.panel import Panel
from rich.segment import Segment
from rich.style import Style
from rich.text import Text

from termfolio.content import DEFAULT_PORTFOLIO, LOGO_LINES
from termfolio.models.portfolio import Portfolio
from termfolio.theme import Theme, get_theme
from termfolio.tui.logo import render_logo
from termfolio.tui.state import MENU_ITEMS, Page, SessionState

COLOR_SYSTEMS: dict[str, ColorSystem] = {
    "standard": ColorSystem.STANDARD,
    "256": ColorSystem.EIGHT_BIT,
    "truecolor": ColorSystem.TRUECOLOR,
}

CURSOR = "→ "
NO_CURSOR = "  "
INDENT = "    "
LOGO_BLOCK_WIDTH = 60
MIN_BOX_WIDTH = 10
CONTACT_LABEL_WIDTH = 12

HELP_MENU = "↑/↓: navigate • enter: select • esc/backspace: menu • q: quit"
HELP_LIST = "↑/↓: browse • esc: back to menu"
HELP_PAGE = "esc: back to menu"


@dataclass(frozen=True)
class _RenderOptions:
    """Values shared by the page bodies for one render call."""

    snake_length: int
    logo: Sequence[str]


def clickable_link(label: str, url: str) -> str:
    """Wrap ``label`` in an OSC-8 hyperlink to ``url``."""
    return f"\x1b]8;;{url}\x1b\\{label}\x1b]8;;\x1b\\"


def _title(text: str, theme: Theme) -> Text:
    return Text(f"━━━ {text} ━━━", style=theme.styles.title)


def _link_style(base: Style, url: str) -> Style:
    return base + Style(link=url)


# =============================================================================
# Page Bodies
# =============================================================================


def _menu_body(
    state: SessionState,
    portfolio: Portfolio,
    theme: Theme,
    options: _RenderOptions,
) -> list[RenderableType]:
    styles = theme.styles
    logo = render_logo(
        options.logo,
        sweep=state.logo_sweep,
        snake_length=options.snake_length,
        logo_style=styles.logo,
        snake_style=styles.snake,
        animated=theme.animated_logo,
    )
    parts: list[RenderableType] = [
        Constrain(Align.center(logo), width=LOGO_BLOCK_WIDTH),
        Text(),
    ]
    for index, (label, _page) in enumerate(MENU_ITEMS):
        if index == state.menu_cursor:
            parts.append(Text(CURSOR + label, style=styles.selected))
        else:
            parts.append(Text(NO_CURSOR + label, style=styles.menu))
    parts.extend([Text(), Text(HELP_MENU, style=styles.help)])
    return parts


def _about_body(
    state: SessionState,
    portfolio: Portfolio,
    theme: Theme,
    options: _RenderOptions,
) -> list[RenderableType]:
    styles = theme.styles
    return [
        _title("About Me", theme),
        Text(),
        Text(portfolio.about, style=styles.content),
        Text(),
        Text(HELP_PAGE, style=styles.help),
    ]


def _projects_body(
    state: SessionState,
    portfolio: Portfolio,
    theme: Theme,
    options: _RenderOptions,
) -> list[RenderableType]:
    styles = theme.styles
    parts: list[RenderableType] = [_title("Projects", theme), Text()]

    for index, project in enumerate(portfolio.projects):
        if index != state.project_cursor:
            parts.extend([Text(NO_CURSOR + project.name, style=styles.menu), Text()])
            continue

        url = project.url
        parts.extend(
            [
                Text(CURSOR + project.name, style=styles.project_name),
                Text(INDENT + project.description, style=styles.subtle),
                Text.assemble(INDENT, (project.tech, styles.tech)),
                Text.assemble(INDENT, (url, _link_style(styles.accent, url))),
                Text(),
            ]
        )

    parts.append(Text(HELP_LIST, style=styles.help))
    return parts


def _experience_body(
    state: SessionState,
    portfolio: Portfolio,
    theme: Theme,
    options: _RenderOptions,
) -> list[RenderableType]:
    styles = theme.styles
    parts: list[RenderableType] = [_title("Experience", theme), Text()]

    for index, experience in enumerate(portfolio.experiences):
        selected = index == state.experience_cursor
        parts.append(
            Text.assemble(
                CURSOR if selected else NO_CURSOR,
                (experience.role, styles.role),
                " @ ",
                (experience.company, styles.company),
            )
        )
        parts.append(Text.assemble(INDENT, (experience.period, styles.period)))
        if selected:
            parts.append(
                Text.assemble(INDENT, (experience.description, styles.content))
            )
        parts.append(Text())

    parts.append(Text(HELP_LIST, style=styles.help))
    return parts


def _contact_body(
    state: SessionState,
    portfolio: Portfolio,
    theme: Theme,
    options: _RenderOptions,
) -> list[RenderableType]:
    styles = theme.styles
    parts: list[RenderableType] = [
        _title("Contact", theme),
        Text(),
        Text(portfolio.contact_intro, style=styles.content),
        Text(),
    ]
    for contact in portfolio.contacts:
        parts.append(
            Text.assemble(
                (f"  {contact.label:<{CONTACT_LABEL_WIDTH}}", styles.content),
                (contact.text, _link_style(styles.accent, contact.url)),
            )
        )
    parts.extend([Text(), Text(HELP_PAGE, style=styles.help)])
    return parts


_PAGE_BODIES: dict[
    Page,
    Callable[[SessionState, Portfolio, Theme, _RenderOptions], list[RenderableType]],
] = {
    Page.MENU: _menu_body,
    Page.ABOUT: _about_body,
    Page.PROJECTS: _projects_body,
    Page.EXPERIENCE: _experience_body,
    Page.CONTACT: _contact_body,
}


# =============================================================================
# Layout & Output
# =============================================================================


def _plain_style(style: Style) -> Style:
    """Copy of ``style`` without link and without rich's cached SGR codes."""
    return Style(
        color=style.color,
        bgcolor=style.bgcolor,
        bold=style.bold,
        dim=style.dim,
        italic=style.italic,
        underline=style.underline,
        reverse=style.reverse,
        strike=style.strike,
    )


def _emit_line(segments: Iterable[Segment], color_system: ColorSystem) -> str:
    out: list[str] = []
    for text, style, control in segments:
        if control or not text:
            continue
        if not style:
            out.append(text)
            continue
        rendered = _plain_style(style).render(text, color_system=color_system)
        if style.link:
            rendered = clickable_link(rendered, style.link)
        out.append(rendered)
    return "".join(out)


def _layout_console(width: int, height: int) -> Console:
    return Console(
        file=io.StringIO(),
        width=width,
        height=height,
        force_terminal=True,
        color_system=None,
        legacy_windows=False,
        markup=False,
        emoji=False,
        highlight=False,
    )


def render(
    state: SessionState,
    portfolio: Portfolio = DEFAULT_PORTFOLIO,
    theme: Theme | None = None,
    *,
    color_system: str = "256",
    max_box_width: int = 70,
    snake_length: int = 14,
    logo: Sequence[str] = LOGO_LINES,
) -> str:
    """
    Render the current page.

    Args:
        state: Session state to draw.
        portfolio: Content tables.
        theme: Styles to use (default theme when None).
        color_system: ``standard``, ``256`` or ``truecolor``.
        max_box_width: Upper bound for the content box width.
        snake_length: Cells in the logo snake.
        logo: Logo rows.

    Returns:
        Frame text, rows separated by ``\\n``. At most ``state.height`` rows,
        none wider than ``state.width`` cells.
    """
    theme = theme or get_theme()
    system = COLOR_SYSTEMS.get(color_system, ColorSystem.EIGHT_BIT)

    box_width = max(min(state.width - 4, max_box_width), MIN_BOX_WIDTH)
    options = _RenderOptions(snake_length=snake_length, logo=logo)

    body = Group(*_PAGE_BODIES[state.page](state, portfolio, theme, options))
    framed: RenderableType
    if theme.border:
        framed = Panel(
            body,
            box=getattr(box, theme.border, box.ROUNDED),
            border_style=theme.styles.border,
            padding=(1, 2),
        )
    else:
        framed = Padding(body, (1, 2))

    console = _layout_console(box_width, state.height)
    lines = console.render_lines(framed, console.options.update_width(box_width))

    height = max(state.height, 1)
    top = max((height - len(lines)) // 2, 0)
    left = " " * max((state.width - box_width) // 2, 0)
    # Below MIN_BOX_WIDTH + 4 columns the box is wider than the terminal
    visible = max(state.width - len(left), 0)

    rows = [""] * top
    rows.extend(
        left + _emit_line(Segment.adjust_line_length(line, visible, pad=False), system)
        for line in lines[: height - top]
    )
    return "\n".join(rows)


def plain_text(frame: str) -> str:
    """Visible text of a rendered frame, escape sequences removed."""
    return Text.from_ansi(frame).plain


__all__ = [
    "render",
    "clickable_link",
    "plain_text",
    "COLOR_SYSTEMS",
    "HELP_MENU",
    "HELP_LIST",
    "HELP_PAGE",
]
