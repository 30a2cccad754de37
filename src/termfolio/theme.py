"""
Colour themes.

A theme is an immutable set of rich styles plus two cosmetic switches
(logo animation and box border). Themes are built once at import time and
handed to the renderer; nothing here is mutated afterwards.

Usage:
    >>> from termfolio.theme import get_theme
    >>> theme = get_theme("kanagawa")
    >>> theme.animated_logo
    False
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.style import Style

from termfolio.exceptions import UnknownThemeError


@dataclass(frozen=True)
class Palette:
    """
    Colours used by a theme.

    Attributes:
        title: Titles, logo and border.
        text: Primary text.
        selected: Highlighted menu entry and roles.
        muted: Help text and secondary details.
        link: Hyperlinks and company names.
        tech: Tech stack labels.
        project: Selected project name.
        snake: Moving segment around the logo.
    """

    title: str
    text: str
    selected: str
    muted: str
    link: str
    tech: str
    project: str
    snake: str


@dataclass(frozen=True)
class ThemeStyles:
    """Rich styles derived from a palette."""

    title: Style
    menu: Style
    selected: Style
    help: Style
    content: Style
    accent: Style
    subtle: Style
    project_name: Style
    tech: Style
    role: Style
    company: Style
    period: Style
    logo: Style
    snake: Style
    border: Style

    @classmethod
    def from_palette(cls, palette: Palette) -> ThemeStyles:
        return cls(
            title=Style(color=palette.title, bold=True),
            menu=Style(color=palette.text),
            selected=Style(color=palette.selected, bold=True),
            help=Style(color=palette.muted),
            content=Style(color=palette.text),
            accent=Style(color=palette.link, bold=True),
            subtle=Style(color=palette.muted),
            project_name=Style(color=palette.project, bold=True),
            tech=Style(color=palette.tech),
            role=Style(color=palette.selected, bold=True),
            company=Style(color=palette.link),
            period=Style(color=palette.muted, italic=True),
            logo=Style(color=palette.title, bold=True),
            snake=Style(color=palette.snake, bold=True),
            border=Style(color=palette.title),
        )


@dataclass(frozen=True)
class Theme:
    """
    A named theme.

    Attributes:
        name: Registry key.
        description: One line for ``termfolio themes``.
        palette: Source colours.
        animated_logo: Run the snake around the logo on the menu.
        border: Name of a ``rich.box`` style for the content box, or None.
    """

    name: str
    description: str
    palette: Palette
    animated_logo: bool = True
    border: str | None = None
    styles: ThemeStyles = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "styles", ThemeStyles.from_palette(self.palette))


TOKYO_NIGHT = Palette(
    title="#7AA2F7",
    text="#C0CAF5",
    selected="#BB9AF7",
    muted="#565F89",
    link="#7DCFFF",
    tech="#9ECE6A",
    project="#7AA2F7",
    snake="#9EC5FF",
)

KANAGAWA = Palette(
    title="#957FB8",
    text="#DCD7BA",
    selected="#98BB6C",
    muted="#727169",
    link="#7E9CD8",
    tech="#FFA066",
    project="#E6C384",
    snake="#7FB4CA",
)

THEMES: dict[str, Theme] = {
    theme.name: theme
    for theme in (
        Theme(
            name="tokyo-night",
            description="Tokyo Night colours, animated logo, no border",
            palette=TOKYO_NIGHT,
        ),
        Theme(
            name="tokyo-night-boxed",
            description="Tokyo Night colours inside a rounded border",
            palette=TOKYO_NIGHT,
            border="ROUNDED",
        ),
        Theme(
            name="kanagawa",
            description="Kanagawa colours, static logo, rounded border",
            palette=KANAGAWA,
            animated_logo=False,
            border="ROUNDED",
        ),
    )
}

DEFAULT_THEME = "tokyo-night"


def get_theme(name: str = DEFAULT_THEME) -> Theme:
    """
    Look up a theme by name.

    Raises:
        UnknownThemeError: No theme registered under ``name``.
    """
    try:
        return THEMES[name]
    except KeyError:
        raise UnknownThemeError(name, sorted(THEMES)) from None


__all__ = [
    "Palette",
    "ThemeStyles",
    "Theme",
    "THEMES",
    "DEFAULT_THEME",
    "get_theme",
]
