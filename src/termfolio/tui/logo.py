"""
Animated ASCII logo.

The logo is placed in a grid with one cell of padding on every side. A
short "snake" of dots runs along the outer border of that grid, one step
per animation tick, without ever covering the logo itself.
"""

from __future__ import annotations

from typing import Sequence

from rich.style import Style
from rich.text import Text

SNAKE_CHAR = "•"
PADDING = 1


def perimeter_path(width: int, height: int) -> list[tuple[int, int]]:
    """
    Clockwise walk around the border of a ``width x height`` grid.

    Starts at the top-left corner: top edge left to right, right edge
    downwards, bottom edge right to left, left edge upwards. Each border
    cell appears once.

    Returns:
        List of (x, y) positions.
    """
    if width <= 0 or height <= 0:
        return []

    path = [(x, 0) for x in range(width)]
    path.extend((width - 1, y) for y in range(1, height - 1))
    if height > 1:
        path.extend((x, height - 1) for x in range(width - 1, -1, -1))
    if width > 1:
        path.extend((0, y) for y in range(height - 2, 0, -1))
    return path


def snake_cells(
    path: Sequence[tuple[int, int]],
    sweep: int,
    length: int,
) -> set[tuple[int, int]]:
    """Cells covered by the snake at animation step ``sweep``."""
    if not path:
        return set()
    length = min(length, len(path))
    start = sweep % len(path)
    return {path[(start + i) % len(path)] for i in range(length)}


def render_logo(
    lines: Sequence[str],
    *,
    sweep: int = 0,
    snake_length: int = 14,
    logo_style: Style | None = None,
    snake_style: Style | None = None,
    animated: bool = True,
) -> Text:
    """
    Render the padded logo grid as rich text.

    Args:
        lines: Logo rows.
        sweep: Animation step.
        snake_length: Number of snake cells.
        logo_style: Style for non-space logo characters.
        snake_style: Style for snake cells.
        animated: Draw the snake.

    Returns:
        Multi-line Text, empty when the logo is empty.
    """
    grid_inner_width = max((len(line) for line in lines), default=0)
    if not lines or grid_inner_width == 0:
        return Text()

    width = grid_inner_width + PADDING * 2
    height = len(lines) + PADDING * 2

    rows = [[" "] * width for _ in range(height)]
    for y, line in enumerate(lines):
        for x, char in enumerate(line):
            rows[PADDING + y][PADDING + x] = char

    snake = (
        snake_cells(perimeter_path(width, height), sweep, snake_length)
        if animated
        else set()
    )

    text = Text(no_wrap=True, overflow="crop")
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            if (x, y) in snake:
                text.append(SNAKE_CHAR, snake_style)
            elif char == " ":
                text.append(char)
            else:
                text.append(char, logo_style)
        if y < height - 1:
            text.append("\n")
    return text


__all__ = ["perimeter_path", "snake_cells", "render_logo", "SNAKE_CHAR"]
