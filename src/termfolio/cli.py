"""
termfolio CLI.

Usage:
    termfolio serve --port 2222
    termfolio local --theme kanagawa
    termfolio snapshot --page projects --width 100
    termfolio themes
"""

from __future__ import annotations

from typing import Any, NoReturn

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from termfolio.config import ServerSettings, configure_settings
from termfolio.exceptions import TermfolioError
from termfolio.logging import setup_logging
from termfolio.theme import DEFAULT_THEME, THEMES, get_theme
from termfolio.tui.state import DEFAULT_HEIGHT, DEFAULT_WIDTH, Page, Session, SessionState

console = Console()
err_console = Console(stderr=True)


def load_settings(**overrides: Any) -> ServerSettings:
    """Build settings from the environment plus the options actually given."""
    given = {key: value for key, value in overrides.items() if value is not None}
    try:
        return configure_settings(**given)
    except ValidationError as e:
        err_console.print(f"[red]Invalid configuration:[/red]\n{e}")
        raise SystemExit(2) from None


def fail(error: TermfolioError) -> NoReturn:
    """Report a startup error and exit."""
    err_console.print(f"[red]Error:[/red] {error}")
    raise SystemExit(1)


@click.group()
@click.version_option(package_name="termfolio")
def main() -> None:
    """termfolio: a terminal portfolio served over SSH."""


# =============================================================================
# Serve Command
# =============================================================================


@main.command()
@click.option("--host", "-h", help="Address to listen on")
@click.option("--port", "-p", type=click.IntRange(1, 65535), help="Port to listen on")
@click.option("--host-key", "host_key_path", help="Path to the SSH host key")
@click.option("--theme", "-t", help="Theme name (see: termfolio themes)")
@click.option(
    "--no-password-auth",
    "no_password_auth",
    is_flag=True,
    default=False,
    help="Offer publickey auth only",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level",
)
@click.option("--json-logs", is_flag=True, default=False, help="Log as JSON lines")
def serve(
    host: str | None,
    port: int | None,
    host_key_path: str | None,
    theme: str | None,
    no_password_auth: bool,
    log_level: str | None,
    json_logs: bool,
) -> None:
    """Serve the portfolio over SSH.

    Every option can also be set with a TERMFOLIO_* environment variable.

    Examples:

        termfolio serve --port 2222

        TERMFOLIO_THEME=kanagawa termfolio serve
    """
    from termfolio.tui.ssh import serve as serve_forever

    settings = load_settings(
        host=host,
        port=port,
        host_key_path=host_key_path,
        theme=theme,
        allow_password_auth=False if no_password_auth else None,
        log_level=log_level.upper() if log_level else None,
        log_json=True if json_logs else None,
    )
    setup_logging(settings.log_level, json_output=settings.log_json)

    try:
        serve_forever(settings, theme=get_theme(settings.theme))
    except TermfolioError as e:
        fail(e)


# =============================================================================
# Local Command
# =============================================================================


@main.command()
@click.option("--theme", "-t", help="Theme name (see: termfolio themes)")
def local(theme: str | None) -> None:
    """Run the portfolio in this terminal.

    Same screens and keys as over SSH, without a server.
    """
    from termfolio.tui.app import run_local

    settings = load_settings(theme=theme)
    setup_logging("WARNING")

    try:
        selected = get_theme(settings.theme)
    except TermfolioError as e:
        fail(e)
        return

    code = run_local(
        theme=selected,
        color_system=settings.color_system,
        tick_interval=settings.tick_interval,
        snake_length=settings.snake_length,
        max_box_width=settings.max_box_width,
    )
    if code != 0:
        err_console.print("[red]Error:[/red] stdin is not a terminal")
    raise SystemExit(code)


# =============================================================================
# Snapshot Command
# =============================================================================


@main.command()
@click.option(
    "--page",
    type=click.Choice([page.value for page in Page]),
    default=Page.MENU.value,
    show_default=True,
    help="Page to render",
)
@click.option("--cursor", "-c", default=0, show_default=True, help="Cursor position on the page")
@click.option("--width", "-W", type=click.IntRange(min=1), default=DEFAULT_WIDTH, show_default=True)
@click.option("--height", "-H", type=click.IntRange(min=1), default=DEFAULT_HEIGHT, show_default=True)
@click.option("--theme", "-t", help="Theme name (see: termfolio themes)")
@click.option("--ansi", is_flag=True, help="Keep colours and hyperlink escapes")
def snapshot(
    page: str,
    cursor: int,
    width: int,
    height: int,
    theme: str | None,
    ansi: bool,
) -> None:
    """Print one rendered frame and exit.

    Examples:

        termfolio snapshot --page projects --cursor 1

        termfolio snapshot --ansi --theme kanagawa
    """
    from termfolio.tui.render import plain_text, render

    settings = load_settings(theme=theme)
    try:
        selected = get_theme(settings.theme)
    except TermfolioError as e:
        fail(e)
        return

    # Same transitions a visitor would make, so the cursor is clamped
    session = Session(state=SessionState(width=width, height=height), animated=False)
    session.state.page = Page(page)
    for _ in range(max(cursor, 0)):
        session.handle_key("down")

    frame = render(
        session.state,
        theme=selected,
        color_system=settings.color_system,
        max_box_width=settings.max_box_width,
        snake_length=settings.snake_length,
    )
    if ansi:
        click.echo(frame, color=True)
    else:
        click.echo(plain_text(frame))


# =============================================================================
# Themes Command
# =============================================================================


@main.command()
def themes() -> None:
    """List available themes."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", no_wrap=True)
    table.add_column("Logo", width=8)
    table.add_column("Border", width=8)
    table.add_column("Description")

    for name in sorted(THEMES):
        theme = THEMES[name]
        label = f"[cyan]{name}[/cyan]"
        if name == DEFAULT_THEME:
            label += " [dim](default)[/dim]"
        logo = "[green]animated[/green]" if theme.animated_logo else "static"
        border = theme.border.lower() if theme.border else "none"
        table.add_row(label, logo, border, theme.description)

    console.print(table)


# =============================================================================
# Entry Point
# =============================================================================


if __name__ == "__main__":
    main()
