"""
SSH server for the portfolio.

Serves one ``PortfolioApp`` per SSH connection using paramiko.

ARCHITECTURE:
=============
Flow per connection:
1. Accept loop hands the TCP socket to a new daemon thread
2. Thread wraps it in a paramiko ``Transport`` with the host key
3. ``PortfolioServerInterface`` answers auth, pty, shell and
   window-change requests on the transport thread; size reports are queued
   as ``Resize`` events for the session
4. Once a shell is requested the thread runs ``PortfolioApp`` on the channel
5. Quit or disconnect: exit status 0, channel and transport closed, state
   dropped

Auth:
    Any public key is accepted. Password auth accepts any password when
    ``allow_password_auth`` is on, otherwise only publickey is offered.
    This is a public portfolio: authentication identifies nobody and guards
    nothing. Every decision is logged.

Troubleshooting:
- "Cannot listen on 0.0.0.0:22" -> port below 1024 needs root, use
  ``--port 2222`` or ``TERMFOLIO_PORT``
- Garbled layout -> client did not request a pty, use ``ssh -t``
"""

from __future__ import annotations

import os
import queue
import socket
import threading
from pathlib import Path

import paramiko
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from termfolio.config import ServerSettings, get_settings
from termfolio.content import DEFAULT_PORTFOLIO
from termfolio.exceptions import HostKeyError, ServerStartError
from termfolio.logging import get_logger
from termfolio.models.portfolio import Portfolio
from termfolio.theme import Theme, get_theme
from termfolio.tui.app import PortfolioApp, Resize

logger = get_logger(__name__)

LISTEN_BACKLOG = 100
ACCEPT_POLL_INTERVAL = 0.5


# =============================================================================
# Host Key
# =============================================================================


def generate_host_key(path: str | Path) -> Path:
    """
    Write a new Ed25519 host key in OpenSSH format (mode 0600).

    Raises:
        HostKeyError: Key file exists already or cannot be written.
    """
    path = Path(path)
    key = ed25519.Ed25519PrivateKey.generate()
    data = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.OpenSSH,
        encryption_algorithm=serialization.NoEncryption(),
    )
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
    except OSError as e:
        raise HostKeyError(str(path), f"cannot write: {e.strerror or e}", cause=e) from e

    logger.info(f"Generated new host key at {path}")
    return path


def load_host_key(path: str | Path) -> paramiko.PKey:
    """
    Load the host key, generating an Ed25519 key first if none exists.

    Raises:
        HostKeyError: Key cannot be generated or parsed.
    """
    path = Path(path)
    if not path.exists():
        generate_host_key(path)

    try:
        return paramiko.PKey.from_path(path)
    except (
        paramiko.SSHException,
        paramiko.UnknownKeyType,
        UnsupportedAlgorithm,
        OSError,
        ValueError,
    ) as e:
        raise HostKeyError(str(path), f"cannot load: {e}", cause=e) from e


# =============================================================================
# Server Interface
# =============================================================================


class PortfolioServerInterface(paramiko.ServerInterface):
    """
    Answers SSH requests for one connection.

    Runs on the paramiko transport thread; the only thing shared with the
    session thread is the ``events`` queue and ``shell_requested``.
    """

    def __init__(
        self,
        peer: str,
        events: queue.SimpleQueue[Resize],
        *,
        allow_password_auth: bool = True,
    ) -> None:
        super().__init__()
        self.peer = peer
        self.events = events
        self.allow_password_auth = allow_password_auth
        self.shell_requested = threading.Event()
        self.username: str | None = None

    def get_allowed_auths(self, username: str) -> str:
        if self.allow_password_auth:
            return "publickey,password"
        return "publickey"

    def check_auth_publickey(self, username: str, key: paramiko.PKey) -> int:
        logger.info(
            f"{self.peer}: publickey auth accepted for '{username}' "
            f"({key.fingerprint})"
        )
        self.username = username
        return paramiko.AUTH_SUCCESSFUL

    def check_auth_password(self, username: str, password: str) -> int:
        if not self.allow_password_auth:
            logger.info(f"{self.peer}: password auth refused for '{username}'")
            return paramiko.AUTH_FAILED
        logger.info(f"{self.peer}: password auth accepted for '{username}'")
        self.username = username
        return paramiko.AUTH_SUCCESSFUL

    def check_channel_request(self, kind: str, chanid: int) -> int:
        if kind == "session":
            return paramiko.OPEN_SUCCEEDED
        return paramiko.OPEN_FAILED_ADMINISTRATIVELY_PROHIBITED

    def check_channel_pty_request(
        self,
        channel: paramiko.Channel,
        term: bytes,
        width: int,
        height: int,
        pixelwidth: int,
        pixelheight: int,
        modes: bytes,
    ) -> bool:
        self.events.put(Resize(width, height))
        return True

    def check_channel_shell_request(self, channel: paramiko.Channel) -> bool:
        self.shell_requested.set()
        return True

    def check_channel_window_change_request(
        self,
        channel: paramiko.Channel,
        width: int,
        height: int,
        pixelwidth: int,
        pixelheight: int,
    ) -> bool:
        self.events.put(Resize(width, height))
        return True


# =============================================================================
# Server
# =============================================================================


class PortfolioServer:
    """
    Threaded SSH server.

    Example:
        >>> server = PortfolioServer(configure_settings(port=2222))
        >>> server.serve_forever()  # blocks until shutdown()
    """

    def __init__(
        self,
        settings: ServerSettings | None = None,
        *,
        portfolio: Portfolio = DEFAULT_PORTFOLIO,
        theme: Theme | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.portfolio = portfolio
        self.theme = theme or get_theme(self.settings.theme)

        self._host_key: paramiko.PKey | None = None
        self._socket: socket.socket | None = None
        self._shutdown = threading.Event()

    @property
    def address(self) -> tuple[str, int] | None:
        """Bound (host, port), None before ``start()``."""
        if self._socket is None:
            return None
        host, port = self._socket.getsockname()[:2]
        return host, port

    def start(self) -> socket.socket:
        """
        Load the host key and bind the listener.

        Returns:
            The listening socket.

        Raises:
            HostKeyError: Host key unusable.
            ServerStartError: Address cannot be bound.
        """
        settings = self.settings
        self._host_key = load_host_key(settings.host_key_path)

        family = socket.AF_INET6 if ":" in settings.host else socket.AF_INET
        try:
            sock = socket.create_server(
                (settings.host, settings.port),
                family=family,
                backlog=LISTEN_BACKLOG,
            )
        except OSError as e:
            raise ServerStartError(settings.host, settings.port, cause=e) from e

        sock.settimeout(ACCEPT_POLL_INTERVAL)
        self._socket = sock

        host, port = self.address or (settings.host, settings.port)
        logger.info(f"Listening on {host}:{port} (theme: {self.theme.name})")
        if settings.allow_password_auth:
            logger.info("Accepting any public key and any password")
        else:
            logger.info("Accepting any public key, password auth disabled")
        return sock

    def serve_forever(self) -> None:
        """
        Accept connections until ``shutdown()``.

        Raises:
            ServerStartError: Listener failed while accepting.
        """
        sock = self._socket or self.start()

        try:
            while not self._shutdown.is_set():
                try:
                    client, addr = sock.accept()
                except socket.timeout:
                    continue
                except OSError as e:
                    if self._shutdown.is_set():
                        break
                    raise ServerStartError(
                        self.settings.host, self.settings.port, cause=e
                    ) from e

                logger.info(f"Connection from {addr[0]}:{addr[1]}")
                thread = threading.Thread(
                    target=self.handle_connection,
                    args=(client, addr),
                    name=f"termfolio-{addr[0]}:{addr[1]}",
                    daemon=True,
                )
                thread.start()
        finally:
            self._close_socket()

    def shutdown(self) -> None:
        """Stop accepting connections. Running sessions end on disconnect."""
        self._shutdown.set()
        self._close_socket()

    def _close_socket(self) -> None:
        if self._socket is not None:
            try:
                self._socket.close()
            except OSError:
                pass
            self._socket = None
            logger.info("Listener closed")

    def handle_connection(self, client: socket.socket, addr: tuple[str, int]) -> None:
        """Run one SSH connection to completion (called on its own thread)."""
        peer = f"{addr[0]}:{addr[1]}"
        settings = self.settings
        transport: paramiko.Transport | None = None

        try:
            client.settimeout(None)
            transport = paramiko.Transport(client)
            transport.add_server_key(self._host_key)
            events: queue.SimpleQueue[Resize] = queue.SimpleQueue()
            server = PortfolioServerInterface(
                peer,
                events,
                allow_password_auth=settings.allow_password_auth,
            )
            transport.start_server(server=server)

            channel = transport.accept(timeout=settings.channel_timeout)
            if channel is None:
                logger.info(f"{peer}: no session channel opened")
                return
            if not server.shell_requested.wait(settings.channel_timeout):
                logger.info(f"{peer}: no shell requested")
                channel.close()
                return

            logger.info(f"{peer}: session started for '{server.username}'")
            app = PortfolioApp(
                channel,
                portfolio=self.portfolio,
                theme=self.theme,
                events=events,
                color_system=settings.color_system,
                tick_interval=settings.tick_interval,
                snake_length=settings.snake_length,
                max_box_width=settings.max_box_width,
                peer=peer,
            )
            status = app.run()

            if not channel.closed:
                channel.send_exit_status(status)
                channel.close()

        except (paramiko.SSHException, EOFError, OSError) as e:
            logger.info(f"{peer}: connection error: {e}")

        finally:
            if transport is not None:
                transport.close()
            else:
                client.close()
            logger.info(f"{peer}: disconnected")


def serve(
    settings: ServerSettings | None = None,
    *,
    theme: Theme | None = None,
) -> PortfolioServer:
    """
    Start a server and block until interrupted.

    Returns:
        The stopped server.
    """
    server = PortfolioServer(settings, theme=theme)
    server.start()
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        server.shutdown()
    return server


__all__ = [
    "generate_host_key",
    "load_host_key",
    "PortfolioServerInterface",
    "PortfolioServer",
    "serve",
]
