"""
Exceptions raised by termfolio.

Only startup problems surface as exceptions. Anything that goes wrong
inside a running session is absorbed there and never reaches the user.
"""

from __future__ import annotations


class TermfolioError(Exception):
    """
    Base exception for termfolio.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self._original_cause = cause
        # Keep tracebacks short, the cause is still reachable for debugging
        self.__suppress_context__ = True

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Startup Errors
# =============================================================================


class HostKeyError(TermfolioError):
    """SSH host key could not be loaded or generated."""

    def __init__(
        self,
        path: str,
        reason: str,
        *,
        cause: BaseException | None = None,
    ) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Host key {path}: {reason}", cause=cause)


class ServerStartError(TermfolioError):
    """SSH listener could not be created."""

    def __init__(
        self,
        host: str,
        port: int,
        *,
        cause: BaseException | None = None,
    ) -> None:
        self.host = host
        self.port = port
        detail = f": {cause}" if cause else ""
        super().__init__(f"Cannot listen on {host}:{port}{detail}", cause=cause)


class UnknownThemeError(TermfolioError):
    """Requested theme is not registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown theme '{name}'. Available: {', '.join(available)}"
        )


__all__ = [
    "TermfolioError",
    "HostKeyError",
    "ServerStartError",
    "UnknownThemeError",
]
