"""
Tests for local terminal utilities.
"""

from __future__ import annotations

import signal
import sys
from unittest.mock import MagicMock, patch

import pytest

from termfolio.tui.modes import (
    LocalChannel,
    TerminalMode,
    get_terminal_size,
    is_tty,
    on_resize,
    raw_mode,
)

unix_only = pytest.mark.skipif(sys.platform == "win32", reason="Unix only")


class TestIsTty:
    """Test is_tty() function."""

    def test_is_tty_with_mock_stdin(self):
        """is_tty checks stdin.isatty()."""
        with patch.object(sys, "stdin") as mock_stdin:
            mock_stdin.isatty.return_value = True
            assert is_tty() is True

            mock_stdin.isatty.return_value = False
            assert is_tty() is False


class TestGetTerminalSize:
    """Test get_terminal_size() function."""

    def test_reads_os_size(self):
        """get_terminal_size returns (columns, lines)."""
        size = MagicMock(columns=132, lines=43)
        with patch("os.get_terminal_size", return_value=size):
            assert get_terminal_size() == (132, 43)

    def test_fallback_on_error(self):
        """get_terminal_size returns 80x24 on error."""
        with patch("os.get_terminal_size", side_effect=OSError):
            assert get_terminal_size() == (80, 24)


@unix_only
class TestTerminalMode:
    """Test TerminalMode class."""

    def test_default_values(self):
        """New mode is not raw."""
        mode = TerminalMode(0)
        assert mode.saved is None
        assert mode.is_raw is False

    def test_enter_and_exit(self):
        """enter saves attributes, exit restores them."""
        saved = [0, 0, 0, 0, 0, 0, []]
        mode = TerminalMode(5)
        with patch("termios.tcgetattr", return_value=saved), patch(
            "termios.tcsetattr"
        ) as mock_set, patch("tty.setraw") as mock_raw:
            assert mode.enter() is True
            assert mode.is_raw is True
            mock_raw.assert_called_once_with(5)

            assert mode.exit() is True
            assert mode.is_raw is False
            assert mock_set.call_args[0][0] == 5
            assert mock_set.call_args[0][2] is saved

    def test_enter_not_a_terminal(self):
        """enter returns False when termios refuses the descriptor."""
        import termios

        mode = TerminalMode(5)
        with patch("termios.tcgetattr", side_effect=termios.error(25, "not a tty")):
            assert mode.enter() is False
        assert mode.is_raw is False

    def test_exit_not_in_raw(self):
        """exit returns False if not in raw mode."""
        assert TerminalMode(5).exit() is False


class TestRawModeContextManager:
    """Test raw_mode() context manager."""

    def test_not_tty(self):
        """raw_mode yields False without a terminal."""
        with patch("termfolio.tui.modes.is_tty", return_value=False):
            with raw_mode() as entered:
                assert entered is False

    def test_restores_on_exception(self):
        """raw_mode restores the terminal even on exception."""
        with patch("termfolio.tui.modes.is_tty", return_value=True), patch(
            "termfolio.tui.modes.sys.stdin"
        ) as mock_stdin, patch.object(
            TerminalMode, "enter", return_value=True
        ) as mock_enter, patch.object(TerminalMode, "exit") as mock_exit:
            mock_stdin.fileno.return_value = 0
            with pytest.raises(ValueError):
                with raw_mode() as entered:
                    assert entered is True
                    raise ValueError("test error")
        mock_enter.assert_called_once()
        mock_exit.assert_called_once()


@unix_only
class TestOnResize:
    """Test on_resize() context manager."""

    def test_handler_reports_size(self):
        """Installed handler passes the current size to the callback."""
        callback = MagicMock()
        with patch("signal.signal", return_value=signal.SIG_DFL) as mock_signal:
            with on_resize(callback) as installed:
                assert installed is True
                handler = mock_signal.call_args[0][1]
                with patch("termfolio.tui.modes.get_terminal_size", return_value=(100, 30)):
                    handler(signal.SIGWINCH, None)

        callback.assert_called_once_with(100, 30)
        assert mock_signal.call_count == 2
        assert mock_signal.call_args[0] == (signal.SIGWINCH, signal.SIG_DFL)

    def test_off_main_thread(self):
        """No handler can be installed outside the main thread."""
        with patch("signal.signal", side_effect=ValueError("main thread only")):
            with on_resize(MagicMock()) as installed:
                assert installed is False


class TestLocalChannel:
    """Test LocalChannel class."""

    def test_sendall_writes_stdout(self):
        """sendall writes bytes to stdout and flushes."""
        with patch("termfolio.tui.modes.sys.stdout") as mock_stdout:
            channel = LocalChannel()
            channel.sendall(b"frame")
        mock_stdout.buffer.write.assert_called_once_with(b"frame")
        mock_stdout.buffer.flush.assert_called_once()

    def test_recv_reads_stdin(self):
        """recv reads from the stdin descriptor."""
        with patch("termfolio.tui.modes.sys.stdin") as mock_stdin:
            mock_stdin.fileno.return_value = 7
            channel = LocalChannel()
            with patch("os.read", return_value=b"q") as mock_read:
                assert channel.recv(16) == b"q"
            mock_read.assert_called_once_with(7, 16)
            assert channel.closed is False

    def test_recv_eof_closes(self):
        """Empty read marks the channel closed."""
        with patch("termfolio.tui.modes.sys.stdin") as mock_stdin:
            mock_stdin.fileno.return_value = 7
            channel = LocalChannel()
            with patch("os.read", return_value=b""):
                assert channel.recv(16) == b""
        assert channel.closed is True
