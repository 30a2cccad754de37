"""
Key decoding for raw terminal input.

Turns the byte stream a terminal sends in raw mode into key names such as
``up``, ``enter``, ``esc``, ``ctrl+c`` or ``q``. The names match what the
state machine binds to.

Usage:
    >>> decoder = KeyDecoder()
    >>> decoder.feed(b"\\x1b[Ajq")
    ['up', 'j', 'q']
"""

from __future__ import annotations

import codecs
import re

ESC = "\x1b"

# CSI final byte (and optional numeric parameter) to key name
_CSI_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
    "Z": "shift+tab",
    "1~": "home",
    "2~": "insert",
    "3~": "delete",
    "4~": "end",
    "5~": "pgup",
    "6~": "pgdn",
    "7~": "home",
    "8~": "end",
}

# SS3 sequences (application cursor mode)
_SS3_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

_SINGLE_KEYS: dict[str, str] = {
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    " ": "space",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x00": "ctrl+space",
}

# ESC [ params intermediates final
_CSI_RE = re.compile(r"\x1b\[([0-9;?<>=]*)([ -/]*)([@-~])")
_CSI_PREFIX_RE = re.compile(r"\x1b\[[0-9;?<>=]*[ -/]*\Z")


def _control_key(char: str) -> str:
    """Name a C0 control character, e.g. ``\\x03`` -> ``ctrl+c``."""
    return f"ctrl+{chr(ord(char) + 0x60)}"


def _csi_key(params: str, final: str) -> str | None:
    if final == "~":
        # Drop modifiers: "5;2~" is shift+pgup, treat as pgup
        return _CSI_KEYS.get(params.split(";", 1)[0] + "~")
    if params and params != "1" and not params.startswith("1;"):
        return None
    return _CSI_KEYS.get(final)


class KeyDecoder:
    """
    Incremental decoder from raw bytes to key names.

    Keeps an incomplete escape sequence or multi-byte UTF-8 character
    across ``feed()`` calls. A lone ESC at the end of a chunk is reported
    as ``esc`` right away; terminals send escape sequences in one write.
    """

    def __init__(self) -> None:
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="ignore")
        self._pending = ""

    def feed(self, data: bytes) -> list[str]:
        """
        Decode a chunk of input.

        Args:
            data: Bytes read from the terminal.

        Returns:
            Key names in arrival order. Unknown sequences are dropped.
        """
        text = self._pending + self._utf8.decode(data)
        self._pending = ""
        keys: list[str] = []
        i = 0

        while i < len(text):
            char = text[i]

            if char != ESC:
                if char in _SINGLE_KEYS:
                    keys.append(_SINGLE_KEYS[char])
                elif ord(char) < 0x20:
                    keys.append(_control_key(char))
                else:
                    keys.append(char)
                i += 1
                continue

            rest = text[i:]

            if len(rest) == 1:
                keys.append("esc")
                break

            follower = rest[1]

            if follower == "[":
                match = _CSI_RE.match(rest)
                if match is None:
                    if _CSI_PREFIX_RE.match(rest):
                        # Sequence split across reads
                        self._pending = rest
                        break
                    # Malformed: report the ESC, reprocess what follows
                    keys.append("esc")
                    i += 1
                    continue
                params, _intermediates, final = match.groups()
                key = _csi_key(params, final)
                if key is not None:
                    keys.append(key)
                i += match.end()
                continue

            if follower == "O":
                if len(rest) < 3:
                    self._pending = rest
                    break
                key = _SS3_KEYS.get(rest[2])
                if key is not None:
                    keys.append(key)
                i += 3
                continue

            if follower == ESC:
                keys.append("esc")
                i += 1
                continue

            # ESC + key is how terminals send Alt
            inner = _SINGLE_KEYS.get(follower, follower)
            if ord(follower) < 0x20 and follower not in _SINGLE_KEYS:
                inner = _control_key(follower)
            keys.append(f"alt+{inner}")
            i += 2

        return keys

    def reset(self) -> None:
        """Forget any partial input."""
        self._utf8.reset()
        self._pending = ""


def decode_keys(data: bytes) -> list[str]:
    """Decode one self-contained chunk of input."""
    return KeyDecoder().feed(data)


__all__ = ["KeyDecoder", "decode_keys"]
