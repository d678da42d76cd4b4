"""Single-keypress reader for the terminal frontend.

Reads one key without waiting for Enter and maps it to an action name.
Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys


def _getch_unix() -> str:
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
    return ch


def _getch_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    return msvcrt.getch().decode("utf-8", errors="ignore")


_getch = _getch_windows if os.name == "nt" else _getch_unix


# -- key mapping ---------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    " ": "select",
    "\r": "select",
    "\n": "select",
    "u": "undo",
    "z": "undo",
    "y": "redo",
    "n": "hint",
    "v": "solve",
    "r": "restart",
    "h": "help",
    "?": "help",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def resolve(ch: str) -> str:
    """Map a raw character to its action name (case-insensitive)."""
    action = _KEY_MAP.get(ch) or _KEY_MAP.get(ch.lower())
    if action is not None:
        return action
    return ch if ch.isprintable() else ""


def get_key() -> str:
    """Block for one keypress and return its action name.

    Actions: ``up``/``down``/``left``/``right`` (arrows or WASD),
    ``select`` (space / Enter), ``undo``, ``redo``, ``hint``, ``solve``,
    ``restart``, ``help`` and ``quit`` (q, Ctrl-C or a bare Escape).
    Unmapped printable keys come back as themselves, anything else as "".
    """
    ch = _getch()

    # Arrow keys arrive as ESC [ A/B/C/D
    if ch == "\x1b":
        if _getch() == "[":
            return _ARROW_MAP.get(_getch(), "")
        return "quit"

    return resolve(ch)
