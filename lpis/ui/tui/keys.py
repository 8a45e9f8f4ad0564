"""
Key decoding — raw terminal input to checklist events.
"""

from __future__ import annotations

import click

from lpis.core.engine.checklist import Event

# Arrow keys arrive as escape sequences; click.getchar returns them whole.
_KEYMAP: dict[str, Event] = {
    "\x1b[A": Event.UP,
    "\x1bOA": Event.UP,
    "k": Event.UP,
    "\x1b[B": Event.DOWN,
    "\x1bOB": Event.DOWN,
    "j": Event.DOWN,
    "\r": Event.ACTIVATE,
    "\n": Event.ACTIVATE,
    " ": Event.ACTIVATE,
    "q": Event.QUIT,
    "\x03": Event.QUIT,  # ctrl+c when the terminal doesn't raise it
}


def decode_key(raw: str) -> Event:
    """Map one keypress to an Event; unknown keys are ``Event.OTHER``."""
    return _KEYMAP.get(raw, Event.OTHER)


def read_key() -> Event:
    """Block for one keypress.

    Raises:
        EOFError: When input is exhausted.
        KeyboardInterrupt: On ctrl+c in a real terminal.
    """
    raw = click.getchar()
    if not raw:
        raise EOFError("end of input")
    return decode_key(raw)
