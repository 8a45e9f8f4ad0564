"""
Run settings — how actions are launched for this invocation.

Built once by the CLI from its flags and handed to every executor, so
nothing below the CLI reads flags or globals.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class Terminal(StrEnum):
    """Terminal emulator family used to show actions in a visible window."""

    GNOME = "gnome"
    KDE = "kde"


class RunSettings(BaseModel):
    """Per-invocation settings passed into the action executors."""

    terminal: Terminal = Terminal.GNOME
    package_manager: str = "flatpak"
