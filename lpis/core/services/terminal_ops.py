"""
Terminal operations — run a shell command in a visible terminal window.

Installs and scripts are interactive enough that the user should watch
them, so every action is launched through a terminal emulator. The
emulator family comes from ``RunSettings.terminal``; there is no
auto-detection.

The launch blocks until the terminal process exits, which keeps the
checklist session strictly sequential.
"""

from __future__ import annotations

import logging
import shlex
import subprocess

from lpis.core.models.settings import RunSettings, Terminal
from lpis.core.services.errors import ExternalCommandError

logger = logging.getLogger(__name__)


# ── Terminal emulator registry ──────────────────────────────────────

# Each args template uses {cmd} as placeholder for the shell command.
_TERMINAL_REGISTRY: dict[Terminal, dict] = {
    Terminal.GNOME: {
        "name": "gnome-terminal",
        "label": "GNOME Terminal",
        "args": ["gnome-terminal", "--", "bash", "-c", "{cmd}"],
    },
    Terminal.KDE: {
        "name": "konsole",
        "label": "Konsole",
        "args": ["konsole", "-e", "bash", "-c", "{cmd}"],
    },
}


def terminal_label(terminal: Terminal) -> str:
    return _TERMINAL_REGISTRY[terminal]["label"]


# ── Build terminal command ──────────────────────────────────────────

def build_terminal_cmd(terminal: Terminal, shell_cmd: str) -> list[str]:
    """Build the full argv list for running *shell_cmd* in *terminal*."""
    entry = _TERMINAL_REGISTRY[Terminal(terminal)]
    return [arg.replace("{cmd}", shell_cmd) for arg in entry["args"]]


# ── Launch ──────────────────────────────────────────────────────────

def launch_in_terminal(shell_cmd: str, settings: RunSettings) -> None:
    """Run *shell_cmd* in the configured terminal and wait for it.

    Raises:
        ExternalCommandError: If the terminal can't be started or exits
            non-zero.
    """
    argv = build_terminal_cmd(settings.terminal, shell_cmd)
    logger.info("CMD %s", shlex.join(argv))

    try:
        result = subprocess.run(argv, check=False)
    except (FileNotFoundError, OSError) as exc:
        raise ExternalCommandError(argv, f"failed to launch: {exc}") from exc

    if result.returncode != 0:
        raise ExternalCommandError(
            argv,
            f"exited with code {result.returncode}",
            returncode=result.returncode,
        )

    logger.debug("%s closed", terminal_label(settings.terminal))
