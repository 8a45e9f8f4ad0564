"""
Flatpak operations — probe what is installed, install what is selected.

The probe is a plain captured ``flatpak list``: a configured ref counts
as installed when it appears anywhere in that output. Installs run in a
visible terminal so the user can follow flatpak's progress.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Iterable, Sequence

from lpis.core.models.catalog import InstallableItem
from lpis.core.models.settings import RunSettings
from lpis.core.services.errors import ExternalCommandError
from lpis.core.services.terminal_ops import launch_in_terminal

logger = logging.getLogger(__name__)

# Non-interactive, auto-confirm: the terminal window is for watching only.
_INSTALL_FLAGS = ["--noninteractive", "-y"]


def _run(args: list[str], timeout: int = 120) -> subprocess.CompletedProcess[str]:
    """Run a command and return the result."""
    return subprocess.run(
        args,
        capture_output=True,
        text=True,
        timeout=timeout,
    )


# ═══════════════════════════════════════════════════════════════════
#  Observe
# ═══════════════════════════════════════════════════════════════════


def list_installed(settings: RunSettings) -> str:
    """Raw ``<package-manager> list`` output.

    Raises:
        ExternalCommandError: If the command can't run or fails.
    """
    argv = [settings.package_manager, "list"]
    logger.info("CMD %s", shlex.join(argv))

    try:
        r = _run(argv)
    except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as exc:
        raise ExternalCommandError(argv, f"failed to run: {exc}") from exc

    if r.returncode != 0:
        raise ExternalCommandError(
            argv,
            r.stderr.strip() or f"exited with code {r.returncode}",
            returncode=r.returncode,
        )
    return r.stdout


def mark_installed(items: Iterable[InstallableItem], installed_output: str) -> None:
    """Set ``installed`` on every item whose ref occurs in *installed_output*."""
    for item in items:
        item.installed = item.ref in installed_output


def probe_installed(items: Sequence[InstallableItem], settings: RunSettings) -> Sequence[InstallableItem]:
    """Annotate *items* with their installed state and return them."""
    mark_installed(items, list_installed(settings))
    found = sum(1 for item in items if item.installed)
    logger.info("%d of %d configured flatpaks already installed", found, len(items))
    return items


# ═══════════════════════════════════════════════════════════════════
#  Act
# ═══════════════════════════════════════════════════════════════════


def build_install_cmd(refs: Sequence[str], settings: RunSettings) -> list[str]:
    """``flatpak install --noninteractive -y <ref>...``"""
    return [settings.package_manager, "install", *_INSTALL_FLAGS, *refs]


def install_selected(
    selected: Iterable[int],
    items: Sequence[InstallableItem],
    settings: RunSettings,
) -> bool:
    """Install the selected items in a visible terminal.

    Refs are passed in ascending index order.

    Returns:
        False without spawning anything when nothing is selected,
        True once the install terminal has exited cleanly.

    Raises:
        ExternalCommandError: If the terminal can't be launched or fails.
    """
    indices = sorted(selected)
    if not indices:
        logger.info("Nothing selected — skipping install")
        return False

    refs = [items[i].ref for i in indices]
    launch_in_terminal(shlex.join(build_install_cmd(refs, settings)), settings)
    logger.info("Installed %d flatpak(s): %s", len(refs), ", ".join(refs))
    return True
