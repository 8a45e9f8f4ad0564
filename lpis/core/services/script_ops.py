"""
Script operations — run a script bundle in a visible terminal.

The bundle's commands are written to a fresh temp file which the
terminal then runs with bash. The file is left behind on purpose: the
run is fire-and-forget, and the temp directory is the OS's to clean.
"""

from __future__ import annotations

import logging
import os
import shlex
import tempfile
from pathlib import Path

from lpis.core.models.catalog import ScriptEntry
from lpis.core.models.settings import RunSettings
from lpis.core.services.terminal_ops import launch_in_terminal

logger = logging.getLogger(__name__)

_SCRIPT_MODE = 0o744


def write_temp_script(script: ScriptEntry, directory: Path | None = None) -> Path:
    """Write *script* to a uniquely named executable file.

    Raises:
        OSError: If the file can't be created or written.
    """
    fd, tmp_path = tempfile.mkstemp(
        dir=directory,
        prefix="lpis-",
        suffix=".sh",
    )
    path = Path(tmp_path)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(script.body())
    path.chmod(_SCRIPT_MODE)
    logger.debug("Wrote script '%s' to %s", script.name, path)
    return path


def run_script(script: ScriptEntry, settings: RunSettings, directory: Path | None = None) -> Path:
    """Run *script* in the configured terminal and wait for it.

    Returns the path of the script file, which is not removed.

    Raises:
        OSError: If the script file can't be written.
        ExternalCommandError: If the terminal can't be launched or fails.
    """
    path = write_temp_script(script, directory=directory)
    logger.info("Running script '%s' (%s)", script.name, path)
    launch_in_terminal(shlex.join(["bash", str(path)]), settings)
    return path
