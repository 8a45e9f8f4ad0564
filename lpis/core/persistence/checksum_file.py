"""
Checksum file — the run marker that gates repeated runs.

A single text file at ``<user-config-dir>/lpis`` holds the hex SHA-256
of the configuration file as it was when the user last quit normally.
When the digest of the current file matches, there is nothing to do.

Reads never fail: a missing or unreadable file means "never run".
Writes happen only on quit and never raise; a crash therefore leaves
the previous digest in place and the same run is offered again.
"""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

STATE_FILE_NAME = "lpis"

_CHUNK_SIZE = 64 * 1024


def user_config_dir() -> Path:
    """``$XDG_CONFIG_HOME``, falling back to ``~/.config``."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def default_state_path() -> Path:
    """Get the default per-user checksum file path."""
    return user_config_dir() / STATE_FILE_NAME


def config_digest(config_path: Path) -> str:
    """Hex SHA-256 of the file's bytes.

    Raises:
        OSError: If the file can't be read.
    """
    logger.debug("Hashing %s", config_path)
    h = hashlib.sha256()
    with config_path.open("rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()


def load_saved_digest(state_path: Path | None = None) -> str:
    """Read the last saved digest, or ``""`` if there is none."""
    path = state_path or default_state_path()
    try:
        saved = path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        logger.debug("No checksum file at %s — never run", path)
        return ""
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Cannot read checksum file %s: %s — treating as never run", path, e)
        return ""
    logger.debug("Saved digest %s (from %s)", saved, path)
    return saved


def should_run(config_path: Path, force: bool = False, state_path: Path | None = None) -> bool:
    """Decide whether this configuration still needs processing.

    Returns True when *force* is set or the current digest differs from
    the saved one.

    Raises:
        OSError: If the configuration file can't be read.
    """
    current = config_digest(config_path)
    if force:
        return True
    return current != load_saved_digest(state_path)


def save_digest(config_path: Path, state_path: Path | None = None) -> bool:
    """Record the configuration's current digest as processed.

    The digest is recomputed here rather than reused from startup. Uses
    write-to-temp-then-rename so a crash never leaves a truncated marker.

    Returns:
        True on success. Failures are logged and reported as False.
    """
    path = state_path or default_state_path()

    try:
        digest = config_digest(config_path)
    except OSError as e:
        logger.error("Couldn't hash %s: %s", config_path, e)
        return False

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=".lpis_",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(digest)
            tmp.chmod(0o644)
            tmp.replace(path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except OSError as e:
        logger.error("Couldn't write %s: %s", path, e)
        return False

    logger.info("Saved digest %s to %s", digest, path)
    return True
