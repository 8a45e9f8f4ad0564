"""
Launch use case — decide whether to show the checklist, and prepare it.

Order matters and mirrors what a user sees:

    1. No config file         → nothing to do (not an error)
    2. Digest unchanged       → nothing to do, unless forced
    3. Parse config           → invalid config is fatal
    4. Probe installed items  → probe failure is fatal

Fatal problems are reported through ``LaunchResult.error`` so the CLI is
the only place that prints diagnostics and picks exit codes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from lpis.core.config.loader import ConfigError, config_exists, load_config
from lpis.core.engine.checklist import Checklist, ChecklistController
from lpis.core.models.catalog import Configuration
from lpis.core.models.settings import RunSettings
from lpis.core.persistence.checksum_file import save_digest, should_run
from lpis.core.services.errors import ExternalCommandError
from lpis.core.services.flatpak_ops import install_selected, probe_installed
from lpis.core.services.script_ops import run_script

logger = logging.getLogger(__name__)


class LaunchStatus(StrEnum):
    MISSING = "missing"
    UNCHANGED = "unchanged"
    READY = "ready"
    ERROR = "error"


@dataclass
class LaunchResult:
    """Outcome of preparing a checklist session."""

    status: LaunchStatus = LaunchStatus.ERROR
    config_path: Path | None = None
    config: Configuration | None = None
    settings: RunSettings = field(default_factory=RunSettings)
    error: str | None = None

    @property
    def ready(self) -> bool:
        return self.status is LaunchStatus.READY

    def to_dict(self) -> dict:
        result: dict = {
            "status": self.status.value,
            "config_path": str(self.config_path) if self.config_path else None,
        }
        if self.error:
            result["error"] = self.error
        if self.config is not None:
            result["flatpaks"] = len(self.config.flatpaks)
            result["missing"] = len(self.config.missing())
            result["scripts"] = len(self.config.scripts)
        return result


def prepare_launch(
    config_path: Path,
    *,
    force: bool = False,
    state_path: Path | None = None,
    settings: RunSettings | None = None,
) -> LaunchResult:
    """Run the checksum gate, load the config and probe the package manager.

    Args:
        config_path: Path to lpis.yml.
        force: Skip the checksum gate.
        state_path: Override for the checksum file location.
        settings: Executor settings (terminal, package manager).

    Returns:
        LaunchResult; ``status`` is READY when the checklist should be shown.
    """
    result = LaunchResult(config_path=config_path, settings=settings or RunSettings())

    if not config_exists(config_path):
        logger.info("No config file at %s", config_path)
        result.status = LaunchStatus.MISSING
        return result

    try:
        if not should_run(config_path, force=force, state_path=state_path):
            logger.info("Config %s unchanged since last run", config_path)
            result.status = LaunchStatus.UNCHANGED
            return result
    except OSError as e:
        result.error = f"Cannot read {config_path}: {e}"
        return result

    try:
        config = load_config(config_path)
        probe_installed(config.flatpaks, result.settings)
    except (ConfigError, ExternalCommandError) as e:
        result.error = str(e)
        return result

    result.config = config
    result.status = LaunchStatus.READY
    return result


def build_controller(result: LaunchResult, *, state_path: Path | None = None) -> ChecklistController:
    """Wire a controller to the real executors for a READY launch."""
    assert result.config is not None and result.config_path is not None
    config, config_path, settings = result.config, result.config_path, result.settings

    return ChecklistController(
        Checklist(items=config.flatpaks, scripts=config.scripts),
        install=lambda selected, items: install_selected(selected, items, settings),
        run_script=lambda script: run_script(script, settings),
        on_quit=lambda: save_digest(config_path, state_path=state_path),
    )
