"""
lpis — CLI entrypoint.

Usage:
    lpis --help
    lpis                        # use /usr/share/lpis/lpis.yml
    lpis -c ./lpis.yml --kde    # custom config, run actions in Konsole
    lpis -f                     # show the checklist even if nothing changed
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click

from lpis import __version__
from lpis.core.config.loader import DEFAULT_CONFIG_PATH
from lpis.core.models.settings import RunSettings, Terminal
from lpis.core.observability.logging_config import resolve_level, setup_logging
from lpis.core.persistence.checksum_file import default_state_path
from lpis.core.services.errors import ExternalCommandError

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(version=__version__, prog_name="lpis")
@click.option("--force", "-f", is_flag=True, help="Force running even if the config is unchanged.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Config file location.",
)
@click.option("--kde", is_flag=True, help="Use Konsole to run commands.")
@click.option("--gnome", is_flag=True, help="Use gnome-terminal to run commands (default).")
@click.option(
    "--state-file",
    "state_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Checksum file location (default: <user-config-dir>/lpis).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(
    force: bool,
    config_path: Path,
    kde: bool,
    gnome: bool,
    state_path: Path | None,
    verbose: bool,
    quiet: bool,
    debug: bool,
) -> None:
    """lpis — pick Flatpaks to install and scripts to run after a fresh install."""
    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(
            debug=debug,
            verbose=verbose,
            quiet=quiet,
            env_level=os.environ.get("LPIS_LOG_LEVEL"),
        ),
        log_file=os.environ.get("LPIS_LOG_FILE"),
        log_file_level=os.environ.get("LPIS_LOG_FILE_LEVEL"),
    )

    from lpis.core.use_cases.launch import LaunchStatus, build_controller, prepare_launch
    from lpis.ui.tui.session import run_session

    state_path = state_path or default_state_path()
    # --kde wins when both are given
    settings = RunSettings(terminal=Terminal.KDE if kde else Terminal.GNOME)
    logger.debug("Config %s, state %s, terminal %s", config_path, state_path, settings.terminal.value)

    result = prepare_launch(config_path, force=force, state_path=state_path, settings=settings)

    if result.status is LaunchStatus.MISSING:
        click.echo("no config file, exiting")
        return

    if result.status is LaunchStatus.UNCHANGED:
        click.echo("we already processed this checksum, nothing to do, use -f to skip verification")
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    controller = build_controller(result, state_path=state_path)

    try:
        run_session(controller)
    except (ExternalCommandError, OSError) as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)
    except Exception as e:
        logger.debug("Session failed", exc_info=True)
        click.secho(f"Alas, there's been an error: {e}", fg="red", err=True)
        sys.exit(1)

    if controller.quit_result is False:
        click.secho(f"⚠️  Could not save checksum to {state_path}", fg="yellow", err=True)


if __name__ == "__main__":
    cli()
