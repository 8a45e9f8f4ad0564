"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

SAMPLE_CONFIG = textwrap.dedent("""\
    flatpaks:
      - name: Firefox
        ref: org.mozilla.firefox
      - name: GIMP
        ref: org.gimp.GIMP
      - name: VLC
        ref: org.videolan.VLC
    scripts:
      - name: Update system
        commands:
          - sudo dnf upgrade -y
          - flatpak update -y
""")


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write the sample lpis.yml to a temp directory."""
    path = tmp_path / "lpis.yml"
    path.write_text(SAMPLE_CONFIG)
    return path


@pytest.fixture
def state_file(tmp_path: Path) -> Path:
    """Checksum file path inside a temp config dir (not created)."""
    return tmp_path / "config" / "lpis"

