"""
Domain models — Pydantic types for lpis.

All models are re-exported here for convenient access:

    from lpis.core.models import Configuration, InstallableItem, RunSettings
"""

from lpis.core.models.catalog import Configuration, InstallableItem, ScriptEntry
from lpis.core.models.settings import RunSettings, Terminal

__all__ = [
    # catalog.py
    "Configuration",
    "InstallableItem",
    # settings.py
    "RunSettings",
    "ScriptEntry",
    "Terminal",
]
