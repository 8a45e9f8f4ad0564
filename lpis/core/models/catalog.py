"""
Catalog models — what lpis.yml declares.

The configuration file lists Flatpaks the user may install and script
bundles the user may run. Both are loaded once at startup; the only
field that changes afterwards is ``InstallableItem.installed``, which is
derived from the package manager probe.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class InstallableItem(BaseModel):
    """A Flatpak offered for install.

    ``ref`` is passed verbatim to the package manager. ``installed`` is
    never read from the file: the probe overwrites it for every item.
    """

    name: str
    ref: str
    installed: bool = False


class ScriptEntry(BaseModel):
    """A named bundle of shell lines, run as one script."""

    name: str
    commands: list[str] = Field(default_factory=list)

    @field_validator("commands", mode="before")
    @classmethod
    def _null_is_empty(cls, v):
        return [] if v is None else v

    def body(self) -> str:
        """The script text: commands joined by newlines, in order."""
        return "\n".join(self.commands)


class Configuration(BaseModel):
    """Root of lpis.yml."""

    flatpaks: list[InstallableItem] = Field(default_factory=list)
    scripts: list[ScriptEntry] = Field(default_factory=list)

    # A key with no value (`scripts:`) parses as null
    @field_validator("flatpaks", "scripts", mode="before")
    @classmethod
    def _null_is_empty(cls, v):
        return [] if v is None else v

    def refs(self) -> list[str]:
        return [item.ref for item in self.flatpaks]

    def missing(self) -> list[InstallableItem]:
        """Items the probe did not find installed."""
        return [item for item in self.flatpaks if not item.installed]
