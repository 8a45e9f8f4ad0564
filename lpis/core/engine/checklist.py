"""
Checklist engine — the selection & run state machine.

The whole session state is ``(cursor, selected)``. Rows are laid out as:

    0 .. n-1        one row per configured Flatpak
    n               "Install missing flatpaks"
    n+1 .. n+s      one row per script bundle

where n = number of Flatpaks and s = number of scripts. The cursor is
clamped to ``[0, n + s]``.

The controller never launches anything itself: the install, script and
quit actions are injected, so the same machine drives the real terminal
session and the tests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from lpis.core.models.catalog import InstallableItem, ScriptEntry

logger = logging.getLogger(__name__)


class Event(StrEnum):
    """Discrete input events the controller understands."""

    UP = "up"
    DOWN = "down"
    ACTIVATE = "activate"
    QUIT = "quit"
    OTHER = "other"


class RowKind(StrEnum):
    ITEM = "item"
    INSTALL = "install"
    SCRIPT = "script"
    NONE = "none"


@dataclass
class Checklist:
    """Cursor and selection over a fixed set of items and scripts."""

    items: Sequence[InstallableItem]
    scripts: Sequence[ScriptEntry]
    cursor: int = 0
    selected: set[int] = field(default_factory=set)

    @property
    def install_row(self) -> int:
        return len(self.items)

    @property
    def max_cursor(self) -> int:
        return len(self.items) + len(self.scripts)

    def row_kind(self, row: int) -> RowKind:
        if 0 <= row < len(self.items):
            return RowKind.ITEM
        if row == self.install_row:
            return RowKind.INSTALL
        if self.install_row < row <= self.max_cursor:
            return RowKind.SCRIPT
        return RowKind.NONE

    def script_at(self, row: int) -> ScriptEntry:
        return self.scripts[row - self.install_row - 1]

    def move_up(self) -> None:
        self.cursor = max(self.cursor - 1, 0)

    def move_down(self) -> None:
        self.cursor = min(self.cursor + 1, self.max_cursor)

    def toggle(self, index: int) -> bool:
        """Flip *index* in the selection; installed items are left alone.

        Returns True if the selection changed.
        """
        if self.items[index].installed:
            return False
        if index in self.selected:
            self.selected.remove(index)
        else:
            self.selected.add(index)
        return True

    def is_selected(self, index: int) -> bool:
        return index in self.selected

    def selected_refs(self) -> list[str]:
        return [self.items[i].ref for i in sorted(self.selected)]


InstallAction = Callable[[set[int], Sequence[InstallableItem]], bool]
ScriptAction = Callable[[ScriptEntry], object]
QuitAction = Callable[[], object]


class ChecklistController:
    """Applies events to a Checklist and dispatches the side effects.

    Args:
        checklist: State to drive.
        install: Called with the selection and items on the install row.
        run_script: Called with the script under the cursor.
        on_quit: Called once when the session ends.

    After quitting, ``quit_result`` holds whatever on_quit returned.
    """

    def __init__(
        self,
        checklist: Checklist,
        *,
        install: InstallAction,
        run_script: ScriptAction,
        on_quit: QuitAction,
    ) -> None:
        self.checklist = checklist
        self._install = install
        self._run_script = run_script
        self._on_quit = on_quit
        self.finished = False
        self.quit_result: object = None

    def handle(self, event: Event) -> bool:
        """Apply *event*. Returns False once the session has ended."""
        if self.finished:
            return False

        cl = self.checklist
        if event is Event.UP:
            cl.move_up()
        elif event is Event.DOWN:
            cl.move_down()
        elif event is Event.ACTIVATE:
            self._activate()
        elif event is Event.QUIT:
            logger.debug("Quit requested")
            self.quit_result = self._on_quit()
            self.finished = True
            return False

        return True

    def _activate(self) -> None:
        cl = self.checklist
        row = cl.cursor
        kind = cl.row_kind(row)

        if kind is RowKind.ITEM:
            if not cl.toggle(row):
                logger.debug("Row %d is already installed — ignoring", row)
        elif kind is RowKind.INSTALL:
            # The session continues after an install; selection is kept.
            self._install(cl.selected, cl.items)
        elif kind is RowKind.SCRIPT:
            self._run_script(cl.script_at(row))
