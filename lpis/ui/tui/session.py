"""
Checklist session — the blocking read, dispatch, render loop.

One thread, no timers: each key is handled to completion (including any
terminal window it opens) before the screen is redrawn.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import click

from lpis.core.engine.checklist import ChecklistController, Event
from lpis.ui.tui.keys import read_key
from lpis.ui.tui.view import render

logger = logging.getLogger(__name__)


def _draw(controller: ChecklistController) -> None:
    click.clear()
    click.echo(render(controller.checklist))


def run_session(
    controller: ChecklistController,
    reader: Callable[[], Event] | None = None,
) -> None:
    """Drive *controller* from keypresses until it quits.

    Interrupts (while waiting for a key or while an action runs) and end
    of input count as quitting, so the run marker is still saved.
    """
    reader = reader or read_key

    while True:
        _draw(controller)
        try:
            event = reader()
        except (KeyboardInterrupt, EOFError):
            logger.debug("Input interrupted, quitting")
            event = Event.QUIT

        try:
            running = controller.handle(event)
        except KeyboardInterrupt:
            # ctrl+c while an action's terminal was open
            logger.debug("Interrupted during an action, quitting")
            running = controller.handle(Event.QUIT)

        if not running:
            break
