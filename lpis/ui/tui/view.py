"""
Checklist rendering.

Item boxes: ``[i]`` already installed, ``[x]`` selected, ``[ ]`` neither.
The row under the cursor is marked with ``>``.
"""

from __future__ import annotations

import click

from lpis.core.engine.checklist import Checklist

CURSOR = ">"
NO_CURSOR = " "


def _cursor(checklist: Checklist, row: int) -> str:
    return CURSOR if checklist.cursor == row else NO_CURSOR


def _box(checklist: Checklist, index: int) -> str:
    if checklist.items[index].installed:
        return "i"
    if checklist.is_selected(index):
        return "x"
    return " "


def _line(checklist: Checklist, row: int, text: str) -> str:
    line = f"{_cursor(checklist, row)} {text}"
    if checklist.cursor == row:
        return click.style(line, fg="cyan", bold=True)
    return line


def render(checklist: Checklist) -> str:
    """Render the full checklist screen as a string."""
    lines = [click.style("Flatpaks:", bold=True), ""]

    for i, item in enumerate(checklist.items):
        lines.append(_line(checklist, i, f"[{_box(checklist, i)}] {item.name}"))

    lines.append("")
    lines.append(_line(checklist, checklist.install_row, "Install missing flatpaks"))
    lines.extend(["", ""])

    if checklist.scripts:
        lines.extend([click.style("Scripts:", bold=True), ""])
        for j, script in enumerate(checklist.scripts):
            lines.append(_line(checklist, checklist.install_row + 1 + j, script.name))

    lines.append("")
    lines.append(click.style("Press q to quit.", dim=True))
    return "\n".join(lines)
