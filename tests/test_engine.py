"""
Tests for the checklist engine — cursor, selection and action dispatch.
"""

import itertools
from unittest.mock import MagicMock

import pytest

from lpis.core.engine.checklist import Checklist, ChecklistController, Event, RowKind
from lpis.core.models.catalog import InstallableItem, ScriptEntry


def _items(*installed: bool) -> list[InstallableItem]:
    return [
        InstallableItem(name=f"App {i}", ref=f"org.example.App{i}", installed=flag)
        for i, flag in enumerate(installed)
    ]


def _scripts(count: int) -> list[ScriptEntry]:
    return [ScriptEntry(name=f"script {j}", commands=[f"echo {j}"]) for j in range(count)]


def _controller(items, scripts):
    install = MagicMock(return_value=True)
    run_script = MagicMock()
    on_quit = MagicMock()
    ctl = ChecklistController(
        Checklist(items=items, scripts=scripts),
        install=install,
        run_script=run_script,
        on_quit=on_quit,
    )
    return ctl, install, run_script, on_quit


class TestChecklistLayout:
    def test_rows(self):
        cl = Checklist(items=_items(False, False), scripts=_scripts(2))
        assert [cl.row_kind(r) for r in range(5)] == [
            RowKind.ITEM, RowKind.ITEM, RowKind.INSTALL, RowKind.SCRIPT, RowKind.SCRIPT,
        ]
        assert cl.row_kind(5) is RowKind.NONE
        assert cl.row_kind(-1) is RowKind.NONE

    def test_max_cursor_is_last_row(self):
        cl = Checklist(items=_items(False, False), scripts=_scripts(2))
        assert cl.max_cursor == 4
        assert cl.install_row == 2

    def test_no_scripts_max_is_install_row(self):
        cl = Checklist(items=_items(False), scripts=[])
        assert cl.max_cursor == cl.install_row == 1

    def test_initial_state(self):
        cl = Checklist(items=_items(False), scripts=[])
        assert cl.cursor == 0
        assert cl.selected == set()


class TestCursor:
    def test_up_clamps_at_zero(self):
        ctl, *_ = _controller(_items(False), [])
        ctl.handle(Event.UP)
        assert ctl.checklist.cursor == 0

    def test_down_clamps_at_max(self):
        ctl, *_ = _controller(_items(False, False), _scripts(1))
        for _ in range(10):
            ctl.handle(Event.DOWN)
        assert ctl.checklist.cursor == 3

    @pytest.mark.parametrize("n_items,n_scripts", [(0, 0), (1, 0), (2, 3), (5, 1)])
    def test_stays_in_bounds(self, n_items, n_scripts):
        ctl, *_ = _controller(_items(*([False] * n_items)), _scripts(n_scripts))
        upper = n_items + n_scripts
        for seq in itertools.product([Event.UP, Event.DOWN], repeat=6):
            ctl.checklist.cursor = 0
            for event in seq:
                ctl.handle(event)
                assert 0 <= ctl.checklist.cursor <= upper

    def test_unknown_event_is_noop(self):
        ctl, install, run_script, on_quit = _controller(_items(False), _scripts(1))
        ctl.handle(Event.DOWN)
        assert ctl.handle(Event.OTHER) is True
        assert ctl.checklist.cursor == 1
        assert ctl.checklist.selected == set()
        install.assert_not_called()
        run_script.assert_not_called()
        on_quit.assert_not_called()


class TestToggle:
    def test_toggle_is_its_own_inverse(self):
        ctl, *_ = _controller(_items(False, False), [])
        ctl.handle(Event.DOWN)
        ctl.handle(Event.ACTIVATE)
        assert ctl.checklist.selected == {1}
        ctl.handle(Event.ACTIVATE)
        assert ctl.checklist.selected == set()

    def test_toggle_keeps_other_members(self):
        ctl, *_ = _controller(_items(False, False), [])
        ctl.handle(Event.ACTIVATE)
        ctl.handle(Event.DOWN)
        ctl.handle(Event.ACTIVATE)
        ctl.handle(Event.ACTIVATE)
        assert ctl.checklist.selected == {0}

    def test_installed_item_not_toggleable(self):
        ctl, *_ = _controller(_items(True, False), [])
        ctl.checklist.selected.add(1)
        ctl.handle(Event.ACTIVATE)
        assert ctl.checklist.selected == {1}

    def test_toggle_reports_change(self):
        cl = Checklist(items=_items(True, False), scripts=[])
        assert cl.toggle(0) is False
        assert cl.toggle(1) is True


class TestDispatch:
    def test_install_row_calls_install_and_continues(self):
        ctl, install, _, on_quit = _controller(_items(False), [])
        ctl.handle(Event.ACTIVATE)
        ctl.handle(Event.DOWN)
        assert ctl.handle(Event.ACTIVATE) is True
        install.assert_called_once()
        selected, items = install.call_args.args
        assert selected == {0}
        assert items is ctl.checklist.items
        on_quit.assert_not_called()
        # Selection survives an install
        assert ctl.checklist.selected == {0}

    def test_install_row_with_empty_selection_still_delegates(self):
        ctl, install, *_ = _controller(_items(True), [])
        ctl.handle(Event.DOWN)
        ctl.handle(Event.ACTIVATE)
        install.assert_called_once()
        assert install.call_args.args[0] == set()

    def test_script_row_runs_that_script(self):
        scripts = _scripts(3)
        ctl, install, run_script, _ = _controller(_items(False), scripts)
        for _ in range(3):
            ctl.handle(Event.DOWN)
        ctl.handle(Event.ACTIVATE)
        run_script.assert_called_once_with(scripts[1])
        install.assert_not_called()

    def test_activate_with_no_rows_is_noop(self):
        ctl, install, run_script, _ = _controller([], [])
        # Cursor 0 is the install row when there are no items
        ctl.handle(Event.ACTIVATE)
        install.assert_called_once()
        run_script.assert_not_called()

    def test_quit_saves_once_and_ends(self):
        ctl, _, _, on_quit = _controller(_items(False), [])
        assert ctl.handle(Event.QUIT) is False
        assert ctl.finished
        assert ctl.handle(Event.QUIT) is False
        on_quit.assert_called_once()

    def test_quit_keeps_save_outcome(self):
        ctl, _, _, on_quit = _controller(_items(False), [])
        on_quit.return_value = False
        assert ctl.quit_result is None
        ctl.handle(Event.QUIT)
        assert ctl.quit_result is False

    def test_events_after_quit_ignored(self):
        ctl, install, *_ = _controller(_items(False), [])
        ctl.handle(Event.QUIT)
        ctl.handle(Event.DOWN)
        ctl.handle(Event.ACTIVATE)
        assert ctl.checklist.cursor == 0
        install.assert_not_called()


class TestScenarios:
    def test_toggle_then_install(self):
        """A not installed, B installed, no scripts."""
        items = [
            InstallableItem(name="A", ref="org.example.A"),
            InstallableItem(name="B", ref="org.example.B", installed=True),
        ]
        ctl, install, *_ = _controller(items, [])

        for event in (Event.DOWN, Event.ACTIVATE, Event.UP, Event.ACTIVATE):
            ctl.handle(event)
        assert ctl.checklist.selected == {0}

        for event in (Event.DOWN, Event.DOWN):
            ctl.handle(event)
        assert ctl.checklist.cursor == 2
        ctl.handle(Event.ACTIVATE)

        install.assert_called_once()
        assert ctl.checklist.selected_refs() == ["org.example.A"]
