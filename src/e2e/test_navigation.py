# src/e2e/test_navigation.py

import pytest

from completion.models import Candidate, Category, Key, Point
from completion.navigation import NavigationStateMachine

A, B, C = (Candidate(t, Category.KEYWORD) for t in ("A", "B", "C"))


@pytest.fixture
def nav():
    m = NavigationStateMachine()
    m.show([A, B, C], Point(1, 2))
    return m


def test_show_opens_at_first_row(nav):
    s = nav.state
    assert s.is_open and s.selected_index == 0 and s.candidates == (A, B, C)


def test_show_with_no_candidates_closes(nav):
    assert nav.show([], Point(0, 0)).is_open is False


def test_arrow_up_wraps_to_last(nav):
    assert nav.handle_key(Key.ARROW_UP) == (True, None)
    assert nav.state.selected_index == 2


def test_arrow_down_wraps_to_first(nav):
    nav.handle_key(Key.ARROW_UP)
    nav.handle_key(Key.ARROW_DOWN)
    assert nav.state.selected_index == 0


def test_enter_accepts_highlighted_row(nav):
    nav.handle_key(Key.ARROW_DOWN)
    assert nav.handle_key(Key.ENTER) == (True, "B")
    assert not nav.is_open


def test_tab_accepts_too(nav):
    assert nav.handle_key(Key.TAB) == (True, "A")


def test_escape_closes_without_selection(nav):
    assert nav.handle_key(Key.ESCAPE) == (True, None)
    assert not nav.is_open


def test_other_keys_are_not_consumed(nav):
    assert nav.handle_key(Key.OTHER) == (False, None)
    assert nav.is_open


def test_closed_machine_consumes_nothing():
    m = NavigationStateMachine()
    for key in Key:
        assert m.handle_key(key) == (False, None)


def test_pointer_select_ignores_highlight(nav):
    assert nav.pointer_select(2) == "C"
    assert not nav.is_open


def test_pointer_select_out_of_range_is_ignored(nav):
    assert nav.pointer_select(7) is None
    assert nav.is_open


def test_pointer_outside_closes(nav):
    assert nav.pointer_outside() is True
    assert nav.pointer_outside() is False


def test_move_anchor_keeps_selection(nav):
    nav.handle_key(Key.ARROW_DOWN)
    nav.move_anchor(Point(9, 9))
    assert nav.state.anchor == Point(9, 9)
    assert nav.state.selected_index == 1


@pytest.mark.parametrize("raw,key", [
    ("Enter", Key.ENTER), ("Return", Key.ENTER), ("Tab", Key.TAB),
    ("Escape", Key.ESCAPE), ("Up", Key.ARROW_UP), ("ArrowDown", Key.ARROW_DOWN),
    ("a", Key.OTHER), ("", Key.OTHER), (None, Key.OTHER),
])
def test_key_parse(raw, key):
    assert Key.parse(raw) is key
