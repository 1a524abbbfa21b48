# src/e2e/test_popup_rows.py

from completion.models import Candidate, Category, NavigationState, Point
from completion.popup import SuggestionPopup, build_rows


class FakeView:
    def __init__(self):
        self.calls = []

    def render(self, rows, anchor):
        self.calls.append(("render", [r.text for r in rows], anchor))

    def hide(self):
        self.calls.append(("hide",))


CANDS = (
    Candidate("print", Category.FUNCTION, "Print values to the console"),
    Candidate("pairs", Category.FUNCTION),
    Candidate("player", Category.VARIABLE, "user defined variable"),
)


def test_rows_carry_glyph_label_and_selection():
    rows = build_rows(CANDS, 1)
    assert [r.glyph for r in rows] == ["ƒ", "ƒ", "x"]
    assert [r.label for r in rows] == ["function", "function", "variable"]
    assert [r.selected for r in rows] == [False, True, False]
    assert rows[1].description is None


def test_empty_list_renders_nothing():
    view = FakeView()
    popup = SuggestionPopup(view, on_select=lambda t: None, on_close=lambda: None)
    popup.present(NavigationState(True, 0, Point(0, 0), ()))
    assert view.calls == [("hide",)]


def test_click_reports_row_text_and_outside_reports_close():
    view, selected, closed = FakeView(), [], []
    popup = SuggestionPopup(view, on_select=selected.append, on_close=lambda: closed.append(True))
    popup.present(NavigationState(True, 0, Point(5, 6), CANDS))
    assert view.calls[-1] == ("render", ["print", "pairs", "player"], Point(5, 6))
    popup.click(2)
    popup.click(9)
    popup.pointer_outside()
    assert selected == ["player"]
    assert closed == [True]


def test_outside_pointer_while_hidden_is_silent():
    closed = []
    popup = SuggestionPopup(FakeView(), on_select=lambda t: None, on_close=lambda: closed.append(1))
    popup.pointer_outside()
    assert closed == []
