from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Sequence

from .models import Anchor, Candidate, Category, NavigationState

CATEGORY_GLYPHS = {
    Category.FUNCTION: "ƒ",
    Category.KEYWORD: "⚡",
    Category.VARIABLE: "x",
}
DEFAULT_GLYPH = "•"


@dataclass(frozen=True, slots=True)
class PopupRow:
    index: int
    glyph: str
    label: str
    text: str
    description: Optional[str]
    selected: bool


def build_rows(candidates: Sequence[Candidate], selected_index: int) -> List[PopupRow]:
    """Display rows for the popup; an empty list renders nothing."""
    return [
        PopupRow(
            index=i,
            glyph=CATEGORY_GLYPHS.get(c.category, DEFAULT_GLYPH),
            label=c.category.value,
            text=c.text,
            description=c.description,
            selected=(i == selected_index),
        )
        for i, c in enumerate(candidates)
    ]


class PopupView(Protocol):
    """Toolkit side of the popup (a Tk toplevel, an HTML list...)."""
    def render(self, rows: Sequence[PopupRow], anchor: Anchor) -> None: ...
    def hide(self) -> None: ...


class SuggestionPopup:
    """
    Binds a PopupView to the two callbacks of the popup contract.

    ``present`` draws whatever state it is given; row clicks report the
    row text through ``on_select`` and pointer events outside the drawn
    box go to ``on_close``. Hit-testing stays with the toolkit.
    """

    def __init__(
        self,
        view: PopupView,
        on_select: Callable[[str], None],
        on_close: Callable[[], None],
    ) -> None:
        self._view = view
        self._on_select = on_select
        self._on_close = on_close
        self._rows: List[PopupRow] = []

    @property
    def rows(self) -> List[PopupRow]:
        return list(self._rows)

    def present(self, state: NavigationState) -> None:
        rows = build_rows(state.candidates, state.selected_index) if state.is_open else []
        self._rows = rows
        if rows:
            self._view.render(rows, state.anchor)
        else:
            self._view.hide()

    def click(self, index: int) -> None:
        if 0 <= index < len(self._rows):
            self._on_select(self._rows[index].text)

    def pointer_outside(self) -> None:
        if self._rows:
            self._on_close()
