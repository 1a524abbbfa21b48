# completion/engine.py
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple, Union

from .catalog import KEYWORD_CATALOG
from .config import CompletionOptions, DEFAULT_OPTIONS
from .geometry import resolve_anchor
from .identifiers import extract_identifiers
from .models import (
    Anchor, CatalogEntry, Key, KeyResult, NavigationState, Point, TextEdit,
)
from .navigation import NavigationStateMachine
from .normalize import clamp_offset, word_before_cursor
from .search import match

log = logging.getLogger(__name__)

Listener = Callable[[NavigationState], None]


class AutocompleteController:
    """
    Orchestration layer between an editing surface and the pure pieces:
      - identifiers.extract_identifiers: declared names, recomputed per edit,
      - search.match: ranked candidates for the word under the caret,
      - geometry.resolve_anchor: where the popup goes,
      - navigation.NavigationStateMachine: open/closed + highlighted row.

    Public API (used by the CLI, Flask and the desktop app):
      * on_document_changed(text, cursor): re-derive everything, return state
      * on_cursor_moved(offset): re-anchor an open popup
      * on_key(key): popup keys; Enter/Tab return the spliced document
      * on_pointer_outside() / on_pointer_select(index): pointer events
      * accept(text): splice a suggestion over the word under the caret
      * add_listener(fn): fn(state) is called after every transition

    Every call runs to completion before returning; there is no
    background work. The controller only ever replaces its document
    snapshot, it never edits the caller's text in place.
    """

    # ------------- lifecycle -------------

    def __init__(
        self,
        *,
        options: Optional[CompletionOptions] = None,
        catalog: Sequence[CatalogEntry] = KEYWORD_CATALOG,
        surface_origin: Point = Point(0.0, 0.0),
    ) -> None:
        self.options = options or DEFAULT_OPTIONS
        self.catalog = catalog
        self.surface_origin = surface_origin
        self._document: str = ""
        self._cursor: int = 0
        self._identifiers: Tuple[str, ...] = ()
        self._nav = NavigationStateMachine()
        self._listeners: List[Listener] = []
        log.debug("controller created (max_candidates=%d)", self.options.max_candidates)

    # ------------- read-only views -------------

    @property
    def document(self) -> str:
        return self._document

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def identifiers(self) -> Tuple[str, ...]:
        return self._identifiers

    @property
    def state(self) -> NavigationState:
        return self._nav.state

    def word_under_cursor(self) -> Tuple[str, int]:
        return word_before_cursor(self._document, self._cursor)

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    # ------------- editing surface events -------------

    def on_document_changed(self, new_text: str, cursor_offset: Optional[int] = None) -> NavigationState:
        """
        Re-derive identifiers, word, candidates and state after an edit.

        ``cursor_offset`` defaults to the end of the text. Re-sending the
        exact snapshot the controller already holds (e.g. the editor
        echoing an accepted suggestion back) changes nothing.
        """
        cursor = clamp_offset(new_text, len(new_text) if cursor_offset is None else cursor_offset)
        if new_text == self._document and cursor == self._cursor:
            return self._nav.state

        self._document = new_text
        self._cursor = cursor
        self._identifiers = extract_identifiers(new_text)

        word, _ = self.word_under_cursor()
        candidates = match(word, self._identifiers, catalog=self.catalog, options=self.options)
        if candidates:
            self._nav.show(candidates, self._anchor())
        else:
            self._nav.close()
        log.debug("document changed: word=%r candidates=%d", word, len(candidates))
        return self._notify()

    def on_cursor_moved(self, offset: int) -> NavigationState:
        self._cursor = clamp_offset(self._document, offset)
        if self._nav.is_open:
            self._nav.move_anchor(self._anchor())
        return self._notify()

    def on_surface_moved(self, origin: Point) -> NavigationState:
        """The text surface moved on screen (window dragged, layout changed)."""
        self.surface_origin = origin
        if self._nav.is_open:
            self._nav.move_anchor(self._anchor())
        return self._notify()

    # ------------- popup events -------------

    def on_key(self, key: Union[Key, str]) -> KeyResult:
        """
        Offer a key to the popup. ``consumed=False`` means the editor must
        handle it as ordinary input.
        """
        key = key if isinstance(key, Key) else Key.parse(key)
        consumed, accepted = self._nav.handle_key(key)
        if accepted is not None:
            return self._apply(accepted)
        if consumed:
            return KeyResult(True, self._notify())
        return KeyResult(False, self._nav.state)

    def on_pointer_outside(self) -> NavigationState:
        if self._nav.pointer_outside():
            return self._notify()
        return self._nav.state

    def on_pointer_select(self, index: int) -> KeyResult:
        accepted = self._nav.pointer_select(index)
        if accepted is None:
            return KeyResult(False, self._nav.state)
        return self._apply(accepted)

    def accept(self, text: str) -> KeyResult:
        """Close the popup and splice ``text`` over the word under the caret."""
        self._nav.close()
        return self._apply(text)

    # ------------- internals -------------

    def _apply(self, accepted: str) -> KeyResult:
        # popup is already closed; replace the document before moving the caret
        word, start = self.word_under_cursor()
        end = start + len(word)
        new_text = self._document[:start] + accepted + self._document[end:]
        edit = TextEdit(text=new_text, cursor=start + len(accepted), start=start, inserted=accepted)
        self._document = edit.text
        self._identifiers = extract_identifiers(edit.text)
        self._cursor = edit.cursor
        log.debug("accepted %r at %d", accepted, start)
        return KeyResult(True, self._notify(), accepted=accepted, edit=edit)

    def _anchor(self) -> Anchor:
        o = self.options
        return resolve_anchor(
            self._document, self._cursor, self.surface_origin,
            o.char_width_px, o.line_height_px, o.anchor_padding_px,
        )

    def _notify(self) -> NavigationState:
        state = self._nav.state
        for listener in list(self._listeners):
            listener(state)
        return state
