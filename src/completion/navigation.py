from __future__ import annotations
import logging
from typing import Optional, Sequence

from .models import Anchor, CLOSED, Candidate, Key, NavigationState

log = logging.getLogger(__name__)


class NavigationStateMachine:
    """
    Open/closed state of the suggestion popup and its highlighted row.

    States are Closed and Open(candidates, selected_index). Arrow keys
    wrap around both ends; Enter/Tab accept, Escape dismisses. Every
    method returns plain values and never touches the document.
    """

    def __init__(self) -> None:
        self._state: NavigationState = CLOSED

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state.is_open

    # ------------- transitions -------------

    def show(self, candidates: Sequence[Candidate], anchor: Anchor) -> NavigationState:
        """Open on a fresh candidate list (selection back to 0), or close if it is empty."""
        if not candidates:
            return self.close()
        self._state = NavigationState(True, 0, anchor, tuple(candidates))
        log.debug("popup open: %d candidates", len(candidates))
        return self._state

    def close(self) -> NavigationState:
        if self._state.is_open:
            log.debug("popup closed")
            # keep the stale index/anchor, only the flag matters once closed
            self._state = NavigationState(False, self._state.selected_index, self._state.anchor, ())
        return self._state

    def move_anchor(self, anchor: Anchor) -> NavigationState:
        if self._state.is_open:
            s = self._state
            self._state = NavigationState(True, s.selected_index, anchor, s.candidates)
        return self._state

    def handle_key(self, key: Key) -> tuple[bool, Optional[str]]:
        """
        Feed one key. Returns (consumed, accepted_text).

        While closed nothing is consumed; the key belongs to the editor.
        """
        if not self._state.is_open:
            return False, None
        s = self._state
        count = len(s.candidates)
        if key is Key.ARROW_DOWN:
            self._select((s.selected_index + 1) % count)
            return True, None
        if key is Key.ARROW_UP:
            self._select((s.selected_index - 1 + count) % count)
            return True, None
        if key in (Key.ENTER, Key.TAB):
            text = s.candidates[s.selected_index].text
            self.close()
            return True, text
        if key is Key.ESCAPE:
            self.close()
            return True, None
        return False, None

    def pointer_outside(self) -> bool:
        """Dismiss on a pointer event outside the popup; True if it was open."""
        was_open = self._state.is_open
        self.close()
        return was_open

    def pointer_select(self, index: int) -> Optional[str]:
        """Accept the clicked row regardless of the highlighted one."""
        s = self._state
        if not s.is_open or not 0 <= index < len(s.candidates):
            log.debug("ignored pointer select %r", index)
            return None
        text = s.candidates[index].text
        self.close()
        return text

    def _select(self, index: int) -> None:
        s = self._state
        self._state = NavigationState(True, index, s.anchor, s.candidates)
