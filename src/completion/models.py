# src/completion/models.py
"""
Data models for the autocomplete subsystem.

These classes carry no business logic; they give the extractor, matcher,
geometry resolver and navigation state machine one shared vocabulary:

- Category: display category of a suggestion.
- CatalogEntry / Candidate: a built-in symbol and a suggestion row.
- Point / Anchor: screen coordinates.
- Key: the closed set of keys the popup reacts to.
- NavigationState: snapshot of the popup (open flag, selection, anchor).
- TextEdit / KeyResult: what the controller hands back to the editor.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class Category(str, Enum):
    FUNCTION = "function"
    KEYWORD = "keyword"
    VARIABLE = "variable"


class Key(str, Enum):
    """Keys the popup may consume. Values follow DOM ``KeyboardEvent.key`` names."""
    ENTER = "Enter"
    TAB = "Tab"
    ESCAPE = "Escape"
    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"
    OTHER = "Other"

    @classmethod
    def parse(cls, name: Optional[str]) -> "Key":
        """Map a raw key name to a Key; anything unknown is OTHER."""
        if not name:
            return cls.OTHER
        try:
            return cls(name)
        except ValueError:
            return _KEY_ALIASES.get(name.lower(), cls.OTHER)


_KEY_ALIASES = {
    "return": Key.ENTER,
    "enter": Key.ENTER,
    "tab": Key.TAB,
    "escape": Key.ESCAPE,
    "esc": Key.ESCAPE,
    "up": Key.ARROW_UP,
    "arrowup": Key.ARROW_UP,
    "down": Key.ARROW_DOWN,
    "arrowdown": Key.ARROW_DOWN,
}


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """
    One built-in symbol of the scripting language.

    Attributes
    ----------
    text : str
        The symbol as it is inserted (unique across the catalog).
    category : Category
        Function, keyword or variable-like.
    description : Optional[str]
        Short human-readable hint shown next to the symbol.
    """
    text: str
    category: Category
    description: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Candidate:
    """A suggestion shown in the popup, sourced from the catalog or the document."""
    text: str
    category: Category
    description: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> "Candidate":
        return cls(entry.text, entry.category, entry.description)


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float


# The popup anchor is just a point; the alias keeps call sites readable.
Anchor = Point


@dataclass(frozen=True, slots=True)
class NavigationState:
    """
    Snapshot of the suggestion popup.

    When ``is_open`` is True, ``candidates`` is non-empty and
    ``0 <= selected_index < len(candidates)``. When closed, the index and
    anchor are stale and must not be relied upon.
    """
    is_open: bool = False
    selected_index: int = 0
    anchor: Anchor = field(default_factory=lambda: Point(0.0, 0.0))
    candidates: Tuple[Candidate, ...] = ()

    @property
    def selected(self) -> Optional[Candidate]:
        if not self.is_open:
            return None
        return self.candidates[self.selected_index]


CLOSED = NavigationState()


@dataclass(frozen=True, slots=True)
class TextEdit:
    """
    Replacement produced by accepting a suggestion.

    ``text`` is the whole new document; ``start`` is where the accepted
    word begins and ``cursor`` is ``start + len(inserted)``.
    """
    text: str
    cursor: int
    start: int
    inserted: str


@dataclass(frozen=True, slots=True)
class KeyResult:
    """Answer to a forwarded key or pointer event."""
    consumed: bool
    state: NavigationState
    accepted: Optional[str] = None
    edit: Optional[TextEdit] = None
