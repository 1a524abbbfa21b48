"""
Inline autocomplete for a Lua editing surface.

The package splits the feature into small pure pieces and one controller:

- identifiers: names declared with ``local`` / ``function`` in the text
- catalog: the built-in Lua vocabulary
- search: ranked, capped candidates for the word under the caret
- geometry: popup anchor from the caret's line and column
- navigation: popup open/closed state and keyboard selection
- popup: display rows and the view contract
- engine: AutocompleteController, the API an editor talks to

Example Usage:
    from completion import AutocompleteController, Key

    ctl = AutocompleteController()
    state = ctl.on_document_changed("loc", 3)
    result = ctl.on_key(Key.TAB)
    print(result.edit.text, result.edit.cursor)   # local 5
"""

# src/completion/__init__.py
from .config import CompletionOptions, DEFAULT_OPTIONS
from .catalog import KEYWORD_CATALOG
from .engine import AutocompleteController
from .geometry import resolve_anchor
from .identifiers import extract_identifiers
from .models import (
    Anchor, Candidate, CatalogEntry, Category, Key, KeyResult,
    NavigationState, Point, TextEdit,
)
from .navigation import NavigationStateMachine
from .popup import PopupRow, SuggestionPopup, build_rows
from .search import match

__version__ = "1.0.0"
__all__ = [
    "AutocompleteController",
    "Anchor",
    "Candidate",
    "CatalogEntry",
    "Category",
    "CompletionOptions",
    "DEFAULT_OPTIONS",
    "KEYWORD_CATALOG",
    "Key",
    "KeyResult",
    "NavigationState",
    "NavigationStateMachine",
    "Point",
    "PopupRow",
    "SuggestionPopup",
    "TextEdit",
    "build_rows",
    "extract_identifiers",
    "match",
    "resolve_anchor",
]
