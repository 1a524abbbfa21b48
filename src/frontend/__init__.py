"""Flask web editor on top of completion.AutocompleteController (one controller per tab)."""
from __future__ import annotations
from .web import app, main

__all__ = ["app", "main"]
