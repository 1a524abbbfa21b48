# src/completion/geometry.py
"""
Caret geometry: where the suggestion popup is anchored.

The text surface is treated as a fixed-width grid. Every character is
``char_width`` wide and every line ``line_height`` tall, so the anchor is
an approximation: proportional fonts, tabs, wide glyphs, soft wrapping and
scrolling are not measured. Callers that know the real caret box (a Tk
``bbox``, a DOM range) may use it instead; this resolver only needs the
text and the offset.
"""

from __future__ import annotations
from typing import Tuple

from .models import Anchor, Point
from .normalize import clamp_offset, split_lines


def line_and_column(document: str, cursor_offset: int) -> Tuple[int, int]:
    """Zero-based (line, column) of the caret; the offset is clamped first."""
    offset = clamp_offset(document, cursor_offset)
    segments = split_lines(document[:offset])
    return len(segments) - 1, len(segments[-1])


def resolve_anchor(
    document: str,
    cursor_offset: int,
    surface_origin: Point,
    char_width: float,
    line_height: float,
    padding: float,
) -> Anchor:
    """
    Screen point just below the caret.

    x = origin.x + column * char_width + padding
    y = origin.y + (line + 1) * line_height + padding
    """
    line, column = line_and_column(document, cursor_offset)
    return Point(
        surface_origin.x + column * char_width + padding,
        surface_origin.y + (line + 1) * line_height + padding,
    )
