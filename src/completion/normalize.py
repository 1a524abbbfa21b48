from __future__ import annotations
import re
import string
from typing import List, Tuple

_ASCII_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

# Line breaks recognised by the geometry resolver
_LINE_BREAK = re.compile(r"\r\n|\r|\n")

# Characters a dot-qualified word ("string.fo") is made of
_WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_.")

# Longest name ending a dotless segment; search stops at the first letter or "_"
_NAME_TAIL = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")


def ascii_fold(text: str) -> str:
    """Lowercase A-Z only; every other character is left untouched."""
    return text.translate(_ASCII_FOLD)


def starts_with_ci(text: str, prefix: str) -> bool:
    """ASCII case-insensitive starts-with."""
    return ascii_fold(text).startswith(ascii_fold(prefix))


def clamp_offset(text: str, offset: int) -> int:
    """Clamp a caret offset into ``[0, len(text)]``."""
    return max(0, min(int(offset), len(text)))


def split_lines(text: str) -> List[str]:
    """
    Split on any line break, keeping a trailing empty segment.

    Unlike str.splitlines(), "a\\n" gives ["a", ""] so the caret after a
    final newline lands on the next line.
    """
    return _LINE_BREAK.split(text)


def word_before_cursor(text: str, offset: int) -> Tuple[str, int]:
    """
    Return (word, start) for the partial word ending at ``offset``.

    Only the trailing run of word characters and dots is read, so the
    scan stays linear however long the line is. When the caret is not
    right after a word character the word is "" and start equals the
    (clamped) offset.
    """
    offset = clamp_offset(text, offset)
    start = offset
    while start > 0 and text[start - 1] in _WORD_CHARS:
        start -= 1

    parts = text[start:offset].split(".")
    # last part is any run of word characters, earlier parts must be names
    keep = [parts.pop()]
    while parts:
        m = _NAME_TAIL.search(parts.pop())
        if m is None:
            break
        keep.append(m.group(0))
        if m.start() > 0:
            break
    word = ".".join(reversed(keep))
    return word, offset - len(word)
