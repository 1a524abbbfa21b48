from __future__ import annotations
import re
from typing import Tuple

from .catalog import RESERVED_WORDS

_NAME = r"[A-Za-z_][A-Za-z0-9_]*"

# /* ~~~ one pass over the document: "local a, b" lists and "function f" ~~~ */
# "local function f" is left to the function branch via the lookahead.
_DECLARATION = re.compile(
    rf"\blocal\s+(?!function\b)(?P<names>{_NAME}(?:\s*,\s*{_NAME})*)"
    rf"|\bfunction\s+(?P<func>{_NAME})"
)
_LIST_SEP = re.compile(r"\s*,\s*")


def extract_identifiers(document: str) -> Tuple[str, ...]:
    """
    Return the names declared in ``document``, deduplicated.

    Recognised declarations are ``local <name>[, <name>...]`` and
    ``function <name>``. There is no scoping: a name declared anywhere is
    reported. Order is first occurrence in the document, which is the
    enumeration order the matcher relies on.
    """
    found: dict[str, None] = {}
    for m in _DECLARATION.finditer(document):
        names = m.group("names")
        parts = _LIST_SEP.split(names) if names else [m.group("func")]
        for name in parts:
            if name not in RESERVED_WORDS:
                found.setdefault(name, None)
    return tuple(found)
