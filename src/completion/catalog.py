# src/completion/catalog.py
"""
Keyword catalog: the built-in Lua vocabulary offered by the popup.

Order matters, it is the order catalog matches appear in. Entries are
unique by text; a duplicate is a programming error and fails at import.
"""

from __future__ import annotations
from typing import Iterable, Tuple

from .models import CatalogEntry, Category

F, K, V = Category.FUNCTION, Category.KEYWORD, Category.VARIABLE

_ENTRIES: Tuple[Tuple[str, Category, str], ...] = (
    # declarations and control flow
    ("local", K, "Declare a local variable"),
    ("function", K, "Define a function"),
    ("if", K, "Conditional statement"),
    ("then", K, "Start of an if block"),
    ("else", K, "Alternative branch"),
    ("elseif", K, "Chained conditional branch"),
    ("end", K, "Close a block"),
    ("for", K, "Numeric or generic loop"),
    ("while", K, "Loop while a condition holds"),
    ("do", K, "Start of a block"),
    ("repeat", K, "Loop until a condition holds"),
    ("until", K, "End of a repeat loop"),
    ("return", K, "Return from a function"),
    ("break", K, "Leave the innermost loop"),
    ("goto", K, "Jump to a label"),
    ("in", K, "Generic for iterator"),
    ("and", K, "Logical and"),
    ("or", K, "Logical or"),
    ("not", K, "Logical not"),
    # literals
    ("nil", K, "Absence of a value"),
    ("true", K, "Boolean true"),
    ("false", K, "Boolean false"),
    # base library
    ("print", F, "Print values to the console"),
    ("pairs", F, "Iterate over all keys of a table"),
    ("ipairs", F, "Iterate over the array part of a table"),
    ("next", F, "Next key/value pair of a table"),
    ("type", F, "Type name of a value"),
    ("tostring", F, "Convert a value to a string"),
    ("tonumber", F, "Convert a value to a number"),
    ("pcall", F, "Call a function in protected mode"),
    ("error", F, "Raise an error"),
    ("assert", F, "Raise an error if a value is false"),
    ("select", F, "Select varargs by index"),
    ("require", F, "Load a module"),
    ("load", F, "Compile a chunk from a string"),
    ("setmetatable", F, "Set the metatable of a table"),
    ("getmetatable", F, "Get the metatable of a value"),
    ("rawget", F, "Read a table field without metamethods"),
    ("rawset", F, "Write a table field without metamethods"),
    ("rawequal", F, "Compare without metamethods"),
    ("unpack", F, "Return the elements of a table"),
    # library tables
    ("string", V, "String library"),
    ("table", V, "Table library"),
    ("math", V, "Math library"),
    ("os", V, "Operating system library"),
    ("_G", V, "Global environment table"),
    ("_VERSION", V, "Interpreter version string"),
    # string library
    ("string.format", F, "Format values into a string"),
    ("string.sub", F, "Substring by position"),
    ("string.gsub", F, "Global pattern substitution"),
    ("string.find", F, "Find a pattern in a string"),
    ("string.match", F, "Match a pattern and return captures"),
    ("string.gmatch", F, "Iterate over pattern matches"),
    ("string.len", F, "Length of a string"),
    ("string.lower", F, "Lowercase copy of a string"),
    ("string.upper", F, "Uppercase copy of a string"),
    ("string.rep", F, "Repeat a string"),
    ("string.reverse", F, "Reverse a string"),
    ("string.byte", F, "Character codes of a string"),
    ("string.char", F, "String from character codes"),
    # table library
    ("table.insert", F, "Insert an element into a list"),
    ("table.remove", F, "Remove an element from a list"),
    ("table.concat", F, "Join list elements into a string"),
    ("table.sort", F, "Sort a list in place"),
    ("table.unpack", F, "Return the elements of a list"),
    # math library
    ("math.floor", F, "Round down"),
    ("math.ceil", F, "Round up"),
    ("math.abs", F, "Absolute value"),
    ("math.max", F, "Largest argument"),
    ("math.min", F, "Smallest argument"),
    ("math.sqrt", F, "Square root"),
    ("math.random", F, "Pseudo-random number"),
    ("math.randomseed", F, "Seed the random generator"),
    ("math.huge", V, "Positive infinity"),
    ("math.pi", V, "The value of pi"),
    # os library
    ("os.time", F, "Current time in seconds"),
    ("os.clock", F, "CPU time used by the program"),
    ("os.date", F, "Formatted date string"),
)


def build_catalog(rows: Iterable[Tuple[str, Category, str]]) -> Tuple[CatalogEntry, ...]:
    seen: set[str] = set()
    out = []
    for text, category, description in rows:
        if text in seen:
            raise ValueError(f"duplicate catalog entry: {text!r}")
        seen.add(text)
        out.append(CatalogEntry(text, category, description))
    return tuple(out)


KEYWORD_CATALOG: Tuple[CatalogEntry, ...] = build_catalog(_ENTRIES)

# Reserved words are never harvested as identifiers
RESERVED_WORDS = frozenset(
    e.text for e in KEYWORD_CATALOG if e.category is Category.KEYWORD
)
