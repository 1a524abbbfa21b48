from __future__ import annotations
from typing import Iterable, List, Sequence

from .catalog import KEYWORD_CATALOG
from .config import CompletionOptions, DEFAULT_OPTIONS, USER_VARIABLE_DESCRIPTION
from .models import Candidate, CatalogEntry, Category
from .normalize import ascii_fold


def match(
    partial_word: str,
    identifiers: Iterable[str],
    *,
    catalog: Sequence[CatalogEntry] = KEYWORD_CATALOG,
    options: CompletionOptions = DEFAULT_OPTIONS,
) -> List[Candidate]:
    """
    Rank suggestions for ``partial_word``.

    Catalog entries whose text starts with the word (ASCII
    case-insensitive) come first, in catalog order, then matching
    identifiers in the order given. The merged list is cut to
    ``options.max_candidates``. Words shorter than
    ``options.min_prefix_length`` (including "") give no suggestions.
    """
    if len(partial_word) < options.min_prefix_length:
        return []
    limit = options.max_candidates
    needle = ascii_fold(partial_word)

    out: List[Candidate] = []
    for entry in catalog:
        if len(out) >= limit:
            return out
        if ascii_fold(entry.text).startswith(needle):
            out.append(Candidate.from_entry(entry))

    for name in identifiers:
        if len(out) >= limit:
            break
        if ascii_fold(name).startswith(needle):
            out.append(Candidate(name, Category.VARIABLE, USER_VARIABLE_DESCRIPTION))
    return out
