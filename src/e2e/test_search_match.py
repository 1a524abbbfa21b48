# src/e2e/test_search_match.py

import pytest

from completion.config import CompletionOptions
from completion.models import Candidate, CatalogEntry, Category
from completion.search import match


def test_empty_word_gives_nothing():
    assert match("", ("x", "y")) == []


def test_pri_matches_print_only():
    rows = match("pri", ())
    assert rows == [Candidate("print", Category.FUNCTION, "Print values to the console")]


def test_identifier_overflow_is_capped_at_eight():
    idents = tuple(f"x{i}" for i in range(1, 21))
    rows = match("x", idents)
    assert len(rows) == 8
    assert all(r.category is Category.VARIABLE for r in rows)
    assert all(r.description == "user defined variable" for r in rows)
    assert [r.text for r in rows] == [f"x{i}" for i in range(1, 9)]


@pytest.mark.parametrize("word", ["s", "ST", "str", "t", "Ta", "m", "lo", "x", "zz"])
def test_every_candidate_starts_with_the_word_case_insensitively(word):
    idents = ("Stack", "total", "xPos", "MAX", "lower")
    for c in match(word, idents):
        assert c.text.lower().startswith(word.lower())


def test_catalog_comes_before_identifiers():
    rows = match("pa", ("page", "parent"))
    texts = [r.text for r in rows]
    assert texts == ["pairs", "page", "parent"]


def test_catalog_matches_are_not_pushed_out_by_identifiers():
    catalog = [CatalogEntry(f"k{i}", Category.KEYWORD) for i in range(6)]
    rows = match("k", [f"kv{i}" for i in range(10)], catalog=catalog)
    assert [r.text for r in rows[:6]] == [f"k{i}" for i in range(6)]
    assert len(rows) == 8


def test_local_named_like_builtin_gets_its_own_row():
    rows = match("print", ("print", "printer"))
    assert [r.text for r in rows] == ["print", "print", "printer"]
    assert [r.category for r in rows] == [Category.FUNCTION, Category.VARIABLE, Category.VARIABLE]
    assert rows[1].description == "user defined variable"


def test_matching_is_ascii_case_insensitive():
    rows = match("LOC", ())
    assert rows and rows[0].text == "local"


def test_custom_cap_and_min_prefix():
    opts = CompletionOptions(max_candidates=2, min_prefix_length=2)
    assert match("s", ("sa", "sb"), options=opts) == []
    assert len(match("st", ("sta", "stb"), options=opts)) == 2
