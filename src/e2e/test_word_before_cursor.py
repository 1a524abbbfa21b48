import time

import pytest

from completion.normalize import word_before_cursor


@pytest.mark.e2e
@pytest.mark.parametrize("text, offset, expected", [
    ("pri", 3, ("pri", 0)),
    ("x = pri", 7, ("pri", 4)),
    ("string.fo", 9, ("string.fo", 0)),
    ("a.b.c", 5, ("a.b.c", 0)),
    ("x.", 2, ("x.", 0)),
    ("1abc.de", 7, ("abc.de", 1)),
    ("12.de", 5, ("de", 3)),
    ("..de", 4, ("de", 2)),
    ("123", 3, ("123", 0)),
    ("pr\nlo", 5, ("lo", 3)),
    ("pr\n", 3, ("", 3)),
    ("print(", 6, ("", 6)),
    ("local", 2, ("lo", 0)),
    ("lo", 99, ("lo", 0)),
])
def test_word_boundaries(text, offset, expected):
    assert word_before_cursor(text, offset) == expected


@pytest.mark.e2e
def test_long_line_scan_stays_fast():
    n = 20000
    started = time.perf_counter()
    assert word_before_cursor("a" * n + " ", n + 1) == ("", n + 1)
    assert word_before_cursor("a" * n, n) == ("a" * n, 0)
    assert word_before_cursor("1" * n + ".pr", n + 3) == ("pr", n + 1)
    assert word_before_cursor("a." * n + ".x", 2 * n + 2) == ("x", 2 * n + 1)
    assert time.perf_counter() - started < 0.5
