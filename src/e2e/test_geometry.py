# src/e2e/test_geometry.py

from completion.geometry import line_and_column, resolve_anchor
from completion.models import Point


def test_offset_zero_sits_under_first_line():
    a = resolve_anchor("local x", 0, Point(100, 50), 8, 20, 4)
    assert a == Point(104, 74)


def test_line_and_column_on_later_line():
    doc = "local a\nlocal bc\nprint"
    assert line_and_column(doc, len("local a\nlocal bc\npri")) == (2, 3)
    a = resolve_anchor(doc, len("local a\nlocal bc\npri"), Point(0, 0), 10, 20, 0)
    assert a == Point(30, 60)


def test_cursor_at_end_of_document():
    doc = "a\nbb\n"
    assert line_and_column(doc, len(doc)) == (2, 0)


def test_crlf_counts_as_one_line_break():
    assert line_and_column("ab\r\ncd", 6) == (1, 2)


def test_out_of_range_offsets_are_clamped():
    doc = "abc"
    assert line_and_column(doc, -5) == (0, 0)
    assert line_and_column(doc, 99) == (0, 3)
