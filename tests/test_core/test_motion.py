# tests/test_core/test_motion.py
"""Unit tests for the pure motion functions in `vee.core.Motion`.
==================================================================

Each motion is exercised directly over a list of strings, independent of any
session state.
"""

import pytest

from vee.core import Motion
from vee.core.Cursor import Point, Wordish


def test_prev_and_next_char_at_row_edges() -> None:
    rows = ["ab"]
    assert Motion.prev_char(rows, Point(0, 0)) is None
    assert Motion.next_char(rows, Point(0, 0)) == "a"
    assert Motion.prev_char(rows, Point(0, 2)) == "b"
    assert Motion.next_char(rows, Point(0, 2)) is None


def test_left_of_and_right_of_do_not_cross_rows() -> None:
    rows = ["a", "b"]
    assert Motion.left_of(rows, Point(1, 0)) is None
    assert Motion.right_of(rows, Point(0, 1)) is None
    assert Motion.right_of(rows, Point(0, 0)) == Point(0, 1)


@pytest.mark.parametrize(
    "start, expected",
    [
        (Point(0, 10), Point(0, 8)),  # from end of "baz" back to its start
        (Point(0, 9), Point(0, 8)),
        (Point(0, 7), Point(0, 4)),  # from the space after "bar"
        (Point(0, 0), Point(0, 0)),  # already inside "foo"
    ],
)
def test_left_word(start: Point, expected: Point) -> None:
    rows = ["foo bar baz"]
    assert Motion.left_word(rows, Wordish.ALNUM_UNDERSCORE, start) == expected


def test_left_word_without_word_returns_none() -> None:
    assert Motion.left_word(["   x"], Wordish.ALNUM_UNDERSCORE, Point(0, 2)) is None


def test_right_word_stops_at_end_of_run() -> None:
    rows = ["foo bar"]
    assert Motion.right_word(rows, Wordish.ALNUM_UNDERSCORE, Point(0, 1)) == Point(0, 3)
    assert Motion.right_word(rows, Wordish.ALNUM_UNDERSCORE, Point(0, 3)) == Point(0, 3)
    assert Motion.right_word(rows, Wordish.ALNUM_UNDERSCORE, Point(0, 4)) == Point(0, 7)


def test_wide_word_includes_punctuation() -> None:
    rows = ["a.b c"]
    assert Motion.right_word(rows, Wordish.ALNUM_UNDERSCORE, Point(0, 0)) == Point(0, 1)
    assert Motion.right_word(rows, Wordish.NON_WHITESPACE, Point(0, 0)) == Point(0, 3)


def test_wordish_classifiers() -> None:
    assert Wordish.ALNUM_UNDERSCORE("_")
    assert Wordish.ALNUM_UNDERSCORE("é")
    assert not Wordish.ALNUM_UNDERSCORE("-")
    assert Wordish.NON_WHITESPACE("-")
    assert not Wordish.NON_WHITESPACE("\t")


def test_start_and_end_of_line() -> None:
    rows = ["   indented", "    ", ""]
    assert Motion.start_of_line(rows, 0) == Point(0, 3)
    assert Motion.start_of_line(rows, 1) == Point(1, 0)
    assert Motion.start_of_line(rows, 2) == Point(2, 0)
    assert Motion.end_of_line(rows, 0) == Point(0, 11)


def test_start_and_end_of_file() -> None:
    rows = ["one", "two", "three"]
    assert Motion.start_of_file(rows) == Point(0, 0)
    assert Motion.end_of_file(rows) == Point(2, 5)


def test_open_quote_excludes_point_and_crosses_rows() -> None:
    rows = ['say "hi', 'there"']
    assert Motion.open_quote(rows, Point(1, 2)) == Point(0, 4)
    assert Motion.open_quote(rows, Point(0, 4)) is None


def test_close_quote_includes_point_and_crosses_rows() -> None:
    rows = ['say "hi', 'there"']
    assert Motion.close_quote(rows, Point(0, 4)) == Point(0, 4)
    assert Motion.close_quote(rows, Point(0, 5)) == Point(1, 5)
    assert Motion.close_quote(rows, Point(1, 6)) is None


def test_close_bracket_skips_nested_pairs_of_other_kinds() -> None:
    rows = ["(a [b {c} d] e)"]
    assert Motion.close_bracket(rows, Point(0, 1)) == Point(0, 14)
    assert Motion.close_bracket(rows, Point(0, 4)) == Point(0, 11)


def test_open_bracket_skips_nested_pairs_of_other_kinds() -> None:
    rows = ["(a [b {c} d] e)"]
    assert Motion.open_bracket(rows, Point(0, 13)) == Point(0, 0)
    assert Motion.open_bracket(rows, Point(0, 10)) == Point(0, 3)


def test_bracket_scans_cross_rows() -> None:
    rows = ["f(", "  x,", ")"]
    assert Motion.close_bracket(rows, Point(1, 2)) == Point(2, 0)
    assert Motion.open_bracket(rows, Point(1, 2)) == Point(0, 1)


def test_mismatched_closer_is_the_answer() -> None:
    """A `}` does not close a pending `[`, so it ends the scan."""
    rows = ["x [ }"]
    assert Motion.close_bracket(rows, Point(0, 0)) == Point(0, 4)


def test_next_opening_bracket() -> None:
    rows = ["abc", "d(e)"]
    assert Motion.next_opening_bracket(rows, Point(0, 0)) == Point(1, 1)
    assert Motion.next_opening_bracket(rows, Point(1, 2)) is None


def test_paragraph_boundaries() -> None:
    rows = ["foo", "bar", "", "  baz", "qux"]
    assert Motion.start_of_para(rows, Point(4, 0)) == Point(3, 2)
    assert Motion.start_of_para(rows, Point(1, 0)) == Point(0, 0)
    assert Motion.end_of_para(rows, Point(0, 0)) == Point(1, 3)
    assert Motion.end_of_para(rows, Point(3, 0)) == Point(4, 3)


def test_start_of_para_considers_row_one() -> None:
    """Row 1 below an empty row 0 is a paragraph start."""
    rows = ["", "text", "more"]
    assert Motion.start_of_para(rows, Point(2, 0)) == Point(1, 0)


def test_whitespace_only_row_is_not_empty() -> None:
    rows = ["a", "  ", "b"]
    assert Motion.end_of_para(rows, Point(0, 0)) == Point(2, 1)


def test_column_for_width_with_wide_characters() -> None:
    """Each CJK character is two cells wide."""
    text = "中文ab"
    assert Motion.column_for_width(text, 0) == 0
    assert Motion.column_for_width(text, 1) == 0
    assert Motion.column_for_width(text, 2) == 1
    assert Motion.column_for_width(text, 4) == 2
    assert Motion.column_for_width(text, 99) == 4


def test_width_before() -> None:
    assert Motion.width_before("中文ab", 2) == 4
    assert Motion.width_before("中文ab", 3) == 5
