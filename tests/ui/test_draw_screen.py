# tests/ui/test_draw_screen.py
"""Unit tests for the DrawScreen renderer.
===========================================

Rendering is pure, so every test inspects the instruction list returned by
`DrawScreen.draw` for a session built in memory.
"""

import logging

import pytest

from vee.core.Cursor import Cursor
from vee.core.Search import SearchState, annotate_all, compile_literal
from vee.ui.DrawScreen import DrawScreen, scroll_offset
from vee.ui.Instructions import (
    ClearLine,
    ClearScreen,
    Color,
    Flush,
    HideCursor,
    MoveTo,
    Print,
    ResetColor,
    SetBackground,
    SetForeground,
    ShowCursor,
)


def text_row(frame, screen_row):
    """The instructions drawn for one text row, without its MoveTo and ClearLine."""
    start = frame.index(MoveTo(0, screen_row)) + 1
    end = frame.index(ClearLine(), start)
    return frame[start:end]


def printed(instructions):
    return "".join(i.text for i in instructions if isinstance(i, Print))


@pytest.fixture
def drawer(default_config) -> DrawScreen:
    return DrawScreen(default_config)


# --- Scroll offset ---
@pytest.mark.parametrize(
    "cursor_row, line_count, rows, expected",
    [
        (50, 100, 10, 46),
        (0, 100, 10, 0),
        (3, 100, 10, 0),
        (4, 100, 10, 0),
        (5, 100, 10, 1),
        (99, 100, 10, 92),
        (4, 8, 10, 0),
        (7, 9, 10, 1),
        (5, 100, 2, 0),
        (5, 100, 1, 0),
    ],
)
def test_scroll_offset(cursor_row, line_count, rows, expected) -> None:
    assert scroll_offset(cursor_row, line_count, rows) == expected


# --- Frame structure ---
def test_frame_layout(drawer, make_session) -> None:
    session = make_session(["ab"])
    frame = drawer.draw(session, (40, 5))

    status = " NORMAL test.txt [utf-8]" + " " * 12 + "1:1 "
    assert frame == [
        HideCursor(),
        ClearScreen(),
        MoveTo(0, 0),
        Print("a"), ResetColor(),
        Print("b"), ResetColor(),
        Print(" "), ResetColor(),
        ClearLine(),
        MoveTo(0, 3),
        SetBackground(Color.GREY),
        Print(status),
        ResetColor(),
        MoveTo(0, 4),
        ClearLine(),
        MoveTo(0, 0),
        ShowCursor(),
        Flush(),
    ]
    assert len(status) == 40


def test_tiny_terminal_draws_nothing(drawer, make_session) -> None:
    session = make_session(["abc"])
    assert drawer.draw(session, (80, 2)) == [HideCursor(), ClearScreen(), Flush()]
    assert drawer.draw(session, (0, 24)) == [HideCursor(), ClearScreen(), Flush()]


def test_only_rows_that_fit_are_drawn(drawer, make_session) -> None:
    session = make_session([str(i) for i in range(10)])
    frame = drawer.draw(session, (20, 5))
    text_moves = [i for i in frame if isinstance(i, MoveTo) and i.col == 0 and i.row < 3]
    assert [m.row for m in text_moves] == [0, 1, 2, 0]
    assert printed(text_row(frame, 2)) == "2 "


def test_scrolled_frame_keeps_cursor_centred(drawer, make_session) -> None:
    session = make_session([str(i) for i in range(100)], at=(50, 1))
    frame = drawer.draw(session, (20, 10))
    assert printed(text_row(frame, 0)) == "46 "
    assert frame[-3] == MoveTo(1, 4)


# --- Text rows ---
def test_wide_characters_are_not_split(drawer, make_session) -> None:
    session = make_session(["中文字"])
    row = text_row(drawer.draw(session, (5, 5)), 0)
    assert printed(row) == "中文"


def test_row_is_cut_at_terminal_width(drawer, make_session) -> None:
    session = make_session(["abcdef"])
    row = text_row(drawer.draw(session, (3, 5)), 0)
    assert printed(row) == "ab"


def test_wide_character_reaching_last_column_is_dropped(drawer, make_session) -> None:
    session = make_session(["a\u4e2db"])
    row = text_row(drawer.draw(session, (3, 5)), 0)
    assert printed(row) == "a"


def test_tabs_and_control_characters(drawer, make_session) -> None:
    session = make_session(["a\tb\x01c"])
    row = text_row(drawer.draw(session, (40, 5)), 0)
    assert printed(row) == "a bc "


def test_highlight_layers_apply_in_order(drawer, make_session) -> None:
    """Comment foreground first, then match background, then selection."""
    session = make_session(["x // ab"], at=(0, 5))
    session.search_state = compile_literal("ab")
    annotate_all(session.lines, session.search_state)
    session.set_anchor()
    session.move_right(1)

    row = text_row(drawer.draw(session, (40, 5)), 0)
    a_at = row.index(Print("a"))
    assert row[a_at - 3:a_at + 2] == [
        SetForeground(Color.DARK_RED),
        SetBackground(Color.YELLOW),
        SetBackground(Color.GREY),
        Print("a"),
        ResetColor(),
    ]
    b_at = row.index(Print("b"))
    assert row[b_at - 2:b_at] == [SetForeground(Color.DARK_RED), SetBackground(Color.YELLOW)]
    assert row[:2] == [Print("x"), ResetColor()]


def test_selection_covers_virtual_blank_across_rows(drawer, make_session) -> None:
    session = make_session(["ab", "cd"], at=(0, 1))
    session.set_anchor()
    session.cursor = Cursor(1, 1)
    frame = drawer.draw(session, (40, 6))

    first = text_row(frame, 0)
    assert first[-3:] == [SetBackground(Color.GREY), Print(" "), ResetColor()]
    second = text_row(frame, 1)
    assert second[:3] == [SetBackground(Color.GREY), Print("c"), ResetColor()]
    assert second[3:5] == [Print("d"), ResetColor()]


def test_virtual_blank_not_selected_at_selection_end(drawer, make_session) -> None:
    session = make_session(["abc"])
    session.set_anchor()
    session.move_end_of_line()
    row = text_row(drawer.draw(session, (40, 5)), 0)
    assert row[-2:] == [Print(" "), ResetColor()]
    assert row.count(SetBackground(Color.GREY)) == 3


# --- Status and search lines ---
def test_status_line_shows_mode_and_one_based_position(drawer, make_session) -> None:
    session = make_session(["abc", "abcdef", "x"], at=(1, 3))
    session.set_anchor()
    session.settle_mode()
    frame = drawer.draw(session, (40, 6))
    status = frame[frame.index(MoveTo(0, 4)) + 2]
    assert status.text.startswith(" SELECT test.txt [utf-8]")
    assert status.text.endswith(" 2:4 ")


def test_status_line_truncates_left_part(drawer, make_session) -> None:
    session = make_session(["abc"])
    frame = drawer.draw(session, (10, 5))
    assert frame[frame.index(MoveTo(0, 3)) + 2] == Print(" NORMA1:1 ")


def test_search_line_shows_pattern(drawer, make_session) -> None:
    session = make_session(["abc"])
    session.search_state = compile_literal("ab")
    frame = drawer.draw(session, (40, 5))
    assert frame[frame.index(MoveTo(0, 4)):][:3] == [MoveTo(0, 4), Print("/ab"), ClearLine()]


def test_search_line_shows_error(drawer, make_session) -> None:
    session = make_session(["abc"])
    session.search_state = SearchState("(", error="missing )")
    frame = drawer.draw(session, (40, 5))
    assert frame[frame.index(MoveTo(0, 4)):][:5] == [
        MoveTo(0, 4),
        SetForeground(Color.RED),
        Print("! missing )"),
        ResetColor(),
        ClearLine(),
    ]


def test_cursor_is_clamped_to_last_column(drawer, make_session) -> None:
    session = make_session(["abcdefgh"], at=(0, 5))
    frame = drawer.draw(session, (4, 5))
    assert frame[-3] == MoveTo(3, 0)


def test_cursor_uses_display_width(drawer, make_session) -> None:
    session = make_session(["中文ab"], at=(0, 2))
    frame = drawer.draw(session, (40, 5))
    assert frame[-3] == MoveTo(4, 0)


# --- Colors ---
def test_configured_colors_and_unknown_fallback(caplog) -> None:
    config = {"colors": {"comment": "Dark-Blue", "match": "nope"}}
    with caplog.at_level(logging.WARNING):
        drawer = DrawScreen(config)
    assert drawer.colors["comment"] is Color.DARK_BLUE
    assert drawer.colors["match"] is Color.YELLOW
    assert drawer.colors["selection"] is Color.GREY
    assert "nope" in caplog.text
