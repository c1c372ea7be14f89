# vee/core/Motion.py
"""Motion Module
=================
Pure position arithmetic over the buffer text.

Every function takes the rows of the buffer as a sequence of strings and a
:class:`~vee.core.Cursor.Point`, and returns a new point (or ``None`` when the
motion has no target). Nothing here touches session state; the session decides
what to do with the result.

Bracket scans are nesting-aware: an opener or closer is pushed on a pending
stack and popped only by its exact counterpart. The first delimiter of the
wanted direction that does not pop the stack is the answer, so a ``}`` never
closes a pending ``[``.

Quote scans have no notion of escaping or pairing. The first ``"`` met wins.
"""

from typing import Optional, Sequence

from vee.core.Cursor import Point, Wordish
from vee.utils.utils import char_width, string_width

OPENERS = frozenset("([{")
CLOSERS = frozenset(")]}")
COUNTERPART = {")": "(", "]": "[", "}": "{", "(": ")", "[": "]", "{": "}"}
QUOTE = '"'

Lines = Sequence[str]


# --- Single characters ---

def prev_char(lines: Lines, point: Point) -> Optional[str]:
    """The character just before *point* on its row, if any."""
    if point.col == 0:
        return None
    return lines[point.row][point.col - 1]


def next_char(lines: Lines, point: Point) -> Optional[str]:
    """The character at *point*, if the point is not at the end of the row."""
    text = lines[point.row]
    if point.col >= len(text):
        return None
    return text[point.col]


def left_of(lines: Lines, point: Point) -> Optional[Point]:
    if prev_char(lines, point) is None:
        return None
    return Point(point.row, point.col - 1)


def right_of(lines: Lines, point: Point) -> Optional[Point]:
    if next_char(lines, point) is None:
        return None
    return Point(point.row, point.col + 1)


# --- Words ---

def left_word(lines: Lines, wordish: Wordish, point: Point) -> Optional[Point]:
    """Scans left from *point* to the start of a word run.

    A word run counts as seen when the character at *point* is already part
    of one. The scan stops at the first non-word character once a word has
    been seen. Stays within the row.
    """
    text = lines[point.row]
    col = point.col
    ch = next_char(lines, point)
    seen_word = ch is not None and wordish(ch)
    while col > 0:
        ch = text[col - 1]
        if seen_word and not wordish(ch):
            break
        if not seen_word and wordish(ch):
            seen_word = True
        col -= 1
    return Point(point.row, col) if seen_word else None


def right_word(lines: Lines, wordish: Wordish, point: Point) -> Optional[Point]:
    """Mirror of :func:`left_word`, scanning right to the end of a word run."""
    text = lines[point.row]
    col = point.col
    ch = prev_char(lines, point)
    seen_word = ch is not None and wordish(ch)
    while col < len(text):
        ch = text[col]
        if seen_word and not wordish(ch):
            break
        if not seen_word and wordish(ch):
            seen_word = True
        col += 1
    return Point(point.row, col) if seen_word else None


# --- Lines and file ---

def start_of_line(lines: Lines, row: int) -> Point:
    """First non-whitespace column of *row*, or 0."""
    for col, ch in enumerate(lines[row]):
        if not ch.isspace():
            return Point(row, col)
    return Point(row, 0)


def end_of_line(lines: Lines, row: int) -> Point:
    return Point(row, len(lines[row]))


def start_of_file(lines: Lines) -> Point:
    return Point(0, 0)


def end_of_file(lines: Lines) -> Point:
    return end_of_line(lines, len(lines) - 1)


# --- Quotes ---

def open_quote(lines: Lines, point: Point) -> Optional[Point]:
    """Nearest ``"`` strictly before *point*, scanning backward across rows."""
    for row in range(point.row, -1, -1):
        text = lines[row]
        end = point.col if row == point.row else len(text)
        col = text.rfind(QUOTE, 0, end)
        if col != -1:
            return Point(row, col)
    return None


def close_quote(lines: Lines, point: Point) -> Optional[Point]:
    """Nearest ``"`` at or after *point*, scanning forward across rows."""
    for row in range(point.row, len(lines)):
        start = point.col if row == point.row else 0
        col = lines[row].find(QUOTE, start)
        if col != -1:
            return Point(row, col)
    return None


def next_quote(lines: Lines, point: Point) -> Optional[Point]:
    """The quote that opens the next quoted run at or after *point*."""
    return close_quote(lines, point)


# --- Brackets ---

def close_bracket(lines: Lines, point: Point) -> Optional[Point]:
    """The closer that ends the bracket pair enclosing *point*."""
    pending: list[str] = []
    for row in range(point.row, len(lines)):
        text = lines[row]
        start = point.col if row == point.row else 0
        for col in range(start, len(text)):
            ch = text[col]
            if ch in OPENERS:
                pending.append(ch)
            elif ch in CLOSERS:
                if pending and pending[-1] == COUNTERPART[ch]:
                    pending.pop()
                else:
                    return Point(row, col)
    return None


def open_bracket(lines: Lines, point: Point) -> Optional[Point]:
    """The opener that starts the bracket pair enclosing *point*.

    The character at *point* itself is not examined.
    """
    pending: list[str] = []
    for row in range(point.row, -1, -1):
        text = lines[row]
        end = point.col if row == point.row else len(text)
        for col in range(end - 1, -1, -1):
            ch = text[col]
            if ch in CLOSERS:
                pending.append(ch)
            elif ch in OPENERS:
                if pending and pending[-1] == COUNTERPART[ch]:
                    pending.pop()
                else:
                    return Point(row, col)
    return None


def next_opening_bracket(lines: Lines, point: Point) -> Optional[Point]:
    """First opener at or after *point*, scanning forward across rows."""
    for row in range(point.row, len(lines)):
        text = lines[row]
        start = point.col if row == point.row else 0
        for col in range(start, len(text)):
            if text[col] in OPENERS:
                return Point(row, col)
    return None


# --- Paragraphs ---

def is_para_start(lines: Lines, row: int) -> bool:
    return row >= 1 and len(lines[row]) > 0 and len(lines[row - 1]) == 0


def is_para_end(lines: Lines, row: int) -> bool:
    return row + 1 < len(lines) and len(lines[row]) > 0 and len(lines[row + 1]) == 0


def start_of_para(lines: Lines, point: Point) -> Point:
    """Start of line of the nearest paragraph start at or above *point*.

    A paragraph starts on a non-empty row below an empty one. Falls back to
    the start of the file.
    """
    for row in range(point.row, 0, -1):
        if is_para_start(lines, row):
            return start_of_line(lines, row)
    return start_of_file(lines)


def end_of_para(lines: Lines, point: Point) -> Point:
    """End of the nearest non-empty row at or below *point* that precedes an
    empty row. Falls back to the end of the file."""
    for row in range(point.row, len(lines) - 1):
        if is_para_end(lines, row):
            return end_of_line(lines, row)
    return end_of_file(lines)


# --- Visual columns ---

def width_before(text: str, col: int) -> int:
    """Display width of the first *col* characters of *text*."""
    return string_width(text[:col])


def column_for_width(text: str, target_width: int) -> int:
    """Column of the first character whose accumulated width exceeds
    *target_width*, or the end of the row if none does."""
    width = 0
    for col, ch in enumerate(text):
        width += char_width(ch)
        if width > target_width:
            return col
    return len(text)
