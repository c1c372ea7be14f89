# vee/core/Cursor.py
"""Positions in the buffer and the character classes used by word motions.

A column is an index into the row's text. Stepping one column always steps
exactly one character, so a column can never split a character.
"""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True, order=True)
class Point:
    """A bare ``(row, col)`` position, ordered row first."""

    row: int
    col: int


@dataclass(frozen=True, order=True)
class Cursor:
    """The live position plus the visual column it tries to keep.

    ``target_width`` is presentation state for vertical motion only. It is
    excluded from equality and ordering, so two cursors on the same character
    always compare equal.
    """

    row: int = 0
    col: int = 0
    target_width: int = field(default=0, compare=False)

    @property
    def point(self) -> Point:
        return Point(self.row, self.col)

    def moved_to(self, point: Point, target_width: int) -> "Cursor":
        return Cursor(point.row, point.col, target_width)


class Wordish(Enum):
    """Which characters count as part of a word.

    Members are callable: ``Wordish.ALNUM_UNDERSCORE("a")`` is ``True``.
    """

    ALNUM_UNDERSCORE = "alnum_underscore"
    NON_WHITESPACE = "non_whitespace"

    def __call__(self, char: str) -> bool:
        if self is Wordish.ALNUM_UNDERSCORE:
            return char.isalnum() or char == "_"
        return not char.isspace()
