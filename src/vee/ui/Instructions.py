# vee/ui/Instructions.py
"""Abstract draw instructions.

The renderer produces a list of these; a terminal-output collaborator replays
them in order. They carry no terminal state of their own.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Color(Enum):
    BLACK = "black"
    DARK_GREY = "dark_grey"
    RED = "red"
    DARK_RED = "dark_red"
    GREEN = "green"
    DARK_GREEN = "dark_green"
    YELLOW = "yellow"
    DARK_YELLOW = "dark_yellow"
    BLUE = "blue"
    DARK_BLUE = "dark_blue"
    MAGENTA = "magenta"
    DARK_MAGENTA = "dark_magenta"
    CYAN = "cyan"
    DARK_CYAN = "dark_cyan"
    WHITE = "white"
    GREY = "grey"

    @classmethod
    def from_name(cls, name: str) -> "Color":
        """Looks a color up by its config name (case and ``-`` insensitive).

        Raises:
            ValueError: If the name is unknown.
        """
        return cls(str(name).strip().lower().replace("-", "_"))


@dataclass(frozen=True)
class MoveTo:
    col: int
    row: int


@dataclass(frozen=True)
class SetForeground:
    color: Color


@dataclass(frozen=True)
class SetBackground:
    color: Color


@dataclass(frozen=True)
class ResetColor:
    pass


@dataclass(frozen=True)
class Print:
    text: str


@dataclass(frozen=True)
class ClearLine:
    """Clear from the cursor to the end of the row."""


@dataclass(frozen=True)
class ClearScreen:
    pass


@dataclass(frozen=True)
class HideCursor:
    pass


@dataclass(frozen=True)
class ShowCursor:
    pass


@dataclass(frozen=True)
class Flush:
    pass


Instruction = Union[
    MoveTo, SetForeground, SetBackground, ResetColor, Print,
    ClearLine, ClearScreen, HideCursor, ShowCursor, Flush,
]
