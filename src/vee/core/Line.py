# vee/core/Line.py
"""Line Module
===============
One row of the loaded file together with its render annotations.

Annotations are columns flagged for highlighting: the ``//`` comment run,
found once when the line is built, and the matches of the active search,
replaced every time the search changes. They are used only for rendering,
never for navigation.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

COMMENT = re.compile(r"//.*")


@dataclass
class Annotations:
    """Highlight data for one line.

    Attributes:
        matches (list[tuple[int, int]]): ``(start, end)`` column pairs of the
            active search, in order, non-overlapping.
        match_indices (set[int]): Every column covered by a match.
        comment_indices (set[int]): Every column covered by a comment.
    """

    matches: list[tuple[int, int]] = field(default_factory=list)
    match_indices: set[int] = field(default_factory=set)
    comment_indices: set[int] = field(default_factory=set)


class Line:
    """A row of text. The text itself is never changed after construction."""

    __slots__ = ("text", "annotations")

    def __init__(self, text: str, pattern: Optional[re.Pattern] = None) -> None:
        self.text = text
        self.annotations = Annotations(comment_indices=_covered(COMMENT, text))
        self.annotate(pattern)

    def __repr__(self) -> str:
        return f"Line({self.text!r})"

    def __len__(self) -> int:
        return len(self.text)

    def annotate(self, pattern: Optional[re.Pattern]) -> None:
        """Replaces the match annotations with the occurrences of *pattern*.

        ``None`` clears them. Empty matches are skipped since they cover no
        column.
        """
        if pattern is None:
            self.annotations.matches = []
            self.annotations.match_indices = set()
            return
        matches = [m.span() for m in pattern.finditer(self.text) if m.end() > m.start()]
        self.annotations.matches = matches
        self.annotations.match_indices = {
            col for start, end in matches for col in range(start, end)
        }


def _covered(pattern: re.Pattern, text: str) -> set[int]:
    return {col for m in pattern.finditer(text) for col in range(m.start(), m.end())}
