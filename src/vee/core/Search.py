# vee/core/Search.py
"""Search Module
=================
Literal search built from the current selection.

The selected text is escaped and compiled as a regular expression. The
outcome is kept in a :class:`SearchState` whether compilation succeeded or
not, so the search line can show either the pattern or the error. Matches are
stored on each :class:`~vee.core.Line.Line` as annotations.
"""

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from vee.core.Cursor import Point
from vee.core.Line import Line
from vee.utils.logging_config import logger


@dataclass(frozen=True)
class SearchState:
    """Outcome of the last search.

    Attributes:
        source (str): The pattern text that was compiled.
        compiled (re.Pattern | None): The pattern, when compilation succeeded.
        error (str | None): The compiler's message, when it failed.
    """

    source: str
    compiled: Optional[re.Pattern] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.compiled is not None


def compile_pattern(source: str) -> SearchState:
    """Compiles *source* as a regular expression, capturing any error."""
    try:
        return SearchState(source, compiled=re.compile(source))
    except re.error as e:
        logger.warning(f"Search pattern {source!r} failed to compile: {e}")
        return SearchState(source, error=str(e))


def compile_literal(text: str) -> SearchState:
    """Compiles *text* so that every character matches itself."""
    return compile_pattern(re.escape(text))


def annotate_all(lines: Sequence[Line], state: Optional[SearchState]) -> int:
    """Re-annotates every line against *state*; clears them when it is absent
    or failed. Returns the total number of matches."""
    pattern = state.compiled if state is not None else None
    total = 0
    for line in lines:
        line.annotate(pattern)
        total += len(line.annotations.matches)
    return total


def match_starts(lines: Sequence[Line]) -> Iterator[Point]:
    """Start of every annotated match, in document order."""
    for row, line in enumerate(lines):
        for start, _end in line.annotations.matches:
            yield Point(row, start)


def next_match(lines: Sequence[Line], point: Point) -> Optional[Point]:
    """First match starting after *point*, wrapping to the first match."""
    first = None
    for start in match_starts(lines):
        if first is None:
            first = start
        if start > point:
            return start
    return first


def prev_match(lines: Sequence[Line], point: Point) -> Optional[Point]:
    """Last match starting before *point*, wrapping to the last match."""
    found = None
    last = None
    for start in match_starts(lines):
        last = start
        if start < point:
            found = start
    return found if found is not None else last
