"""Offset to line/column translation at the editor boundary."""

from __future__ import annotations

from bisect import bisect_right

from .models import Position, Range


class LineIndex:
    """Translate text offsets into zero-based line/character positions.

    Line breaks are ``\\n``; a ``\\r`` before it stays part of the line.

    Examples:
        index = LineIndex("<a>\\n</a>")
        index.position_at(4)  # Position(line=1, character=0)
    """

    def __init__(self, text: str):
        self.length = len(text)
        self.line_starts = [0]
        start = text.find("\n")
        while start != -1:
            self.line_starts.append(start + 1)
            start = text.find("\n", start + 1)

    def position_at(self, offset: int) -> Position:
        offset = min(max(offset, 0), self.length)
        line = bisect_right(self.line_starts, offset) - 1
        return Position(line=line, character=offset - self.line_starts[line])

    def range_at(self, start: int, end: int) -> Range:
        return Range(start=self.position_at(start), end=self.position_at(end))
