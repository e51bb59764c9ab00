"""Line table for a single text revision.

The index is an ordered tuple of (line_start_offset, line_length) pairs, one per
line. Lengths exclude the terminator ("\\n", "\\r\\n" or "\\r"). Empty text still
has one (0, 0) line, and a trailing terminator yields a final empty line.

The table is never patched: any change to the text builds a new LineIndex.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from typing import Optional

from leek.types.position import Position

LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


class LineIndex:
    __slots__ = ("lines", "text_length", "_starts")

    def __init__(self, lines: tuple[tuple[int, int], ...], text_length: int):
        self.lines = lines
        self.text_length = text_length
        self._starts = [start for start, _ in lines]

    @classmethod
    def from_text(cls, text: str) -> LineIndex:
        lines: list[tuple[int, int]] = []
        start = 0
        for m in LINE_BREAK_RE.finditer(text):
            lines.append((start, m.start() - start))
            start = m.end()
        lines.append((start, len(text) - start))
        return cls(tuple(lines), len(text))

    def __len__(self):
        return len(self.lines)

    def offset_of(self, pos: Position) -> Optional[int]:
        """Offset addressed by `pos`, or None when its line is not indexed.

        A character beyond the end of its line is clamped to the line length.
        """
        if pos.line < 0 or pos.line >= len(self.lines) or pos.character < 0:
            return None
        start, length = self.lines[pos.line]
        return start + min(pos.character, length)

    def position_of(self, offset: int) -> Optional[Position]:
        """Position of `offset`, or None when it lies outside the text.

        Offsets inside a line terminator map to the end of that line.
        """
        if offset < 0 or offset > self.text_length:
            return None
        line = bisect_right(self._starts, offset) - 1
        start, length = self.lines[line]
        return Position(line, min(offset - start, length))

    def last_position(self) -> Position:
        line = len(self.lines) - 1
        return Position(line, max(self.lines[line][1] - 1, 0))

    def __repr__(self):
        return f"LineIndex({list(self.lines)!r})"
