"""Coordinates used across the buffer, parser and query layers.

- Span:     [start, end) character offsets into one revision of a text.
- Position: zero-based (line, character) pair.
- Range:    [start, end) pair of Positions.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Position:
    line: int
    character: int

    def __str__(self):
        return f"{self.line}:{self.character}"


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position


@dataclass(frozen=True, order=True)
class Span:
    start: int
    end: int

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end
