from __future__ import annotations

import logging
from typing import Optional

from leek.buffer.line_index import LineIndex
from leek.errors import BufferRangeError
from leek.types.position import Position

logger = logging.getLogger(__name__)


class EditBuffer:
    """
    Mutable text of one open document plus its LineIndex.
    Edits rewrite the text and rebuild the index before returning.
    """

    __slots__ = ("_text", "_index")

    def __init__(self, text: str = ""):
        self._text = text
        self._index = LineIndex.from_text(text)

    @classmethod
    def from_text(cls, text: str) -> EditBuffer:
        return cls(text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def index(self) -> LineIndex:
        return self._index

    def offset_of(self, pos: Position) -> Optional[int]:
        return self._index.offset_of(pos)

    def position_of(self, offset: int) -> Optional[Position]:
        return self._index.position_of(offset)

    def position_or_last(self, offset: int) -> Position:
        pos = self._index.position_of(offset)
        return pos if pos is not None else self._index.last_position()

    def text_in(self, start: Position, end: Position) -> Optional[str]:
        lo = self.offset_of(start)
        hi = self.offset_of(end)
        if lo is None or hi is None or lo > hi:
            return None
        return self._text[lo:hi]

    def apply_full_edit(self, new_text: str) -> None:
        self._text = new_text
        self._index = LineIndex.from_text(new_text)

    def apply_range_edit(self, start: Position, end: Position, new_text: str) -> None:
        """Replace the text between `start` and `end` (exclusive) with `new_text`.

        Raises BufferRangeError, leaving the buffer untouched, if either endpoint
        falls outside the line table or the range is reversed.
        """
        lo = self.offset_of(start)
        hi = self.offset_of(end)
        if lo is None or hi is None:
            raise BufferRangeError(
                f"Edit range {start}-{end} is outside the document ({len(self._index)} lines)",
                start, end,
            )
        if lo > hi:
            raise BufferRangeError(f"Edit range {start}-{end} is reversed", start, end)
        logger.debug("range edit [%d, %d) -> %d chars", lo, hi, len(new_text))
        self._text = self._text[:lo] + new_text + self._text[hi:]
        self._index = LineIndex.from_text(self._text)
