from __future__ import annotations

from typing import Iterable


class LeekError(Exception):
    """ Base class for all Leek errors"""
    pass


class BufferRangeError(LeekError):
    """ Raised when an edit references a position outside the current line table"""

    def __init__(self, message: str, start=None, end=None):
        super().__init__(message)
        self.start = start
        self.end = end


class LeekSyntaxError(LeekError):
    """ Raised when the parser cannot match the input"""

    def __init__(self, offset: int, line: int, column: int, expected: Iterable[str]):
        self.offset = offset
        self.line = line
        self.column = column
        self.expected = tuple(sorted(set(expected)))
        super().__init__(f"{line + 1}:{column + 1}: {self.expectation}")

    @property
    def expectation(self) -> str:
        if not self.expected:
            return "unexpected input"
        if len(self.expected) == 1:
            return f"expected {self.expected[0]}"
        head = ", ".join(self.expected[:-1])
        return f"expected one of {head} or {self.expected[-1]}"


class UnknownDocumentError(LeekError):
    """ Raised when an operation names a document that was never opened"""

    def __init__(self, uri: str):
        super().__init__(f"No such document: {uri}")
        self.uri = uri
