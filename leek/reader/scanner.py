"""
  Character-level scanner for the Leek reader.

- No separate token stream: the parser asks for a literal, keyword, identifier
  or number at the cursor and the scanner either consumes it or records what was
  expected there.
- Trivia (whitespace, // line comments, /* block comments */) is skipped before
  every token and never shows up in expectation messages. An unterminated block
  comment runs to the end of the text.
- Failures are tracked PEG-style: only the expectations at the farthest failing
  offset are kept, which is where a syntax error is reported.
"""

from __future__ import annotations

import re
from typing import Optional

from leek.types.position import Span

IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
NUMBER_RE = re.compile(r"[0-9]+")

KEYWORDS = frozenset({"var", "while", "if", "else", "function", "return"})

END_OF_INPUT = "end of input"


class Scanner:
    __slots__ = ("text", "pos", "fail_pos", "expected")

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.fail_pos = -1
        self.expected: set[str] = set()

    # ----------------------
    # Cursor
    # ----------------------

    def skip_trivia(self) -> None:
        text, n = self.text, len(self.text)
        while self.pos < n:
            if text[self.pos].isspace():
                self.pos += 1
            elif text.startswith("//", self.pos):
                end = text.find("\n", self.pos)
                self.pos = n if end == -1 else end
            elif text.startswith("/*", self.pos):
                end = text.find("*/", self.pos + 2)
                self.pos = n if end == -1 else end + 2
            else:
                break

    def start(self) -> int:
        """Skip trivia and return the offset the next token starts at."""
        self.skip_trivia()
        return self.pos

    def reset(self, pos: int) -> None:
        self.pos = pos

    def span_from(self, start: int) -> Span:
        return Span(start, self.pos)

    def expect(self, what: str) -> None:
        if self.pos > self.fail_pos:
            self.fail_pos = self.pos
            self.expected = {what}
        elif self.pos == self.fail_pos:
            self.expected.add(what)

    # ----------------------
    # Tokens
    # ----------------------

    def literal(self, s: str) -> bool:
        self.skip_trivia()
        if self.text.startswith(s, self.pos):
            self.pos += len(s)
            return True
        self.expect(f"'{s}'")
        return False

    def keyword(self, kw: str) -> bool:
        self.skip_trivia()
        m = IDENT_RE.match(self.text, self.pos)
        if m and m.group() == kw:
            self.pos = m.end()
            return True
        self.expect(f"'{kw}'")
        return False

    def identifier(self) -> Optional[tuple[str, Span]]:
        self.skip_trivia()
        m = IDENT_RE.match(self.text, self.pos)
        if m and m.group() not in KEYWORDS:
            self.pos = m.end()
            return m.group(), Span(m.start(), m.end())
        self.expect("identifier")
        return None

    def number(self) -> Optional[tuple[int, Span]]:
        self.skip_trivia()
        m = NUMBER_RE.match(self.text, self.pos)
        if m:
            self.pos = m.end()
            return int(m.group()), Span(m.start(), m.end())
        self.expect("number")
        return None

    def at_end(self) -> bool:
        self.skip_trivia()
        if self.pos >= len(self.text):
            return True
        self.expect(END_OF_INPUT)
        return False
