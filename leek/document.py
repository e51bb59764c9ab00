"""Per-document state: buffer, parse outcome and declaration cache.

A DocumentModel re-parses its whole buffer on creation and after every accepted
change, so the text, tree and declarations always describe the same revision.
A rejected edit (BufferRangeError) leaves all three untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from leek.analysis.query import (
    declarations_of,
    defined_functions,
    describe_node,
    innermost_node_at,
    node_kind,
)
from leek.buffer.edit_buffer import EditBuffer
from leek.errors import BufferRangeError, LeekSyntaxError
from leek.reader.parser import parse
from leek.reader.scanner import KEYWORDS
from leek.types.ast import Declaration, Node, Stmt
from leek.types.position import Position, Range, Span

logger = logging.getLogger(__name__)


class DiagnosticSeverity(IntEnum):
    # Same numbering as the LSP
    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


@dataclass(frozen=True)
class TextChange:
    """An edit notification. `range=None` replaces the whole document."""
    new_text: str
    range: Optional[Range] = None


@dataclass(frozen=True)
class ParseOutcome:
    statements: tuple[Stmt, ...] = ()
    error: Optional[LeekSyntaxError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class Diagnostic:
    range: Range
    severity: DiagnosticSeverity
    message: str


@dataclass(frozen=True)
class NodeInfo:
    kind: str
    range: Range
    description: str


@dataclass(frozen=True)
class Completion:
    label: str
    kind: str  # "var" | "function" | "keyword"


class DocumentModel:
    def __init__(self, uri: str, text: str):
        self.uri = uri
        self.buffer = EditBuffer.from_text(text)
        self.version = 0
        self.outcome = ParseOutcome()
        self.declarations: tuple[Declaration, ...] = ()
        self._reparse()

    @property
    def text(self) -> str:
        return self.buffer.text

    def _reparse(self) -> None:
        try:
            statements = parse(self.buffer.text)
        except LeekSyntaxError as err:
            logger.debug("%s: parse failed at %d: %s", self.uri, err.offset, err.expectation)
            self.outcome = ParseOutcome(error=err)
            self.declarations = ()
            return
        self.outcome = ParseOutcome(statements=statements)
        self.declarations = tuple(declarations_of(statements))
        logger.debug("%s: parsed %d statements, %d declarations",
                     self.uri, len(statements), len(self.declarations))

    def apply_change(self, change: TextChange) -> bool:
        """Apply one edit and re-parse. Returns False if the edit was rejected."""
        if change.range is None:
            self.buffer.apply_full_edit(change.new_text)
        else:
            try:
                self.buffer.apply_range_edit(change.range.start, change.range.end, change.new_text)
            except BufferRangeError as err:
                logger.warning("%s: ignoring edit: %s", self.uri, err)
                return False
        self.version += 1
        self._reparse()
        return True

    # ------------------------
    # Queries
    # ------------------------

    def span_to_range(self, span: Span) -> Range:
        return Range(
            start=self.buffer.position_or_last(span.start),
            end=self.buffer.position_or_last(span.end),
        )

    def node_at(self, position: Position) -> Optional[Node]:
        offset = self.buffer.offset_of(position)
        if offset is None:
            return None
        return innermost_node_at(self.outcome.statements, offset)

    def node_info_at(self, position: Position) -> Optional[NodeInfo]:
        node = self.node_at(position)
        if node is None:
            return None
        return NodeInfo(node_kind(node), self.span_to_range(node.span), describe_node(node))

    def diagnostics(self) -> list[Diagnostic]:
        err = self.outcome.error
        if err is not None:
            start = Position(err.line, err.column)
            return [Diagnostic(
                range=Range(start=start, end=Position(err.line, err.column + 1)),
                severity=DiagnosticSeverity.ERROR,
                message=err.expectation,
            )]
        return [
            Diagnostic(
                range=self.span_to_range(decl.span),
                severity=DiagnosticSeverity.INFORMATION,
                message=f"found variable '{decl.name}'",
            )
            for decl in self.declarations
        ]

    def completions(self) -> list[Completion]:
        items: dict[str, Completion] = {}
        for decl in self.declarations:
            items.setdefault(decl.name, Completion(decl.name, "var"))
        for fn in defined_functions(self.outcome.statements):
            items.setdefault(fn.name, Completion(fn.name, "function"))
        for kw in sorted(KEYWORDS):
            items.setdefault(kw, Completion(kw, "keyword"))
        return list(items.values())
