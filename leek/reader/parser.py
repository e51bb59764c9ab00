"""
  Leek recursive-descent parser

Rules are tried in order at each choice point and the first match wins (PEG
ordered choice). A rule that fails puts the cursor back where it started and
returns None; the scanner remembers what was expected at the farthest failure.

    program     := statement* EOF
    statement   := declaration | while | ifElse | function | return
                 | assignment | exprCallStatement
    declaration := "var" ident "=" expression ";"
    assignment  := ident "=" expression ";"
    while       := "while" "(" expression ")" block
    ifElse      := "if" "(" expression ")" block ("else" block)?
    function    := "function" ident "(" (ident ("," ident)*)? ")" block
    return      := "return" expression ";"
    block       := "{" statement* "}" | statement
    exprCallStatement := ident "(" arguments ")" ";"
    expression  := prefix | list | const | call | variable
    prefix      := "!" expression
    list        := "[" (expression ("," expression)*)? "]"
    call        := ident "(" (expression ("," expression)*)? ")"

Each node is stamped with the span from the first character of its first
token to just past its last token.

Blocks and expressions nest at most MAX_NESTING levels deep; one level more is
a syntax error ("shallower nesting") rather than a RecursionError.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TypeVar

from leek.buffer.line_index import LineIndex
from leek.errors import LeekSyntaxError
from leek.reader.scanner import Scanner
from leek.types.ast import (
    Call,
    Const,
    Declare,
    Assign,
    DefineFunction,
    Expr,
    ExprCall,
    If,
    ListExpr,
    PrefixOp,
    Return,
    Stmt,
    Var,
    While,
)

T = TypeVar("T")

# Blocks and expressions nested deeper than this are rejected as a syntax error.
MAX_NESTING = 100

NESTING_EXPECTATION = "shallower nesting"


class Parser:
    def __init__(self, text: str):
        self.text = text
        self.scanner = Scanner(text)
        self.depth = 0

    def parse_program(self) -> tuple[Stmt, ...]:
        """Parse the whole text or raise LeekSyntaxError at the farthest failure."""
        stmts = self.statements()
        if not self.scanner.at_end():
            raise self._error()
        return tuple(stmts)

    def _error(self) -> LeekSyntaxError:
        s = self.scanner
        return self._error_at(max(s.fail_pos, s.pos), s.expected)

    def _error_at(self, offset: int, expected) -> LeekSyntaxError:
        pos = LineIndex.from_text(self.text).position_of(offset)
        return LeekSyntaxError(offset, pos.line, pos.character, expected)

    @contextmanager
    def _nested(self) -> Iterator[None]:
        """Track one level of block or expression nesting.

        Going past MAX_NESTING aborts the parse at the next token instead of
        backtracking, so no alternative rule is tried.
        """
        if self.depth >= MAX_NESTING:
            raise self._error_at(self.scanner.start(), (NESTING_EXPECTATION,))
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    # ------------------------
    # Statements
    # ------------------------

    def statements(self) -> list[Stmt]:
        stmts = []
        while True:
            stmt = self.statement()
            if stmt is None:
                return stmts
            stmts.append(stmt)

    def statement(self) -> Optional[Stmt]:
        return _first(
            self.declaration,
            self.while_loop,
            self.if_else,
            self.function,
            self.return_stmt,
            self.assignment,
            self.expr_call_statement,
        )

    def declaration(self) -> Optional[Declare]:
        s = self.scanner
        start = s.start()
        if s.keyword("var"):
            ident = s.identifier()
            if ident is not None and s.literal("="):
                init = self.expression()
                if init is not None and s.literal(";"):
                    name, name_span = ident
                    return Declare(s.span_from(start), name, init, name_span)
        s.reset(start)
        return None

    def assignment(self) -> Optional[Assign]:
        s = self.scanner
        start = s.start()
        ident = s.identifier()
        if ident is not None and s.literal("="):
            value = self.expression()
            if value is not None and s.literal(";"):
                return Assign(s.span_from(start), ident[0], value)
        s.reset(start)
        return None

    def while_loop(self) -> Optional[While]:
        s = self.scanner
        start = s.start()
        if s.keyword("while"):
            cond = self._condition()
            if cond is not None:
                body = self.block()
                if body is not None:
                    return While(s.span_from(start), cond, body)
        s.reset(start)
        return None

    def if_else(self) -> Optional[If]:
        s = self.scanner
        start = s.start()
        if s.keyword("if"):
            cond = self._condition()
            if cond is not None:
                then = self.block()
                if then is not None:
                    after_then = s.pos
                    orelse = None
                    if s.keyword("else"):
                        orelse = self.block()
                    if orelse is None:
                        s.reset(after_then)
                    return If(s.span_from(start), cond, then, orelse)
        s.reset(start)
        return None

    def function(self) -> Optional[DefineFunction]:
        s = self.scanner
        start = s.start()
        if s.keyword("function"):
            ident = s.identifier()
            if ident is not None and s.literal("("):
                params = self._comma_separated(s.identifier)
                if s.literal(")"):
                    body = self.block()
                    if body is not None:
                        return DefineFunction(
                            s.span_from(start), ident[0], tuple(name for name, _ in params), body
                        )
        s.reset(start)
        return None

    def return_stmt(self) -> Optional[Return]:
        s = self.scanner
        start = s.start()
        if s.keyword("return"):
            value = self.expression()
            if value is not None and s.literal(";"):
                return Return(s.span_from(start), value)
        s.reset(start)
        return None

    def expr_call_statement(self) -> Optional[ExprCall]:
        s = self.scanner
        start = s.start()
        call = self._call_parts()
        if call is not None and s.literal(";"):
            name, args = call
            return ExprCall(s.span_from(start), name, args)
        s.reset(start)
        return None

    def block(self) -> Optional[tuple[Stmt, ...]]:
        s = self.scanner
        with self._nested():
            start = s.start()
            if s.literal("{"):
                body = self.statements()
                if s.literal("}"):
                    return tuple(body)
                s.reset(start)
            stmt = self.statement()
            return (stmt,) if stmt is not None else None

    def _condition(self) -> Optional[Expr]:
        s = self.scanner
        start = s.start()
        if s.literal("("):
            cond = self.expression()
            if cond is not None and s.literal(")"):
                return cond
        s.reset(start)
        return None

    # ------------------------
    # Expressions
    # ------------------------

    def expression(self) -> Optional[Expr]:
        with self._nested():
            return _first(self.prefix, self.list_expr, self.const, self.call, self.variable)

    def prefix(self) -> Optional[PrefixOp]:
        s = self.scanner
        start = s.start()
        if s.literal("!"):
            operand = self.expression()
            if operand is not None:
                return PrefixOp(s.span_from(start), "!", operand)
        s.reset(start)
        return None

    def list_expr(self) -> Optional[ListExpr]:
        s = self.scanner
        start = s.start()
        if s.literal("["):
            items = self._comma_separated(self.expression)
            if s.literal("]"):
                return ListExpr(s.span_from(start), tuple(items))
        s.reset(start)
        return None

    def const(self) -> Optional[Const]:
        num = self.scanner.number()
        if num is None:
            return None
        value, span = num
        return Const(span, value)

    def call(self) -> Optional[Call]:
        s = self.scanner
        start = s.start()
        call = self._call_parts()
        if call is None:
            return None
        name, args = call
        return Call(s.span_from(start), name, args)

    def variable(self) -> Optional[Var]:
        ident = self.scanner.identifier()
        if ident is None:
            return None
        name, span = ident
        return Var(span, name)

    def _call_parts(self) -> Optional[tuple[str, tuple[Expr, ...]]]:
        s = self.scanner
        start = s.start()
        ident = s.identifier()
        if ident is not None and s.literal("("):
            args = self._comma_separated(self.expression)
            if s.literal(")"):
                return ident[0], tuple(args)
        s.reset(start)
        return None

    def _comma_separated(self, item: Callable[[], Optional[T]]) -> list[T]:
        s = self.scanner
        first = item()
        if first is None:
            return []
        items = [first]
        while True:
            save = s.pos
            if not s.literal(","):
                return items
            nxt = item()
            if nxt is None:
                s.reset(save)
                return items
            items.append(nxt)


def _first(*rules: Callable[[], Optional[T]]) -> Optional[T]:
    for rule in rules:
        node = rule()
        if node is not None:
            return node
    return None


def parse(text: str) -> tuple[Stmt, ...]:
    """Parse `text` into its statements; raises LeekSyntaxError on the first failure."""
    return Parser(text).parse_program()
