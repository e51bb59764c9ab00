"""Position-based queries over a parsed Leek program.

Everything here is read-only and dispatches with `match` over the closed node
set in `leek.types.ast`. The functions are total on any tree the parser
produces; nothing evaluates the program.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence

from leek.types.ast import (
    Assign,
    Call,
    Const,
    Declaration,
    Declare,
    DefineFunction,
    ExprCall,
    If,
    InfixOp,
    ListExpr,
    Node,
    PrefixOp,
    Return,
    Stmt,
    Var,
    While,
)


def iter_children(node: Node) -> tuple[Node, ...]:
    """Direct children in source order: sub-expressions first, then nested statements."""
    match node:
        case Const() | Var():
            return ()
        case ListExpr(items=items):
            return items
        case Call(args=args) | ExprCall(args=args):
            return args
        case PrefixOp(operand=operand):
            return (operand,)
        case InfixOp(lhs=lhs, rhs=rhs):
            return (lhs, rhs)
        case Declare(init=init):
            return (init,)
        case Assign(value=value) | Return(value=value):
            return (value,)
        case If(cond=cond, then=then, orelse=orelse):
            return (cond, *then, *(orelse or ()))
        case While(cond=cond, body=body):
            return (cond, *body)
        case DefineFunction(body=body):
            return body
    raise TypeError(f"Not a syntax node: {node!r}")


def walk(statements: Iterable[Node]) -> Iterator[Node]:
    """Pre-order traversal of every node under `statements`."""
    stack = list(reversed(list(statements)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(iter_children(node)))


def innermost_node_at(statements: Sequence[Stmt], offset: int) -> Optional[Node]:
    """Deepest node whose span contains `offset`, or None when no statement does."""
    node = next((stmt for stmt in statements if stmt.span.contains(offset)), None)
    while node is not None:
        child = next((c for c in iter_children(node) if c.span.contains(offset)), None)
        if child is None:
            return node
        node = child
    return None


def declarations_of(statements: Sequence[Stmt]) -> list[Declaration]:
    """Every `var` declaration, looking inside if/while/function bodies only."""
    found: list[Declaration] = []
    _collect_declarations(statements, found)
    return found


def _collect_declarations(statements: Sequence[Stmt], found: list[Declaration]) -> None:
    for stmt in statements:
        match stmt:
            case Declare(span=span, name=name, name_span=name_span):
                found.append(Declaration(span, name, name_span))
            case If(then=then, orelse=orelse):
                _collect_declarations(then, found)
                if orelse is not None:
                    _collect_declarations(orelse, found)
            case While(body=body) | DefineFunction(body=body):
                _collect_declarations(body, found)
            case _:
                pass


def defined_functions(statements: Sequence[Stmt]) -> list[DefineFunction]:
    return [node for node in walk(statements) if isinstance(node, DefineFunction)]


def node_kind(node: Node) -> str:
    return type(node).__name__


def describe_node(node: Node) -> str:
    match node:
        case Const(value=value):
            return f"constant {value}"
        case Var(name=name):
            return f"variable '{name}'"
        case ListExpr(items=items):
            return f"list of {len(items)} item{'' if len(items) == 1 else 's'}"
        case Call(name=name, args=args):
            return f"call to '{name}' with {len(args)} argument{'' if len(args) == 1 else 's'}"
        case PrefixOp(op=op):
            return f"prefix '{op}' expression"
        case InfixOp(op=op):
            return f"infix '{op}' expression"
        case Declare(name=name):
            return f"declaration of variable '{name}'"
        case Assign(name=name):
            return f"assignment to '{name}'"
        case If(orelse=orelse):
            return "if statement" if orelse is None else "if/else statement"
        case While():
            return "while loop"
        case DefineFunction(name=name, params=params):
            return f"function '{name}({', '.join(params)})'"
        case ExprCall(name=name):
            return f"call statement '{name}'"
        case Return():
            return "return statement"
    raise TypeError(f"Not a syntax node: {node!r}")
