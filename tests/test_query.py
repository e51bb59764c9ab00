import pytest
from hypothesis import given

from leek.analysis.query import (
    declarations_of,
    defined_functions,
    describe_node,
    innermost_node_at,
    iter_children,
    node_kind,
    walk,
)
from leek.reader.parser import parse
from leek.types.ast import (
    Call,
    Const,
    Declaration,
    Declare,
    ExprCall,
    If,
    InfixOp,
    ListExpr,
    Var,
)
from leek.types.position import Span

from strategies import programs


@pytest.fixture
def tree(sample_source):
    return parse(sample_source)


@pytest.mark.parametrize(
    "offset,kind,span",
    [
        (0, "Declare", Span(0, 10)),
        (4, "Declare", Span(0, 10)),
        (8, "Const", Span(8, 9)),
        (15, "Declare", Span(11, 21)),
        (19, "Const", Span(19, 20)),
        (22, "If", Span(22, 42)),
        (26, "Var", Span(26, 27)),
        (29, "If", Span(22, 42)),
        (31, "ExprCall", Span(31, 40)),
        (37, "Var", Span(37, 38)),
        (41, "If", Span(22, 42)),
    ]
)
def test_innermost_node_at(tree, offset, kind, span):
    node = innermost_node_at(tree, offset)
    assert node_kind(node) == kind
    assert node.span == span


@pytest.mark.parametrize("offset", [10, 21, 42, 100, -1])
def test_innermost_node_at_misses(tree, offset):
    assert innermost_node_at(tree, offset) is None


def test_innermost_node_on_empty_tree():
    assert innermost_node_at((), 0) is None


def test_innermost_prefers_initializer_over_declaration():
    (decl,) = parse("var total = f(1, [2, 3]);")
    init = decl.init
    for offset in range(init.span.start, init.span.end):
        node = innermost_node_at((decl,), offset)
        assert node is not decl
        assert init.span.start <= node.span.start and node.span.end <= init.span.end
    assert innermost_node_at((decl,), 18) == Const(Span(18, 19), 2)


def test_innermost_descends_into_else_branch():
    tree = parse("if (a) { f(); } else { g(b); }")
    node = innermost_node_at(tree, 25)
    assert node == Var(Span(25, 26), "b")


def test_declarations_of(tree):
    assert declarations_of(tree) == [
        Declaration(Span(0, 10), "a", Span(4, 5)),
        Declaration(Span(11, 21), "b", Span(15, 16)),
    ]


def test_declarations_descend_into_if_while_and_function_bodies():
    tree = parse(
        "var a = 1;\n"
        "if (a) { var b = 2; } else { var c = 3; }\n"
        "while (a) { var d = 4; }\n"
        "function f(x) { var e = 5; while (x) var g = 6; }\n"
        "print(a);\n"
    )
    assert [d.name for d in declarations_of(tree)] == ["a", "b", "c", "d", "e", "g"]


def test_declarations_empty_without_declare():
    assert declarations_of(parse("print(a); x = 2;")) == []


def test_iter_children_order():
    (stmt,) = parse("if (c) { f(); } else { g(); }")
    kinds = [node_kind(n) for n in iter_children(stmt)]
    assert kinds == ["Var", "ExprCall", "ExprCall"]


def test_iter_children_rejects_non_nodes():
    with pytest.raises(TypeError):
        iter_children("not a node")


def test_infix_nodes_are_handled_by_queries():
    lhs = Const(Span(8, 9), 1)
    rhs = Var(Span(12, 13), "b")
    expr = InfixOp(Span(8, 13), lhs, "+", rhs)
    tree = (Declare(Span(0, 14), "a", expr, Span(4, 5)),)
    assert iter_children(expr) == (lhs, rhs)
    assert innermost_node_at(tree, 12) == rhs
    assert innermost_node_at(tree, 10) == expr
    assert describe_node(expr) == "infix '+' expression"


def test_walk_visits_every_node_in_source_order(tree):
    kinds = [node_kind(n) for n in walk(tree)]
    assert kinds == ["Declare", "Const", "Declare", "Const", "If", "Var", "ExprCall", "Var"]


def test_defined_functions():
    tree = parse("function f() { function g(a) { return a; } } f();")
    assert [fn.name for fn in defined_functions(tree)] == ["f", "g"]


@pytest.mark.parametrize(
    "source,offset,description",
    [
        ("var a = 3;", 8, "constant 3"),
        ("var a = 3;", 0, "declaration of variable 'a'"),
        ("var a = b;", 8, "variable 'b'"),
        ("var a = [1];", 8, "list of 1 item"),
        ("var a = f(1, 2);", 8, "call to 'f' with 2 arguments"),
        ("var a = !b;", 8, "prefix '!' expression"),
        ("a = 1;", 0, "assignment to 'a'"),
        ("if (a) f();", 0, "if statement"),
        ("if (a) f(); else g();", 0, "if/else statement"),
        ("while (a) f();", 0, "while loop"),
        ("function f(a, b) return a;", 0, "function 'f(a, b)'"),
        ("print(1);", 0, "call statement 'print'"),
        ("return 1;", 0, "return statement"),
    ]
)
def test_describe_node(source, offset, description):
    assert describe_node(innermost_node_at(parse(source), offset)) == description


# -------------------------------
# Hypothesis tests
# -------------------------------

@given(programs)
def test_innermost_node_contains_offset_and_has_no_matching_child(source):
    tree = parse(source)
    for offset in range(len(source) + 1):
        node = innermost_node_at(tree, offset)
        if node is None:
            assert not any(stmt.span.contains(offset) for stmt in tree)
            continue
        assert node.span.contains(offset)
        assert not any(c.span.contains(offset) for c in iter_children(node))


@given(programs)
def test_declarations_only_name_declare_nodes(source):
    tree = parse(source)
    names = {n.name for n in walk(tree) if isinstance(n, Declare)}
    assert {d.name for d in declarations_of(tree)} <= names
