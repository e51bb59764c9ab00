from leek.analysis.query import (
    iter_children,
    walk,
    innermost_node_at,
    declarations_of,
    defined_functions,
    node_kind,
    describe_node,
)

__all__ = [
    "iter_children",
    "walk",
    "innermost_node_at",
    "declarations_of",
    "defined_functions",
    "node_kind",
    "describe_node",
]
