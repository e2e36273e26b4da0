"""
Relation traversal for rule expressions.

Handles Aggregator (any / all / none) and RelationLength. Each related node
becomes the current node while an aggregator body is evaluated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from ..dsl_nodes import Aggregator, AggregatorKind, Relation, RelationLength, OPTIONAL_RELATIONS
from .protocols import ExprEvaluatorProtocol

if TYPE_CHECKING:
    from ..context import NodeContext


def get_relation(relation: Relation, node: "NodeContext") -> Iterable["NodeContext"]:
    """
    Get the nodes a relation reaches from `node`.

    next_focus / prev_focus are optional on a context; a context without
    them yields nothing.
    """
    if relation in OPTIONAL_RELATIONS:
        return getattr(node, relation.value, None) or ()
    return getattr(node, relation.value)


def eval_aggregator(
    expr: Aggregator,
    node: "NodeContext",
    evaluator: ExprEvaluatorProtocol,
) -> bool:
    """
    Evaluate a quantifier over a relation with short-circuit.

    A body result counts as a match only if it is exactly true.
    Empty relation: any -> false, all -> true, none -> true.
    """
    related = get_relation(expr.relation, node)

    if expr.kind is AggregatorKind.ANY:
        for other in related:
            if evaluator.evaluate(expr.body, other) is True:
                return True
        return False

    if expr.kind is AggregatorKind.ALL:
        for other in related:
            if evaluator.evaluate(expr.body, other) is not True:
                return False
        return True

    for other in related:
        if evaluator.evaluate(expr.body, other) is True:
            return False
    return True


def eval_relation_length(expr: RelationLength, node: "NodeContext") -> int:
    """Count the nodes in a relation."""
    return sum(1 for _ in get_relation(expr.relation, node))


__all__ = [
    "get_relation",
    "eval_aggregator",
    "eval_relation_length",
]
