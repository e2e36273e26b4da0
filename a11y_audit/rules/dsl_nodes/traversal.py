"""
DSL Traversal Nodes for the accessibility rule language.

Relation traversals move evaluation from the current node to related nodes:
- Aggregator: children.any(expr), ancestors.none(expr), siblings.all(expr)
- RelationLength: children.length

Each related node becomes the current node while the body is evaluated,
so aggregators nest: children.any(children.any(focusable)).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import AggregatorKind, Relation

if TYPE_CHECKING:
    from .types import Expr


@dataclass(frozen=True)
class Aggregator:
    """
    Quantifier over a relation.

    Attributes:
        relation: Relation to traverse
        kind: any / all / none
        body: Expression evaluated with each related node as current node

    Semantics (empty relation):
        any -> false, all -> true, none -> true
    """
    relation: Relation
    kind: AggregatorKind
    body: "Expr"

    def __post_init__(self):
        if not isinstance(self.relation, Relation):
            raise ValueError(f"Aggregator: relation must be a Relation, got {self.relation!r}")
        if not isinstance(self.kind, AggregatorKind):
            raise ValueError(f"Aggregator: kind must be an AggregatorKind, got {self.kind!r}")

    def __repr__(self) -> str:
        return f"{self.relation.value}.{self.kind.value}({self.body!r})"


@dataclass(frozen=True)
class RelationLength:
    """Number of nodes in a relation (`children.length`)."""
    relation: Relation

    def __post_init__(self):
        if not isinstance(self.relation, Relation):
            raise ValueError(f"RelationLength: relation must be a Relation, got {self.relation!r}")

    def __repr__(self) -> str:
        return f"{self.relation.value}.length"


__all__ = [
    "Aggregator",
    "RelationLength",
]
