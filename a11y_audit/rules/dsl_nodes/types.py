"""
DSL Type Aliases for the accessibility rule language.

Placed in a separate module to avoid circular imports.
"""

from __future__ import annotations

from .base import Literal, BooleanState, PropAccess, Identifier
from .operators import Unary, Binary, RegexMatch
from .traversal import Aggregator, RelationLength


# All expression types that can appear in a when/ensure clause
Expr = (
    Literal | BooleanState | PropAccess | Identifier
    | Unary | Binary | RegexMatch
    | Aggregator | RelationLength
)


__all__ = ["Expr"]
