"""
DSL AST Node Types for the accessibility rule language.

Nodes are frozen dataclasses: a parsed rule is immutable and can be
evaluated repeatedly and concurrently against any number of nodes.

Node Categories:
- Leaf nodes: Literal, BooleanState, PropAccess, Identifier
- Operator nodes: Unary, Binary, RegexMatch
- Traversal nodes: Aggregator, RelationLength
- Selectors: AnySelector, RoleSelector, TypeSelector, KindSelector
- Root: Rule

Type Hierarchy:
    Expr = Literal | BooleanState | PropAccess | Identifier
         | Unary | Binary | RegexMatch | Aggregator | RelationLength

Usage:
    # ensure: prop("divisions") as int <= 10 && focusable
    expr = Binary(
        left=Binary(
            left=PropAccess("divisions", as_type="int"),
            op=BinaryOp.LESS_EQUAL,
            right=Literal(10),
        ),
        op=BinaryOp.AND,
        right=BooleanState("focusable"),
    )
"""

# Constants
from .constants import (
    BinaryOp,
    UNARY_OPERATORS,
    WORD_OPERATORS,
    Relation,
    AggregatorKind,
    RELATION_NAMES,
    AGGREGATOR_NAMES,
    OPTIONAL_RELATIONS,
    BOOLEAN_STATES,
    STATE_ACCESSORS,
    CastType,
    CAST_NAMES,
    BUILTIN_IDENTIFIERS,
    BOOLEAN_LITERALS,
    CASE_INSENSITIVE_PREFIX,
)

# Leaf nodes
from .base import (
    Literal,
    BooleanState,
    PropAccess,
    Identifier,
)

# Operator nodes
from .operators import (
    Unary,
    Binary,
    RegexMatch,
)

# Traversal nodes
from .traversal import (
    Aggregator,
    RelationLength,
)

# Selectors
from .selectors import (
    AnySelector,
    RoleSelector,
    TypeSelector,
    KindSelector,
    Selector,
)

# Root
from .rule import Rule

# Type aliases
from .types import Expr

# Utility functions
from .utils import (
    walk,
    rule_expressions,
    get_referenced_names,
    selector_to_dict,
    expr_to_dict,
    rule_to_dict,
)


__all__ = [
    # Constants
    "BinaryOp",
    "UNARY_OPERATORS",
    "WORD_OPERATORS",
    "Relation",
    "AggregatorKind",
    "RELATION_NAMES",
    "AGGREGATOR_NAMES",
    "OPTIONAL_RELATIONS",
    "BOOLEAN_STATES",
    "STATE_ACCESSORS",
    "CastType",
    "CAST_NAMES",
    "BUILTIN_IDENTIFIERS",
    "BOOLEAN_LITERALS",
    "CASE_INSENSITIVE_PREFIX",
    # Leaf nodes
    "Literal",
    "BooleanState",
    "PropAccess",
    "Identifier",
    # Operator nodes
    "Unary",
    "Binary",
    "RegexMatch",
    # Traversal nodes
    "Aggregator",
    "RelationLength",
    # Selectors
    "AnySelector",
    "RoleSelector",
    "TypeSelector",
    "KindSelector",
    "Selector",
    # Root
    "Rule",
    # Type aliases
    "Expr",
    # Utility functions
    "walk",
    "rule_expressions",
    "get_referenced_names",
    "selector_to_dict",
    "expr_to_dict",
    "rule_to_dict",
]
