"""
DSL Constants for the accessibility rule language.

This module defines the fixed vocabularies shared by the parser, validator
and evaluator:
- Binary and unary operator symbols
- Relation names and aggregator kinds
- Boolean state keywords and cast targets
- Built-in identifiers that are always valid
"""

from __future__ import annotations

from enum import Enum


# =============================================================================
# Operators
# =============================================================================

class BinaryOp(str, Enum):
    """Binary operators, valued by their source symbol."""

    AND = "&&"
    OR = "||"
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    LESS = "<"
    GREATER = ">"
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="
    EQUALS = "=="
    NOT_EQUALS = "!="
    TILDE_EQUALS = "~="
    CONTAINS = "contains"
    MATCHES = "matches"


UNARY_OPERATORS = frozenset({
    "!",            # Logical not: operand is not exactly true
    "-",            # Numeric negation
})

# Word operators are lexed as identifiers and promoted in operator position
WORD_OPERATORS = frozenset({"contains", "matches"})


# =============================================================================
# Relations and Aggregators
# =============================================================================

class Relation(str, Enum):
    """Named traversals from the current node."""

    CHILDREN = "children"
    ANCESTORS = "ancestors"
    SIBLINGS = "siblings"
    NEXT_FOCUS = "next_focus"
    PREV_FOCUS = "prev_focus"


class AggregatorKind(str, Enum):
    """Quantifiers over a relation's result set."""

    ANY = "any"     # OR, false for empty
    ALL = "all"     # AND, true for empty
    NONE = "none"   # NOR, true for empty


RELATION_NAMES = frozenset(r.value for r in Relation)
AGGREGATOR_NAMES = frozenset(a.value for a in AggregatorKind)

# Relations a context may leave unimplemented (treated as always empty)
OPTIONAL_RELATIONS = frozenset({Relation.NEXT_FOCUS, Relation.PREV_FOCUS})


# =============================================================================
# Boolean States and Casts
# =============================================================================

BOOLEAN_STATES = frozenset({
    "focusable",
    "enabled",
    "hidden",
    "checked",
    "toggled",
    "merges_descendants",
    "has_tap",
    "has_long_press",
    "is_empty",
    "is_not_empty",
})

# Boolean state -> NodeContext accessor. States without an accessor are false.
STATE_ACCESSORS: dict[str, str] = {
    "focusable": "is_focusable",
    "enabled": "is_enabled",
    "hidden": "is_hidden",
    "merges_descendants": "merges_descendants",
    "has_tap": "has_tap",
    "has_long_press": "has_long_press",
}


class CastType(str, Enum):
    """Targets of the `as` cast suffix on prop(...)."""

    INT = "int"
    STRING = "string"
    BOOL = "bool"


CAST_NAMES = frozenset(c.value for c in CastType)


# =============================================================================
# Identifiers
# =============================================================================

# Always valid; resolved through dedicated context accessors
BUILTIN_IDENTIFIERS = frozenset({"role", "widgetType", "type"})

BOOLEAN_LITERALS = frozenset({"true", "false"})

# Case-insensitive regex prefix stripped from `matches` patterns
CASE_INSENSITIVE_PREFIX = "(?i)"


__all__ = [
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
]
