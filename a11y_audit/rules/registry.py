"""
Operator Registry - Single source of truth for binary operator semantics.

Used by:
- The parser (binding power / precedence climbing)
- The evaluator (category dispatch)

Precedence, loosest to tightest:
    ||  <  &&  <  == != ~= contains matches  <  < <= > >=  <  + -  <  * /

All binary operators are left-associative. Prefix ! and - bind tighter
than every binary operator.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .dsl_nodes.constants import BinaryOp


class OpCategory(Enum):
    """Evaluation categories for binary operators."""
    LOGICAL = auto()      # && || (short-circuit, exact-true semantics)
    EQUALITY = auto()     # == != (value equality, boolean fallback only)
    STRING = auto()       # ~= contains matches (string forms)
    RELATIONAL = auto()   # < <= > >= (numeric coercion, false on failure)
    ARITHMETIC = auto()   # + - * / (numeric coercion, error on failure)


@dataclass(frozen=True)
class OperatorSpec:
    """
    Specification for a single binary operator.

    Attributes:
        op: The BinaryOp this symbol produces
        category: Evaluation category
        precedence: Binding power (higher binds tighter)
        description: One-line summary for error messages and docs
    """
    op: BinaryOp
    category: OpCategory
    precedence: int
    description: str

    @property
    def symbol(self) -> str:
        return self.op.value


# =============================================================================
# OPERATOR REGISTRY - Single Source of Truth
# =============================================================================

OPERATOR_REGISTRY: dict[str, OperatorSpec] = {
    spec.symbol: spec
    for spec in (
        # Logical
        OperatorSpec(BinaryOp.OR, OpCategory.LOGICAL, 1, "logical or, short-circuits on true"),
        OperatorSpec(BinaryOp.AND, OpCategory.LOGICAL, 2, "logical and, short-circuits on non-true"),

        # Equality and string matching share one level
        OperatorSpec(BinaryOp.EQUALS, OpCategory.EQUALITY, 3, "value equality with boolean fallback"),
        OperatorSpec(BinaryOp.NOT_EQUALS, OpCategory.EQUALITY, 3, "negated value equality"),
        OperatorSpec(BinaryOp.TILDE_EQUALS, OpCategory.STRING, 3, "case-insensitive trimmed string equality"),
        OperatorSpec(BinaryOp.CONTAINS, OpCategory.STRING, 3, "substring test, false for null left operand"),
        OperatorSpec(BinaryOp.MATCHES, OpCategory.STRING, 3, "regular expression search"),

        # Relational
        OperatorSpec(BinaryOp.LESS, OpCategory.RELATIONAL, 4, "numeric less than"),
        OperatorSpec(BinaryOp.LESS_EQUAL, OpCategory.RELATIONAL, 4, "numeric less than or equal"),
        OperatorSpec(BinaryOp.GREATER, OpCategory.RELATIONAL, 4, "numeric greater than"),
        OperatorSpec(BinaryOp.GREATER_EQUAL, OpCategory.RELATIONAL, 4, "numeric greater than or equal"),

        # Additive
        OperatorSpec(BinaryOp.ADD, OpCategory.ARITHMETIC, 5, "numeric addition"),
        OperatorSpec(BinaryOp.SUBTRACT, OpCategory.ARITHMETIC, 5, "numeric subtraction"),

        # Multiplicative
        OperatorSpec(BinaryOp.MULTIPLY, OpCategory.ARITHMETIC, 6, "numeric multiplication"),
        OperatorSpec(BinaryOp.DIVIDE, OpCategory.ARITHMETIC, 6, "numeric division, error on zero divisor"),
    )
}

_BY_OP: dict[BinaryOp, OperatorSpec] = {spec.op: spec for spec in OPERATOR_REGISTRY.values()}

# Lowest binding power; the parser starts precedence climbing here
MIN_PRECEDENCE = min(spec.precedence for spec in OPERATOR_REGISTRY.values())


def get_operator_spec(symbol: str) -> Optional[OperatorSpec]:
    """
    Get operator specification by source symbol.

    Args:
        symbol: Operator as written in rule text ("&&", "contains", ...)

    Returns:
        OperatorSpec if known, None otherwise
    """
    return OPERATOR_REGISTRY.get(symbol)


def spec_for(op: BinaryOp) -> OperatorSpec:
    """Get the specification of a BinaryOp (always registered)."""
    return _BY_OP[op]


def is_binary_operator(symbol: str) -> bool:
    """Check if a symbol is a known binary operator."""
    return symbol in OPERATOR_REGISTRY


__all__ = [
    "OpCategory",
    "OperatorSpec",
    "OPERATOR_REGISTRY",
    "MIN_PRECEDENCE",
    "get_operator_spec",
    "spec_for",
    "is_binary_operator",
]
