"""
Operator evaluation for rule expressions.

Handles Unary, Binary and RegexMatch nodes. Binary operators dispatch on
their registry category:

- LOGICAL: short-circuit; result is whether the deciding operand is exactly true
- EQUALITY: value equality, then boolean-coercion fallback (never numeric)
- STRING: ~= / contains / matches on stringified operands
- RELATIONAL: numeric coercion; false when an operand does not coerce
- ARITHMETIC: numeric coercion; RuleRuntimeError when an operand does not coerce
"""

from __future__ import annotations

import operator
import re
from typing import TYPE_CHECKING, Any, Callable

from ..dsl_nodes import Binary, BinaryOp, RegexMatch, Unary
from ..dsl_parser import compile_pattern
from ..errors import RuleRuntimeError
from ..registry import OpCategory, spec_for
from .coercion import Number, stringify, to_bool, to_number
from .protocols import ExprEvaluatorProtocol

if TYPE_CHECKING:
    from ..context import NodeContext


_RELATIONAL: dict[BinaryOp, Callable[[Number, Number], bool]] = {
    BinaryOp.LESS: operator.lt,
    BinaryOp.LESS_EQUAL: operator.le,
    BinaryOp.GREATER: operator.gt,
    BinaryOp.GREATER_EQUAL: operator.ge,
}

_ARITHMETIC: dict[BinaryOp, Callable[[Number, Number], Number]] = {
    BinaryOp.ADD: operator.add,
    BinaryOp.SUBTRACT: operator.sub,
    BinaryOp.MULTIPLY: operator.mul,
    BinaryOp.DIVIDE: operator.truediv,
}


# =============================================================================
# Unary
# =============================================================================

def eval_unary(
    expr: Unary,
    node: "NodeContext",
    evaluator: ExprEvaluatorProtocol,
) -> Any:
    """
    Evaluate a prefix operator.

    `!x` is true unless x is exactly true (so `!null` is true).
    `-x` negates a number or numeric string; anything else is a runtime fault.
    """
    value = evaluator.evaluate(expr.operand, node)
    if expr.op == "!":
        return value is not True
    number = to_number(value)
    if number is None:
        raise RuleRuntimeError(f"Unary - applied to non-number: {stringify(value)}")
    return -number


# =============================================================================
# Binary
# =============================================================================

def values_equal(left: Any, right: Any) -> bool:
    """
    Equality with boolean fallback.

    Operands that are equal by value are equal. Otherwise, if both coerce
    to bools, the bools are compared. There is no numeric fallback:
    "10" == 10 is false.
    """
    if left == right:
        return True
    lb = to_bool(left)
    rb = to_bool(right)
    if lb is not None and rb is not None:
        return lb == rb
    return False


def _eval_logical(
    expr: Binary,
    node: "NodeContext",
    evaluator: ExprEvaluatorProtocol,
) -> bool:
    left = evaluator.evaluate(expr.left, node)
    if expr.op is BinaryOp.AND:
        if left is not True:
            return False
    elif left is True:
        return True
    return evaluator.evaluate(expr.right, node) is True


def _eval_string(op: BinaryOp, left: Any, right: Any) -> bool:
    if op is BinaryOp.TILDE_EQUALS:
        return stringify(left).strip().lower() == stringify(right).strip().lower()
    if op is BinaryOp.CONTAINS:
        if left is None:
            return False
        return stringify(right) in stringify(left)
    # Dynamic `matches`: pattern computed at runtime
    if left is None or right is None:
        return False
    try:
        pattern = compile_pattern(stringify(right))
    except re.error as e:
        raise RuleRuntimeError(f"Invalid regex: {e}") from e
    return pattern.search(stringify(left)) is not None


def _eval_arithmetic(op: BinaryOp, left: Any, right: Any) -> Number:
    ln = to_number(left)
    rn = to_number(right)
    if ln is None or rn is None:
        raise RuleRuntimeError(
            f"Operator {op.value} requires two numbers, got {stringify(left)} and {stringify(right)}"
        )
    if op is BinaryOp.DIVIDE and rn == 0:
        raise RuleRuntimeError("Division by zero")
    try:
        return _ARITHMETIC[op](ln, rn)
    except OverflowError as e:
        raise RuleRuntimeError(f"Operator {op.value} overflowed: {e}") from e


def eval_binary(
    expr: Binary,
    node: "NodeContext",
    evaluator: ExprEvaluatorProtocol,
) -> Any:
    """
    Evaluate a binary operator node.

    Raises:
        RuleRuntimeError: Arithmetic on non-numbers, division by zero, a
            result too large for a float, or an invalid dynamically computed regex.
    """
    category = spec_for(expr.op).category

    if category is OpCategory.LOGICAL:
        return _eval_logical(expr, node, evaluator)

    left = evaluator.evaluate(expr.left, node)
    right = evaluator.evaluate(expr.right, node)

    if category is OpCategory.EQUALITY:
        equal = values_equal(left, right)
        return equal if expr.op is BinaryOp.EQUALS else not equal

    if category is OpCategory.STRING:
        return _eval_string(expr.op, left, right)

    if category is OpCategory.RELATIONAL:
        ln = to_number(left)
        rn = to_number(right)
        if ln is None or rn is None:
            return False
        return _RELATIONAL[expr.op](ln, rn)

    return _eval_arithmetic(expr.op, left, right)


def eval_regex_match(
    expr: RegexMatch,
    node: "NodeContext",
    evaluator: ExprEvaluatorProtocol,
) -> bool:
    """Search the precompiled pattern in the left operand's string form (false for null)."""
    left = evaluator.evaluate(expr.left, node)
    if left is None:
        return False
    return expr.pattern.search(stringify(left)) is not None


__all__ = [
    "eval_unary",
    "eval_binary",
    "eval_regex_match",
    "values_equal",
]
