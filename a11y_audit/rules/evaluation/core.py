"""
Rule Interpreter for the accessibility rule language.

Evaluates parsed rules and expression trees against a NodeContext.

Three-phase rule protocol:
1. Selection: the rule applies only if ANY selector matches the node;
   otherwise the node passes (not applicable).
2. Filter: if the rule has a `when` guard and it is not exactly true,
   the node passes (guard not met).
3. Assertion: the node passes iff `ensure` evaluates to exactly true.

Evaluation never mutates the rule or the context, so one interpreter can
be shared across threads and reused for any number of nodes.

Usage:
    interpreter = RuleInterpreter(kind_map={"input": ["textField"]})
    compliant = interpreter.evaluate(rule, node)

    # Or without an interpreter instance
    compliant = evaluate(rule, node)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..dsl_nodes import (
    Expr,
    Rule,
    Literal,
    BooleanState,
    PropAccess,
    Identifier,
    Unary,
    Binary,
    RegexMatch,
    Aggregator,
    RelationLength,
)

from .binary_ops import eval_binary, eval_regex_match, eval_unary
from .resolve import resolve_identifier, resolve_prop, resolve_state
from .selection import DEFAULT_KIND_MAP, KindMap, matches_selectors
from .traversal_ops import eval_aggregator, eval_relation_length

if TYPE_CHECKING:
    from ..context import NodeContext


class ExprEvaluator:
    """
    Evaluates expression trees against a node.

    Stateless; results are plain values (bool, number, str, None or a raw
    property value).
    """

    def evaluate(self, expr: Expr, node: "NodeContext") -> Any:
        """
        Evaluate an expression with `node` as the current node.

        Raises:
            RuleRuntimeError: On a type or arithmetic fault.
        """
        if isinstance(expr, Literal):
            return expr.value
        elif isinstance(expr, Identifier):
            return resolve_identifier(expr, node)
        elif isinstance(expr, BooleanState):
            return resolve_state(expr, node)
        elif isinstance(expr, PropAccess):
            return resolve_prop(expr, node)
        elif isinstance(expr, Unary):
            return eval_unary(expr, node, self)
        elif isinstance(expr, Binary):
            return eval_binary(expr, node, self)
        elif isinstance(expr, RegexMatch):
            return eval_regex_match(expr, node, self)
        elif isinstance(expr, Aggregator):
            return eval_aggregator(expr, node, self)
        elif isinstance(expr, RelationLength):
            return eval_relation_length(expr, node)
        else:
            raise TypeError(f"Unknown expression type: {type(expr).__name__}")


class RuleInterpreter:
    """
    Applies the selection / filter / assertion protocol to rules.

    Attributes:
        kind_map: Kind name -> roles, used by kind(...) selectors
    """

    def __init__(self, kind_map: KindMap | None = None):
        """
        Initialize interpreter.

        Args:
            kind_map: Kind selector vocabulary. Defaults to DEFAULT_KIND_MAP.
        """
        self.kind_map: KindMap = DEFAULT_KIND_MAP if kind_map is None else kind_map
        self._evaluator = ExprEvaluator()

    def applies_to(self, rule: Rule, node: "NodeContext") -> bool:
        """Selection phase only: True if any selector matches the node."""
        return matches_selectors(rule.selectors, node, self.kind_map)

    def evaluate(self, rule: Rule, node: "NodeContext") -> bool:
        """
        Evaluate a rule against a node.

        Returns:
            True if the node is compliant, not selected, or filtered out by
            the guard; False only when the assertion is not exactly true.

        Raises:
            RuleRuntimeError: If the guard or assertion faults.
        """
        if not self.applies_to(rule, node):
            return True

        if rule.when is not None:
            if self._evaluator.evaluate(rule.when, node) is not True:
                return True

        return self._evaluator.evaluate(rule.ensure, node) is True

    def evaluate_expression(self, expr: Expr, node: "NodeContext") -> Any:
        """Evaluate a bare expression (no selection or guard)."""
        return self._evaluator.evaluate(expr, node)


def evaluate(rule: Rule, node: "NodeContext", kind_map: KindMap | None = None) -> bool:
    """
    Convenience function to evaluate a rule.

    Args:
        rule: Parsed rule.
        node: Node to check.
        kind_map: Kind selector vocabulary (DEFAULT_KIND_MAP if omitted).

    Returns:
        True if compliant or not applicable, False on violation.
    """
    return RuleInterpreter(kind_map=kind_map).evaluate(rule, node)


def evaluate_expression(expr: Expr, node: "NodeContext") -> Any:
    """Convenience function to evaluate a bare expression."""
    return ExprEvaluator().evaluate(expr, node)


__all__ = [
    "ExprEvaluator",
    "RuleInterpreter",
    "evaluate",
    "evaluate_expression",
]
