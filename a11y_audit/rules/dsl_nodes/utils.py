"""
DSL Utility Functions.

Tree walking, name collection and plain-data serialization for rule ASTs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator

from .base import Literal, BooleanState, PropAccess, Identifier
from .operators import Unary, Binary, RegexMatch
from .traversal import Aggregator, RelationLength
from .selectors import AnySelector, RoleSelector, TypeSelector, KindSelector

if TYPE_CHECKING:
    from .rule import Rule
    from .selectors import Selector
    from .types import Expr


# =============================================================================
# Tree walking
# =============================================================================

def walk(expr: "Expr") -> Iterator["Expr"]:
    """
    Yield every node of an expression tree in pre-order.

    Args:
        expr: Root expression.

    Yields:
        expr, then the nodes of each operand left to right.
    """
    yield expr
    if isinstance(expr, Unary):
        yield from walk(expr.operand)
    elif isinstance(expr, Binary):
        yield from walk(expr.left)
        yield from walk(expr.right)
    elif isinstance(expr, RegexMatch):
        yield from walk(expr.left)
    elif isinstance(expr, Aggregator):
        yield from walk(expr.body)


def rule_expressions(rule: "Rule") -> tuple["Expr", ...]:
    """Return the rule's clause expressions: (when, ensure) or (ensure,)."""
    if rule.when is not None:
        return (rule.when, rule.ensure)
    return (rule.ensure,)


def get_referenced_names(rule: "Rule") -> set[str]:
    """
    Collect all identifier and property names a rule reads.

    Args:
        rule: Parsed rule.

    Returns:
        Set of names from Identifier and PropAccess nodes.
    """
    names: set[str] = set()
    for clause in rule_expressions(rule):
        for node in walk(clause):
            if isinstance(node, (Identifier, PropAccess)):
                names.add(node.name)
    return names


# =============================================================================
# Serialization
# =============================================================================

def selector_to_dict(selector: "Selector") -> dict[str, Any]:
    """Convert a selector to a plain dict."""
    if isinstance(selector, AnySelector):
        return {"any": True}
    if isinstance(selector, RoleSelector):
        return {"role": selector.role}
    if isinstance(selector, TypeSelector):
        return {"type": selector.type}
    if isinstance(selector, KindSelector):
        return {"kind": selector.kind}
    raise ValueError(f"Unknown selector type: {type(selector)}")


def expr_to_dict(expr: "Expr") -> dict[str, Any]:
    """
    Convert an expression tree to plain data.

    Regex nodes dump their source pattern, never the compiled object.

    Args:
        expr: Expression to convert.

    Returns:
        Nested dict suitable for JSON/YAML output.
    """
    if isinstance(expr, Literal):
        return {"literal": expr.value}

    elif isinstance(expr, BooleanState):
        return {"state": expr.name}

    elif isinstance(expr, PropAccess):
        result: dict[str, Any] = {"prop": expr.name}
        if expr.as_type is not None:
            result["as"] = expr.as_type
        if expr.is_resolved:
            result["is_resolved"] = True
        return result

    elif isinstance(expr, Identifier):
        return {"ident": expr.name}

    elif isinstance(expr, Unary):
        return {"unary": expr.op, "operand": expr_to_dict(expr.operand)}

    elif isinstance(expr, Binary):
        return {
            "op": expr.op.value,
            "left": expr_to_dict(expr.left),
            "right": expr_to_dict(expr.right),
        }

    elif isinstance(expr, RegexMatch):
        return {"matches": expr.source, "left": expr_to_dict(expr.left)}

    elif isinstance(expr, Aggregator):
        return {
            "relation": expr.relation.value,
            "aggregate": expr.kind.value,
            "body": expr_to_dict(expr.body),
        }

    elif isinstance(expr, RelationLength):
        return {"relation": expr.relation.value, "length": True}

    else:
        raise ValueError(f"Unknown expression type: {type(expr)}")


def rule_to_dict(rule: "Rule") -> dict[str, Any]:
    """Convert a rule to plain data."""
    result: dict[str, Any] = {
        "name": rule.name,
        "selectors": [selector_to_dict(s) for s in rule.selectors],
    }
    if rule.meta:
        result["meta"] = dict(rule.meta)
    if rule.when is not None:
        result["when"] = expr_to_dict(rule.when)
    result["ensure"] = expr_to_dict(rule.ensure)
    result["report"] = rule.report
    return result


__all__ = [
    "walk",
    "rule_expressions",
    "get_referenced_names",
    "selector_to_dict",
    "expr_to_dict",
    "rule_to_dict",
]
