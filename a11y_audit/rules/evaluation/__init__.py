"""
Rule Evaluation Package.

This package provides the interpreter for parsed rules, split into
focused modules:

- core.py: ExprEvaluator dispatch and the RuleInterpreter three-phase protocol
- resolve.py: Identifier, BooleanState and PropAccess lookups
- binary_ops.py: Unary, Binary and RegexMatch evaluation
- traversal_ops.py: Aggregator and RelationLength over node relations
- selection.py: Selector matching and the default kind map
- coercion.py: Number / bool / string coercion and casts
- protocols.py: Evaluator protocol shared by the operation modules

Usage:
    from a11y_audit.rules.evaluation import RuleInterpreter

    interpreter = RuleInterpreter()
    compliant = interpreter.evaluate(rule, node)
"""

from .core import ExprEvaluator, RuleInterpreter, evaluate, evaluate_expression
from .selection import DEFAULT_KIND_MAP, KindMap

__all__ = [
    "ExprEvaluator",
    "RuleInterpreter",
    "evaluate",
    "evaluate_expression",
    "DEFAULT_KIND_MAP",
    "KindMap",
]
