"""
Accessibility rule language.

Rules are declarative, tree-aware policies parsed from text:

    rule "Slider divisions" on role(slider) {
        meta { severity: "error" code: "slider_divisions" }
        when: prop("divisions").is_resolved
        ensure: prop("divisions") as int <= 10
        report: "Sliders should have at most 10 divisions"
    }

Pipeline:
- parse: source text -> immutable Rule AST (ParseError on bad syntax)
- validate: Rule references checked against the host schema (ValidationError)
- RuleInterpreter.evaluate: selection -> guard -> assertion against a NodeContext
  (RuleRuntimeError on a type or arithmetic fault)
- load_rules / RuleRunner: rule sets and tree sweeps for hosts
"""

from .errors import (
    RuleError,
    ParseError,
    ValidationError,
    RuleRuntimeError,
)
from .dsl_parser import parse, parse_rule, parse_expression
from .dsl_validator import validate, find_unknown_references
from .context import NodeContext
from .evaluation import (
    DEFAULT_KIND_MAP,
    ExprEvaluator,
    RuleInterpreter,
    evaluate,
    evaluate_expression,
)
from .registry import (
    OperatorSpec,
    OpCategory,
    OPERATOR_REGISTRY,
    get_operator_spec,
)
from .tree_context import DictNode, iter_tree
from .runner import (
    RuleSpec,
    RuleViolation,
    EvaluationFault,
    AuditResult,
    RuleRunner,
    compile_rule,
    load_rules,
)

__all__ = [
    # Errors
    "RuleError",
    "ParseError",
    "ValidationError",
    "RuleRuntimeError",
    # Parsing and validation
    "parse",
    "parse_rule",
    "parse_expression",
    "validate",
    "find_unknown_references",
    # Evaluation
    "NodeContext",
    "DEFAULT_KIND_MAP",
    "ExprEvaluator",
    "RuleInterpreter",
    "evaluate",
    "evaluate_expression",
    # Registry
    "OperatorSpec",
    "OpCategory",
    "OPERATOR_REGISTRY",
    "get_operator_spec",
    # Hosts
    "DictNode",
    "iter_tree",
    "RuleSpec",
    "RuleViolation",
    "EvaluationFault",
    "AuditResult",
    "RuleRunner",
    "compile_rule",
    "load_rules",
]
