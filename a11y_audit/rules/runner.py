"""
Rule loading and sweeping.

Ties the language pieces together for a host:
- compile_rule: parse + optional schema validation for one rule text
- load_rules: compile many rule texts, skipping (and logging) rejects
- RuleRunner: evaluate every rule on every node, collecting violations
  and evaluation faults separately

Rule metadata conventions (all optional `meta` keys):
    severity    error / warning / info (default: loader's default_severity)
    code        stable rule identifier (default: rule name)
    message     violation message (default: report text)
    correction  fix hint (default: message)

Usage:
    specs = load_rules({"slider.rule": SLIDER_RULE_TEXT}, schema={"divisions"})
    runner = RuleRunner(specs.values())
    result = runner.run_tree(root)
    for violation in result.violations:
        print(violation.code, violation.node_description, violation.message)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Mapping, Optional

from ..utils.log_context import audit_context_scope, new_sweep_context
from ..utils.logger import get_logger
from .dsl_nodes import Rule
from .dsl_parser import parse_rule
from .dsl_validator import validate
from .errors import ParseError, RuleRuntimeError, ValidationError
from .evaluation import RuleInterpreter
from .tree_context import iter_tree

if TYPE_CHECKING:
    from .context import NodeContext


def describe_node(node: "NodeContext") -> str:
    """Short Type(role) label for any context (uses node.describe() when present)."""
    describe = getattr(node, "describe", None)
    if callable(describe):
        return describe()
    return f"{node.widget_type or '?'}({node.role or '?'})"


# =============================================================================
# Rule specs
# =============================================================================

@dataclass(frozen=True)
class RuleSpec:
    """
    A loaded rule plus the reporting fields derived from its meta block.

    Attributes:
        rule: Parsed (and validated) rule
        code: Stable identifier used to key rule sets
        message: Violation message
        correction: Fix hint
        severity: error / warning / info
        source: Where the rule text came from (file name, key), if known
    """
    rule: Rule
    code: str
    message: str
    correction: str
    severity: str
    source: Optional[str] = None

    @classmethod
    def from_rule(
        cls,
        rule: Rule,
        source: Optional[str] = None,
        default_severity: str = "warning",
    ) -> "RuleSpec":
        """Derive reporting fields from rule.meta with name/report fallbacks."""
        meta = rule.meta
        message = meta.get("message", rule.report)
        return cls(
            rule=rule,
            code=meta.get("code", rule.name),
            message=message,
            correction=meta.get("correction", message),
            severity=meta.get("severity", default_severity),
            source=source,
        )


def compile_rule(text: str, schema: Optional[Iterable[str]] = None) -> Rule:
    """
    Parse rule text and, when a schema is given, validate it.

    Raises:
        ParseError: Malformed rule text.
        ValidationError: Unknown identifier or property.
    """
    rule = parse_rule(text)
    if schema is not None:
        validate(rule, schema)
    return rule


def load_rules(
    sources: Mapping[str, str],
    schema: Optional[Iterable[str]] = None,
    default_severity: str = "warning",
) -> dict[str, RuleSpec]:
    """
    Compile a set of rule texts.

    A rule that fails to parse or validate is logged and skipped; it never
    reaches the returned rule set.

    Args:
        sources: Source name -> rule text.
        schema: Identifier/property names the host supports (None: no validation).
        default_severity: Severity for rules without meta severity.

    Returns:
        Rule code -> RuleSpec (a later source with the same code replaces an earlier one).
    """
    logger = get_logger()
    schema_set = frozenset(schema) if schema is not None else None
    specs: dict[str, RuleSpec] = {}

    for source, text in sources.items():
        try:
            rule = compile_rule(text, schema_set)
        except (ParseError, ValidationError) as e:
            logger.rule_load("REJECTED", rule=source, source=source, reason=e)
            continue

        spec = RuleSpec.from_rule(rule, source=source, default_severity=default_severity)
        if spec.code in specs:
            logger.warning(f"Rule code '{spec.code}' from {source} replaces {specs[spec.code].source}")
        specs[spec.code] = spec
        logger.rule_load("LOADED", rule=spec.code, source=source, severity=spec.severity)

    return specs


# =============================================================================
# Sweep results
# =============================================================================

@dataclass(frozen=True)
class RuleViolation:
    """A node that a selected, guarded rule's assertion did not accept."""
    spec: RuleSpec
    node: "NodeContext"

    @property
    def code(self) -> str:
        return self.spec.code

    @property
    def severity(self) -> str:
        return self.spec.severity

    @property
    def message(self) -> str:
        return self.spec.message

    @property
    def node_description(self) -> str:
        return describe_node(self.node)


@dataclass(frozen=True)
class EvaluationFault:
    """A (rule, node) pair whose evaluation raised a RuleRuntimeError."""
    spec: RuleSpec
    node: "NodeContext"
    error: RuleRuntimeError

    @property
    def code(self) -> str:
        return self.spec.code

    @property
    def node_description(self) -> str:
        return describe_node(self.node)


@dataclass
class AuditResult:
    """
    Outcome of one sweep.

    Faults are tooling errors, not accessibility findings: `passed` only
    looks at violations.
    """
    violations: list[RuleViolation] = field(default_factory=list)
    faults: list[EvaluationFault] = field(default_factory=list)
    nodes_checked: int = 0
    evaluations: int = 0
    sweep_id: Optional[str] = None

    @property
    def passed(self) -> bool:
        return not self.violations

    def violations_by_code(self) -> dict[str, list[RuleViolation]]:
        grouped: dict[str, list[RuleViolation]] = {}
        for violation in self.violations:
            grouped.setdefault(violation.code, []).append(violation)
        return grouped

    def summary_short(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        return (
            f"{status} | nodes={self.nodes_checked} | evaluations={self.evaluations} | "
            f"violations={len(self.violations)} | faults={len(self.faults)}"
        )


# =============================================================================
# Runner
# =============================================================================

class RuleRunner:
    """
    Evaluates a rule set over nodes.

    Every rule is evaluated on every node. A RuleRuntimeError is logged and
    recorded as a fault for that (rule, node) pair only; the sweep continues.
    """

    def __init__(self, rules: Iterable[RuleSpec], interpreter: Optional[RuleInterpreter] = None):
        self.rules: tuple[RuleSpec, ...] = tuple(rules)
        self.interpreter = interpreter or RuleInterpreter()
        self.logger = get_logger()

    def run(self, nodes: Iterable["NodeContext"], sweep_id: Optional[str] = None) -> AuditResult:
        """
        Evaluate all rules on the given nodes.

        Args:
            nodes: Nodes to check (consumed once).
            sweep_id: Sweep identifier for log correlation (generated if omitted).

        Returns:
            AuditResult with violations, faults and counters.
        """
        with new_sweep_context(sweep_id) as ctx:
            result = AuditResult(sweep_id=ctx.sweep_id)
            for node in nodes:
                result.nodes_checked += 1
                node_label = describe_node(node)
                for spec in self.rules:
                    result.evaluations += 1
                    with audit_context_scope(rule_code=spec.code, node=node_label):
                        self._check(spec, node, node_label, result)

            self.logger.info(f"Sweep {ctx.sweep_id}: {result.summary_short()}")
            return result

    def run_tree(self, root: "NodeContext", sweep_id: Optional[str] = None) -> AuditResult:
        """Evaluate all rules on `root` and every descendant (pre-order)."""
        return self.run(iter_tree(root), sweep_id=sweep_id)

    def _check(self, spec: RuleSpec, node: "NodeContext", node_label: str, result: AuditResult) -> None:
        try:
            compliant = self.interpreter.evaluate(spec.rule, node)
        except RuleRuntimeError as e:
            self.logger.fault(spec.code, node_label, e)
            result.faults.append(EvaluationFault(spec=spec, node=node, error=e))
            return

        if not compliant:
            self.logger.violation(spec.code, node_label, spec.severity, spec.message)
            result.violations.append(RuleViolation(spec=spec, node=node))


__all__ = [
    "describe_node",
    "RuleSpec",
    "compile_rule",
    "load_rules",
    "RuleViolation",
    "EvaluationFault",
    "AuditResult",
    "RuleRunner",
]
