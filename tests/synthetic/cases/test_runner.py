"""
Rule loading and sweep tests.

Validates:
1. RuleSpec fields derived from meta with fallbacks
2. load_rules skips and logs rejected rules
3. RuleRunner collects violations and faults separately
"""

import logging

import pytest

from tests.synthetic.harness.nodes import FakeNode
from a11y_audit.rules.dsl_parser import parse_rule
from a11y_audit.rules.errors import ParseError, RuleRuntimeError, ValidationError
from a11y_audit.rules.evaluation import RuleInterpreter
from a11y_audit.rules.runner import RuleRunner, RuleSpec, compile_rule, load_rules
from a11y_audit.rules.tree_context import DictNode


SLIDER_RULE = '''
rule "Slider divisions" on role(slider) {
    meta {
        severity: "error"
        code: "slider_divisions"
        message: "Slider has too many divisions"
        correction: "Use at most 10 divisions"
    }
    when: prop("divisions").is_resolved
    ensure: prop("divisions") as int <= 10
    report: "Too many divisions"
}
'''

LABEL_RULE = '''
rule "Buttons need labels" on kind(action) {
    ensure: prop("label").is_resolved
    report: "Button has no label"
}
'''

FAULTY_RULE = '''
rule "Broken math" on role(slider) {
    meta { code: "broken_math" }
    ensure: prop("label") * 2 > 0
    report: "never reported"
}
'''

SCHEMA = {"divisions", "label"}


@pytest.fixture
def tree() -> DictNode:
    return DictNode.from_dict({
        "type": "Column",
        "role": "group",
        "children": [
            {"type": "Slider", "role": "slider", "focusable": True,
             "props": {"divisions": 20, "label": "Volume"}},
            {"type": "Slider", "role": "slider", "props": {"divisions": "5", "label": "Bass"}},
            {"type": "IconButton", "role": "button", "focusable": True},
            {"type": "TextButton", "role": "button", "props": {"label": "OK"}},
        ],
    })


class TestRuleSpec:
    """Reporting fields from meta."""

    def test_meta_overrides(self):
        spec = RuleSpec.from_rule(parse_rule(SLIDER_RULE), source="slider.rule")
        assert spec.code == "slider_divisions"
        assert spec.severity == "error"
        assert spec.message == "Slider has too many divisions"
        assert spec.correction == "Use at most 10 divisions"
        assert spec.source == "slider.rule"

    def test_defaults(self):
        spec = RuleSpec.from_rule(parse_rule(LABEL_RULE))
        assert spec.code == "Buttons need labels"
        assert spec.severity == "warning"
        assert spec.message == "Button has no label"
        assert spec.correction == "Button has no label"
        assert spec.source is None

    def test_default_severity_override(self):
        spec = RuleSpec.from_rule(parse_rule(LABEL_RULE), default_severity="info")
        assert spec.severity == "info"


class TestLoading:
    """compile_rule and load_rules."""

    def test_compile_without_schema_skips_validation(self):
        rule = compile_rule('rule "r" on any { ensure: anything report: "x" }')
        assert rule.name == "r"

    def test_compile_with_schema_validates(self):
        with pytest.raises(ValidationError):
            compile_rule('rule "r" on any { ensure: anything report: "x" }', schema=SCHEMA)

    def test_compile_propagates_parse_errors(self):
        with pytest.raises(ParseError):
            compile_rule('rule "r" on any { ensure: report: "x" }')

    def test_load_rules_skips_rejects(self, caplog):
        sources = {
            "slider.rule": SLIDER_RULE,
            "label.rule": LABEL_RULE,
            "syntax.rule": 'rule "bad" on any { ensure: ( report: "x" }',
            "schema.rule": 'rule "unknown" on any { ensure: tooltip report: "x" }',
        }
        with caplog.at_level(logging.DEBUG, logger="a11y_audit"):
            specs = load_rules(sources, schema=SCHEMA)

        assert set(specs) == {"slider_divisions", "Buttons need labels"}
        assert specs["slider_divisions"].source == "slider.rule"

        rejected = [r for r in caplog.records if "[RULE:REJECTED]" in r.getMessage()]
        assert len(rejected) == 2
        assert all(r.levelno == logging.WARNING for r in rejected)
        assert any("syntax.rule" in r.getMessage() for r in rejected)
        assert any("tooltip" in r.getMessage() for r in rejected)

    def test_later_duplicate_code_replaces_earlier(self):
        first = 'rule "a" on any { meta { code: "dup" } ensure: true report: "first" }'
        second = 'rule "b" on any { meta { code: "dup" } ensure: true report: "second" }'
        specs = load_rules({"one": first, "two": second})
        assert list(specs) == ["dup"]
        assert specs["dup"].message == "second"


class TestRunner:
    """Sweeping rule sets over nodes."""

    def test_run_tree_finds_violations(self, tree):
        specs = load_rules({"slider": SLIDER_RULE, "label": LABEL_RULE}, schema=SCHEMA)
        result = RuleRunner(specs.values()).run_tree(tree)

        assert result.nodes_checked == 5
        assert result.evaluations == 10
        assert not result.passed
        assert result.faults == []

        found = sorted((v.code, v.node_description) for v in result.violations)
        assert found == [
            ("Buttons need labels", "IconButton(button)"),
            ("slider_divisions", "Slider(slider)"),
        ]
        slider_violation = result.violations_by_code()["slider_divisions"][0]
        assert slider_violation.severity == "error"
        assert slider_violation.node.get_property("label") == "Volume"

    def test_clean_tree_passes(self):
        specs = load_rules({"label": LABEL_RULE})
        root = DictNode(role="button", widget_type="TextButton", props={"label": "OK"})
        result = RuleRunner(specs.values()).run_tree(root)
        assert result.passed
        assert result.summary_short().startswith("PASS")

    def test_runtime_fault_is_recorded_not_reported(self, tree, caplog):
        specs = load_rules({"broken": FAULTY_RULE, "label": LABEL_RULE})
        with caplog.at_level(logging.WARNING, logger="a11y_audit"):
            result = RuleRunner(specs.values()).run_tree(tree)

        assert [f.code for f in result.faults] == ["broken_math", "broken_math"]
        assert all(isinstance(f.error, RuleRuntimeError) for f in result.faults)
        assert {f.node_description for f in result.faults} == {"Slider(slider)"}
        assert [v.code for v in result.violations] == ["Buttons need labels"]

        faults = [r for r in caplog.records if "[FAULT]" in r.getMessage()]
        assert len(faults) == 2
        assert "rule=broken_math" in faults[0].getMessage()

    def test_overflow_is_a_fault_and_sweep_continues(self):
        specs = load_rules({"ratio": 'rule "ratio" on any { ensure: prop("n") / 1 > 0 report: "x" }'})
        huge = FakeNode.with_props({"n": "1" + "0" * 400}, role="slider")
        result = RuleRunner(specs.values()).run([huge, FakeNode.with_props({"n": 3}), FakeNode()])

        assert result.nodes_checked == 3
        assert result.evaluations == 3
        assert [f.node_description for f in result.faults] == ["?(slider)", "?(?)"]
        assert "overflowed" in str(result.faults[0].error)
        assert result.violations == []

    def test_oversized_numeric_string_is_a_violation(self):
        specs = load_rules({"positive": 'rule "positive" on any { ensure: prop("n") > 0 report: "x" }'})
        nodes = [FakeNode.with_props({"n": "9" * 5000}), FakeNode.with_props({"n": "7"})]
        result = RuleRunner(specs.values()).run(nodes)

        assert result.faults == []
        assert [v.node for v in result.violations] == [nodes[0]]

    def test_run_over_plain_nodes(self):
        specs = load_rules({"label": LABEL_RULE})
        nodes = [FakeNode(role="button"), FakeNode(role="text")]
        result = RuleRunner(specs.values()).run(nodes, sweep_id="sweep-1")
        assert result.sweep_id == "sweep-1"
        assert result.nodes_checked == 2
        assert [v.node_description for v in result.violations] == ["?(button)"]

    def test_custom_interpreter_kind_map(self):
        specs = load_rules({"label": LABEL_RULE})
        runner = RuleRunner(specs.values(), interpreter=RuleInterpreter(kind_map={"action": ["link"]}))
        result = runner.run([FakeNode(role="button"), FakeNode(role="link")])
        assert [v.node.role for v in result.violations] == ["link"]
