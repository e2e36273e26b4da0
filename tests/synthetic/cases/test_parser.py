"""
Rule text parsing tests.

Validates:
1. Rule structure (selectors, meta, when, ensure, report)
2. Operator precedence and associativity
3. Literals, string escapes, prop(...) suffixes, traversals
4. Literal vs computed `matches` patterns
5. Positioned ParseErrors for malformed input
"""

import re

import pytest

from a11y_audit.rules.dsl_lexer import TokenKind, tokenize
from a11y_audit.rules.dsl_nodes import (
    Aggregator,
    AggregatorKind,
    AnySelector,
    Binary,
    BinaryOp,
    BooleanState,
    Identifier,
    KindSelector,
    Literal,
    PropAccess,
    RegexMatch,
    Relation,
    RelationLength,
    RoleSelector,
    TypeSelector,
    Unary,
)
from a11y_audit.rules.dsl_parser import compile_pattern, parse, parse_expression, parse_rule
from a11y_audit.rules.errors import ParseError


def rule_with(ensure: str, selectors: str = "any") -> str:
    """Wrap an ensure expression in a minimal rule."""
    return f'rule "r" on {selectors} {{ ensure: {ensure} report: "x" }}'


# =============================================================================
# Rule structure
# =============================================================================

class TestRuleStructure:
    """Header, selectors and body clauses."""

    def test_full_rule(self):
        rule = parse_rule('''
            rule "Slider divisions" on role(slider) {
                meta {
                    severity: "error"
                    code: "slider_divisions"
                }
                when: prop("divisions").is_resolved
                ensure: prop("divisions") as int <= 10
                report: "Too many divisions"
            }
        ''')

        assert rule.name == "Slider divisions"
        assert rule.selectors == (RoleSelector("slider"),)
        assert dict(rule.meta) == {"severity": "error", "code": "slider_divisions"}
        assert rule.when == PropAccess("divisions", is_resolved=True)
        assert rule.ensure == Binary(
            PropAccess("divisions", as_type="int"), BinaryOp.LESS_EQUAL, Literal(10)
        )
        assert rule.report == "Too many divisions"

    def test_minimal_rule_has_no_guard_or_meta(self):
        rule = parse_rule(rule_with("focusable"))
        assert rule.when is None
        assert dict(rule.meta) == {}
        assert rule.ensure == BooleanState("focusable")

    def test_selector_alternatives(self):
        rule = parse_rule(rule_with("true", "role(button) || type(InkWell) || kind(input) || any"))
        assert rule.selectors == (
            RoleSelector("button"),
            TypeSelector("InkWell"),
            KindSelector("input"),
            AnySelector(),
        )

    def test_report_is_kept_verbatim(self):
        rule = parse_rule('rule "r" on any { ensure: true report: "Label ${label} missing" }')
        assert rule.report == "Label ${label} missing"

    def test_parse_alias(self):
        assert parse(rule_with("hidden")) == parse_rule(rule_with("hidden"))

    def test_rule_is_immutable(self):
        rule = parse_rule(rule_with("hidden"))
        with pytest.raises(AttributeError):
            rule.name = "other"
        with pytest.raises(TypeError):
            rule.meta["code"] = "x"


# =============================================================================
# Precedence
# =============================================================================

class TestPrecedence:
    """Binding power, loosest to tightest: || && equality relational additive multiplicative unary."""

    def test_and_binds_tighter_than_or(self):
        expr = parse_expression("a || b && c")
        assert expr == Binary(
            Identifier("a"), BinaryOp.OR,
            Binary(Identifier("b"), BinaryOp.AND, Identifier("c")),
        )

    def test_multiplication_binds_tighter_than_addition(self):
        expr = parse_expression("1 + 2 * 3")
        assert expr == Binary(
            Literal(1), BinaryOp.ADD,
            Binary(Literal(2), BinaryOp.MULTIPLY, Literal(3)),
        )

    def test_relational_binds_tighter_than_equality(self):
        expr = parse_expression("a == b < c")
        assert expr == Binary(
            Identifier("a"), BinaryOp.EQUALS,
            Binary(Identifier("b"), BinaryOp.LESS, Identifier("c")),
        )

    def test_string_operators_share_equality_level(self):
        expr = parse_expression('label contains "a" && role ~= "Button"')
        assert expr.op is BinaryOp.AND
        assert expr.left.op is BinaryOp.CONTAINS
        assert expr.right.op is BinaryOp.TILDE_EQUALS

    def test_binary_operators_are_left_associative(self):
        expr = parse_expression("10 - 2 - 3")
        assert expr == Binary(
            Binary(Literal(10), BinaryOp.SUBTRACT, Literal(2)),
            BinaryOp.SUBTRACT,
            Literal(3),
        )

    def test_parentheses_override_precedence(self):
        expr = parse_expression("(1 + 2) * 3")
        assert expr.op is BinaryOp.MULTIPLY
        assert expr.left.op is BinaryOp.ADD

    def test_unary_binds_tightest(self):
        expr = parse_expression("!focusable && enabled")
        assert expr == Binary(
            Unary("!", BooleanState("focusable")), BinaryOp.AND, BooleanState("enabled")
        )

    def test_repeated_prefix_operators(self):
        assert parse_expression("!!hidden") == Unary("!", Unary("!", BooleanState("hidden")))
        assert parse_expression("- -1") == Unary("-", Unary("-", Literal(1)))


# =============================================================================
# Primaries
# =============================================================================

class TestPrimaries:
    """Literals, names, properties and traversals."""

    def test_numbers_are_unsigned(self):
        assert parse_expression("10") == Literal(10)
        assert parse_expression("0.75") == Literal(0.75)
        assert parse_expression("-3.5") == Unary("-", Literal(3.5))

    def test_integer_literal_stays_int(self):
        value = parse_expression("42").value
        assert isinstance(value, int) and value == 42

    def test_boolean_literals(self):
        assert parse_expression("true") == Literal(True)
        assert parse_expression("false") == Literal(False)

    def test_null_is_an_identifier(self):
        assert parse_expression("null") == Identifier("null")

    def test_boolean_states(self):
        for name in ("focusable", "enabled", "hidden", "checked", "toggled",
                     "merges_descendants", "has_tap", "has_long_press",
                     "is_empty", "is_not_empty"):
            assert parse_expression(name) == BooleanState(name)

    def test_prop_forms(self):
        assert parse_expression('prop("label")') == PropAccess("label")
        assert parse_expression('prop("label").is_resolved') == PropAccess("label", is_resolved=True)
        assert parse_expression('prop("n") as int') == PropAccess("n", as_type="int")
        assert parse_expression('prop("n") as string') == PropAccess("n", as_type="string")
        assert parse_expression('prop("n") as bool') == PropAccess("n", as_type="bool")

    def test_relation_length(self):
        assert parse_expression("children.length") == RelationLength(Relation.CHILDREN)
        assert parse_expression("next_focus.length") == RelationLength(Relation.NEXT_FOCUS)

    def test_aggregators(self):
        expr = parse_expression("ancestors.none(hidden)")
        assert expr == Aggregator(Relation.ANCESTORS, AggregatorKind.NONE, BooleanState("hidden"))

    def test_nested_aggregators(self):
        expr = parse_expression("children.any(children.all(focusable))")
        assert isinstance(expr, Aggregator)
        assert expr.body == Aggregator(Relation.CHILDREN, AggregatorKind.ALL, BooleanState("focusable"))

    def test_relation_name_without_dot_is_identifier(self):
        assert parse_expression("children") == Identifier("children")


# =============================================================================
# Strings
# =============================================================================

class TestStrings:
    """String literal escapes."""

    def test_known_escapes_are_decoded(self):
        assert parse_expression(r'"a\nb\tc\rd"') == Literal("a\nb\tc\rd")
        assert parse_expression(r'"say \"hi\""') == Literal('say "hi"')
        assert parse_expression(r'"back\\slash"') == Literal("back\\slash")

    def test_unknown_escapes_are_preserved(self):
        assert parse_expression(r'"\d+\s\b"') == Literal(r"\d+\s\b")

    def test_strings_may_span_lines(self):
        assert parse_expression('"a\nb"') == Literal("a\nb")

    def test_lexer_tokens(self):
        kinds = [t.kind for t in tokenize('prop("x") >= 1.5')]
        assert kinds == [
            TokenKind.WORD, TokenKind.PUNCT, TokenKind.STRING, TokenKind.PUNCT,
            TokenKind.PUNCT, TokenKind.NUMBER, TokenKind.EOF,
        ]


# =============================================================================
# Regex
# =============================================================================

class TestMatches:
    """Literal patterns compile at parse time; computed ones stay dynamic."""

    def test_literal_pattern_is_precompiled(self):
        expr = parse_expression(r'label matches "^\d+$"')
        assert isinstance(expr, RegexMatch)
        assert expr.left == Identifier("label")
        assert expr.source == r"^\d+$"
        assert expr.pattern.search("123")

    def test_case_insensitive_prefix(self):
        expr = parse_expression('label matches "(?i)^ok$"')
        assert expr.pattern.flags & re.IGNORECASE
        assert expr.pattern.pattern == r"^ok\Z"

    def test_invalid_literal_pattern_is_parse_error(self):
        with pytest.raises(ParseError, match="invalid regular expression"):
            parse_rule(rule_with('label matches "[unclosed"'))

    def test_computed_pattern_is_dynamic(self):
        expr = parse_expression('label matches prop("pattern")')
        assert expr == Binary(Identifier("label"), BinaryOp.MATCHES, PropAccess("pattern"))

    def test_invalid_computed_pattern_parses(self):
        expr = parse_expression('label matches ("[" + "")')
        assert isinstance(expr, Binary)

    def test_dollar_anchors_at_end_of_text_only(self):
        assert compile_pattern("abc$").search("abc") is not None
        assert compile_pattern("abc$").search("abc\n") is None
        assert compile_pattern("(?i)^ABC$").search("abc\n") is None

    @pytest.mark.parametrize("pattern,text", [
        (r"a\$", "a$"),
        ("[$]", "$"),
        ("[]$]", "$"),
        ("[^]$]x", "ax"),
    ])
    def test_literal_dollars_are_untouched(self, pattern, text):
        assert compile_pattern(pattern).search(text) is not None


# =============================================================================
# Errors
# =============================================================================

class TestParseErrors:
    """Malformed input is rejected with a position."""

    @pytest.mark.parametrize("text", [
        'rule "r" on any { report: "x" }',                        # missing ensure
        'rule "r" on any { ensure: true }',                       # missing report
        'rule "r" on any { ensure: true report: "x" } extra',     # trailing input
        'rule "r" on any { ensure: true report: "x"',             # missing brace
        'rule "r" on { ensure: true report: "x" }',               # missing selector
        'rule "r" on role() { ensure: true report: "x" }',        # empty selector arg
        'rule "r" on any { ensure: a b report: "x" }',            # juxtaposed operands
        'rule "r" on any { ensure: 1 + report: "x" }',            # dangling operator
        'rule "r" on any { ensure: prop("x") as float report: "x" }',
        'rule "r" on any { ensure: children.first report: "x" }',
        'rule "r" on any { ensure: a | b report: "x" }',
        'rule "r" on any { ensure: a @ b report: "x" }',
        'rule r on any { ensure: true report: "x" }',
        'rule "r" on any { when true ensure: true report: "x" }',
        'rule "r" on any { meta { code = "x" } ensure: true report: "x" }',
    ])
    def test_malformed_rules(self, text):
        with pytest.raises(ParseError):
            parse_rule(text)

    def test_unterminated_string(self):
        with pytest.raises(ParseError, match="unterminated string"):
            parse_rule('rule "r on any {')

    def test_error_carries_line_and_column(self):
        text = 'rule "r" on any {\n  ensure: (true\n  report: "x"\n}'
        with pytest.raises(ParseError) as exc_info:
            parse_rule(text)
        err = exc_info.value
        assert err.line == 3
        assert err.column == 3
        assert err.position == text.index("report")
        assert "3:3" in str(err)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_expression("(")
