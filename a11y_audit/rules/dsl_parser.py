"""
DSL Parser: rule source text to AST.

Grammar:
```
rule      := 'rule' STRING 'on' selectors '{' meta? when? ensure report '}'
selectors := selector ('||' selector)*
selector  := 'any' | ('role' | 'type' | 'kind') '(' WORD ')'
meta      := 'meta' '{' (WORD ':' STRING)* '}'
when      := 'when' ':' expr
ensure    := 'ensure' ':' expr
report    := 'report' ':' STRING

expr      := unary (BINOP unary)*        # precedence climbing, see registry
unary     := ('!' | '-') unary | primary
primary   := '(' expr ')'
           | RELATION '.' 'length'
           | RELATION '.' ('any' | 'all' | 'none') '(' expr ')'
           | 'prop' '(' STRING ')' ('.' 'is_resolved' | 'as' CAST)?
           | STATE | 'true' | 'false' | STRING | NUMBER | WORD
```

`left matches "<literal>"` compiles its pattern here; an invalid pattern
is a ParseError. Any other right operand yields a dynamic Binary MATCHES
whose pattern is compiled at evaluation time.

Usage:
    rule = parse_rule('''
        rule "Slider divisions" on role(slider) {
            when: prop("divisions").is_resolved
            ensure: prop("divisions") as int <= 10
            report: "Too many divisions"
        }
    ''')
    expr = parse_expression('children.any(focusable) && !hidden')
"""

from __future__ import annotations

import re

from .dsl_lexer import Token, TokenKind, tokenize
from .dsl_nodes import (
    Expr, Literal, BooleanState, PropAccess, Identifier,
    Unary, Binary, RegexMatch, Aggregator, RelationLength,
    AnySelector, RoleSelector, TypeSelector, KindSelector, Selector,
    Rule, BinaryOp, Relation, AggregatorKind,
    UNARY_OPERATORS, WORD_OPERATORS, RELATION_NAMES, AGGREGATOR_NAMES,
    BOOLEAN_STATES, BOOLEAN_LITERALS, CAST_NAMES, CASE_INSENSITIVE_PREFIX,
)
from .errors import ParseError
from .registry import MIN_PRECEDENCE, OperatorSpec, get_operator_spec


# =============================================================================
# Regex Compilation
# =============================================================================

def _anchor_at_end(pattern: str) -> str:
    """Rewrite unescaped `$` outside character classes as `\\Z`."""
    out: list[str] = []
    i = 0
    n = len(pattern)
    in_class = False
    while i < n:
        ch = pattern[i]
        if ch == "\\":
            out.append(pattern[i:i + 2])
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
        elif ch == "[":
            in_class = True
            out.append(ch)
            i += 1
            # A ']' right after '[' or '[^' is a literal member
            if i < n and pattern[i] == "^":
                out.append("^")
                i += 1
            if i < n and pattern[i] == "]":
                out.append("]")
                i += 1
            continue
        elif ch == "$":
            out.append(r"\Z")
            i += 1
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def compile_pattern(pattern: str) -> re.Pattern:
    """
    Compile a `matches` pattern.

    A leading (?i) is stripped and turned into case-insensitive matching.
    `$` anchors at the very end of the text only: Python's `$` would also
    match before a trailing newline, so it is compiled as `\\Z`. The rest of
    the pattern is used as written.

    Raises:
        re.error: If the pattern is invalid.
    """
    flags = 0
    if pattern.startswith(CASE_INSENSITIVE_PREFIX):
        pattern = pattern[len(CASE_INSENSITIVE_PREFIX):]
        flags |= re.IGNORECASE
    return re.compile(_anchor_at_end(pattern), flags)


# =============================================================================
# Recursive Descent Parser
# =============================================================================

_SELECTOR_FACTORIES = {
    "role": RoleSelector,
    "type": TypeSelector,
    "kind": KindSelector,
}


class _Parser:
    """Single-use parser over one token stream."""

    def __init__(self, source: str):
        self.source = source
        self.tokens = tokenize(source)
        self.pos = 0

    # -------------------------------------------------------------------------
    # Token helpers
    # -------------------------------------------------------------------------

    def peek(self, offset: int = 0) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def advance(self) -> Token:
        token = self.peek()
        if token.kind is not TokenKind.EOF:
            self.pos += 1
        return token

    def error(self, reason: str, token: Token | None = None) -> ParseError:
        token = token or self.peek()
        return ParseError.at(self.source, token.position, f"{reason}, found {token.describe()}")

    def expect_punct(self, symbol: str) -> Token:
        token = self.peek()
        if not token.is_punct(symbol):
            raise self.error(f"expected '{symbol}'")
        return self.advance()

    def expect_word(self, word: str | None = None) -> Token:
        token = self.peek()
        if token.kind is not TokenKind.WORD or (word is not None and token.value != word):
            raise self.error(f"expected '{word}'" if word else "expected identifier")
        return self.advance()

    def expect_string(self, what: str) -> str:
        token = self.peek()
        if token.kind is not TokenKind.STRING:
            raise self.error(f"expected {what} string")
        self.advance()
        return token.value

    def expect_eof(self) -> None:
        if self.peek().kind is not TokenKind.EOF:
            raise self.error("expected end of input")

    # -------------------------------------------------------------------------
    # Rule structure
    # -------------------------------------------------------------------------

    def parse_rule(self) -> Rule:
        self.expect_word("rule")
        name = self.expect_string("rule name")
        self.expect_word("on")
        selectors = self.parse_selectors()
        self.expect_punct("{")

        meta: dict[str, str] = {}
        if self.peek().is_word("meta"):
            meta = self.parse_meta()

        when: Expr | None = None
        if self.peek().is_word("when"):
            self.advance()
            self.expect_punct(":")
            when = self.parse_expr()

        self.expect_word("ensure")
        self.expect_punct(":")
        ensure = self.parse_expr()

        self.expect_word("report")
        self.expect_punct(":")
        report = self.expect_string("report")

        self.expect_punct("}")
        self.expect_eof()

        return Rule(
            name=name,
            selectors=tuple(selectors),
            ensure=ensure,
            report=report,
            when=when,
            meta=meta,
        )

    def parse_selectors(self) -> list[Selector]:
        selectors = [self.parse_selector()]
        while self.peek().is_punct("||"):
            self.advance()
            selectors.append(self.parse_selector())
        return selectors

    def parse_selector(self) -> Selector:
        token = self.peek()
        if token.is_word("any"):
            self.advance()
            return AnySelector()
        if token.kind is TokenKind.WORD and token.value in _SELECTOR_FACTORIES:
            self.advance()
            self.expect_punct("(")
            arg = self.expect_word().value
            self.expect_punct(")")
            return _SELECTOR_FACTORIES[token.value](arg)
        raise self.error("expected selector (any, role(...), type(...) or kind(...))")

    def parse_meta(self) -> dict[str, str]:
        self.expect_word("meta")
        self.expect_punct("{")
        meta: dict[str, str] = {}
        while not self.peek().is_punct("}"):
            key = self.expect_word().value
            self.expect_punct(":")
            meta[key] = self.expect_string("meta value")
        self.expect_punct("}")
        return meta

    # -------------------------------------------------------------------------
    # Expressions
    # -------------------------------------------------------------------------

    def binary_spec(self, token: Token) -> OperatorSpec | None:
        if token.kind is TokenKind.PUNCT:
            return get_operator_spec(token.value)
        if token.kind is TokenKind.WORD and token.value in WORD_OPERATORS:
            return get_operator_spec(token.value)
        return None

    def parse_expr(self, min_precedence: int = MIN_PRECEDENCE) -> Expr:
        left = self.parse_unary()
        while True:
            spec = self.binary_spec(self.peek())
            if spec is None or spec.precedence < min_precedence:
                return left
            self.advance()
            right_token = self.peek()
            # Left-associative: the right side only takes tighter operators
            right = self.parse_expr(spec.precedence + 1)
            left = self.make_binary(left, spec.op, right, right_token)

    def make_binary(self, left: Expr, op: BinaryOp, right: Expr, right_token: Token) -> Expr:
        if op is BinaryOp.MATCHES and isinstance(right, Literal) and isinstance(right.value, str):
            try:
                pattern = compile_pattern(right.value)
            except re.error as e:
                raise ParseError.at(
                    self.source, right_token.position, f"invalid regular expression: {e}"
                ) from e
            return RegexMatch(left=left, pattern=pattern, source=right.value)
        return Binary(left=left, op=op, right=right)

    def parse_unary(self) -> Expr:
        token = self.peek()
        if token.kind is TokenKind.PUNCT and token.value in UNARY_OPERATORS:
            self.advance()
            return Unary(op=token.value, operand=self.parse_unary())
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        token = self.peek()

        if token.is_punct("("):
            self.advance()
            expr = self.parse_expr()
            self.expect_punct(")")
            return expr

        if token.kind is TokenKind.STRING:
            self.advance()
            return Literal(token.value)

        if token.kind is TokenKind.NUMBER:
            self.advance()
            return Literal(token.value)

        if token.kind is not TokenKind.WORD:
            raise self.error("expected expression")

        word = token.value
        if word in RELATION_NAMES and self.peek(1).is_punct("."):
            return self.parse_traversal()
        if word == "prop" and self.peek(1).is_punct("("):
            return self.parse_prop()

        self.advance()
        if word in BOOLEAN_STATES:
            return BooleanState(word)
        if word in BOOLEAN_LITERALS:
            return Literal(word == "true")
        return Identifier(word)

    def parse_traversal(self) -> Expr:
        relation = Relation(self.advance().value)
        self.expect_punct(".")
        token = self.peek()
        if token.is_word("length"):
            self.advance()
            return RelationLength(relation)
        if token.kind is TokenKind.WORD and token.value in AGGREGATOR_NAMES:
            self.advance()
            self.expect_punct("(")
            body = self.parse_expr()
            self.expect_punct(")")
            return Aggregator(relation=relation, kind=AggregatorKind(token.value), body=body)
        raise self.error("expected 'length', 'any', 'all' or 'none'")

    def parse_prop(self) -> PropAccess:
        self.expect_word("prop")
        self.expect_punct("(")
        name = self.expect_string("property name")
        self.expect_punct(")")

        if self.peek().is_punct(".") and self.peek(1).is_word("is_resolved"):
            self.advance()
            self.advance()
            return PropAccess(name, is_resolved=True)

        if self.peek().is_word("as"):
            self.advance()
            cast = self.peek()
            if cast.kind is not TokenKind.WORD or cast.value not in CAST_NAMES:
                raise self.error("expected cast type (int, string or bool)")
            self.advance()
            return PropAccess(name, as_type=cast.value)

        return PropAccess(name)


# =============================================================================
# Public API
# =============================================================================

def parse_rule(source: str) -> Rule:
    """
    Parse one rule from source text.

    Args:
        source: Complete rule text (surrounding whitespace allowed).

    Returns:
        Immutable Rule.

    Raises:
        ParseError: On any syntax error, trailing input, or invalid
            literal regex pattern.
    """
    return _Parser(source).parse_rule()


# Short form used by hosts that load rule text
parse = parse_rule


def parse_expression(source: str) -> Expr:
    """
    Parse a standalone expression (the text after `ensure:`).

    Raises:
        ParseError: On any syntax error or trailing input.
    """
    parser = _Parser(source)
    expr = parser.parse_expr()
    parser.expect_eof()
    return expr


__all__ = [
    "compile_pattern",
    "parse_rule",
    "parse",
    "parse_expression",
]
