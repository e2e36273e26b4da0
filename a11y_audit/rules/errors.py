"""
Rule language error types.

Three failure classes, never conflated:
- ParseError: malformed rule text (load time, no Rule is produced)
- ValidationError: rule references a name outside the caller's schema (load time)
- RuleRuntimeError: the evaluator cannot execute an expression (evaluation time)

A RuleRuntimeError is a tooling fault, not an accessibility violation.
"""

from __future__ import annotations


class RuleError(Exception):
    """Base class for all rule language errors."""


class ParseError(RuleError, ValueError):
    """
    Raised when rule source text cannot be parsed.

    Attributes:
        reason: Human-readable description of what was expected
        position: 0-based character offset into the source
        line: 1-based line number
        column: 1-based column number
    """

    def __init__(self, reason: str, position: int, line: int, column: int):
        self.reason = reason
        self.position = position
        self.line = line
        self.column = column
        super().__init__(f"Parse error: {reason} at {line}:{column}")

    @classmethod
    def at(cls, source: str, position: int, reason: str) -> "ParseError":
        """Build a ParseError, deriving line/column from an offset into source."""
        position = max(0, min(position, len(source)))
        line = source.count("\n", 0, position) + 1
        column = position - (source.rfind("\n", 0, position) + 1) + 1
        return cls(reason, position, line, column)


class ValidationError(RuleError, ValueError):
    """
    Raised when a parsed rule references an unknown identifier or property.

    Attributes:
        rule_name: Name of the offending rule
        identifier: The unknown name
        kind: "identifier" for bare names, "property" for prop("...") access
        suggestions: Close matches from the schema (may be empty)
    """

    def __init__(
        self,
        rule_name: str,
        identifier: str,
        kind: str = "identifier",
        suggestions: tuple[str, ...] = (),
    ):
        self.rule_name = rule_name
        self.identifier = identifier
        self.kind = kind
        self.suggestions = suggestions
        msg = f'Unknown {kind} "{identifier}" in rule {rule_name}'
        if suggestions:
            msg += f" (did you mean: {', '.join(suggestions)}?)"
        super().__init__(msg)


class RuleRuntimeError(RuleError, RuntimeError):
    """Raised when an expression cannot be executed (type or arithmetic fault)."""


__all__ = [
    "RuleError",
    "ParseError",
    "ValidationError",
    "RuleRuntimeError",
]
