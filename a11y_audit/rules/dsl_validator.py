"""
DSL Reference Validator: load-time validation of names a rule reads.

A rule may only reference identifiers and properties the host declares in
its schema, plus the built-ins (role, widgetType, type). Boolean states,
relations and keywords are part of the grammar and are never checked here.

Functions:
- find_unknown_references: Collect every unknown reference in a rule
- validate: Raise ValidationError for the first unknown reference
"""

from __future__ import annotations

import difflib
from typing import Iterable

from .dsl_nodes import BUILTIN_IDENTIFIERS, Identifier, PropAccess, Rule, walk, rule_expressions
from .errors import ValidationError


def _suggest(name: str, known: Iterable[str]) -> tuple[str, ...]:
    return tuple(difflib.get_close_matches(name, sorted(known), n=3, cutoff=0.6))


def find_unknown_references(rule: Rule, schema: Iterable[str]) -> list[ValidationError]:
    """
    Walk the `when` clause then the `ensure` clause and collect unknown names.

    Args:
        rule: Parsed rule.
        schema: Identifier/property names the host supports.

    Returns:
        One ValidationError per unknown reference, in source order
        (empty if the rule is valid).
    """
    known = set(schema) | BUILTIN_IDENTIFIERS
    errors: list[ValidationError] = []

    for clause in rule_expressions(rule):
        for node in walk(clause):
            if isinstance(node, Identifier):
                kind = "identifier"
            elif isinstance(node, PropAccess):
                kind = "property"
            else:
                continue
            if node.name not in known:
                errors.append(ValidationError(
                    rule_name=rule.name,
                    identifier=node.name,
                    kind=kind,
                    suggestions=_suggest(node.name, known),
                ))

    return errors


def validate(rule: Rule, schema: Iterable[str]) -> None:
    """
    Check every identifier and property a rule reads against a schema.

    Args:
        rule: Parsed rule.
        schema: Identifier/property names the host supports.

    Raises:
        ValidationError: For the first unknown reference.
    """
    errors = find_unknown_references(rule, schema)
    if errors:
        raise errors[0]


__all__ = [
    "find_unknown_references",
    "validate",
]
