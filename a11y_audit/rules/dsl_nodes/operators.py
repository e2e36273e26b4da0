"""
DSL Operator Nodes for the accessibility rule language.

This module defines the composite expression nodes built from operators:
- Unary: prefix ! and -
- Binary: arithmetic, relational, equality, string and logical operators
- RegexMatch: `matches` against a pattern compiled at parse time
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import BinaryOp, UNARY_OPERATORS

if TYPE_CHECKING:
    from .types import Expr


@dataclass(frozen=True)
class Unary:
    """
    Prefix operator applied to one operand.

    Attributes:
        op: "!" or "-"
        operand: The operand expression
    """
    op: str
    operand: "Expr"

    def __post_init__(self):
        if self.op not in UNARY_OPERATORS:
            raise ValueError(
                f"Unary: unknown operator '{self.op}'. "
                f"Valid operators: {sorted(UNARY_OPERATORS)}"
            )

    def __repr__(self) -> str:
        return f"Unary({self.op}{self.operand!r})"


@dataclass(frozen=True)
class Binary:
    """
    Binary operator node.

    A `matches` Binary only appears when the pattern operand is computed
    (not a string literal); its pattern is compiled per evaluation.

    Attributes:
        left: Left operand
        op: BinaryOp
        right: Right operand
    """
    left: "Expr"
    op: BinaryOp
    right: "Expr"

    def __post_init__(self):
        if not isinstance(self.op, BinaryOp):
            raise ValueError(f"Binary: op must be a BinaryOp, got {self.op!r}")

    def __repr__(self) -> str:
        return f"Binary({self.left!r} {self.op.value} {self.right!r})"


@dataclass(frozen=True)
class RegexMatch:
    """
    `left matches "<literal>"` with the pattern compiled eagerly.

    Attributes:
        left: Expression whose string form is tested
        pattern: Compiled pattern ((?i) prefix already applied as IGNORECASE)
        source: Pattern text exactly as written in the rule
    """
    left: "Expr"
    pattern: re.Pattern
    source: str

    def __repr__(self) -> str:
        return f"RegexMatch({self.left!r}, {self.source!r})"


__all__ = [
    "Unary",
    "Binary",
    "RegexMatch",
]
