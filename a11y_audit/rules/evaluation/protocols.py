"""
Shared protocols for rule expression evaluation.

Provides Protocol classes to avoid circular imports between evaluation modules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from ..dsl_nodes import Expr

if TYPE_CHECKING:
    from ..context import NodeContext


class ExprEvaluatorProtocol(Protocol):
    """Protocol for expression evaluator to avoid circular imports."""

    def evaluate(self, expr: Expr, node: "NodeContext") -> Any: ...
