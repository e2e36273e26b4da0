"""
Logging context propagation for rule sweeps.

Provides contextvars-based context (sweep id, rule code, node description)
that flows through sync code and into every log record emitted inside a
scope, so a fault logged deep in the runner still names its rule and node.

Usage:
    from a11y_audit.utils.log_context import audit_context_scope, new_sweep_context

    with new_sweep_context() as ctx:
        with audit_context_scope(rule_code="slider_divisions", node="Slider(slider)"):
            logger.warning("evaluation fault")
            # -> ... | evaluation fault | sweep=sw-1a2b3c rule=slider_divisions node=Slider(slider)
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any


# =============================================================================
# Context Variables (thread-safe, async-safe)
# =============================================================================

_sweep_id: ContextVar[str | None] = ContextVar("sweep_id", default=None)
_rule_code: ContextVar[str | None] = ContextVar("rule_code", default=None)
_node: ContextVar[str | None] = ContextVar("node", default=None)


def _generate_id() -> str:
    """Generate a short unique ID (first 12 chars of UUID4)."""
    return uuid.uuid4().hex[:12]


# =============================================================================
# AuditContext dataclass
# =============================================================================

@dataclass(frozen=True)
class AuditContext:
    """Snapshot of the current audit logging context."""
    sweep_id: str | None = None
    rule_code: str | None = None
    node: str | None = None

    def to_log_fields(self) -> dict[str, Any]:
        """Return only the fields that are set."""
        fields = {}
        if self.sweep_id:
            fields["sweep"] = self.sweep_id
        if self.rule_code:
            fields["rule"] = self.rule_code
        if self.node:
            fields["node"] = self.node
        return fields


def get_audit_context() -> AuditContext:
    """Get the current audit logging context."""
    return AuditContext(
        sweep_id=_sweep_id.get(),
        rule_code=_rule_code.get(),
        node=_node.get(),
    )


# =============================================================================
# Context Managers
# =============================================================================

@contextmanager
def audit_context_scope(
    sweep_id: str | None = None,
    rule_code: str | None = None,
    node: str | None = None,
) -> Generator[AuditContext, None, None]:
    """
    Set audit context fields for a scope.

    Only the fields passed are changed; previous values are restored on exit.

    Yields:
        AuditContext snapshot of the active context
    """
    tokens = []
    if sweep_id is not None:
        tokens.append((_sweep_id, _sweep_id.set(sweep_id)))
    if rule_code is not None:
        tokens.append((_rule_code, _rule_code.set(rule_code)))
    if node is not None:
        tokens.append((_node, _node.set(node)))

    try:
        yield get_audit_context()
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


@contextmanager
def new_sweep_context(sweep_id: str | None = None) -> Generator[AuditContext, None, None]:
    """
    Start a new sweep context, generating a sweep id if not provided.

    Example:
        with new_sweep_context() as ctx:
            print(f"Sweep ID: {ctx.sweep_id}")
    """
    with audit_context_scope(sweep_id=sweep_id or f"sw-{_generate_id()}") as ctx:
        yield ctx


# =============================================================================
# Logging integration
# =============================================================================

class AuditContextFilter(logging.Filter):
    """
    Attach the current audit context to log records.

    Sets `record.audit_ctx` to " | key=value ..." (empty string outside any
    scope) so formatters can append it with %(audit_ctx)s.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        fields = get_audit_context().to_log_fields()
        record.audit_ctx = (
            " | " + " ".join(f"{k}={v}" for k, v in fields.items()) if fields else ""
        )
        return True


__all__ = [
    "AuditContext",
    "get_audit_context",
    "audit_context_scope",
    "new_sweep_context",
    "AuditContextFilter",
]
