"""Logging utilities for the audit engine."""

from .logger import AuditLogger, get_logger, setup_logger
from .log_context import (
    AuditContext,
    AuditContextFilter,
    audit_context_scope,
    get_audit_context,
    new_sweep_context,
)

__all__ = [
    "AuditLogger",
    "get_logger",
    "setup_logger",
    "AuditContext",
    "AuditContextFilter",
    "audit_context_scope",
    "get_audit_context",
    "new_sweep_context",
]
