"""
Audit logging tests.

Validates:
1. Context scopes nest and restore
2. AuditContextFilter decorates records
3. Structured logger helpers and file output
"""

import logging

from a11y_audit.utils.log_context import (
    AuditContextFilter,
    audit_context_scope,
    get_audit_context,
    new_sweep_context,
)
from a11y_audit.utils.logger import ColoredFormatter, setup_logger


def make_record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord("a11y_audit.test", logging.WARNING, __file__, 1, msg, None, None)


class TestAuditContext:
    """contextvars scopes."""

    def test_scopes_nest_and_restore(self):
        assert get_audit_context().sweep_id is None
        with new_sweep_context("sw-1"):
            with audit_context_scope(rule_code="r1", node="Slider(slider)") as ctx:
                assert ctx.sweep_id == "sw-1"
                assert ctx.rule_code == "r1"
            assert get_audit_context().rule_code is None
            assert get_audit_context().sweep_id == "sw-1"
        assert get_audit_context().sweep_id is None

    def test_generated_sweep_id(self):
        with new_sweep_context() as ctx:
            assert ctx.sweep_id.startswith("sw-")

    def test_filter_adds_context(self):
        record = make_record()
        with audit_context_scope(sweep_id="sw-2", rule_code="r2"):
            assert AuditContextFilter().filter(record) is True
        assert record.audit_ctx == " | sweep=sw-2 rule=r2"

    def test_filter_outside_scope(self):
        record = make_record()
        AuditContextFilter().filter(record)
        assert record.audit_ctx == ""


class TestAuditLogger:
    """Logger helpers and handlers."""

    def test_colored_formatter_leaves_record_plain(self):
        record = make_record("plain")
        record.audit_ctx = ""
        output = ColoredFormatter("%(levelname)s | %(message)s%(audit_ctx)s").format(record)
        assert "\033[" in output
        assert record.levelname == "WARNING"
        assert record.msg == "plain"

    def test_writes_daily_file(self, tmp_path):
        logger = setup_logger(log_dir=str(tmp_path), log_level="INFO")
        with audit_context_scope(sweep_id="sw-file"):
            logger.violation("rule_x", "Slider(slider)", "warning", "too many divisions")
        for handler in logging.getLogger("a11y_audit").handlers:
            handler.flush()

        files = list(tmp_path.glob("audit_*.log"))
        assert len(files) == 1
        content = files[0].read_text(encoding="utf-8")
        assert "[VIOLATION:WARNING] | rule=rule_x | node=Slider(slider)" in content
        assert "sweep=sw-file" in content
        assert "\033[" not in content

    def test_rule_load_levels(self, caplog):
        logger = setup_logger(log_level="DEBUG")
        with caplog.at_level(logging.DEBUG, logger="a11y_audit"):
            logger.rule_load("LOADED", rule="a", source="a.rule")
            logger.rule_load("REJECTED", rule="b", reason="bad")
        levels = [(r.levelno, r.getMessage()) for r in caplog.records]
        assert levels == [
            (logging.DEBUG, "[RULE:LOADED] | rule=a | source=a.rule"),
            (logging.WARNING, "[RULE:REJECTED] | rule=b | reason=bad"),
        ]

    def test_fault_message(self, caplog):
        logger = setup_logger()
        with caplog.at_level(logging.WARNING, logger="a11y_audit"):
            logger.fault("r", "Text(text)", RuntimeError("boom"))
        assert caplog.records[-1].getMessage() == "[FAULT] | rule=r | node=Text(text) | error=RuntimeError: boom"
