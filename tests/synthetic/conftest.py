"""
Pytest configuration for rule language tests.
"""

import logging

import pytest

from tests.synthetic.harness.nodes import FakeNode
from a11y_audit.config.config import reset_config
from a11y_audit.rules.evaluation import RuleInterpreter
from a11y_audit.utils.logger import setup_logger


@pytest.fixture(autouse=True)
def _audit_logging():
    """Console-only audit logger that propagates to caplog."""
    logger = setup_logger(log_dir=None, log_level="DEBUG")
    yield logger
    audit_logger = logging.getLogger("a11y_audit")
    for handler in audit_logger.handlers:
        handler.close()
    audit_logger.handlers.clear()
    reset_config()


@pytest.fixture
def interpreter() -> RuleInterpreter:
    """Interpreter with the default kind map."""
    return RuleInterpreter()


@pytest.fixture
def empty_node() -> FakeNode:
    """Node with no role, type or properties."""
    return FakeNode()


@pytest.fixture
def slider_node() -> FakeNode:
    """Focusable slider with a label and string-typed divisions."""
    return FakeNode.with_props(
        {"label": "Volume", "divisions": "20", "max": 100},
        role="slider",
        widget_type="Slider",
        is_focusable=True,
    )


@pytest.fixture
def button_group() -> FakeNode:
    """Group with one labelled focusable button and one plain text child."""
    return FakeNode(
        role="group",
        widget_type="Row",
        children=[
            FakeNode.with_props({"label": "OK"}, role="button", widget_type="TextButton", is_focusable=True),
            FakeNode.with_props({"text": "Hint"}, role="text", widget_type="Text"),
        ],
    )
