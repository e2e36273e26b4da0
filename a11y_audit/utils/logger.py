"""
Logging system for the accessibility audit engine.
Provides structured, human-readable logs with console and optional file output.

Components share one AuditLogger through get_logger().
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .log_context import AuditContextFilter


ROOT_LOGGER_NAME = "a11y_audit"


# ANSI color codes for terminal output
class Colors:
    RESET = "\033[0m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    BOLD = "\033[1m"


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for console output."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.CYAN,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record):
        # Color a copy so other handlers see the plain record
        record = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        record.levelname = f"{color}{record.levelname}{Colors.RESET}"
        record.msg = f"{color}{record.msg}{Colors.RESET}"
        return super().format(record)


class AuditLogger:
    """
    Central logging system for rule loading and sweeps.

    Features:
    - Console output with colors
    - Optional daily file output (audit_YYYYMMDD.log)
    - Sweep / rule / node context appended to every line
    - Structured helpers for rule loading, faults and violations
    """

    _instance: Optional['AuditLogger'] = None
    _initialized: bool = False

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, log_dir: Optional[str] = None, log_level: str = "INFO"):
        if AuditLogger._initialized:
            return

        self.log_dir = Path(log_dir) if log_dir else None
        self.main_logger = self._create_logger(ROOT_LOGGER_NAME, log_level)

        AuditLogger._initialized = True

    def _create_logger(self, name: str, level: str) -> logging.Logger:
        """Create a configured logger instance."""
        logger = logging.getLogger(name)
        logger.setLevel(getattr(logging, level.upper()))
        logger.handlers.clear()
        context_filter = AuditContextFilter()

        # Console handler with colors
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(ColoredFormatter(
            "%(asctime)s | %(levelname)s | %(message)s%(audit_ctx)s",
            datefmt="%H:%M:%S"
        ))
        console_handler.addFilter(context_filter)
        logger.addHandler(console_handler)

        # File handler (plain text, no colors)
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            log_file = self.log_dir / f"audit_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s%(audit_ctx)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
            file_handler.addFilter(context_filter)
            logger.addHandler(file_handler)

        return logger

    def info(self, msg: str, *args, **kwargs):
        """Log info message."""
        self.main_logger.info(msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs):
        """Log debug message."""
        self.main_logger.debug(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        """Log warning message."""
        self.main_logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        """Log error message."""
        self.main_logger.error(msg, *args, **kwargs)

    def rule_load(self, status: str, rule: str, source: Optional[str] = None, **kwargs):
        """
        Log a rule load outcome with structured format.

        Args:
            status: LOADED, REJECTED
            rule: Rule code or name
            source: Where the rule text came from (optional)
            **kwargs: Additional fields (reason, severity, ...)
        """
        parts = [f"[RULE:{status}]", f"rule={rule}"]
        if source:
            parts.append(f"source={source}")
        for key, value in kwargs.items():
            parts.append(f"{key}={value}")

        msg = " | ".join(parts)
        if status == "REJECTED":
            self.main_logger.warning(msg)
        else:
            self.main_logger.debug(msg)

    def fault(self, rule: str, node: str, error: Exception):
        """Log an evaluation fault (tooling error, not a violation)."""
        self.main_logger.warning(
            f"[FAULT] | rule={rule} | node={node} | error={type(error).__name__}: {error}"
        )

    def violation(self, rule: str, node: str, severity: str, message: str):
        """Log a rule violation."""
        msg = f"[VIOLATION:{severity.upper()}] | rule={rule} | node={node} | {message}"
        if severity == "error":
            self.main_logger.error(msg)
        else:
            self.main_logger.info(msg)


# Global logger instance
_logger: Optional[AuditLogger] = None


def get_logger(log_dir: Optional[str] = None, log_level: str = "INFO") -> AuditLogger:
    """Get or create the global logger instance."""
    global _logger
    if _logger is None:
        _logger = AuditLogger(log_dir, log_level)
    return _logger


def setup_logger(log_dir: Optional[str] = None, log_level: str = "INFO") -> AuditLogger:
    """Initialize the logger with custom settings, replacing any existing one."""
    global _logger
    AuditLogger._initialized = False
    AuditLogger._instance = None
    _logger = AuditLogger(log_dir, log_level)
    return _logger


__all__ = [
    "ROOT_LOGGER_NAME",
    "Colors",
    "ColoredFormatter",
    "AuditLogger",
    "get_logger",
    "setup_logger",
]
