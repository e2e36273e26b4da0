"""
Configuration management for the audit engine.
Loads settings from environment variables (and .env) with sensible defaults.

Environment:
    A11Y_LOG_LEVEL          DEBUG / INFO / WARNING / ERROR (default INFO)
    A11Y_LOG_DIR            Directory for audit_YYYYMMDD.log (default: console only)
    A11Y_DEFAULT_SEVERITY   Severity for rules without meta severity (default warning)
    A11Y_KIND_MAP           Path to a YAML kind map (default: built-in kind map)

Kind map YAML:
```yaml
input: [textField, slider, switchRole]
action: [button, toggle]
```
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from ..rules.evaluation.selection import DEFAULT_KIND_MAP


VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_SEVERITIES = ("error", "warning", "info")


def _default_kind_map() -> dict[str, tuple[str, ...]]:
    return {kind: tuple(roles) for kind, roles in DEFAULT_KIND_MAP.items()}


def load_kind_map(path: str | Path) -> dict[str, tuple[str, ...]]:
    """
    Load a kind map from a YAML file.

    Args:
        path: YAML file mapping kind names to lists of roles.

    Returns:
        Kind name -> tuple of roles.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the YAML is not a mapping of string -> list of strings.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"Kind map {path} must be a mapping, got {type(raw).__name__}")

    kind_map: dict[str, tuple[str, ...]] = {}
    for kind, roles in raw.items():
        if not isinstance(kind, str):
            raise ValueError(f"Kind map {path}: kind names must be strings, got {kind!r}")
        if not isinstance(roles, list) or not all(isinstance(r, str) for r in roles):
            raise ValueError(f"Kind map {path}: '{kind}' must be a list of role names")
        kind_map[kind] = tuple(roles)
    return kind_map


@dataclass
class EngineConfig:
    """
    Audit engine settings.

    The interpreter never reads this directly; hosts pass `kind_map` and
    `default_severity` into RuleInterpreter / load_rules explicitly.
    """
    kind_map: dict[str, tuple[str, ...]] = field(default_factory=_default_kind_map)
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    default_severity: str = "warning"

    def __post_init__(self):
        """Validate and normalize settings."""
        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"A11Y_LOG_LEVEL must be one of {list(VALID_LOG_LEVELS)}, got '{self.log_level}'"
            )
        self.default_severity = self.default_severity.lower()
        if self.default_severity not in VALID_SEVERITIES:
            raise ValueError(
                f"A11Y_DEFAULT_SEVERITY must be one of {list(VALID_SEVERITIES)}, "
                f"got '{self.default_severity}'"
            )

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "EngineConfig":
        """
        Build a config from the environment.

        Loads `env_file` first when it exists (values there override the
        process environment).
        """
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path, override=True)

        kind_map_path = os.getenv("A11Y_KIND_MAP", "")
        kind_map = load_kind_map(kind_map_path) if kind_map_path else _default_kind_map()

        return cls(
            kind_map=kind_map,
            log_level=os.getenv("A11Y_LOG_LEVEL", "INFO"),
            log_dir=os.getenv("A11Y_LOG_DIR") or None,
            default_severity=os.getenv("A11Y_DEFAULT_SEVERITY", "warning"),
        )

    def summary_short(self) -> str:
        """Generate a short one-line configuration summary."""
        kinds = ", ".join(sorted(self.kind_map)) or "(none)"
        log_dir = self.log_dir or "console only"
        return (
            f"A11y audit | log={self.log_level} ({log_dir}) | "
            f"severity={self.default_severity} | kinds={kinds}"
        )


# Global config instance
_config: Optional[EngineConfig] = None


def get_config(env_file: str = ".env") -> EngineConfig:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = EngineConfig.from_env(env_file)
    return _config


def reset_config() -> None:
    """Drop the cached global config (next get_config() reloads)."""
    global _config
    _config = None


__all__ = [
    "DEFAULT_KIND_MAP",
    "VALID_LOG_LEVELS",
    "VALID_SEVERITIES",
    "EngineConfig",
    "load_kind_map",
    "get_config",
    "reset_config",
]
